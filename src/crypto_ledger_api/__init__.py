"""HTTP API for crypto-ledger."""
