#!/usr/bin/env python3
"""
Fetch transactions from every configured exchange account and wallet.

    python scripts/fetch_transactions.py --config config/ledger.yaml --since 2024-01-01 --json
"""

import sys

from crypto_ledger.cli import main

if __name__ == "__main__":
    sys.exit(main())
