from crypto_ledger.ingestion.config.value_objects import HttpClientConfig

__all__ = ["HttpClientConfig"]
