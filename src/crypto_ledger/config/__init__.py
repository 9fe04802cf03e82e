"""Configuration models and loader."""

from crypto_ledger.config.state import (
    BinanceSettings,
    BitcoinSettings,
    BybitSettings,
    ConfigLoader,
    ConfigState,
    EthereumSettings,
    HttpSettings,
    LoggingConfig,
    SheetsConfig,
    TronSettings,
    load_config,
)

__all__ = [
    "BinanceSettings",
    "BitcoinSettings",
    "BybitSettings",
    "ConfigLoader",
    "ConfigState",
    "EthereumSettings",
    "HttpSettings",
    "LoggingConfig",
    "SheetsConfig",
    "TronSettings",
    "load_config",
]
