"""
Unified configuration state for crypto-ledger.

A single validated `ConfigState` object is built at the composition root
(API startup or CLI) from an optional YAML file plus environment overrides,
then passed explicitly into the aggregator. Nothing below the composition
root reads the environment.
"""

import logging
import os
from collections.abc import Mapping
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from crypto_ledger.shared.models.accounts import AccountCredential, WalletConfig
from crypto_ledger.shared.models.enums import WalletChain

logger = logging.getLogger(__name__)


# =============================================================================
# PYDANTIC MODELS - Type-Safe Configuration
# =============================================================================


class HttpSettings(BaseModel):
    """Outbound HTTP settings. `timeout=None` keeps the aiohttp default."""

    timeout: float | None = Field(default=None, gt=0)
    user_agent: str = Field(default="crypto-ledger/0.1")

    model_config = ConfigDict(extra="allow")


class BinanceSettings(BaseModel):
    """Binance REST endpoint configuration."""

    base_url: str = Field(default="https://api.binance.com")
    recv_window: int = Field(default=5000, ge=1, le=60000)
    page_limit: int = Field(default=100, ge=1, le=1000)
    p2p_path: str = Field(default="/sapi/v1/c2c/orderMatch/listUserOrderHistory")
    pay_path: str = Field(default="/sapi/v1/pay/transactions")
    deposit_path: str = Field(default="/sapi/v1/capital/deposit/hisrec")
    withdrawal_path: str = Field(default="/sapi/v1/capital/withdraw/history")

    model_config = ConfigDict(extra="allow")


class BybitSettings(BaseModel):
    """ByBit V5 endpoint configuration."""

    base_url: str = Field(default="https://api.bybit.com")
    recv_window: int = Field(default=5000, ge=1, le=60000)
    page_limit: int = Field(default=50, ge=1, le=50)
    deposit_path: str = Field(default="/v5/asset/deposit/query-record")
    withdrawal_path: str = Field(default="/v5/asset/withdraw/query-record")

    model_config = ConfigDict(extra="allow")


class TronSettings(BaseModel):
    """TronGrid explorer configuration."""

    base_url: str = Field(default="https://api.trongrid.io")
    page_limit: int = Field(default=50, ge=1, le=200)
    api_key: str | None = Field(default=None, repr=False)

    model_config = ConfigDict(extra="allow")


class EthereumSettings(BaseModel):
    """Etherscan V2 explorer configuration."""

    base_url: str = Field(default="https://api.etherscan.io/v2/api")
    chain_id: int = Field(default=1, ge=1)
    page_limit: int = Field(default=100, ge=1, le=10000)
    api_key: str | None = Field(default=None, repr=False)

    model_config = ConfigDict(extra="allow")


class BitcoinSettings(BaseModel):
    """Blockstream Esplora configuration."""

    base_url: str = Field(default="https://blockstream.info/api")

    model_config = ConfigDict(extra="allow")


class SheetsConfig(BaseModel):
    """Spreadsheet projection settings."""

    path: str = Field(default="crypto_ledger.xlsx")
    min_value_aed: Decimal = Field(default=Decimal("3.6"), ge=0)
    default_rate_aed: Decimal = Field(default=Decimal("1.0"), gt=0)
    auto_update: str = Field(default="Every Hour")
    prices_aed: dict[str, Decimal] = Field(
        default_factory=lambda: {
            symbol: Decimal(price)
            for symbol, price in {
                "BTC": "220200",
                "ETH": "11010",
                "USDT": "3.67",
                "USDC": "3.67",
                "SOL": "181.50",
                "TRX": "0.37",
                "BNB": "2200",
                "SEI": "1.47",
                "BUSD": "3.67",
                "ADA": "1.47",
                "DOT": "18.50",
                "MATIC": "1.84",
                "LINK": "44.10",
                "UNI": "25.75",
                "LTC": "257.25",
                "XRP": "2.20",
                "AVAX": "117.00",
                "ATOM": "29.50",
                "NEAR": "22.00",
                "FTM": "2.94",
                "ALGO": "1.10",
                "VET": "0.11",
                "ICP": "36.75",
                "SAND": "1.84",
                "MANA": "1.47",
                "CRO": "0.44",
                "SHIB": "0.00009",
            }.items()
        }
    )

    model_config = ConfigDict(extra="allow")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)

    model_config = ConfigDict(extra="allow")


class ConfigState(BaseModel):
    """
    Root configuration state - single source of truth for one process.

    Account lists keep their configured order; that order is the order in
    which accounts are processed and reported.
    """

    binance_accounts: list[AccountCredential] = Field(default_factory=list)
    bybit_accounts: list[AccountCredential] = Field(default_factory=list)
    wallets: list[WalletConfig] = Field(default_factory=list)

    http: HttpSettings = Field(default_factory=HttpSettings)
    binance: BinanceSettings = Field(default_factory=BinanceSettings)
    bybit: BybitSettings = Field(default_factory=BybitSettings)
    tron: TronSettings = Field(default_factory=TronSettings)
    ethereum: EthereumSettings = Field(default_factory=EthereumSettings)
    bitcoin: BitcoinSettings = Field(default_factory=BitcoinSettings)
    sheets: SheetsConfig = Field(default_factory=SheetsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    env: str = Field(default="dev")

    model_config = ConfigDict(extra="allow")

    @field_validator("binance_accounts", "bybit_accounts", mode="before")
    @classmethod
    def drop_null_accounts(cls, v: Any) -> Any:
        if v is None:
            return []
        return v


# =============================================================================
# CONFIG LOADER
# =============================================================================

# Account names used by the original deployment's environment variables.
LEGACY_BINANCE_ACCOUNTS = ("GC", "Main", "CV")
LEGACY_BYBIT_ACCOUNTS = ("CV",)
WALLET_ADDRESS_VARIABLES = (
    ("BTC_WALLET_ADDRESS", WalletChain.BITCOIN),
    ("ETH_WALLET_ADDRESS", WalletChain.ETHEREUM),
    ("TRON_WALLET_ADDRESS", WalletChain.TRON),
)


class ConfigLoader:
    """
    Load and validate configuration.

    Merges:
      1. Model defaults
      2. YAML file (optional)
      3. Environment variable overrides (legacy credential variables included)
    """

    def __init__(
        self,
        config_path: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        self.config_path = Path(config_path) if config_path else None
        self.environ = dict(os.environ if environ is None else environ)
        self.env = self.environ.get("LEDGER_ENV", "dev")

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            logger.debug(f"Config file not found (using defaults): {path}")
            return {}

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        logger.debug(f"Loaded config: {path}")
        return data

    def _credential_from_env(self, prefix: str, name: str) -> dict[str, str]:
        key_prefix = f"{prefix}_{name.upper()}" if name else prefix
        return {
            "name": name,
            "api_key": self.environ.get(f"{key_prefix}_API_KEY", ""),
            "api_secret": self.environ.get(f"{key_prefix}_API_SECRET", ""),
        }

    def _merge_accounts(
        self,
        configured: list[dict[str, Any]] | None,
        prefix: str,
        legacy_names: tuple[str, ...],
    ) -> list[dict[str, Any]]:
        """
        Fill credentials from the environment.

        YAML-listed accounts keep their order and only take missing keys from
        the environment; without a YAML list the legacy account names are used.
        """
        if configured:
            merged = []
            for account in configured:
                from_env = self._credential_from_env(prefix, account.get("name", ""))
                merged.append(
                    {
                        **account,
                        "api_key": account.get("api_key") or from_env["api_key"],
                        "api_secret": account.get("api_secret")
                        or from_env["api_secret"],
                    }
                )
            return merged

        accounts = [self._credential_from_env(prefix, name) for name in legacy_names]
        # ByBit's legacy variables carry no account suffix
        if prefix == "BYBIT" and not any(a["api_key"] for a in accounts):
            bare = self._credential_from_env("BYBIT", "")
            accounts = [{**bare, "name": legacy_names[0]}]
        return accounts

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        config["binance_accounts"] = self._merge_accounts(
            config.get("binance_accounts"), "BINANCE", LEGACY_BINANCE_ACCOUNTS
        )
        config["bybit_accounts"] = self._merge_accounts(
            config.get("bybit_accounts"), "BYBIT", LEGACY_BYBIT_ACCOUNTS
        )

        for variable, chain in WALLET_ADDRESS_VARIABLES:
            if address := self.environ.get(variable):
                wallets = [
                    w for w in config.get("wallets") or [] if w.get("address") != address
                ]
                wallets.append({"chain": chain.value, "address": address})
                config["wallets"] = wallets

        if tron_key := self.environ.get("TRONGRID_API_KEY"):
            config.setdefault("tron", {})["api_key"] = tron_key

        if etherscan_key := self.environ.get("ETHERSCAN_API_KEY"):
            config.setdefault("ethereum", {})["api_key"] = etherscan_key

        if sheet_path := self.environ.get("LEDGER_SHEET_PATH"):
            config.setdefault("sheets", {})["path"] = sheet_path

        if log_level := self.environ.get("LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level

        return config

    def load(self) -> ConfigState:
        """
        Load complete configuration state.

        Raises:
            pydantic.ValidationError: If configuration is invalid
        """
        config: dict[str, Any] = {}
        if self.config_path:
            config = self._load_yaml(self.config_path)

        config = self._apply_env_overrides(config)

        try:
            state = ConfigState(env=self.env, **config)
        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

        logger.info(
            f"Configuration loaded: binance={len(state.binance_accounts)} "
            f"bybit={len(state.bybit_accounts)} wallets={len(state.wallets)}"
        )
        return state


def load_config(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConfigState:
    """Convenience wrapper used by the API and CLI composition roots."""
    return ConfigLoader(config_path=config_path, environ=environ).load()
