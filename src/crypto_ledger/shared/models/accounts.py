# crypto_ledger/shared/models/accounts.py

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from crypto_ledger.shared.models.enums import Exchange, WalletChain

DEFAULT_WALLET_LABELS = {
    WalletChain.TRON: "TRON Wallet",
    WalletChain.ETHEREUM: "Ethereum Wallet",
    WalletChain.BITCOIN: "Bitcoin Wallet",
}


class AccountCredential(BaseModel):
    """API key pair for one exchange sub-account. Never persisted."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    api_key: str = ""
    api_secret: str = Field(default="", repr=False)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("account name must not be blank")
        return v

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key) and bool(self.api_secret)

    def label(self, exchange: Exchange) -> str:
        """Platform label, e.g. 'Binance (GC)'."""
        return f"{exchange.value} ({self.name})"


class WalletConfig(BaseModel):
    """A tracked on-chain address and how far back to look.

    Without an explicit label the chain's display name is used, e.g.
    'TRON Wallet' or 'Bitcoin Wallet'.
    """

    model_config = ConfigDict(frozen=True)

    chain: WalletChain = WalletChain.TRON
    label: str
    address: str = Field(..., min_length=1)
    lookback_days: int = Field(default=7, ge=1, le=365)

    @model_validator(mode="before")
    @classmethod
    def default_label(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("label"):
            chain = WalletChain(data.get("chain") or WalletChain.TRON)
            data = {**data, "label": DEFAULT_WALLET_LABELS[chain]}
        return data
