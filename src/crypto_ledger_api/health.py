from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from crypto_ledger import __version__
from crypto_ledger.config.state import ConfigState
from crypto_ledger.infrastructure.observability import get_api_logger
from crypto_ledger_api.dependencies import get_config

logger = get_api_logger("health")

router = APIRouter()


def check_accounts(config: ConfigState) -> bool:
    """At least one account or wallet is configured with something to fetch."""
    return (
        any(a.has_credentials for a in config.binance_accounts)
        or any(a.has_credentials for a in config.bybit_accounts)
        or bool(config.wallets)
    )


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Liveness check."""
    return {"status": "healthy", "version": __version__}


@router.get("/ready")
async def readiness_check(config: ConfigState = Depends(get_config)) -> dict[str, Any]:
    """Ready once configuration loaded and names at least one usable account."""
    status = {"status": "ready", "accounts_configured": check_accounts(config)}
    if not status["accounts_configured"]:
        logger.warning("no_accounts_configured")
        raise HTTPException(status_code=503, detail=status)
    return status
