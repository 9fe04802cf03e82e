"""
Structured logging infrastructure for crypto-ledger.
Provides consistent, machine-readable logs across the fetch/normalize/sync path.

Log Structure:
    {
        "app": "crypto-ledger",        # Application identifier
        "layer": "ingestion",          # Architectural layer
        "component": "binance-plugin", # Specific component/service
        "module": "...",               # Python module (optional)
        "exchange": "binance",         # Domain context
        "event": "sub_endpoint_failed",# What happened
        ...
    }

Architectural Layers:
    - infrastructure: Cross-cutting (config, http session)
    - ingestion: Exchange and explorer calls, account processing
    - processing: Normalization and aggregation
    - storage: Spreadsheet projection
    - api: REST API services
"""

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict

Layer = Literal["infrastructure", "ingestion", "processing", "storage", "api"]

SEVERITY_BY_LEVEL = {
    "debug": "DEBUG",
    "info": "INFO",
    "warning": "WARNING",
    "error": "ERROR",
    "critical": "CRITICAL",
}

# Never written to a log line, whatever component binds them
SENSITIVE_KEYS = frozenset({"api_key", "api_secret", "signature", "X-MBX-APIKEY"})
MASK = "***"


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the application identifier to every log entry."""
    event_dict["app"] = "crypto-ledger"
    return event_dict


def add_severity_level(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Cloud-logging severity derived from the structlog level."""
    level = event_dict.get("level")
    if level:
        event_dict["severity"] = SEVERITY_BY_LEVEL.get(level, "INFO")
    return event_dict


def mask_credentials(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace API keys, secrets and signatures with a fixed mask."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = MASK
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON. If False, use human-readable format (dev mode).
        include_timestamp: Whether to include ISO timestamps in logs

    Usage:
        >>> from crypto_ledger.infrastructure.observability import setup_logging
        >>> setup_logging(level="DEBUG", json_logs=False)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        mask_credentials,
        structlog.stdlib.add_log_level,
        add_severity_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: str | None = None,
    layer: Layer | None = None,
    component: str | None = None,
    **initial_context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance with architectural context.

    Args:
        name: Logger name (typically __name__ of the calling module)
        layer: Architectural layer (ingestion, processing, storage, ...)
        component: Specific component/service within the layer
        **initial_context: Additional context key-value pairs to bind to logger

    Usage:
        >>> log = get_logger(__name__, layer="ingestion", component="fetcher")
        >>> log.info("request_completed", status_code=200)
    """
    logger = structlog.get_logger(name)

    context = {}

    if layer:
        context["layer"] = layer

    if component:
        context["component"] = component

    if name:
        context["module"] = name

    context.update(initial_context)

    if context:
        logger = logger.bind(**context)

    return logger


# ============================================================================
# Layer-Specific Logger Factories
# ============================================================================


def get_infrastructure_logger(
    component: str,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """Logger for cross-cutting infrastructure (config loading, http session)."""
    return get_logger(
        "infrastructure",
        layer="infrastructure",
        component=component,
        **context,
    )


def get_ingestion_logger(
    component: str,
    exchange: str | None = None,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for the ingestion layer.

    Args:
        component: Component name (e.g., "binance-plugin", "fetcher", "aggregator")
        exchange: Exchange name (e.g., "binance", "bybit", "tron") - optional
        **context: Additional context (account, api_source, ...)

    Usage:
        >>> log = get_ingestion_logger("binance-plugin", exchange="binance", account="GC")
        >>> log.info("sub_endpoint_completed", api_source="Binance_P2P", count=3)
    """
    ctx = {}
    if exchange:
        ctx["exchange"] = exchange
    ctx.update(context)

    return get_logger(
        "ingestion",
        layer="ingestion",
        component=component,
        **ctx,
    )


def get_processing_logger(
    component: str,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """Logger for normalization and aggregation steps."""
    return get_logger(
        "processing",
        layer="processing",
        component=component,
        **context,
    )


def get_storage_logger(
    component: str,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for the storage layer (spreadsheet projection).

    Usage:
        >>> log = get_storage_logger("xlsx-store", sheet="FORMATTED_TRANSACTIONS")
        >>> log.info("rows_appended", count=12)
    """
    return get_logger(
        "storage",
        layer="storage",
        component=component,
        **context,
    )


def get_api_logger(
    component: str = "fastapi",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """Logger for the REST API layer."""
    return get_logger(
        "api",
        layer="api",
        component=component,
        **context,
    )
