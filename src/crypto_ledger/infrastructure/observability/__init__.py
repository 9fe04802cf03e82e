"""
Observability for crypto-ledger: structured logging with layer context so a
single aggregation run can be followed from outbound call to spreadsheet row.
"""

from .logging import (
    get_api_logger,
    get_infrastructure_logger,
    get_ingestion_logger,
    get_logger,
    get_processing_logger,
    get_storage_logger,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_infrastructure_logger",
    "get_ingestion_logger",
    "get_processing_logger",
    "get_storage_logger",
    "get_api_logger",
]
