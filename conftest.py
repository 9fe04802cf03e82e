"""
Shared pytest configuration for crypto-ledger.
Exchange responses live in tests/fixtures; nothing here touches the network.
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure src on path
sys.path.insert(0, str(Path(__file__).parent / "src"))

logger = logging.getLogger(__name__)

FIXED_NOW = datetime(2023, 11, 15, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock():
    """Clock pinned to 2023-11-15T00:00Z, one day after the fixture payloads."""
    return lambda: FIXED_NOW
