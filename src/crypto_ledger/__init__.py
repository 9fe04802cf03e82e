"""
Crypto ledger: multi-exchange transaction aggregation.
Modular architecture with clean separation of concerns.

Modules:
- ingestion: Signed exchange calls, explorer calls, account processing
- transformation: Raw record -> canonical Transaction normalizers
- storage: Spreadsheet projection of the canonical transaction list
- shared: Canonical models and enums
- infrastructure: Config, logging
"""

__version__ = "0.1.0"
