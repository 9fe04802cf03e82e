"""Transformation layer: raw exchange records to canonical transactions."""

from crypto_ledger.transformation.normalizers import NormalizationError

__all__ = ["NormalizationError"]
