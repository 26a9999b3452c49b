"""Validation package."""

from splitcalc.validation.validator import (
    LedgerValidator,
    normalize_quantity,
    normalize_shared_by,
    parse_price,
)

__all__ = [
    "LedgerValidator",
    "normalize_quantity",
    "normalize_shared_by",
    "parse_price",
]
