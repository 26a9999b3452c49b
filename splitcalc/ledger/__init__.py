"""Ledger package."""

from splitcalc.ledger.ledger import Ledger

__all__ = ["Ledger"]
