"""Allocation package."""

from splitcalc.allocation.allocator import allocate, grand_total, recompute

__all__ = ["allocate", "grand_total", "recompute"]
