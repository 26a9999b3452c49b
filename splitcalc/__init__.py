"""
Split Calculator - Source Package

Splits a shared bill item by item: each item's cost is divided evenly
among the people who had it, and every person's share plus the grand
total are kept current after each change.

DESIGN PRINCIPLES:
1. Amounts are derived, never edited
2. Validation failures are results, not exceptions
3. Every mutation is audited
4. Presentation stays outside the package
"""

__version__ = "1.0.0"
__author__ = "Split Calculator Team"
