"""Export package."""

from splitcalc.export.csv_export import HEADERS, item_to_row, serialize

__all__ = ["HEADERS", "item_to_row", "serialize"]
