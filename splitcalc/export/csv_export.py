"""
CSV export for Split Calculator

Produces the itemized bill as delimited text. Writing the file (or
offering it as a download) is the caller's job; this module only builds
the content.

Columns: Item Name, Price, Quantity, Shared By, Total
Every field is quoted so commas in names and in the sharer list survive.
"""

import csv
import io
from collections.abc import Sequence
from typing import Optional

from splitcalc.config import get_settings
from splitcalc.models.ledger import ExportResult, Item, LedgerErrorCode

HEADERS = ["Item Name", "Price", "Quantity", "Shared By", "Total"]


def item_to_row(item: Item, separator: str = ", ") -> list[str]:
    """One export row for an item."""
    return [
        item.name,
        f"{item.unit_price:.2f}",
        str(item.quantity),
        separator.join(item.shared_by),
        f"{item.unit_price * item.quantity:.2f}",
    ]


def serialize(
    items: Sequence[Item],
    filename: Optional[str] = None,
    separator: Optional[str] = None,
) -> ExportResult:
    """
    Serialize items to CSV text.

    An empty list is reported as EXPORT_EMPTY rather than producing a
    header-only file.
    """
    settings = get_settings()
    filename = filename or settings.export_filename
    separator = settings.sharer_separator if separator is None else separator

    if not items:
        return ExportResult(
            success=False,
            message="No items to export",
            error_code=LedgerErrorCode.EXPORT_EMPTY,
            filename=filename,
        )

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(HEADERS)
    for item in items:
        writer.writerow(item_to_row(item, separator))

    return ExportResult(
        success=True,
        message="CSV exported successfully!",
        filename=filename,
        content=buffer.getvalue(),
        row_count=len(items),
    )
