"""
Input Validation for Ledger Operations

DESIGN DECISION: Caller input (form fields, in practice) is checked here
before the ledger touches its state. The validator never raises for bad
input. It reports every issue it finds so the caller can show them, and
the first error decides the error code the operation reports.

Checks are ordered the way the user fills the form:
name, price, quantity, then sharers.

IMPORTANT: Validation NEVER silently fixes issues, with one documented
exception: a missing or non-positive quantity becomes 1.
"""

import math
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from splitcalc.models.ledger import (
    Item,
    LedgerErrorCode,
    ValidationIssue,
    ValidationResult,
)


def parse_price(value: Any) -> Optional[float]:
    """
    Turn a price from the caller into a float.

    Numeric strings are accepted because prices usually arrive from text
    inputs. Returns None for anything that is not a finite number.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price):
        return None
    return price


def normalize_quantity(value: Any) -> Optional[int]:
    """
    Turn a quantity from the caller into a positive int.

    Missing, blank and non-positive values become 1.
    Returns None when the value is not a whole number.
    """
    if value is None or isinstance(value, bool):
        return 1 if value is None else None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 1
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    quantity = int(number)
    return quantity if quantity > 0 else 1


def normalize_shared_by(shared_by: Optional[Iterable[str]]) -> list[str]:
    """Trim sharer names and keep them in the order given."""
    if shared_by is None:
        return []
    if isinstance(shared_by, str):
        shared_by = [shared_by]
    return [name.strip() if isinstance(name, str) else name for name in shared_by]


class LedgerValidator:
    """
    Validates input for ledger mutations.

    Holds no state of its own; the current people are passed in
    with every call.
    """

    def validate_person_name(
        self,
        name: Any,
        existing: Mapping[str, Any],
    ) -> ValidationResult:
        """
        Check a new person's name.

        Empty or whitespace-only names are INVALID_NAME.
        A trimmed name already present (exact, case-sensitive) is DUPLICATE_NAME.
        """
        issues = []

        if not isinstance(name, str) or not name.strip():
            issues.append(ValidationIssue(
                field="name",
                code=LedgerErrorCode.INVALID_NAME,
                issue_type="missing",
                message="Please enter a valid name",
                suggested_fix="Type at least one non-space character",
            ))
        elif name.strip() in existing:
            issues.append(ValidationIssue(
                field="name",
                code=LedgerErrorCode.DUPLICATE_NAME,
                issue_type="duplicate",
                message="This person already exists!",
                suggested_fix="Use a different name, e.g. add an initial",
            ))

        return ValidationResult(is_valid=not issues, issues=issues)

    def _validate_sharers(
        self,
        shared_by: list[str],
        people: Mapping[str, Any],
    ) -> list[ValidationIssue]:
        """Sharers must be known people, each listed once."""
        issues = []

        unknown = [
            name for name in shared_by
            if not isinstance(name, str) or name not in people
        ]
        if unknown:
            issues.append(ValidationIssue(
                field="shared_by",
                code=LedgerErrorCode.INVALID_ITEM,
                issue_type="unknown_person",
                message=f"Unknown people: {', '.join(str(n) for n in unknown)}",
                suggested_fix="Add these people before assigning items to them",
            ))

        if not unknown and len(set(shared_by)) != len(shared_by):
            issues.append(ValidationIssue(
                field="shared_by",
                code=LedgerErrorCode.INVALID_ITEM,
                issue_type="repeated_person",
                message="The same person is selected more than once",
            ))

        return issues

    def build_item(
        self,
        name: Any,
        unit_price: Any,
        quantity: Any,
        shared_by: Optional[Iterable[str]],
        people: Mapping[str, Any],
    ) -> tuple[ValidationResult, Optional[Item]]:
        """
        Validate new-item input and build the Item when it passes.

        Returns:
            (result, item) where item is None unless result.is_valid
        """
        issues = []

        if not isinstance(name, str) or not name.strip():
            issues.append(ValidationIssue(
                field="name",
                code=LedgerErrorCode.INVALID_ITEM,
                issue_type="missing",
                message="Enter valid item details",
                suggested_fix="Give the item a name",
            ))

        price = parse_price(unit_price)
        if price is None:
            issues.append(ValidationIssue(
                field="unit_price",
                code=LedgerErrorCode.INVALID_ITEM,
                issue_type="not_a_number",
                message="Enter valid item details",
                suggested_fix="Enter the price as a number, e.g. 12.50",
            ))
        elif price < 0:
            issues.append(ValidationIssue(
                field="unit_price",
                code=LedgerErrorCode.INVALID_ITEM,
                issue_type="negative",
                message="Price cannot be negative",
            ))

        qty = normalize_quantity(quantity)
        if qty is None:
            issues.append(ValidationIssue(
                field="quantity",
                code=LedgerErrorCode.INVALID_ITEM,
                issue_type="not_whole",
                message="Quantity must be a whole number",
            ))
        elif price is not None and price >= 0 and not math.isfinite(price * qty):
            issues.append(ValidationIssue(
                field="unit_price",
                code=LedgerErrorCode.INVALID_ITEM,
                issue_type="not_finite",
                message="Item total is too large",
                suggested_fix="Check the price and quantity",
            ))

        sharers = normalize_shared_by(shared_by)
        if not sharers:
            issues.append(ValidationIssue(
                field="shared_by",
                code=LedgerErrorCode.EMPTY_SHARED_BY,
                issue_type="empty",
                message="Select at least one person",
            ))
        else:
            issues.extend(self._validate_sharers(sharers, people))

        if issues:
            return ValidationResult(is_valid=False, issues=issues), None

        item = Item(
            name=name,
            unit_price=price,
            quantity=qty,
            shared_by=sharers,
        )
        return ValidationResult(is_valid=True), item

    def validate_shared_by_update(
        self,
        shared_by: list[str],
        people: Mapping[str, Any],
    ) -> ValidationResult:
        """
        Check a replacement sharer list for an existing item.

        An empty list is allowed here, unlike on creation.
        """
        issues = self._validate_sharers(shared_by, people)
        return ValidationResult(is_valid=not issues, issues=issues)

    def get_user_friendly_summary(
        self,
        issues: list[ValidationIssue],
    ) -> str:
        """
        Generate a user-friendly summary of validation issues.

        This is what the page shows when an operation is rejected
        for more than one reason.
        """
        if not issues:
            return "All checks passed."

        lines = []
        for issue in issues:
            lines.append(f"• {issue.message}")
            if issue.suggested_fix:
                lines.append(f"  {issue.suggested_fix}")
        return "\n".join(lines)
