"""
Core Data Models for Split Calculator

These models define the schemas for everything that flows between the
ledger, the allocator, the exporter and the presentation layer.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Be safe to hand to the UI (results never leak mutable ledger state)

DESIGN DECISION: Amounts are plain floats. Shares are computed with
standard floating-point division and only rounded at display time,
so the models never quantize money.
"""

from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class LedgerErrorCode(str, Enum):
    """
    Every recoverable failure an operation can report.

    None of these are raised. They travel back to the caller inside
    a LedgerResult or ExportResult.
    """
    INVALID_NAME = "invalid_name"
    DUPLICATE_NAME = "duplicate_name"
    INVALID_ITEM = "invalid_item"          # Bad name, price, quantity or sharer
    EMPTY_SHARED_BY = "empty_shared_by"    # Only enforced on creation
    EXPORT_EMPTY = "export_empty"
    PERSON_IN_USE = "person_in_use"        # Removal blocked by policy


class RemovalPolicy(str, Enum):
    """What happens to item sharers when a person is removed."""
    STRIP = "strip"    # Drop the person from every item's shared_by
    BLOCK = "block"    # Refuse removal while any item references the person


# =============================================================================
# CORE LEDGER MODELS
# =============================================================================

class Person(BaseModel):
    """
    A participant in the bill.

    The owed amount is a snapshot taken from the current allocation.
    It is never edited directly.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Unique display name (case-sensitive)"
    )
    owed_amount: float = Field(
        default=0.0,
        description="Derived share of all items this person is part of"
    )


class Item(BaseModel):
    """
    A priced line on the bill, split evenly among its sharers.

    Only shared_by changes after creation; everything else is fixed.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    item_id: UUID = Field(
        default_factory=uuid4,
        description="Opaque unique identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Item name"
    )
    unit_price: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Price of a single unit"
    )
    quantity: int = Field(
        default=1,
        ge=1,
        description="Number of units"
    )
    shared_by: list[str] = Field(
        default_factory=list,
        description="Names of the people splitting this item, in selection order"
    )

    @field_validator('shared_by')
    @classmethod
    def reject_repeated_sharers(cls, v: list[str]) -> list[str]:
        """A person can only take one share of an item."""
        if len(set(v)) != len(v):
            raise ValueError("shared_by contains the same person more than once")
        return v

    @computed_field
    @property
    def total(self) -> float:
        """Unit price times quantity."""
        return self.unit_price * self.quantity


class Allocation(BaseModel):
    """
    Result of splitting the current items among the current people.

    owed is replaced wholesale on every recompute, never merged.
    """
    model_config = ConfigDict(frozen=True)

    owed: dict[str, float] = Field(
        default_factory=dict,
        description="Person name -> owed amount"
    )
    grand_total: float = Field(
        default=0.0,
        description="Sum of unit_price * quantity over all items"
    )

    @property
    def assigned_total(self) -> float:
        """Portion of the grand total that landed on someone."""
        return sum(self.owed.values())

    @property
    def unassigned_total(self) -> float:
        """
        Cost of items that currently have no sharers.

        Float shares can sum a hair above the grand total, so this is
        approximate and clamped at zero.
        """
        return max(0.0, self.grand_total - self.assigned_total)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    code: LedgerErrorCode = Field(
        ...,
        description="Error taxonomy entry this issue maps to"
    )
    issue_type: str = Field(
        ...,
        description="Finer-grained kind of issue (e.g., 'missing', 'not_finite')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """Outcome of validating one operation's input."""

    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def first_error(self) -> Optional[ValidationIssue]:
        """The issue that decides the reported error code."""
        return self.issues[0] if self.issues else None


# =============================================================================
# OPERATION RESULTS
# =============================================================================

class LedgerResult(BaseModel):
    """
    Outcome of a ledger operation.

    The allocation is always the one current after the call, so a
    caller can render straight from the result.
    """

    success: bool
    message: str = Field(
        ...,
        description="Notification text for the user"
    )
    error_code: Optional[LedgerErrorCode] = None
    issues: list[ValidationIssue] = Field(default_factory=list)
    item_id: Optional[UUID] = Field(
        default=None,
        description="Id of the item the operation created or touched"
    )
    changed: bool = Field(
        default=False,
        description="Did the ledger state change?"
    )
    allocation: Allocation = Field(default_factory=Allocation)


class ExportResult(BaseModel):
    """Outcome of serializing the item list."""

    success: bool
    message: str
    error_code: Optional[LedgerErrorCode] = None
    filename: str = Field(
        ...,
        description="Suggested file name for the caller's download"
    )
    content: str = Field(
        default="",
        description="Delimited text, empty on failure"
    )
    row_count: int = Field(
        default=0,
        ge=0,
        description="Number of item rows (header excluded)"
    )

    def to_bytes(self) -> bytes:
        """UTF-8 payload for a download or file write."""
        return self.content.encode("utf-8")
