"""
The Ledger

Holds the people and items of one bill and keeps their allocation current.

GUARANTEES:
- Person names are unique (exact, case-sensitive, after trimming)
- Every sharer of every item is a known person
- After every call the allocation matches the items, never stale
- A call either applies fully or leaves the state untouched

Validation failures are returned as LedgerResult values, never raised.
Unknown item ids are treated as no-ops.
"""

from collections.abc import Iterable
from typing import Any, Optional
from uuid import UUID

from pydantic import ValidationError

from splitcalc.allocation import allocate
from splitcalc.models.ledger import (
    Allocation,
    Item,
    LedgerErrorCode,
    LedgerResult,
    Person,
    RemovalPolicy,
    ValidationIssue,
    ValidationResult,
)
from splitcalc.validation import LedgerValidator, normalize_shared_by


class Ledger:
    """
    Mutable collection of people and items for one bill.

    Single-threaded: one session owns a ledger.
    """

    def __init__(
        self,
        removal_policy: RemovalPolicy = RemovalPolicy.STRIP,
        validator: Optional[LedgerValidator] = None,
    ):
        self._people: dict[str, Person] = {}
        self._items: list[Item] = []
        self._removal_policy = RemovalPolicy(removal_policy)
        self._validator = validator or LedgerValidator()
        self._allocation = Allocation()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def people(self) -> list[str]:
        """Person names in the order they were added."""
        return list(self._people)

    @property
    def items(self) -> tuple[Item, ...]:
        """Copies of the items in insertion order."""
        return tuple(item.model_copy(deep=True) for item in self._items)

    @property
    def allocation(self) -> Allocation:
        return self._allocation

    @property
    def owed_amounts(self) -> dict[str, float]:
        return dict(self._allocation.owed)

    @property
    def grand_total(self) -> float:
        return self._allocation.grand_total

    @property
    def removal_policy(self) -> RemovalPolicy:
        return self._removal_policy

    @property
    def validator(self) -> LedgerValidator:
        return self._validator

    def get_item(self, item_id: UUID) -> Optional[Item]:
        """Copy of the item with this id, or None."""
        item = self._find(item_id)
        return item.model_copy(deep=True) if item else None

    def person_views(self) -> list[Person]:
        """People with their current owed amounts filled in."""
        owed = self._allocation.owed
        return [
            person.model_copy(update={"owed_amount": owed.get(name, 0.0)})
            for name, person in self._people.items()
        ]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find(self, item_id: UUID) -> Optional[Item]:
        for item in self._items:
            if item.item_id == item_id:
                return item
        return None

    def _reallocate(self) -> Allocation:
        self._allocation = allocate(self._people, self._items)
        return self._allocation

    def _fail(
        self,
        validation: ValidationResult,
        item_id: Optional[UUID] = None,
    ) -> LedgerResult:
        error = validation.first_error
        return LedgerResult(
            success=False,
            message=error.message,
            error_code=error.code,
            issues=validation.issues,
            item_id=item_id,
            allocation=self._allocation,
        )

    def _ok(
        self,
        message: str,
        changed: bool,
        item_id: Optional[UUID] = None,
    ) -> LedgerResult:
        allocation = self._reallocate() if changed else self._allocation
        return LedgerResult(
            success=True,
            message=message,
            item_id=item_id,
            changed=changed,
            allocation=allocation,
        )

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------

    def add_person(self, name: Any) -> LedgerResult:
        """Add a person with nothing owed yet."""
        validation = self._validator.validate_person_name(name, self._people)
        if not validation.is_valid:
            return self._fail(validation)

        person = Person(name=name)
        self._people[person.name] = person
        return self._ok(f"{person.name} added", changed=True)

    def remove_person(self, name: str) -> LedgerResult:
        """
        Remove a person, applying the configured cascade to items.

        STRIP drops the person from every item's shared_by.
        BLOCK refuses while any item still lists the person.
        """
        name = name.strip() if isinstance(name, str) else name
        if name not in self._people:
            return self._ok("Nobody by that name", changed=False)

        referencing = [item for item in self._items if name in item.shared_by]
        if referencing and self._removal_policy == RemovalPolicy.BLOCK:
            return self._fail(ValidationResult(
                is_valid=False,
                issues=[ValidationIssue(
                    field="name",
                    code=LedgerErrorCode.PERSON_IN_USE,
                    issue_type="referenced",
                    message=f"{name} still shares {len(referencing)} item(s)",
                    suggested_fix="Untick this person on those items first",
                )],
            ))

        for item in referencing:
            item.shared_by = [p for p in item.shared_by if p != name]
        del self._people[name]
        return self._ok(f"{name} removed", changed=True)

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def add_item(
        self,
        name: Any,
        unit_price: Any,
        quantity: Any = 1,
        shared_by: Optional[Iterable[str]] = None,
    ) -> LedgerResult:
        """
        Append a new item and reallocate.

        Returns the generated id in result.item_id.
        """
        try:
            validation, item = self._validator.build_item(
                name, unit_price, quantity, shared_by, self._people
            )
        except ValidationError as e:
            validation, item = ValidationResult(
                is_valid=False,
                issues=[ValidationIssue(
                    field=str(err["loc"][0]) if err["loc"] else "item",
                    code=LedgerErrorCode.INVALID_ITEM,
                    issue_type=err["type"],
                    message="Enter valid item details",
                ) for err in e.errors()],
            ), None

        if item is None:
            return self._fail(validation)

        self._items.append(item)
        return self._ok("Item added!", changed=True, item_id=item.item_id)

    def remove_item(self, item_id: UUID) -> LedgerResult:
        """Remove an item; an unknown id changes nothing."""
        item = self._find(item_id)
        if item is None:
            return self._ok("Item not found, nothing removed", changed=False, item_id=item_id)

        self._items.remove(item)
        return self._ok("Item removed!", changed=True, item_id=item_id)

    def set_item_shared_by(
        self,
        item_id: UUID,
        shared_by: Optional[Iterable[str]],
    ) -> LedgerResult:
        """
        Replace an item's sharers and reallocate.

        An empty list is accepted: the item then counts only toward
        the grand total.
        """
        item = self._find(item_id)
        if item is None:
            return self._ok("Item not found, nothing changed", changed=False, item_id=item_id)

        sharers = normalize_shared_by(shared_by)
        validation = self._validator.validate_shared_by_update(sharers, self._people)
        if not validation.is_valid:
            return self._fail(validation, item_id=item_id)

        item.shared_by = sharers
        return self._ok("Shared by updated", changed=True, item_id=item_id)

    def toggle_sharer(self, item_id: UUID, name: str, included: bool) -> LedgerResult:
        """Tick or untick one person on an item."""
        name = name.strip() if isinstance(name, str) else name
        item = self._find(item_id)
        if item is None:
            return self._ok("Item not found, nothing changed", changed=False, item_id=item_id)

        if included:
            sharers = list(item.shared_by)
            if name not in sharers:
                sharers.append(name)
        else:
            sharers = [p for p in item.shared_by if p != name]
        return self.set_item_shared_by(item_id, sharers)
