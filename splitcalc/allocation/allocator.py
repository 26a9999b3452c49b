"""
Share Allocation

DESIGN DECISION: Allocation is a pure function of the current people and
items. It is recomputed from scratch after every mutation instead of being
patched incrementally, so amounts can never drift out of sync with items.

Two values come out of it and they are computed independently:
- owed amounts: each item's total split evenly among its sharers
- grand total: sum of every item's total, sharers or not

An item with nobody sharing it still counts in the grand total but adds
nothing to anyone's share. The difference shows up as
Allocation.unassigned_total.

No rounding happens here. Amounts are rounded only when displayed.
"""

from collections.abc import Iterable, Sequence

from splitcalc.models.ledger import Allocation, Item


def recompute(people: Iterable[str], items: Sequence[Item]) -> dict[str, float]:
    """
    Compute each person's owed amount.

    Every known person starts at 0.0. A sharer missing from people still
    gets their share so no money disappears from the split.

    Returns a new mapping; the caller replaces its previous one with it.
    """
    owed = {name: 0.0 for name in people}

    for item in items:
        if not item.shared_by:
            continue
        share = item.unit_price * item.quantity / len(item.shared_by)
        for name in item.shared_by:
            owed[name] = owed.get(name, 0.0) + share

    return owed


def grand_total(items: Iterable[Item]) -> float:
    """Sum of unit_price * quantity over all items."""
    return sum((item.unit_price * item.quantity for item in items), 0.0)


def allocate(people: Iterable[str], items: Sequence[Item]) -> Allocation:
    """Owed amounts and grand total for the given state."""
    return Allocation(
        owed=recompute(people, items),
        grand_total=grand_total(items),
    )
