"""Tests for share allocation."""

import random

import pytest

from splitcalc.allocation import allocate, grand_total, recompute
from splitcalc.models.ledger import Item


def make_item(name, price, quantity=1, shared_by=()):
    return Item(name=name, unit_price=price, quantity=quantity, shared_by=list(shared_by))


class TestRecompute:
    """Tests for the per-person pass."""

    def test_even_split_between_two(self):
        """Pizza for 20.00 shared by Alice and Bob is 10.00 each."""
        items = [make_item("Pizza", 20.00, 1, ["Alice", "Bob"])]
        owed = recompute(["Alice", "Bob"], items)
        assert owed == {"Alice": 10.0, "Bob": 10.0}
        assert grand_total(items) == 20.0

    def test_uneven_split_uses_float_division(self):
        items = [make_item("Cake", 10.0, 1, ["A", "B", "C"])]
        owed = recompute(["A", "B", "C"], items)
        assert owed["A"] == owed["B"] == owed["C"] == pytest.approx(10.0 / 3)

    def test_quantity_multiplies_cost(self):
        items = [make_item("Beer", 4.0, 3, ["Alice", "Bob"])]
        owed = recompute(["Alice", "Bob"], items)
        assert owed == {"Alice": 6.0, "Bob": 6.0}

    def test_every_known_person_starts_at_zero(self):
        items = [make_item("Tea", 3.0, 1, ["Alice"])]
        owed = recompute(["Alice", "Bob", "Carol"], items)
        assert owed == {"Alice": 3.0, "Bob": 0.0, "Carol": 0.0}

    def test_unshared_item_adds_nothing(self):
        """An item nobody shares counts only toward the grand total."""
        items = [
            make_item("Pizza", 20.0, 1, ["Alice", "Bob"]),
            make_item("Tip", 5.0, 1, []),
        ]
        owed = recompute(["Alice", "Bob"], items)
        assert owed == {"Alice": 10.0, "Bob": 10.0}
        assert grand_total(items) == 25.0

    def test_unknown_sharer_keeps_money(self):
        """A sharer outside people still receives a share."""
        items = [make_item("Pizza", 20.0, 1, ["Alice", "Ghost"])]
        owed = recompute(["Alice"], items)
        assert owed == {"Alice": 10.0, "Ghost": 10.0}

    def test_no_people_no_items(self):
        assert recompute([], []) == {}
        assert grand_total([]) == 0.0

    def test_idempotent(self):
        items = [
            make_item("Pizza", 19.99, 2, ["Alice", "Bob"]),
            make_item("Salad", 7.25, 1, ["Bob", "Carol", "Alice"]),
        ]
        people = ["Alice", "Bob", "Carol"]
        assert recompute(people, items) == recompute(people, items)

    def test_returns_fresh_mapping(self):
        items = [make_item("Pizza", 20.0, 1, ["Alice"])]
        first = recompute(["Alice"], items)
        first["Alice"] = 999.0
        assert recompute(["Alice"], items) == {"Alice": 20.0}

    def test_order_independent(self):
        items = [
            make_item("A", 3.0, 1, ["Alice", "Bob"]),
            make_item("B", 8.0, 2, ["Bob"]),
            make_item("C", 1.5, 4, ["Alice", "Bob", "Carol"]),
        ]
        people = ["Alice", "Bob", "Carol"]
        forward = recompute(people, items)
        backward = recompute(people, list(reversed(items)))
        for name in people:
            assert forward[name] == pytest.approx(backward[name])


class TestConservation:
    """Money is redistributed by the split, never created or lost."""

    def test_sum_equals_total_when_all_shared(self):
        rng = random.Random(7)
        people = ["Alice", "Bob", "Carol", "Dan"]
        items = [
            make_item(
                f"item{i}",
                round(rng.uniform(0, 50), 2),
                rng.randint(1, 4),
                rng.sample(people, rng.randint(1, len(people))),
            )
            for i in range(30)
        ]
        allocation = allocate(people, items)
        assert allocation.assigned_total == pytest.approx(allocation.grand_total)
        assert allocation.unassigned_total == pytest.approx(0.0, abs=1e-9)

    def test_sum_below_total_with_unshared_items(self):
        people = ["Alice", "Bob"]
        items = [
            make_item("Pizza", 20.0, 1, ["Alice", "Bob"]),
            make_item("Wine", 30.0, 1, []),
        ]
        allocation = allocate(people, items)
        assert allocation.assigned_total < allocation.grand_total
        assert allocation.unassigned_total == pytest.approx(30.0)

    def test_grand_total_ignores_sharing(self):
        shared = [make_item("Pizza", 12.0, 2, ["Alice"])]
        unshared = [make_item("Pizza", 12.0, 2, [])]
        assert grand_total(shared) == grand_total(unshared) == 24.0
