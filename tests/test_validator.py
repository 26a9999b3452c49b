"""Tests for ledger input validation."""

import pytest

from splitcalc.models.ledger import LedgerErrorCode
from splitcalc.validation import (
    LedgerValidator,
    normalize_quantity,
    normalize_shared_by,
    parse_price,
)


PEOPLE = {"Alice": None, "Bob": None}


class TestParsing:
    """Tests for the price and quantity helpers."""

    @pytest.mark.parametrize("raw,expected", [
        (20, 20.0),
        (0, 0.0),
        ("12.50", 12.5),
        (" 3 ", 3.0),
    ])
    def test_parse_price_accepts_numbers(self, raw, expected):
        assert parse_price(raw) == expected

    @pytest.mark.parametrize("raw", ["", "  ", "abc", None, True, "nan", "inf", float("inf")])
    def test_parse_price_rejects_non_numbers(self, raw):
        assert parse_price(raw) is None

    @pytest.mark.parametrize("raw,expected", [
        (None, 1),
        ("", 1),
        (0, 1),
        (-3, 1),
        (2, 2),
        ("4", 4),
        (5.0, 5),
    ])
    def test_normalize_quantity(self, raw, expected):
        assert normalize_quantity(raw) == expected

    @pytest.mark.parametrize("raw", [2.5, "two", True, float("nan")])
    def test_normalize_quantity_rejects_fractions(self, raw):
        assert normalize_quantity(raw) is None

    def test_normalize_shared_by(self):
        """Test names are trimmed and order kept."""
        assert normalize_shared_by([" Bob", "Alice "]) == ["Bob", "Alice"]
        assert normalize_shared_by(None) == []
        assert normalize_shared_by("Alice") == ["Alice"]


class TestPersonNameValidation:
    """Tests for validate_person_name."""

    def setup_method(self):
        self.validator = LedgerValidator()

    @pytest.mark.parametrize("name", ["", " ", "\t\n", None, 42])
    def test_invalid_names(self, name):
        result = self.validator.validate_person_name(name, PEOPLE)
        assert result.is_valid is False
        assert result.first_error.code == LedgerErrorCode.INVALID_NAME

    def test_duplicate_name(self):
        result = self.validator.validate_person_name("Alice", PEOPLE)
        assert result.first_error.code == LedgerErrorCode.DUPLICATE_NAME
        assert result.first_error.message == "This person already exists!"

    def test_duplicate_check_uses_trimmed_name(self):
        result = self.validator.validate_person_name("  Bob ", PEOPLE)
        assert result.first_error.code == LedgerErrorCode.DUPLICATE_NAME

    def test_duplicate_check_is_case_sensitive(self):
        result = self.validator.validate_person_name("alice", PEOPLE)
        assert result.is_valid is True


class TestBuildItem:
    """Tests for build_item."""

    def setup_method(self):
        self.validator = LedgerValidator()

    def test_valid_item(self):
        result, item = self.validator.build_item("Pizza", "20", None, ["Alice", "Bob"], PEOPLE)
        assert result.is_valid is True
        assert item.name == "Pizza"
        assert item.unit_price == 20.0
        assert item.quantity == 1
        assert item.shared_by == ["Alice", "Bob"]

    def test_zero_price_is_allowed(self):
        result, item = self.validator.build_item("Water", 0, 1, ["Alice"], PEOPLE)
        assert result.is_valid is True
        assert item.unit_price == 0.0

    @pytest.mark.parametrize("name,price", [
        ("", 10),
        ("  ", 10),
        ("Pizza", ""),
        ("Pizza", "ten"),
        ("Pizza", -1),
        ("Pizza", float("nan")),
    ])
    def test_invalid_item(self, name, price):
        result, item = self.validator.build_item(name, price, 1, ["Alice"], PEOPLE)
        assert item is None
        assert result.first_error.code == LedgerErrorCode.INVALID_ITEM

    def test_fractional_quantity_is_invalid(self):
        result, item = self.validator.build_item("Pizza", 10, 1.5, ["Alice"], PEOPLE)
        assert item is None
        assert result.first_error.field == "quantity"

    def test_overflowing_total_is_invalid(self):
        """Test a finite price whose total overflows is rejected."""
        result, item = self.validator.build_item("Gold", 1e308, 10, ["Alice"], PEOPLE)
        assert item is None
        assert result.first_error.code == LedgerErrorCode.INVALID_ITEM
        assert result.first_error.issue_type == "not_finite"

    def test_empty_shared_by(self):
        result, item = self.validator.build_item("Pizza", 10, 1, [], PEOPLE)
        assert item is None
        assert result.first_error.code == LedgerErrorCode.EMPTY_SHARED_BY
        assert result.first_error.message == "Select at least one person"

    def test_bad_details_reported_before_empty_sharers(self):
        """Test the first error follows form order."""
        result, _ = self.validator.build_item("", 10, 1, [], PEOPLE)
        assert result.first_error.code == LedgerErrorCode.INVALID_ITEM
        assert {i.code for i in result.issues} == {
            LedgerErrorCode.INVALID_ITEM,
            LedgerErrorCode.EMPTY_SHARED_BY,
        }

    def test_unknown_sharer(self):
        result, item = self.validator.build_item("Pizza", 10, 1, ["Alice", "Carol"], PEOPLE)
        assert item is None
        assert result.first_error.issue_type == "unknown_person"
        assert "Carol" in result.first_error.message

    def test_repeated_sharer(self):
        result, item = self.validator.build_item("Pizza", 10, 1, ["Alice", "Alice"], PEOPLE)
        assert item is None
        assert result.first_error.issue_type == "repeated_person"


class TestSharedByUpdate:
    """Tests for validate_shared_by_update."""

    def setup_method(self):
        self.validator = LedgerValidator()

    def test_empty_update_is_allowed(self):
        assert self.validator.validate_shared_by_update([], PEOPLE).is_valid is True

    def test_unknown_person_rejected(self):
        result = self.validator.validate_shared_by_update(["Zed"], PEOPLE)
        assert result.first_error.code == LedgerErrorCode.INVALID_ITEM

    def test_summary_lists_messages(self):
        result = self.validator.validate_shared_by_update(["Zed"], PEOPLE)
        summary = self.validator.get_user_friendly_summary(result.issues)
        assert "• Unknown people: Zed" in summary
        assert "Add these people before assigning items to them" in summary

    def test_summary_without_issues(self):
        assert self.validator.get_user_friendly_summary([]) == "All checks passed."
