"""
Tests for entry form validation.
"""

import pytest
from decimal import Decimal

from expense_tracker.validation import (
    MAX_AMOUNT,
    ExpenseFormValidator,
    InvalidTarget,
    MissingCategory,
    MissingOrInvalidAmount,
    MissingRequiredNote,
    parse_amount,
    parse_target,
)


@pytest.fixture
def validator():
    return ExpenseFormValidator()


class TestParseAmount:
    """Tests for amount parsing."""

    def test_valid_amounts(self):
        assert parse_amount("50") == Decimal("50")
        assert parse_amount(" 99.50 ") == Decimal("99.50")

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_amount(self, text):
        with pytest.raises(MissingOrInvalidAmount, match="valid amount and category"):
            parse_amount(text)

    @pytest.mark.parametrize("text", ["abc", "12abc", "1,000"])
    def test_unparsable_amount(self, text):
        with pytest.raises(MissingOrInvalidAmount, match="is not a valid amount"):
            parse_amount(text)

    @pytest.mark.parametrize("text", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_amount(self, text):
        with pytest.raises(MissingOrInvalidAmount):
            parse_amount(text)

    @pytest.mark.parametrize("text", ["0", "-5", "0.00"])
    def test_non_positive_amount(self, text):
        with pytest.raises(MissingOrInvalidAmount, match="greater than zero"):
            parse_amount(text)

    @pytest.mark.parametrize("text", ["1e30", "1000000000000000.01"])
    def test_amount_above_cap(self, text):
        with pytest.raises(MissingOrInvalidAmount, match="must not exceed"):
            parse_amount(text)

    def test_amount_at_cap(self):
        assert parse_amount("1000000000000000") == MAX_AMOUNT


class TestParseTarget:
    """Tests for daily target parsing."""

    def test_valid_target(self):
        assert parse_target("500") == Decimal("500")

    def test_zero_target_allowed(self):
        assert parse_target("0") == Decimal("0")

    def test_target_above_cap(self):
        with pytest.raises(InvalidTarget, match="must not exceed"):
            parse_target("1e30")

    @pytest.mark.parametrize("text", ["", "abc", "-1", "NaN"])
    def test_invalid_target(self, text):
        with pytest.raises(InvalidTarget):
            parse_target(text)


class TestDailyForm:
    """Tests for the predefined-category form."""

    def test_food_entry(self, validator):
        entry = validator.validate_daily("50", "Food", "")
        assert entry.amount == Decimal("50")
        assert entry.category == "Food"
        assert entry.original_category == "Food"
        assert entry.note == ""

    def test_extra_uses_note_as_category(self, validator):
        entry = validator.validate_daily("500", "Extra", "  Concert  ")
        assert entry.category == "Concert"
        assert entry.original_category == "Extra"
        assert entry.note == "Concert"

    def test_extra_without_note(self, validator):
        with pytest.raises(MissingRequiredNote) as exc_info:
            validator.validate_daily("500", "Extra", "   ")
        assert exc_info.value.title == "Missing Note"
        assert exc_info.value.message == "Please specify what the Extra expense is for"

    def test_missing_category(self, validator):
        with pytest.raises(MissingCategory) as exc_info:
            validator.validate_daily("50", None, "")
        assert exc_info.value.title == "Missing Fields"

    def test_unknown_category(self, validator):
        with pytest.raises(MissingCategory, match="is not one of"):
            validator.validate_daily("50", "Rent", "")

    def test_amount_checked_first(self, validator):
        """The first failing rule wins."""
        with pytest.raises(MissingOrInvalidAmount):
            validator.validate_daily("", "", "")

    def test_note_kept_for_non_extra(self, validator):
        entry = validator.validate_daily("20", "Travel", " bus ")
        assert entry.category == "Travel"
        assert entry.note == "bus"


class TestOtherForm:
    """Tests for the free-form category form."""

    def test_rent_entry(self, validator):
        entry = validator.validate_other("1200", " Rent ", "")
        assert entry.category == "Rent"
        assert entry.original_category == "Rent"

    def test_blank_category(self, validator):
        with pytest.raises(MissingCategory):
            validator.validate_other("1200", "   ", "March")

    def test_invalid_amount(self, validator):
        with pytest.raises(MissingOrInvalidAmount):
            validator.validate_other("twelve", "Rent", "")


class TestErrorMessages:
    """Tests for user-facing error text."""

    def test_error_carries_field_and_type(self):
        error = MissingRequiredNote("Please specify what the Extra expense is for")
        assert error.field == "note"
        assert error.error_type == "MissingRequiredNote"

    def test_user_friendly_message_includes_fix(self, validator):
        error = MissingOrInvalidAmount("Amount must be greater than zero")
        message = validator.get_user_friendly_message(error)
        assert "Amount must be greater than zero" in message
        assert "e.g. 250" in message


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
