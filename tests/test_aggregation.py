"""
Tests for the aggregation engine and date helpers.

All dates are fixed. March 2024 starts on a Friday, so its Sundays are
the 3rd, 10th, 17th, 24th and 31st.
"""

import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.aggregation import (
    bucket_by_date,
    category_totals,
    classify,
    current_month_dates,
    current_week_dates,
    current_week_range,
    expenses_between,
    expenses_in_month,
    group_by_category_and_note,
    is_daily,
    last_day_of_month,
    monthly_weeks,
    spending_progress,
    split_by_kind,
    sum_amounts,
    week_date_range,
    week_number_within_month,
    weekday_index,
    weekly_breakdown,
)
from expense_tracker.models.expense import Expense, ExpenseKind


def make_expense(amount, category, date_str, original=None, note="", expense_id=1):
    return Expense(
        id=expense_id,
        amount=Decimal(str(amount)),
        category=category,
        original_category=original,
        note=note,
        date=date_str,
    )


class TestClassification:
    """Tests for daily/other classification."""

    def test_predefined_categories_are_daily(self):
        for category in ("Food", "Travel", "Utility"):
            expense = make_expense(10, category, "2024-03-05", original=category)
            assert classify(expense) is ExpenseKind.DAILY

    def test_extra_with_note_label_is_daily(self):
        """Extra expenses are shown under their note but stay daily."""
        expense = make_expense(500, "Concert", "2024-03-05", original="Extra", note="Concert")
        assert classify(expense) is ExpenseKind.DAILY

    def test_free_form_category_is_other(self):
        expense = make_expense(1200, "Rent", "2024-03-01", original="Rent")
        assert classify(expense) is ExpenseKind.OTHER

    def test_legacy_record_without_original_category(self):
        """Records saved before originalCategory existed classify by category."""
        assert is_daily(make_expense(10, "Food", "2024-03-05"))
        assert not is_daily(make_expense(10, "Rent", "2024-03-05"))

    def test_legacy_extra_label_without_original_is_other(self):
        """Only originalCategory marks an Extra expense."""
        assert not is_daily(make_expense(10, "Extra", "2024-03-05"))

    def test_original_category_wins_over_label(self):
        """A free-form expense labelled 'Food' is still other."""
        expense = make_expense(10, "Food", "2024-03-05", original="Snacks")
        assert classify(expense) is ExpenseKind.OTHER

    def test_split_is_total_and_exclusive(self):
        """Every expense lands in exactly one side, keeping order."""
        expenses = [
            make_expense(10, "Food", "2024-03-05", original="Food", expense_id=1),
            make_expense(20, "Rent", "2024-03-05", original="Rent", expense_id=2),
            make_expense(30, "Gift", "2024-03-05", original="Extra", note="Gift", expense_id=3),
            make_expense(40, "Phone", "2024-03-04", original="Phone", expense_id=4),
        ]
        daily, other = split_by_kind(expenses)
        assert [e.id for e in daily] == [1, 3]
        assert [e.id for e in other] == [2, 4]
        assert len(daily) + len(other) == len(expenses)


class TestBucketing:
    """Tests for grouping and summing."""

    def test_bucket_by_date_keeps_order(self):
        expenses = [
            make_expense(1, "Food", "2024-03-05", expense_id=1),
            make_expense(2, "Food", "2024-03-04", expense_id=2),
            make_expense(3, "Food", "2024-03-05", expense_id=3),
        ]
        buckets = bucket_by_date(expenses)
        assert list(buckets) == ["2024-03-05", "2024-03-04"]
        assert [e.id for e in buckets["2024-03-05"]] == [1, 3]

    def test_sum_amounts_empty_is_zero(self):
        assert sum_amounts([]) == Decimal("0")

    def test_sum_amounts_is_exact(self):
        expenses = [make_expense("0.1", "Food", "2024-03-05") for _ in range(3)]
        assert sum_amounts(expenses) == Decimal("0.3")

    def test_group_merges_same_category_and_note(self):
        """Two Food entries with no note become one 50.00 line."""
        expenses = [
            make_expense(20, "Food", "2024-03-05", original="Food", expense_id=1),
            make_expense(30, "Food", "2024-03-05", original="Food", expense_id=2),
        ]
        groups = group_by_category_and_note(expenses)
        assert list(groups) == [("Food", "")]
        merged = groups[("Food", "")]
        assert merged.amount == Decimal("50")
        assert merged.id == 1

    def test_group_keeps_different_notes_apart(self):
        expenses = [
            make_expense(20, "Food", "2024-03-05", note="lunch"),
            make_expense(30, "Food", "2024-03-05", note="dinner"),
        ]
        assert len(group_by_category_and_note(expenses)) == 2

    def test_group_is_idempotent(self):
        expenses = [
            make_expense(20, "Food", "2024-03-05"),
            make_expense(30, "Food", "2024-03-05"),
            make_expense(5, "Travel", "2024-03-05", note="bus"),
        ]
        once = group_by_category_and_note(expenses)
        twice = group_by_category_and_note(list(once.values()))
        assert {k: v.amount for k, v in twice.items()} == {k: v.amount for k, v in once.items()}

    def test_group_does_not_mutate_input(self):
        expenses = [
            make_expense(20, "Food", "2024-03-05"),
            make_expense(30, "Food", "2024-03-05"),
        ]
        group_by_category_and_note(expenses)
        assert [e.amount for e in expenses] == [Decimal("20"), Decimal("30")]

    def test_category_totals_by_display_label(self):
        expenses = [
            make_expense(20, "Food", "2024-03-05"),
            make_expense(1200, "Rent", "2024-03-01"),
            make_expense(30, "Food", "2024-03-02"),
        ]
        assert category_totals(expenses) == {
            "Food": Decimal("50"),
            "Rent": Decimal("1200"),
        }


class TestDateFilters:
    """Tests for week and month filters."""

    def test_weekday_index_sunday_is_zero(self):
        assert weekday_index(date(2024, 3, 17)) == 0
        assert weekday_index(date(2024, 3, 23)) == 6

    def test_current_week_range_mid_week(self):
        assert current_week_range("2024-03-20") == ("2024-03-17", "2024-03-23")

    def test_current_week_range_on_sunday_and_saturday(self):
        assert current_week_range(date(2024, 3, 17)) == ("2024-03-17", "2024-03-23")
        assert current_week_range(date(2024, 3, 23)) == ("2024-03-17", "2024-03-23")

    def test_current_week_range_crosses_month_start(self):
        assert current_week_range("2024-03-01") == ("2024-02-25", "2024-03-02")

    def test_current_week_dates(self):
        expenses = [
            make_expense(1, "Food", "2024-03-20"),
            make_expense(1, "Food", "2024-03-16"),
            make_expense(1, "Food", "2024-03-17"),
            make_expense(1, "Food", "2024-03-20"),
        ]
        assert current_week_dates(expenses, "2024-03-20") == ["2024-03-20", "2024-03-17"]

    def test_current_month_dates_distinct(self):
        expenses = [
            make_expense(1, "Food", "2024-03-20"),
            make_expense(1, "Food", "2024-02-29"),
            make_expense(1, "Food", "2024-03-02"),
            make_expense(1, "Food", "2024-03-20"),
        ]
        assert current_month_dates(expenses, date(2024, 3, 20)) == ["2024-03-20", "2024-03-02"]

    def test_expenses_between_is_inclusive(self):
        expenses = [
            make_expense(1, "Food", "2024-03-01", expense_id=1),
            make_expense(1, "Food", "2024-03-07", expense_id=2),
            make_expense(1, "Food", "2024-03-08", expense_id=3),
        ]
        result = expenses_between(expenses, "2024-03-01", date(2024, 3, 7))
        assert [e.id for e in result] == [1, 2]

    def test_expenses_in_month(self):
        expenses = [
            make_expense(1, "Food", "2024-03-31", expense_id=1),
            make_expense(1, "Food", "2024-04-01", expense_id=2),
            make_expense(1, "Food", "2023-03-15", expense_id=3),
        ]
        assert [e.id for e in expenses_in_month(expenses, 2024, 3)] == [1]


class TestWeekOfMonth:
    """Tests for week-of-month arithmetic."""

    @pytest.mark.parametrize("day,expected", [(1, 1), (7, 1), (8, 2), (14, 2), (15, 3), (28, 4), (29, 5), (31, 5)])
    def test_week_number_within_month(self, day, expected):
        assert week_number_within_month(date(2024, 3, day)) == expected

    def test_week_date_range(self):
        assert week_date_range(1, 2024, 3) == (1, 7)
        assert week_date_range(5, 2024, 3) == (29, 31)

    def test_week_date_range_leap_february(self):
        assert week_date_range(5, 2024, 2) == (29, 29)

    def test_week_date_range_nonexistent_week(self):
        """February 2023 has no fifth week."""
        with pytest.raises(ValueError, match="has no week 5"):
            week_date_range(5, 2023, 2)

    def test_week_date_range_rejects_week_zero(self):
        with pytest.raises(ValueError):
            week_date_range(0, 2024, 3)

    def test_monthly_weeks_truncates_last_span(self):
        weeks = monthly_weeks(2024, 3)
        assert [(w.start_day, w.end_day) for w in weeks] == [
            (1, 7), (8, 14), (15, 21), (22, 28), (29, 31),
        ]

    def test_monthly_weeks_february_non_leap(self):
        assert len(monthly_weeks(2023, 2)) == 4

    @pytest.mark.parametrize("year,month", [(2023, 2), (2024, 2), (2024, 4), (2024, 3)])
    def test_week_number_agrees_with_monthly_weeks(self, year, month):
        """Every day of 28-, 29-, 30- and 31-day months lands in its numbered span."""
        weeks = monthly_weeks(year, month)
        for day in range(1, last_day_of_month(year, month) + 1):
            day_str = date(year, month, day).isoformat()
            containing = [w for w in weeks if w.contains(day_str)]
            assert len(containing) == 1
            span = containing[0]
            week_num = week_number_within_month(day_str)
            assert span.week_number == week_num
            assert week_date_range(week_num, year, month) == (span.start_day, span.end_day)


class TestWeeklyBreakdown:
    """Tests for weekly_breakdown."""

    def test_every_span_returned_with_totals(self):
        expenses = [
            make_expense(10, "Food", "2024-03-02"),
            make_expense(15, "Food", "2024-03-02"),
            make_expense(40, "Travel", "2024-03-30"),
        ]
        weeks = weekly_breakdown(expenses, 2024, 3)
        assert len(weeks) == 5
        assert weeks[0].total == Decimal("25")
        assert list(weeks[0].daily_breakdown) == ["2024-03-02"]
        assert weeks[1].total == Decimal("0")
        assert weeks[1].daily_breakdown == {}
        assert weeks[4].total == Decimal("40")

    def test_ignores_other_months(self):
        weeks = weekly_breakdown([make_expense(10, "Food", "2024-04-02")], 2024, 3)
        assert all(w.total == Decimal("0") for w in weeks)


class TestSpendingProgress:
    """Tests for progress against the daily target."""

    def test_no_target(self):
        assert spending_progress(Decimal("50"), None) is None

    def test_under_target(self):
        progress = spending_progress(Decimal("50"), Decimal("200"))
        assert progress.percentage == Decimal("25")
        assert progress.remaining == Decimal("150")
        assert progress.over_budget is False

    def test_over_target_caps_percentage(self):
        progress = spending_progress(Decimal("300"), Decimal("200"))
        assert progress.percentage == Decimal("100")
        assert progress.remaining == Decimal("-100")
        assert progress.over_budget is True

    def test_zero_target_with_spending(self):
        progress = spending_progress(Decimal("1"), Decimal("0"))
        assert progress.percentage == Decimal("100")

    def test_zero_target_without_spending(self):
        progress = spending_progress(Decimal("0"), Decimal("0"))
        assert progress.percentage == Decimal("0")
        assert progress.over_budget is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
