"""
Aggregation Package

Pure functions that classify, bucket and sum expenses by day,
week, month and category.
"""

from expense_tracker.aggregation.dates import (
    MONTH_NAMES,
    DayRange,
    current_week_range,
    last_day_of_month,
    monthly_weeks,
    week_date_range,
    week_number_within_month,
    weekday_index,
)
from expense_tracker.aggregation.engine import (
    bucket_by_date,
    category_totals,
    classify,
    current_month_dates,
    current_week_dates,
    expenses_between,
    expenses_in_month,
    expenses_on,
    group_by_category_and_note,
    is_daily,
    sort_dates_newest_first,
    spending_progress,
    split_by_kind,
    sum_amounts,
    total_for_dates,
    weekly_breakdown,
)

__all__ = [
    # Dates
    "MONTH_NAMES",
    "DayRange",
    "current_week_range",
    "last_day_of_month",
    "monthly_weeks",
    "week_date_range",
    "week_number_within_month",
    "weekday_index",
    # Engine
    "bucket_by_date",
    "category_totals",
    "classify",
    "current_month_dates",
    "current_week_dates",
    "expenses_between",
    "expenses_in_month",
    "expenses_on",
    "group_by_category_and_note",
    "is_daily",
    "sort_dates_newest_first",
    "spending_progress",
    "split_by_kind",
    "sum_amounts",
    "total_for_dates",
    "weekly_breakdown",
]
