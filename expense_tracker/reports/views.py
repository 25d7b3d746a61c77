"""
Report Views

Compose aggregation engine outputs into the structures each screen
shows. These functions never classify or bucket on their own; they
only call the engine and arrange its results.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from expense_tracker.aggregation.dates import (
    MONTH_NAMES,
    DateLike,
    to_date,
    week_date_range,
    week_number_within_month,
)
from expense_tracker.aggregation.engine import (
    bucket_by_date,
    category_totals,
    current_month_dates,
    current_week_dates,
    expenses_in_month,
    expenses_on,
    group_by_category_and_note,
    sort_dates_newest_first,
    spending_progress,
    split_by_kind,
    sum_amounts,
    total_for_dates,
    weekly_breakdown,
)
from expense_tracker.models.expense import Expense, other_category_icon
from expense_tracker.models.report import (
    CategoryTag,
    DayDetail,
    DayTotal,
    HistoryOverview,
    HomeSummary,
    MonthlyReport,
    MonthWeekGroup,
)


def _day_detail(day: str, expenses: list[Expense]) -> DayDetail:
    return DayDetail(
        date=day,
        lines=list(group_by_category_and_note(expenses).values()),
        total=sum_amounts(expenses),
    )


def build_home_summary(
    expenses: Iterable[Expense],
    target: Optional[Decimal],
    today: date,
) -> HomeSummary:
    """Today's daily and other spending, plus progress against the target."""
    todays = expenses_on(expenses, today)
    daily, other = split_by_kind(todays)
    daily_total = sum_amounts(daily)

    category_names = list(dict.fromkeys(e.category for e in other))

    return HomeSummary(
        today=today.isoformat(),
        daily_expenses=daily,
        other_expenses=other,
        daily_total=daily_total,
        other_total=sum_amounts(other),
        other_categories=[
            CategoryTag(name=name, icon=other_category_icon(name))
            for name in category_names
        ],
        progress=spending_progress(daily_total, target),
    )


def build_history_overview(
    expenses: Iterable[Expense],
    today: date,
) -> HistoryOverview:
    """
    Daily spending for today, the rest of this week and the rest of
    this month, plus today's other-expense total.

    "Rest of this month" is every date in the month that is outside the
    current Sunday-start week, grouped by week-of-month.
    """
    today_str = today.isoformat()
    daily, other = split_by_kind(expenses)
    buckets = bucket_by_date(daily)

    todays = buckets.get(today_str, [])

    week_dates = current_week_dates(daily, today)
    rest_of_week = [
        DayTotal(date=d, total=sum_amounts(buckets[d]))
        for d in sort_dates_newest_first(week_dates)
        if d != today_str
    ]

    week_date_set = set(week_dates)
    month_only_dates = [
        d for d in current_month_dates(daily, today) if d not in week_date_set
    ]

    dates_by_week: dict[int, list[str]] = {}
    for d in month_only_dates:
        dates_by_week.setdefault(week_number_within_month(d), []).append(d)

    rest_of_month = []
    for week_num in sorted(dates_by_week):
        dates = sort_dates_newest_first(dates_by_week[week_num])
        day_range = week_date_range(week_num, today.year, today.month)
        rest_of_month.append(MonthWeekGroup(
            week_number=week_num,
            start_day=day_range.start_day,
            end_day=day_range.end_day,
            total=total_for_dates(buckets, dates),
            days=[_day_detail(d, buckets[d]) for d in dates],
        ))

    return HistoryOverview(
        today=today_str,
        today_lines=list(group_by_category_and_note(todays).values()),
        today_total=sum_amounts(todays),
        rest_of_week=rest_of_week,
        weekly_total=total_for_dates(buckets, week_dates),
        rest_of_month=rest_of_month,
        today_other_total=sum_amounts(expenses_on(other, today)),
    )


def build_report_for_month(
    expenses: Iterable[Expense],
    year: int,
    month: int,
) -> MonthlyReport:
    """
    Everything in one calendar month.

    Daily expenses go into the week-of-month breakdown, other expenses
    into a flat list; together they cover the month exactly once.
    """
    monthly = sorted(
        expenses_in_month(expenses, year, month),
        key=lambda e: e.date,
        reverse=True,
    )
    daily, other = split_by_kind(monthly)
    daily_total = sum_amounts(daily)
    other_total = sum_amounts(other)

    return MonthlyReport(
        year=year,
        month=month,
        month_name=MONTH_NAMES[month - 1],
        expenses=monthly,
        daily_expenses=daily,
        other_expenses=other,
        other_by_date=bucket_by_date(other),
        weeks=weekly_breakdown(daily, year, month),
        category_totals=category_totals(monthly),
        daily_total=daily_total,
        other_total=other_total,
        grand_total=daily_total + other_total,
    )


def build_monthly_report(expenses: Iterable[Expense], today: DateLike) -> MonthlyReport:
    """Report for the calendar month containing `today`."""
    day = to_date(today)
    return build_report_for_month(expenses, day.year, day.month)
