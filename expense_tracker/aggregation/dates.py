"""
Date Helpers

Week and month arithmetic over plain `YYYY-MM-DD` strings.

DESIGN DECISION: Dates are calendar strings, never timestamps.
Nothing here looks at a time zone, so bucketing gives the same answer
wherever and whenever it runs.

Two notions of "week" are used:
- current_week_range: the Sunday-to-Saturday week around a given day
- week-of-month: consecutive 7-day spans starting on the 1st
  (days 1-7, 8-14, 15-21, 22-28, 29-end), independent of weekday
"""

import calendar
from datetime import date, timedelta
from typing import NamedTuple, Union

from expense_tracker.models.report import WeekSpan


MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

DAYS_PER_WEEK = 7


class DayRange(NamedTuple):
    """First and last day-of-month of a week-of-month span."""
    start_day: int
    end_day: int


DateLike = Union[str, date]


def to_date(value: DateLike) -> date:
    """Accept either a date or a YYYY-MM-DD string."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def weekday_index(day: date) -> int:
    """Day of week with Sunday = 0 ... Saturday = 6."""
    return (day.weekday() + 1) % DAYS_PER_WEEK


def current_week_range(now: DateLike) -> tuple[str, str]:
    """
    The Sunday-start week containing `now`.

    Returns (start, end) as YYYY-MM-DD strings, end = start + 6 days.
    """
    today = to_date(now)
    start = today - timedelta(days=weekday_index(today))
    end = start + timedelta(days=DAYS_PER_WEEK - 1)
    return start.isoformat(), end.isoformat()


def week_number_within_month(day: DateLike) -> int:
    """
    1-based week-of-month of a date, counted from the 1st of its own month.

    Day 1-7 -> 1, 8-14 -> 2, ..., 29-31 -> 5.
    """
    return (to_date(day).day - 1) // DAYS_PER_WEEK + 1


def week_date_range(week_num: int, year: int, month: int) -> DayRange:
    """
    Day-of-month span of a week-of-month.

    Args:
        week_num: 1-based week-of-month
        year: Calendar year
        month: Calendar month, 1-12

    Raises:
        ValueError: If the week starts after the month's last day
    """
    if week_num < 1:
        raise ValueError(f"Week number must be >= 1, got {week_num}")

    last_day = last_day_of_month(year, month)
    start_day = 1 + (week_num - 1) * DAYS_PER_WEEK
    if start_day > last_day:
        raise ValueError(
            f"{MONTH_NAMES[month - 1]} {year} has no week {week_num}"
        )
    return DayRange(start_day, min(start_day + DAYS_PER_WEEK - 1, last_day))


def monthly_weeks(year: int, month: int) -> list[WeekSpan]:
    """
    Partition a month into 7-day spans starting on the 1st.

    The final span is truncated to the month's last day.
    """
    last_day = last_day_of_month(year, month)
    weeks = []
    start_day = 1
    while start_day <= last_day:
        end_day = min(start_day + DAYS_PER_WEEK - 1, last_day)
        weeks.append(WeekSpan(
            week_number=len(weeks) + 1,
            start=date(year, month, start_day).isoformat(),
            end=date(year, month, end_day).isoformat(),
        ))
        start_day = end_day + 1
    return weeks


def month_key(year: int, month: int) -> str:
    """YYYY-MM prefix shared by every date string in a month."""
    return f"{year:04d}-{month:02d}"
