"""
Aggregation Engine

DESIGN DECISION: Every function here is PURE.
Input is the full expense list (or a filtered subset) plus a reference
day; output is a newly built structure. Nothing here performs I/O,
caches, or mutates its input.

Classification is recomputed from the stored fields on every call.
There is no persisted "kind" flag, so a change to the category rules
applies to old records immediately without any migration.

PRECISION: Amounts are Decimal and sums are exact. Rounding to two
places happens only when a figure is displayed.
"""

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from expense_tracker.aggregation.dates import (
    DateLike,
    current_week_range,
    month_key,
    monthly_weeks,
    to_date,
)
from expense_tracker.models.expense import (
    DAILY_CATEGORY_KEYS,
    DailyCategory,
    Expense,
    ExpenseKind,
)
from expense_tracker.models.report import BudgetProgress, WeekBucket


ZERO = Decimal("0")
HUNDRED = Decimal("100")

GroupKey = tuple[str, str]


# =============================================================================
# CLASSIFICATION
# =============================================================================

def classify(expense: Expense) -> ExpenseKind:
    """
    Daily iff the original category (falling back to category) is
    Food/Travel/Utility, or the original category is Extra.
    """
    if (
        expense.classification_key in DAILY_CATEGORY_KEYS
        or expense.original_category == DailyCategory.EXTRA.value
    ):
        return ExpenseKind.DAILY
    return ExpenseKind.OTHER


def is_daily(expense: Expense) -> bool:
    return classify(expense) is ExpenseKind.DAILY


def split_by_kind(expenses: Iterable[Expense]) -> tuple[list[Expense], list[Expense]]:
    """Split into (daily, other), each keeping input order."""
    daily, other = [], []
    for expense in expenses:
        if is_daily(expense):
            daily.append(expense)
        else:
            other.append(expense)
    return daily, other


# =============================================================================
# BUCKETING AND SUMMING
# =============================================================================

def bucket_by_date(expenses: Iterable[Expense]) -> dict[str, list[Expense]]:
    """Group by date string, keeping input order within each day."""
    buckets: dict[str, list[Expense]] = {}
    for expense in expenses:
        buckets.setdefault(expense.date, []).append(expense)
    return buckets


def sum_amounts(expenses: Iterable[Expense]) -> Decimal:
    return sum((e.amount for e in expenses), ZERO)


def total_for_dates(buckets: dict[str, list[Expense]], dates: Iterable[str]) -> Decimal:
    """Sum every expense in the given date buckets. Missing dates count as zero."""
    return sum((sum_amounts(buckets.get(d, [])) for d in dates), ZERO)


def group_by_category_and_note(expenses: Iterable[Expense]) -> dict[GroupKey, Expense]:
    """
    Merge expenses sharing the exact (category, note) pair.

    The first expense of each group supplies every field except amount,
    which is the sum over the group. Used to collapse repeated entries
    on the same day into one display line.
    """
    groups: dict[GroupKey, Expense] = {}
    for expense in expenses:
        key = (expense.category, expense.note or "")
        if key in groups:
            merged = groups[key]
            groups[key] = merged.model_copy(
                update={"amount": merged.amount + expense.amount}
            )
        else:
            groups[key] = expense
    return groups


def category_totals(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Sum amounts per display category, in first-seen order."""
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, ZERO) + expense.amount
    return totals


# =============================================================================
# DATE FILTERS
# =============================================================================

def expenses_on(expenses: Iterable[Expense], day: DateLike) -> list[Expense]:
    target = to_date(day).isoformat()
    return [e for e in expenses if e.date == target]


def expenses_between(
    expenses: Iterable[Expense],
    start: DateLike,
    end: DateLike,
) -> list[Expense]:
    """Expenses dated within [start, end], both inclusive."""
    lo, hi = to_date(start).isoformat(), to_date(end).isoformat()
    return [e for e in expenses if lo <= e.date <= hi]


def expenses_in_month(expenses: Iterable[Expense], year: int, month: int) -> list[Expense]:
    prefix = month_key(year, month) + "-"
    return [e for e in expenses if e.date.startswith(prefix)]


def current_week_dates(expenses: Iterable[Expense], now: DateLike) -> list[str]:
    """Distinct dates, in first-seen order, inside the week around `now`."""
    start, end = current_week_range(now)
    return _distinct_dates(e for e in expenses if start <= e.date <= end)


def current_month_dates(expenses: Iterable[Expense], now: DateLike) -> list[str]:
    """Distinct dates, in first-seen order, whose year and month match `now`."""
    today = to_date(now)
    return _distinct_dates(expenses_in_month(expenses, today.year, today.month))


def _distinct_dates(expenses: Iterable[Expense]) -> list[str]:
    return list(dict.fromkeys(e.date for e in expenses))


def sort_dates_newest_first(dates: Iterable[str]) -> list[str]:
    return sorted(dates, reverse=True)


# =============================================================================
# WEEKLY BREAKDOWN
# =============================================================================

def weekly_breakdown(
    expenses: Sequence[Expense],
    year: int,
    month: int,
) -> list[WeekBucket]:
    """
    Bucket expenses into the month's week-of-month spans.

    Callers pass the subset they want summarised (the monthly report
    passes daily expenses only). Every span is returned, empty or not.
    """
    buckets = []
    for span in monthly_weeks(year, month):
        in_week = [e for e in expenses if span.contains(e.date)]
        buckets.append(WeekBucket(
            span=span,
            total=sum_amounts(in_week),
            daily_breakdown=bucket_by_date(in_week),
        ))
    return buckets


# =============================================================================
# TARGET
# =============================================================================

def spending_progress(spent: Decimal, target: Optional[Decimal]) -> Optional[BudgetProgress]:
    """
    Compare today's daily spending with the target.

    No target means no progress figures at all. A zero target is 100%
    spent as soon as anything is spent.
    """
    if target is None:
        return None

    if target > 0:
        percentage = min(spent / target * HUNDRED, HUNDRED)
    else:
        percentage = HUNDRED if spent > 0 else ZERO

    return BudgetProgress(
        target=target,
        spent=spent,
        remaining=target - spent,
        percentage=percentage,
    )
