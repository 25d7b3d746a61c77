"""
Report Models

Derived structures produced by the aggregation engine and the report
views. Nothing here is ever written to the store; every instance is
rebuilt from the full expense list each time a view is shown.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from expense_tracker.models.expense import Expense


# =============================================================================
# CALENDAR BUCKETS
# =============================================================================

class WeekSpan(BaseModel):
    """A run of up to seven days inside one month, starting on day 1, 8, 15..."""

    week_number: int = Field(..., ge=1, le=5)
    start: str = Field(..., description="First day, YYYY-MM-DD")
    end: str = Field(..., description="Last day (inclusive), YYYY-MM-DD")

    @property
    def start_day(self) -> int:
        return date.fromisoformat(self.start).day

    @property
    def end_day(self) -> int:
        return date.fromisoformat(self.end).day

    def contains(self, day: str) -> bool:
        return self.start <= day <= self.end


class WeekBucket(BaseModel):
    """Daily expenses that fall inside one WeekSpan."""

    span: WeekSpan
    total: Decimal = Decimal("0")
    daily_breakdown: dict[str, list[Expense]] = Field(
        default_factory=dict,
        description="Expenses per date, in input order"
    )


class BudgetProgress(BaseModel):
    """Spending against the daily target."""

    target: Decimal
    spent: Decimal
    remaining: Decimal = Field(
        ...,
        description="target - spent; negative when over budget"
    )
    percentage: Decimal = Field(
        ...,
        ge=0,
        le=100,
        description="Share of target spent, capped at 100"
    )

    @property
    def over_budget(self) -> bool:
        return self.remaining < 0


# =============================================================================
# VIEW MODELS
# =============================================================================

class CategoryTag(BaseModel):
    """A free-form category shown as a tag on the home screen."""

    name: str
    icon: str


class DayDetail(BaseModel):
    """One day's grouped lines and total."""

    date: str
    lines: list[Expense] = Field(default_factory=list)
    total: Decimal = Decimal("0")


class DayTotal(BaseModel):
    """A date and the sum of its expenses."""

    date: str
    total: Decimal = Decimal("0")


class MonthWeekGroup(BaseModel):
    """A week-of-month group of days for the history view."""

    week_number: int
    start_day: int
    end_day: int
    total: Decimal = Decimal("0")
    days: list[DayDetail] = Field(default_factory=list)


class HomeSummary(BaseModel):
    """Everything the home screen shows for today."""

    today: str
    daily_expenses: list[Expense] = Field(default_factory=list)
    other_expenses: list[Expense] = Field(default_factory=list)
    daily_total: Decimal = Decimal("0")
    other_total: Decimal = Decimal("0")
    other_categories: list[CategoryTag] = Field(default_factory=list)
    progress: Optional[BudgetProgress] = Field(
        default=None,
        description="None when no target is set"
    )


class HistoryOverview(BaseModel):
    """Today, the rest of this week and the rest of this month."""

    today: str
    today_lines: list[Expense] = Field(default_factory=list)
    today_total: Decimal = Decimal("0")
    rest_of_week: list[DayTotal] = Field(default_factory=list)
    weekly_total: Decimal = Decimal("0")
    rest_of_month: list[MonthWeekGroup] = Field(default_factory=list)
    today_other_total: Decimal = Decimal("0")


class MonthlyReport(BaseModel):
    """
    Full report for one calendar month.

    Every expense dated in the month is in exactly one of
    `weeks[*].daily_breakdown` or `other_expenses`.
    """

    year: int
    month: int = Field(..., ge=1, le=12)
    month_name: str
    expenses: list[Expense] = Field(default_factory=list)
    daily_expenses: list[Expense] = Field(default_factory=list)
    other_expenses: list[Expense] = Field(default_factory=list)
    other_by_date: dict[str, list[Expense]] = Field(default_factory=dict)
    weeks: list[WeekBucket] = Field(default_factory=list)
    category_totals: dict[str, Decimal] = Field(default_factory=dict)
    daily_total: Decimal = Decimal("0")
    other_total: Decimal = Decimal("0")
    grand_total: Decimal = Decimal("0")
