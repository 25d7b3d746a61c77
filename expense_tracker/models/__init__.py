"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
Everything written to the store conforms to Expense; everything shown
in a report is one of the derived report models.
"""

from expense_tracker.models.expense import (
    DAILY_CATEGORY_KEYS,
    DailyCategory,
    Expense,
    ExpenseKind,
    other_category_icon,
)
from expense_tracker.models.report import (
    BudgetProgress,
    CategoryTag,
    DayDetail,
    DayTotal,
    HistoryOverview,
    HomeSummary,
    MonthlyReport,
    MonthWeekGroup,
    WeekBucket,
    WeekSpan,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "DAILY_CATEGORY_KEYS",
    "DailyCategory",
    "Expense",
    "ExpenseKind",
    "other_category_icon",
    # Report models
    "BudgetProgress",
    "CategoryTag",
    "DayDetail",
    "DayTotal",
    "HistoryOverview",
    "HomeSummary",
    "MonthlyReport",
    "MonthWeekGroup",
    "WeekBucket",
    "WeekSpan",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
