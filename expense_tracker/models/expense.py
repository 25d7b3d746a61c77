"""
Core Data Models for Expense Tracker

These models define the schema of everything written to the store.
They are designed to:
1. Enforce positive, finite amounts at runtime
2. Keep the stored JSON shape stable (camelCase `originalCategory`)
3. Be immutable once created
4. Carry no derived state - classification is computed, never stored

DESIGN DECISION: Amounts are Decimal in memory and JSON numbers in the store.
Totals are summed exactly and only rounded when displayed.
"""

import re
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class DailyCategory(str, Enum):
    """
    Predefined categories offered by the daily expense form.

    EXTRA is special: the user's note replaces the category label.
    """
    FOOD = "Food"
    TRAVEL = "Travel"
    EXTRA = "Extra"
    UTILITY = "Utility"

    @property
    def icon(self) -> str:
        return _DAILY_ICONS[self]

    @property
    def label(self) -> str:
        return f"{self.icon} {self.value}"


_DAILY_ICONS = {
    DailyCategory.FOOD: "🍔",
    DailyCategory.TRAVEL: "🚗",
    DailyCategory.EXTRA: "✨",
    DailyCategory.UTILITY: "⚡",
}

# Categories whose label is kept as-is. EXTRA is matched on original_category only.
DAILY_CATEGORY_KEYS = frozenset({
    DailyCategory.FOOD.value,
    DailyCategory.TRAVEL.value,
    DailyCategory.UTILITY.value,
})

# Icons for well known free-form categories
OTHER_CATEGORY_ICONS = {
    "Rent": "🏠",
    "Groceries": "🛒",
    "Utilities": "⚡",
    "Transport": "🚗",
    "Internet": "🌐",
    "Phone": "📱",
    "Shopping": "🛍️",
    "Entertainment": "🎬",
    "Healthcare": "🏥",
    "Education": "📚",
    "Insurance": "🛡️",
    "Investment": "💰",
}
DEFAULT_OTHER_ICON = "💼"


class ExpenseKind(str, Enum):
    """Result of classifying an expense."""
    DAILY = "daily"
    OTHER = "other"


# =============================================================================
# EXPENSE
# =============================================================================

class Expense(BaseModel):
    """
    A single recorded expense.

    CRITICAL: Expenses are never edited once saved.
    The model is frozen so nothing downstream can mutate one in place.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: int = Field(
        default_factory=lambda: int(datetime.now().timestamp() * 1000),
        description="Creation timestamp in milliseconds (render key only)"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount spent"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Display label"
    )
    original_category: Optional[str] = Field(
        default=None,
        alias="originalCategory",
        description="Category key as selected or typed"
    )
    note: str = Field(
        default="",
        description="Optional free text"
    )
    date: str = Field(
        ...,
        description="Local calendar day, YYYY-MM-DD"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def float_to_decimal(cls, v: Any) -> Any:
        """Convert floats through their shortest repr so 0.1 stays 0.1."""
        if isinstance(v, float):
            return Decimal(repr(v))
        return v

    @field_validator('amount')
    @classmethod
    def amount_must_be_finite(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("Amount must be a finite number")
        return v

    @field_validator('note', mode='before')
    @classmethod
    def none_note_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator('date')
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        if not DATE_PATTERN.match(v):
            raise ValueError(f"Date must be YYYY-MM-DD, got {v!r}")
        return v

    @property
    def classification_key(self) -> str:
        """The field classification looks at: original_category, else category."""
        return self.original_category or self.category

    def to_store_dict(self) -> dict:
        """
        Convert to the JSON object written to the store.

        Integral amounts are written as ints, everything else as floats.
        """
        if self.amount == self.amount.to_integral_value():
            amount: Any = int(self.amount)
        else:
            amount = float(self.amount)
        return {
            "id": self.id,
            "amount": amount,
            "category": self.category,
            "originalCategory": self.original_category,
            "note": self.note,
            "date": self.date,
        }


def other_category_icon(category: str) -> str:
    """Icon shown next to a free-form category tag."""
    return OTHER_CATEGORY_ICONS.get(category, DEFAULT_OTHER_ICON)
