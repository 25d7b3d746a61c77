"""
Entry Form Validation

DESIGN DECISION: Both entry forms share one ordered rule list and the
FIRST failure wins:

1. AMOUNT - non-empty, parses as a finite number, greater than zero
   and no larger than MAX_AMOUNT
2. CATEGORY - non-empty after trimming (daily form: one of the four
   predefined categories)
3. NOTE - daily form only: "Extra" needs a note, because the note
   becomes the label the expense is shown under

Each failure is its own exception type carrying the field, a short
title and a user-facing message, so the UI can show a blocking notice
and the user can correct the field and resubmit.

IMPORTANT: Validation never silently fixes input beyond trimming
surrounding whitespace.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

from expense_tracker.models.expense import DailyCategory


# Upper bound for amounts and targets, far above any real expense
MAX_AMOUNT = Decimal("1e15")


class ExpenseValidationError(Exception):
    """Base exception for rejected form input."""

    field: str = "form"
    title: str = "Invalid Input"
    suggested_fix: Optional[str] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def error_type(self) -> str:
        return type(self).__name__


class MissingOrInvalidAmount(ExpenseValidationError):
    """Amount is empty, not a number, not finite, or not positive."""
    field = "amount"
    title = "Missing Fields"
    suggested_fix = "Enter the amount as a number, e.g. 250 or 99.50"


class MissingCategory(ExpenseValidationError):
    """No usable category was selected or typed."""
    field = "category"
    title = "Missing Fields"
    suggested_fix = "Pick a category before saving"


class MissingRequiredNote(ExpenseValidationError):
    """An Extra expense was submitted without saying what it was for."""
    field = "note"
    title = "Missing Note"
    suggested_fix = "Describe the expense, e.g. 'Concert tickets'"


class InvalidTarget(ExpenseValidationError):
    """The daily target is not a finite, non-negative number."""
    field = "target"
    title = "Invalid Target"
    suggested_fix = "Enter the target as a number, e.g. 500"


@dataclass(frozen=True)
class ValidatedEntry:
    """Cleaned form input, ready to become an Expense."""
    amount: Decimal
    category: str
    original_category: str
    note: str


def parse_amount(amount_text: Optional[str]) -> Decimal:
    """
    Parse user-typed amount text.

    Raises:
        MissingOrInvalidAmount: If empty, unparsable, non-finite or <= 0
            or above MAX_AMOUNT
    """
    text = (amount_text or "").strip()
    if not text:
        raise MissingOrInvalidAmount("Please enter a valid amount and category")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise MissingOrInvalidAmount(f"'{text}' is not a valid amount")

    if not amount.is_finite():
        raise MissingOrInvalidAmount(f"'{text}' is not a valid amount")
    if amount <= 0:
        raise MissingOrInvalidAmount("Amount must be greater than zero")
    if amount > MAX_AMOUNT:
        raise MissingOrInvalidAmount(f"Amount must not exceed {MAX_AMOUNT:,f}")
    return amount


def parse_target(target_text: Optional[str]) -> Decimal:
    """
    Parse user-typed daily target text.

    Raises:
        InvalidTarget: If empty, unparsable, non-finite, negative
            or above MAX_AMOUNT
    """
    text = (target_text or "").strip()
    if not text:
        raise InvalidTarget("Please enter a daily target")

    try:
        target = Decimal(text)
    except InvalidOperation:
        raise InvalidTarget(f"'{text}' is not a valid target")

    if not target.is_finite() or target < 0:
        raise InvalidTarget("Target must be zero or a positive number")
    if target > MAX_AMOUNT:
        raise InvalidTarget(f"Target must not exceed {MAX_AMOUNT:,f}")
    return target


class ExpenseFormValidator:
    """
    Validates the two entry forms.

    Stateless; one instance can serve every form.
    """

    def validate_daily(
        self,
        amount_text: Optional[str],
        category: Optional[str],
        note: Optional[str],
    ) -> ValidatedEntry:
        """
        Validate the predefined-category (daily) form.

        For Extra, the trimmed note becomes the display category.

        Raises:
            MissingOrInvalidAmount, MissingCategory, MissingRequiredNote
        """
        amount = parse_amount(amount_text)

        selected = (category or "").strip()
        if not selected:
            raise MissingCategory("Please enter a valid amount and category")
        try:
            daily_category = DailyCategory(selected)
        except ValueError:
            choices = ", ".join(c.value for c in DailyCategory)
            raise MissingCategory(f"'{selected}' is not one of: {choices}")

        clean_note = (note or "").strip()
        if daily_category is DailyCategory.EXTRA:
            if not clean_note:
                raise MissingRequiredNote("Please specify what the Extra expense is for")
            display_category = clean_note
        else:
            display_category = daily_category.value

        return ValidatedEntry(
            amount=amount,
            category=display_category,
            original_category=daily_category.value,
            note=clean_note,
        )

    def validate_other(
        self,
        amount_text: Optional[str],
        category: Optional[str],
        note: Optional[str],
    ) -> ValidatedEntry:
        """
        Validate the free-form (other expenses) form.

        The typed category is both the label and the original category.

        Raises:
            MissingOrInvalidAmount, MissingCategory
        """
        amount = parse_amount(amount_text)

        typed = (category or "").strip()
        if not typed:
            raise MissingCategory("Please enter a valid amount and category")

        return ValidatedEntry(
            amount=amount,
            category=typed,
            original_category=typed,
            note=(note or "").strip(),
        )

    def get_user_friendly_message(self, error: ExpenseValidationError) -> str:
        """The text shown in the blocking notice."""
        lines = [f"❌ {error.message}"]
        if error.suggested_fix:
            lines.append(f"💡 {error.suggested_fix}")
        return "\n".join(lines)
