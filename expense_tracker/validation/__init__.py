"""Entry form validation package."""

from expense_tracker.validation.validator import (
    MAX_AMOUNT,
    ExpenseFormValidator,
    ExpenseValidationError,
    InvalidTarget,
    MissingCategory,
    MissingOrInvalidAmount,
    MissingRequiredNote,
    ValidatedEntry,
    parse_amount,
    parse_target,
)

__all__ = [
    "MAX_AMOUNT",
    "ExpenseFormValidator",
    "ExpenseValidationError",
    "InvalidTarget",
    "MissingCategory",
    "MissingOrInvalidAmount",
    "MissingRequiredNote",
    "ValidatedEntry",
    "parse_amount",
    "parse_target",
]
