"""Display formatting for amounts and dates."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, getcontext, localcontext

from expense_tracker.aggregation.dates import DateLike, to_date


CENTS = Decimal("0.01")


def round_amount(amount: Decimal) -> Decimal:
    """Round to two places for display. Stored values are never rounded."""
    with localcontext() as ctx:
        # quantize raises InvalidOperation when the result needs more digits than prec
        ctx.prec = max(getcontext().prec, amount.adjusted() + 3)
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal, currency: str = "Rs.") -> str:
    """e.g. Decimal('1234.5') -> 'Rs. 1234.50'"""
    return f"{currency} {round_amount(amount):.2f}"


def format_short_date(day: DateLike) -> str:
    """e.g. '2024-03-05' -> 'Mar 5'"""
    d = to_date(day)
    return f"{d.strftime('%b')} {d.day}"


def format_long_date(day: date) -> str:
    """e.g. 'Tuesday, March 5, 2024'"""
    return f"{day.strftime('%A, %B')} {day.day}, {day.year}"


def ordinal_suffix(day: int) -> str:
    if 11 <= day <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_day_range(start_day: int, end_day: int) -> str:
    """e.g. (1, 7) -> '1st to 7th'"""
    return (
        f"{start_day}{ordinal_suffix(start_day)} to "
        f"{end_day}{ordinal_suffix(end_day)}"
    )


def format_compact_day_range(start_day: int, end_day: int) -> str:
    """e.g. (8, 14) -> '8-14', (29, 29) -> '29'"""
    if start_day == end_day:
        return str(start_day)
    return f"{start_day}-{end_day}"
