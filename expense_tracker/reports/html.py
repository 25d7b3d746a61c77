"""
Monthly Report HTML Rendering

Turns a MonthlyReport into a standalone HTML document for printing or
sharing. The markup is plain; what matters is that every expense of
the month is listed exactly once, either under its week in the daily
breakdown or in the other-expenses list.

All user text goes through html.escape.
"""

from html import escape

from expense_tracker.aggregation.engine import sum_amounts
from expense_tracker.models.expense import Expense
from expense_tracker.models.report import MonthlyReport
from expense_tracker.reports.formatting import (
    format_amount,
    format_day_range,
    format_short_date,
)


_STYLE = """
body { font-family: -apple-system, Helvetica, Arial, sans-serif; margin: 2rem; color: #222; }
h1 { color: #1E3A5F; }
h2 { border-bottom: 1px solid #ddd; padding-bottom: 0.25rem; }
li.expense { color: #444; }
.total { font-size: 1.2rem; }
"""


def report_title(report: MonthlyReport) -> str:
    return f"{report.month_name} {report.year} Monthly Expense Summary"


def _expense_item(expense: Expense, currency: str, with_date: bool = False) -> str:
    prefix = f"{escape(format_short_date(expense.date))} - " if with_date else ""
    note = f" ({escape(expense.note)})" if expense.note else ""
    return (
        f'<li class="expense">{prefix}{escape(expense.category)}: '
        f"{escape(format_amount(expense.amount, currency))}{note}</li>"
    )


def _weeks_section(report: MonthlyReport, currency: str) -> list[str]:
    parts = [
        f"<h2>Daily Expenses Total: {escape(format_amount(report.daily_total, currency))}</h2>"
    ]
    for bucket in report.weeks:
        span = bucket.span
        parts.append(
            f"<h3>Week {span.week_number} "
            f"({format_day_range(span.start_day, span.end_day)}): "
            f"{escape(format_amount(bucket.total, currency))}</h3>"
        )
        if not bucket.daily_breakdown:
            parts.append("<p>No daily expenses.</p>")
            continue

        parts.append("<ul>")
        for day, expenses in bucket.daily_breakdown.items():
            day_total = sum_amounts(expenses)
            parts.append(
                f"<li><strong>{escape(format_short_date(day))}:</strong> "
                f"{escape(format_amount(day_total, currency))}<ul>"
            )
            parts.extend(_expense_item(e, currency) for e in expenses)
            parts.append("</ul></li>")
        parts.append("</ul>")
    return parts


def _other_section(report: MonthlyReport, currency: str) -> list[str]:
    parts = [
        f"<h2>Other Expenses Total: {escape(format_amount(report.other_total, currency))}</h2>"
    ]
    if not report.other_expenses:
        parts.append("<p>No other expenses.</p>")
        return parts

    parts.append("<ul>")
    parts.extend(
        _expense_item(e, currency, with_date=True) for e in report.other_expenses
    )
    parts.append("</ul>")
    return parts


def _category_section(report: MonthlyReport, currency: str) -> list[str]:
    parts = ["<h2>Category Breakdown:</h2>", "<ul>"]
    for category, amount in report.category_totals.items():
        parts.append(
            f"<li><b>{escape(category)}:</b> {escape(format_amount(amount, currency))}</li>"
        )
    parts.append("</ul>")
    return parts


def render_monthly_report_html(report: MonthlyReport, currency: str = "Rs.") -> str:
    """
    Render the full monthly report as an HTML document.

    Args:
        report: Output of build_monthly_report
        currency: Prefix for every amount

    Returns:
        A complete <!DOCTYPE html> document
    """
    title = escape(report_title(report))
    body = [f"<h1>{escape(report.month_name)} Monthly Expense Summary</h1>"]
    body.extend(_weeks_section(report, currency))
    body.extend(_other_section(report, currency))
    body.extend(_category_section(report, currency))
    body.append(
        f'<p class="total"><strong>Total for the Month:</strong> '
        f"{escape(format_amount(report.grand_total, currency))}</p>"
    )

    return "\n".join([
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{title}</title>",
        f"<style>{_STYLE}</style>",
        "</head>",
        "<body>",
        *body,
        "</body>",
        "</html>",
    ])
