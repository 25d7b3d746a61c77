"""
Reports Package

Screen view composition, HTML rendering and export of monthly reports.
"""

from expense_tracker.reports.exporter import (
    HtmlFileExporter,
    ReportExporter,
    ReportExportError,
)
from expense_tracker.reports.formatting import (
    format_amount,
    format_compact_day_range,
    format_day_range,
    format_long_date,
    format_short_date,
    round_amount,
)
from expense_tracker.reports.html import render_monthly_report_html, report_title
from expense_tracker.reports.views import (
    build_history_overview,
    build_home_summary,
    build_monthly_report,
    build_report_for_month,
)

__all__ = [
    # Views
    "build_history_overview",
    "build_home_summary",
    "build_monthly_report",
    "build_report_for_month",
    # Rendering
    "render_monthly_report_html",
    "report_title",
    # Export
    "HtmlFileExporter",
    "ReportExporter",
    "ReportExportError",
    # Formatting
    "format_amount",
    "format_compact_day_range",
    "format_day_range",
    "format_long_date",
    "format_short_date",
    "round_amount",
]
