"""
Streamlit Frontend for Expense Tracker

A single-user app for recording day-to-day spending and seeing where
the money went.

DESIGN PRINCIPLES:
1. Two entry forms: predefined daily categories and free-form others
2. Blocking notices for every rejected or failed save
3. Forms keep their fields when a save fails
4. Every view is rebuilt from the store on each rerun

Form submissions run in button callbacks, so a successful save can
clear the widgets before they are drawn again.
"""

import asyncio
from decimal import Decimal

import streamlit as st

from expense_tracker.audit import configure_logging
from expense_tracker.config import get_settings, validate_all_settings
from expense_tracker.models.expense import DailyCategory
from expense_tracker.orchestrator import (
    AppComponents,
    ExpenseForm,
    create_app_components,
)
from expense_tracker.reports import (
    ReportExportError,
    format_amount,
    format_compact_day_range,
    format_day_range,
    format_long_date,
    format_short_date,
    report_title,
)
from expense_tracker.services.storage import InMemoryStore, StorageError
from expense_tracker.validation import ExpenseFormValidator, ExpenseValidationError


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="centered",
    initial_sidebar_state="expanded",
)

# Custom CSS
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .tag {
        display: inline-block;
        padding: 4px 12px;
        margin: 4px;
        background-color: #eef2f7;
        border-radius: 16px;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #1E3A5F;
    }
    .over-budget {
        color: #dc3545;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)


HOME = "🏠 Home"
ADD_DAILY = "➕ Add Expense"
ADD_OTHER = "💼 Add Other Expense"
HISTORY = "📅 History"
MONTHLY = "📊 Monthly Summary"
SETTINGS = "⚙️ Settings"
PAGES = [HOME, ADD_DAILY, ADD_OTHER, HISTORY, MONTHLY, SETTINGS]

DAILY_FIELDS = ("daily_amount", "daily_category", "daily_note")
OTHER_FIELDS = ("other_amount", "other_category", "other_note")


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components() -> AppComponents:
    """Get or create application components (cached)."""
    settings = get_settings()
    configure_logging(settings.app.log_level)
    try:
        return create_app_components(settings)
    except Exception as e:
        st.error(f"Failed to initialize storage: {e}. Using a temporary in-memory store.")
        return create_app_components(settings, store=InMemoryStore())


def money(amount: Decimal) -> str:
    return format_amount(amount, get_components().report_flow.currency)


# =============================================================================
# NOTICES
# =============================================================================

def set_notice(kind: str, title: str, message: str) -> None:
    st.session_state.notice = (kind, title, message)


def show_notice() -> None:
    """Show and consume the notice left by the last callback."""
    notice = st.session_state.pop("notice", None)
    if not notice:
        return
    kind, title, message = notice
    text = f"**{title}**\n\n{message}"
    if kind == "success":
        st.success(text)
    else:
        st.error(text)


# =============================================================================
# CALLBACKS
# =============================================================================

def _form_from_state(fields: tuple[str, str, str]) -> ExpenseForm:
    amount_key, category_key, note_key = fields
    category = st.session_state.get(category_key)
    if isinstance(category, DailyCategory):
        category = category.value
    return ExpenseForm(
        amount_text=st.session_state.get(amount_key, ""),
        category=category or "",
        note=st.session_state.get(note_key, ""),
    )


def _reset_fields(fields: tuple[str, str, str]) -> None:
    for key in fields:
        if key in st.session_state:
            del st.session_state[key]


def submit_expense(kind: str, go_home: bool) -> None:
    entry_flow = get_components().entry_flow
    fields = DAILY_FIELDS if kind == "daily" else OTHER_FIELDS
    submit = entry_flow.submit_daily if kind == "daily" else entry_flow.submit_other
    form = _form_from_state(fields)

    try:
        run_async(submit(form))
    except ExpenseValidationError as e:
        set_notice("error", e.title, ExpenseFormValidator().get_user_friendly_message(e))
        return
    except StorageError:
        set_notice("error", "Error", "Failed to save expense")
        return

    _reset_fields(fields)
    set_notice("success", "Success! 🎉", "Expense added successfully")
    if go_home:
        st.session_state.page = HOME


def save_target() -> None:
    target_flow = get_components().target_flow
    try:
        target = run_async(target_flow.save_target(st.session_state.get("target_text", "")))
    except ExpenseValidationError as e:
        set_notice("error", e.title, e.message)
        return
    except StorageError:
        set_notice("error", "Error", "Failed to save target")
        return
    set_notice("success", "Target Saved", f"Daily target set to {money(target)}")


def export_report() -> None:
    report_flow = get_components().report_flow
    try:
        destination = run_async(report_flow.export_monthly_report())
    except ReportExportError as e:
        set_notice("error", "Export Failed", str(e))
        return
    set_notice("success", "Report Exported", f"Saved to {destination}")


# =============================================================================
# PAGES
# =============================================================================

def main():
    """Main application entry point."""
    get_components()

    st.sidebar.title("💸 Expense Tracker")
    st.sidebar.markdown("---")
    st.sidebar.radio("Navigate to:", PAGES, key="page")
    st.sidebar.markdown("---")
    st.sidebar.markdown(
        """
        **Daily expenses** are Food, Travel, Utility and Extra.
        They count towards your daily target.

        **Other expenses** are anything else: rent, bills, shopping.
        """
    )

    show_notice()

    page = st.session_state.page
    if page == HOME:
        render_home_page()
    elif page == ADD_DAILY:
        render_add_daily_page()
    elif page == ADD_OTHER:
        render_add_other_page()
    elif page == HISTORY:
        render_history_page()
    elif page == MONTHLY:
        render_monthly_page()
    elif page == SETTINGS:
        render_settings_page()


def render_home_page():
    """Render today's summary and the daily target."""
    report_flow = get_components().report_flow
    today = report_flow.today()
    summary = run_async(report_flow.home_summary(today))

    st.title("🏠 Today")
    st.caption(format_long_date(today))

    if "target_text" not in st.session_state:
        st.session_state.target_text = run_async(get_components().target_flow.get_target_text())

    col1, col2 = st.columns([3, 1])
    with col1:
        st.text_input("Daily target", key="target_text", placeholder="Enter daily target")
    with col2:
        st.button("Save Target", on_click=save_target)

    st.markdown("### Daily Spending")
    st.markdown(
        f'<div class="big-number">{money(summary.daily_total)}</div>',
        unsafe_allow_html=True,
    )

    progress = summary.progress
    if progress is None:
        st.info("Set a daily target to track your spending against it.")
    else:
        st.progress(float(progress.percentage) / 100)
        if progress.over_budget:
            st.markdown(
                f'<span class="over-budget">Over budget by {money(-progress.remaining)}</span>',
                unsafe_allow_html=True,
            )
        else:
            st.markdown(f"Remaining: **{money(progress.remaining)}** of {money(progress.target)}")

    for expense in summary.daily_expenses:
        note = f" ({expense.note})" if expense.note else ""
        st.markdown(f"- {expense.category}: {money(expense.amount)}{note}")

    st.markdown("---")
    st.markdown("### Other Expenses Today")
    if not summary.other_expenses:
        st.caption("No other expenses today.")
    else:
        st.metric("Total", money(summary.other_total))
        tags = "".join(
            f'<span class="tag">{tag.icon} {tag.name}</span>'
            for tag in summary.other_categories
        )
        st.markdown(tags, unsafe_allow_html=True)


def render_add_daily_page():
    """Render the predefined-category entry form."""
    st.title("➕ Add Expense")

    st.text_input("Amount *", key="daily_amount", placeholder="0.00")
    st.radio(
        "Category *",
        options=list(DailyCategory),
        format_func=lambda c: c.label,
        key="daily_category",
        index=None,
        horizontal=True,
    )
    if st.session_state.get("daily_category") is DailyCategory.EXTRA:
        note_label = "What was it for? *"
    else:
        note_label = "Note (optional)"
    st.text_area(note_label, key="daily_note", placeholder="Add a note about this expense...")

    col1, col2 = st.columns(2)
    with col1:
        st.button("Save & Add More", on_click=submit_expense, args=("daily", False))
    with col2:
        st.button("Save & Go Home", type="primary", on_click=submit_expense, args=("daily", True))


def render_add_other_page():
    """Render the free-form category entry form."""
    st.title("💼 Add Other Expense")

    st.text_input("Amount *", key="other_amount", placeholder="0.00")
    st.text_input(
        "Category *",
        key="other_category",
        placeholder="Type a category (e.g., Rent, Internet...)",
    )
    st.text_area("Note (optional)", key="other_note", placeholder="Add a note about this expense...")

    col1, col2 = st.columns(2)
    with col1:
        st.button("Save & Add More", key="other_more", on_click=submit_expense, args=("other", False))
    with col2:
        st.button("Save & Go Home", key="other_home", type="primary", on_click=submit_expense, args=("other", True))


def render_history_page():
    """Render today, the rest of this week and the rest of this month."""
    report_flow = get_components().report_flow
    overview = run_async(report_flow.history())

    st.title("📅 History")

    st.markdown(f"### Today: {money(overview.today_total)}")
    if not overview.today_lines:
        st.caption("No daily expenses today.")
    for line in overview.today_lines:
        note = f" ({line.note})" if line.note else ""
        st.markdown(f"- {line.category}: {money(line.amount)}{note}")

    st.markdown(f"### This Week: {money(overview.weekly_total)}")
    for day in overview.rest_of_week:
        st.markdown(f"- {format_short_date(day.date)}: {money(day.total)}")

    st.markdown("### Earlier This Month")
    if not overview.rest_of_month:
        st.caption("Nothing earlier this month.")
    for group in overview.rest_of_month:
        label = (
            f"Week {group.week_number} "
            f"({format_compact_day_range(group.start_day, group.end_day)}): "
            f"{money(group.total)}"
        )
        with st.expander(label):
            for day in group.days:
                st.markdown(f"**{format_short_date(day.date)}**: {money(day.total)}")
                for line in day.lines:
                    note = f" ({line.note})" if line.note else ""
                    st.markdown(f"- {line.category}: {money(line.amount)}{note}")

    st.markdown("---")
    st.metric("Other expenses today", money(overview.today_other_total))


def render_monthly_page():
    """Render the full monthly report with download and export."""
    report_flow = get_components().report_flow
    report = run_async(report_flow.monthly_report())

    st.title(f"📊 {report.month_name} Summary")

    col1, col2, col3 = st.columns(3)
    col1.metric("Daily", money(report.daily_total))
    col2.metric("Other", money(report.other_total))
    col3.metric("Total", money(report.grand_total))

    st.markdown("### Daily Expenses by Week")
    for bucket in report.weeks:
        span = bucket.span
        label = (
            f"Week {span.week_number} "
            f"({format_day_range(span.start_day, span.end_day)}): "
            f"{money(bucket.total)}"
        )
        with st.expander(label):
            if not bucket.daily_breakdown:
                st.caption("No daily expenses.")
            for day, expenses in bucket.daily_breakdown.items():
                st.markdown(f"**{format_short_date(day)}**")
                for expense in expenses:
                    note = f" ({expense.note})" if expense.note else ""
                    st.markdown(f"- {expense.category}: {money(expense.amount)}{note}")

    st.markdown("### Other Expenses")
    if not report.other_by_date:
        st.caption("No other expenses this month.")
    for day, expenses in report.other_by_date.items():
        st.markdown(f"**{format_short_date(day)}**")
        for expense in expenses:
            note = f" ({expense.note})" if expense.note else ""
            st.markdown(f"- {expense.category}: {money(expense.amount)}{note}")

    st.markdown("### Category Breakdown")
    if report.category_totals:
        st.bar_chart({name: float(total) for name, total in report.category_totals.items()})
        for name, total in report.category_totals.items():
            st.markdown(f"- **{name}**: {money(total)}")

    st.markdown("---")
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "⬇️ Download HTML",
            data=report_flow.render_html(report),
            file_name=f"{report_title(report)}.html",
            mime="text/html",
        )
    with col2:
        st.button("🖨️ Export Report", on_click=export_report)


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    status = validate_all_settings()

    sections = [
        ("Storage", "storage"),
        ("Google Sheets", "google_sheets"),
        ("Application", "app"),
    ]

    for name, key in sections:
        if key not in status:
            continue
        if status[key]:
            st.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown("### Store")
    st.markdown(f"Backend: `{get_settings().storage.backend}`")
    st.markdown(
        "To configure the application, create a `.env` file. "
        "See `.env.example` for the available variables."
    )


if __name__ == "__main__":
    main()
