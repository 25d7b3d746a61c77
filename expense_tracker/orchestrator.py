"""
Main Orchestrator for Expense Tracker

Wires repositories, validation, aggregation and export into the
three flows the UI calls:
1. Expense entry (form → validate → build expense → append → clear form)
2. Daily target (text → validate → overwrite)
3. Reports (load everything → aggregate → view / render / export)

DESIGN DECISION: The flows own these rules:
- Nothing is appended unless every validation rule passes
- A store fault never clears the form, so the user can retry
- Views are rebuilt from the full expense list on every request
- Every step is audited

Flows take their collaborators as constructor arguments. The only
shared state is the key-value store behind the repositories.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, NamedTuple, Optional
from uuid import UUID

from expense_tracker.audit import AuditLogger, create_correlation_id
from expense_tracker.config import Settings, get_settings
from expense_tracker.models.expense import Expense
from expense_tracker.models.report import HistoryOverview, HomeSummary, MonthlyReport
from expense_tracker.reports import (
    HtmlFileExporter,
    ReportExporter,
    ReportExportError,
    build_history_overview,
    build_home_summary,
    build_monthly_report,
    render_monthly_report_html,
    report_title,
)
from expense_tracker.services.storage import (
    ExpenseRepository,
    GoogleSheetsStore,
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    StorageError,
    StoreReadError,
    TargetRepository,
)
from expense_tracker.validation import (
    ExpenseFormValidator,
    ExpenseValidationError,
    ValidatedEntry,
    parse_target,
)


Clock = Callable[[], datetime]

DAILY_FORM = "daily"
OTHER_FORM = "other"
TARGET_FORM = "target"


@dataclass
class ExpenseForm:
    """
    The editable fields of one entry form.

    Cleared after a successful save; left untouched on any failure.
    """
    amount_text: str = ""
    category: str = ""
    note: str = ""

    def clear(self) -> None:
        self.amount_text = ""
        self.category = ""
        self.note = ""

    @property
    def is_blank(self) -> bool:
        return not (self.amount_text or self.category or self.note)


class ExpenseEntryFlow:
    """
    Orchestrates both expense entry forms.

    Flow:
    1. Validate → first failing rule wins, nothing is written
    2. Build → amount, labels and today's local date
    3. Append → read full list, prepend, write full list
    4. Clear → only after the write succeeded
    """

    def __init__(
        self,
        expense_repository: ExpenseRepository,
        validator: Optional[ExpenseFormValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Clock] = None,
    ):
        self._expenses = expense_repository
        self._validator = validator or ExpenseFormValidator()
        self._audit_logger = audit_logger
        self._clock = clock or datetime.now

    async def submit_daily(
        self,
        form: ExpenseForm,
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """
        Save the predefined-category form.

        Raises:
            ExpenseValidationError: A rule failed; form untouched
            StorageError: The store failed; form untouched
        """
        return await self._submit(
            DAILY_FORM,
            self._validator.validate_daily,
            form,
            correlation_id,
        )

    async def submit_other(
        self,
        form: ExpenseForm,
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """
        Save the free-form category form.

        Raises:
            ExpenseValidationError: A rule failed; form untouched
            StorageError: The store failed; form untouched
        """
        return await self._submit(
            OTHER_FORM,
            self._validator.validate_other,
            form,
            correlation_id,
        )

    async def _submit(
        self,
        form_name: str,
        validate: Callable[[str, str, str], ValidatedEntry],
        form: ExpenseForm,
        correlation_id: Optional[UUID],
    ) -> Expense:
        correlation_id = correlation_id or create_correlation_id()

        try:
            entry = validate(form.amount_text, form.category, form.note)
        except ExpenseValidationError as e:
            if self._audit_logger:
                await self._audit_logger.log_validation_failed(
                    form=form_name,
                    field=e.field,
                    error_type=e.error_type,
                    message=e.message,
                    correlation_id=correlation_id,
                )
            raise

        now = self._clock()
        expense = Expense(
            id=int(now.timestamp() * 1000),
            amount=entry.amount,
            category=entry.category,
            original_category=entry.original_category,
            note=entry.note,
            date=now.date().isoformat(),
        )

        try:
            await self._expenses.append(expense)
        except StorageError as e:
            await self._log_store_fault(e, self._expenses.key, correlation_id)
            raise

        form.clear()

        if self._audit_logger:
            await self._audit_logger.log_expense_saved(
                expense_id=expense.id,
                category=expense.category,
                amount=str(expense.amount),
                expense_date=expense.date,
                correlation_id=correlation_id,
            )

        return expense

    async def _log_store_fault(
        self,
        error: StorageError,
        key: str,
        correlation_id: UUID,
    ) -> None:
        if not self._audit_logger:
            return
        if isinstance(error, StoreReadError):
            await self._audit_logger.log_store_read_failed(
                key=key,
                error_message=str(error),
                correlation_id=correlation_id,
            )
        else:
            await self._audit_logger.log_store_write_failed(
                key=key,
                error_message=str(error),
                correlation_id=correlation_id,
            )


class TargetFlow:
    """Reads and replaces the daily spending target."""

    def __init__(
        self,
        target_repository: TargetRepository,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._targets = target_repository
        self._audit_logger = audit_logger

    async def get_target(self) -> Optional[Decimal]:
        return await self._targets.get_target()

    async def get_target_text(self) -> str:
        """The saved target as the target input shows it, or "" when unset."""
        target = await self.get_target()
        return "" if target is None else str(target)

    async def save_target(
        self,
        target_text: str,
        correlation_id: Optional[UUID] = None,
    ) -> Decimal:
        """
        Validate and overwrite the daily target.

        Raises:
            InvalidTarget: Text is not a finite, non-negative number
            StoreWriteError: The store failed
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            target = parse_target(target_text)
        except ExpenseValidationError as e:
            if self._audit_logger:
                await self._audit_logger.log_validation_failed(
                    form=TARGET_FORM,
                    field=e.field,
                    error_type=e.error_type,
                    message=e.message,
                    correlation_id=correlation_id,
                )
            raise

        try:
            await self._targets.set_target(target)
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_store_write_failed(
                    key=self._targets.key,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_target_saved(
                target=str(target),
                correlation_id=correlation_id,
            )
        return target


class ReportFlow:
    """
    Builds every read-only view from a fresh load of the store.

    A failed expense read shows as an empty list, never an error, so
    these screens always render.
    """

    def __init__(
        self,
        expense_repository: ExpenseRepository,
        target_repository: TargetRepository,
        exporter: Optional[ReportExporter] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Clock] = None,
        currency: str = "Rs.",
    ):
        self._expenses = expense_repository
        self._targets = target_repository
        self._exporter = exporter
        self._audit_logger = audit_logger
        self._clock = clock or datetime.now
        self._currency = currency

    @property
    def currency(self) -> str:
        return self._currency

    def today(self) -> date:
        return self._clock().date()

    async def home_summary(self, today: Optional[date] = None) -> HomeSummary:
        today = today or self.today()
        expenses = await self._expenses.list_all()
        target = await self._targets.get_target()
        return build_home_summary(expenses, target, today)

    async def history(self, today: Optional[date] = None) -> HistoryOverview:
        today = today or self.today()
        expenses = await self._expenses.list_all()
        return build_history_overview(expenses, today)

    async def monthly_report(
        self,
        today: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> MonthlyReport:
        today = today or self.today()
        expenses = await self._expenses.list_all()
        report = build_monthly_report(expenses, today)

        if self._audit_logger:
            await self._audit_logger.log_report_generated(
                report_type="monthly",
                period=f"{report.year:04d}-{report.month:02d}",
                expense_count=len(report.expenses),
                correlation_id=correlation_id,
            )
        return report

    def render_html(self, report: MonthlyReport) -> str:
        return render_monthly_report_html(report, self._currency)

    async def export_monthly_report(
        self,
        today: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> str:
        """
        Render this month's report and hand it to the exporter.

        Returns:
            Where the exporter put the document

        Raises:
            ReportExportError: No exporter is configured or export failed
        """
        correlation_id = correlation_id or create_correlation_id()

        if self._exporter is None:
            raise ReportExportError("No report exporter is configured")

        report = await self.monthly_report(today, correlation_id)
        period = f"{report.year:04d}-{report.month:02d}"

        try:
            destination = await self._exporter.export(
                self.render_html(report),
                report_title(report),
            )
        except ReportExportError as e:
            if self._audit_logger:
                await self._audit_logger.log_error(
                    error_type="ReportExportError",
                    error_message=str(e),
                    details={"period": period},
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_report_exported(
                period=period,
                destination=destination,
                correlation_id=correlation_id,
            )
        return destination


class AppComponents(NamedTuple):
    entry_flow: ExpenseEntryFlow
    target_flow: TargetFlow
    report_flow: ReportFlow
    store: KeyValueStore


def create_store(settings: Optional[Settings] = None) -> KeyValueStore:
    """
    Build the configured store backend.

    Raises:
        pydantic.ValidationError: If the selected backend is not configured
    """
    settings = settings or get_settings()
    storage = settings.storage

    if storage.backend == "memory":
        return InMemoryStore()
    if storage.backend == "google_sheets":
        return GoogleSheetsStore()
    return JsonFileStore(storage.data_file)


def create_app_components(
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStore] = None,
    exporter: Optional[ReportExporter] = None,
    clock: Optional[Clock] = None,
) -> AppComponents:
    """
    Build the three flows over one store and one AuditLogger.

    Args:
        settings: Defaults to get_settings()
        store: Overrides the configured backend (tests pass InMemoryStore)
        exporter: Defaults to an HtmlFileExporter on the report directory
        clock: Source of "now" for dates and ids

    Returns:
        AppComponents(entry_flow, target_flow, report_flow, store)
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    app_settings = settings.app

    store = store or create_store(settings)
    audit_logger = AuditLogger()

    expense_repository = ExpenseRepository(store, storage_settings.expenses_key)
    target_repository = TargetRepository(store, storage_settings.target_key)

    entry_flow = ExpenseEntryFlow(
        expense_repository,
        audit_logger=audit_logger,
        clock=clock,
    )
    target_flow = TargetFlow(
        target_repository,
        audit_logger=audit_logger,
    )
    report_flow = ReportFlow(
        expense_repository,
        target_repository,
        exporter=exporter or HtmlFileExporter(app_settings.report_output_path),
        audit_logger=audit_logger,
        clock=clock,
        currency=app_settings.currency_symbol,
    )

    return AppComponents(entry_flow, target_flow, report_flow, store)
