"""
Audit Logger

DESIGN DECISION: Saves, rejected submissions, target changes, store
faults and report runs each leave one structured log line.
A correlation id ties together the lines written for one user action,
so a failed save can be followed from the form to the store.

Methods are async so flows can await them beside store calls.
"""

import logging
from typing import Callable, Optional
from uuid import UUID, uuid4

import structlog
from pydantic import ValidationError

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# JSON lines through the stdlib logging tree
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

_LEVEL_BY_SEVERITY = {
    AuditSeverity.DEBUG: "debug",
    AuditSeverity.INFO: "info",
    AuditSeverity.WARNING: "warning",
    AuditSeverity.ERROR: "error",
    AuditSeverity.CRITICAL: "error",
}


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output to stderr at the given stdlib level."""
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


class AuditLogger:
    """
    Writes AuditEvents as "audit_event" log lines.

    The log level follows the event's severity; critical events are
    written at error level.
    """

    def __init__(self, logger_name: str = "expense_tracker.audit"):
        self._logger = structlog.get_logger(logger_name)

    async def log(self, event: AuditEvent) -> bool:
        """Write one event. Returns True once it has been emitted."""
        method_name = _LEVEL_BY_SEVERITY.get(event.severity, "info")
        getattr(self._logger, method_name)("audit_event", **event.to_log_dict())
        return True

    async def _log_built(self, build: Callable[..., AuditEvent], **fields) -> bool:
        """
        Build an event and log it.

        A builder rejected by the event model is logged as
        "audit_event_invalid" and dropped, so the action being audited
        still completes.
        """
        try:
            event = build(**fields)
        except ValidationError as e:
            self._logger.error(
                "audit_event_invalid",
                builder=build.__name__,
                error=str(e),
            )
            return False
        return await self.log(event)

    async def log_expense_saved(
        self,
        expense_id: int,
        category: str,
        amount: str,
        expense_date: str,
        correlation_id: UUID,
    ) -> bool:
        return await self._log_built(
            AuditEventBuilder.expense_saved,
            expense_id=expense_id,
            category=category,
            amount=amount,
            expense_date=expense_date,
            correlation_id=correlation_id,
        )

    async def log_validation_failed(
        self,
        form: str,
        field: str,
        error_type: str,
        message: str,
        correlation_id: UUID,
    ) -> bool:
        """Log a rejected form submission."""
        return await self._log_built(
            AuditEventBuilder.validation_failed,
            form=form,
            field=field,
            error_type=error_type,
            message=message,
            correlation_id=correlation_id,
        )

    async def log_target_saved(
        self,
        target: str,
        correlation_id: UUID,
    ) -> bool:
        return await self._log_built(
            AuditEventBuilder.target_saved,
            target=target,
            correlation_id=correlation_id,
        )

    async def log_store_read_failed(
        self,
        key: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._log_built(
            AuditEventBuilder.store_read_failed,
            key=key,
            error_message=error_message,
            correlation_id=correlation_id,
        )

    async def log_store_write_failed(
        self,
        key: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._log_built(
            AuditEventBuilder.store_write_failed,
            key=key,
            error_message=error_message,
            correlation_id=correlation_id,
        )

    async def log_report_generated(
        self,
        report_type: str,
        period: str,
        expense_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Log a built report."""
        return await self._log_built(
            AuditEventBuilder.report_generated,
            report_type=report_type,
            period=period,
            expense_count=expense_count,
            correlation_id=correlation_id,
        )

    async def log_report_exported(
        self,
        period: str,
        destination: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._log_built(
            AuditEventBuilder.report_exported,
            period=period,
            destination=destination,
            correlation_id=correlation_id,
        )

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Log an unexpected failure."""
        return await self._log_built(
            AuditEventBuilder.system_error,
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )


def create_correlation_id() -> UUID:
    """New id for one user action, e.g. one form submission."""
    return uuid4()
