"""
Audit Models for Expense Tracker

Saves, rejected submissions, target changes, store faults and report
runs are described as typed AuditEvents before they are logged.

DESIGN DECISION: Flows never build AuditEvent directly. They go through
AuditEventBuilder so one kind of action always produces the same
event_type, severity and entity fields.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """What happened."""
    EXPENSE_SAVED = "expense_saved"
    VALIDATION_FAILED = "validation_failed"
    TARGET_SAVED = "target_saved"

    STORE_READ_FAILED = "store_read_failed"
    STORE_WRITE_FAILED = "store_write_failed"

    REPORT_GENERATED = "report_generated"
    REPORT_EXPORTED = "report_exported"

    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """One logged action or fault."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="Local wall-clock time"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # "expense", "form", "target", "store_key" or "report"
    entity_type: Optional[str] = None
    entity_id: Optional[str] = Field(
        default=None,
        description="Expense id, form name, store key or report period"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Shared by every event of one user action"
    )

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Flat JSON-safe fields for a structlog call."""
        return self.model_dump(mode="json")


class AuditEventBuilder:
    """
    One constructor per audited action.

    Usage:
        event = AuditEventBuilder.expense_saved(expense.id, "Food", "50", "2024-03-05", cid)
        event = AuditEventBuilder.store_write_failed("expenses", str(e), cid)
    """

    @staticmethod
    def expense_saved(
        expense_id: int,
        category: str,
        amount: str,
        expense_date: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_SAVED,
            entity_type="expense",
            entity_id=str(expense_id),
            correlation_id=correlation_id,
            description=f"Expense {expense_id} saved",
            details={
                "category": category,
                "amount": amount,
                "date": expense_date,
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        form: str,
        field: str,
        error_type: str,
        message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="form",
            entity_id=form,
            correlation_id=correlation_id,
            description=f"{form} form rejected: {error_type}",
            details={
                "field": field,
                "error_type": error_type,
                "message": message,
            },
            is_user_action=True,
        )

    @staticmethod
    def target_saved(
        target: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TARGET_SAVED,
            entity_type="target",
            correlation_id=correlation_id,
            description="Daily target updated",
            details={
                "target": target,
            },
            is_user_action=True,
        )

    @staticmethod
    def store_read_failed(
        key: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_READ_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="store_key",
            entity_id=key,
            correlation_id=correlation_id,
            description=f"Failed to read '{key}' from the store",
            error_message=error_message,
        )

    @staticmethod
    def store_write_failed(
        key: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_WRITE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="store_key",
            entity_id=key,
            correlation_id=correlation_id,
            description=f"Failed to write '{key}' to the store",
            error_message=error_message,
        )

    @staticmethod
    def report_generated(
        report_type: str,
        period: str,
        expense_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            entity_type="report",
            entity_id=period,
            correlation_id=correlation_id,
            description=f"{report_type} report built for {period} from {expense_count} expenses",
            details={
                "report_type": report_type,
                "expense_count": expense_count,
            },
        )

    @staticmethod
    def report_exported(
        period: str,
        destination: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_EXPORTED,
            entity_type="report",
            entity_id=period,
            correlation_id=correlation_id,
            description=f"Monthly report for {period} exported",
            details={
                "destination": destination,
            },
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Unhandled {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
