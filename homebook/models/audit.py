"""
Audit Models for Homebook

Every task mutation is recorded as an audit event: what happened, when,
and which task (or what details) it touched.

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditAction(str, Enum):
    """Task actions we audit."""
    ADD = "ADD"
    TOGGLE = "TOGGLE"
    DELETE = "DELETE"
    EDIT = "EDIT"
    CLEAR = "CLEAR"
    SAVE_FAILED = "SAVE_FAILED"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    action: AuditAction
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what entity is this about?
    entity_type: str = Field(
        default="task",
        description="Type of entity"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "action": self.action.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.task_added(task_id, name)
        event = AuditEventBuilder.completed_cleared(removed_ids)
    """

    @staticmethod
    def task_added(task_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            action=AuditAction.ADD,
            entity_id=task_id,
            description="Task added",
            details={"name": name},
        )

    @staticmethod
    def task_toggled(task_id: str, completed: bool) -> AuditEvent:
        return AuditEvent(
            action=AuditAction.TOGGLE,
            entity_id=task_id,
            description="Task marked done" if completed else "Task reopened",
            details={"completed": completed},
        )

    @staticmethod
    def task_deleted(task_id: str) -> AuditEvent:
        return AuditEvent(
            action=AuditAction.DELETE,
            entity_id=task_id,
            description="Task removed",
        )

    @staticmethod
    def task_edited(task_id: str, old_name: str, new_name: str) -> AuditEvent:
        return AuditEvent(
            action=AuditAction.EDIT,
            entity_id=task_id,
            description="Task renamed",
            details={"old_name": old_name, "new_name": new_name},
        )

    @staticmethod
    def completed_cleared(removed_ids: list[str]) -> AuditEvent:
        return AuditEvent(
            action=AuditAction.CLEAR,
            description=f"Completed tasks cleared ({len(removed_ids)})",
            details={"removed_ids": removed_ids},
        )

    @staticmethod
    def save_failed(task_id: Optional[str], error_message: str) -> AuditEvent:
        return AuditEvent(
            action=AuditAction.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_id=task_id,
            description="Failed to save tasks",
            details={"error": error_message},
        )
