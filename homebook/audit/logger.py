"""
Audit Logger

DESIGN DECISION: Every task mutation leaves an audit event, including
writes that failed and were rolled back.

Events always go to the structured local log. When an audit storage is
configured they are appended there too; a storage failure is logged and
reported as False, never raised into a controller.
"""

import logging
from typing import Any, Callable, Optional

import structlog
from pydantic import ValidationError

from homebook.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from homebook.services.storage import AuditStorageInterface


# Configure structlog for local logging
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


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through stdlib logging at the given level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for the in-app history), when configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("homebook.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity is AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity is AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage is not None:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def _build_and_log(self, build: Callable[..., AuditEvent], **kwargs: Any) -> bool:
        """Build an event and log it. An event that fails validation is logged, not raised."""
        try:
            event = build(**kwargs)
        except ValidationError as e:
            self._logger.error(
                "audit_event_invalid",
                builder=build.__name__,
                error=str(e),
            )
            return False
        return self.log(event)

    def log_task_added(self, task_id: str, name: str) -> bool:
        return self._build_and_log(AuditEventBuilder.task_added, task_id=task_id, name=name)

    def log_task_toggled(self, task_id: str, completed: bool) -> bool:
        return self._build_and_log(AuditEventBuilder.task_toggled, task_id=task_id, completed=completed)

    def log_task_deleted(self, task_id: str) -> bool:
        return self._build_and_log(AuditEventBuilder.task_deleted, task_id=task_id)

    def log_task_edited(self, task_id: str, old_name: str, new_name: str) -> bool:
        return self._build_and_log(
            AuditEventBuilder.task_edited,
            task_id=task_id,
            old_name=old_name,
            new_name=new_name,
        )

    def log_completed_cleared(self, removed_ids: list[str]) -> bool:
        return self._build_and_log(AuditEventBuilder.completed_cleared, removed_ids=removed_ids)

    def log_save_failed(self, task_id: Optional[str], error_message: str) -> bool:
        return self._build_and_log(
            AuditEventBuilder.save_failed,
            task_id=task_id,
            error_message=error_message,
        )
