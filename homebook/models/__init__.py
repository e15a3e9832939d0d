"""
Data Models Package

This package contains all Pydantic models used in Homebook.
Everything that is persisted or audited conforms to these schemas.
"""

from homebook.models.expense import (
    Expense,
    ExpenseFilter,
    ExpenseType,
    expense_type_label,
)
from homebook.models.task import (
    Task,
    TaskFilter,
    count_active,
)
from homebook.models.audit import (
    AuditAction,
    AuditEvent,
    AuditEventBuilder,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "Expense",
    "ExpenseFilter",
    "ExpenseType",
    "expense_type_label",
    # Task models
    "Task",
    "TaskFilter",
    "count_active",
    # Audit models
    "AuditAction",
    "AuditEvent",
    "AuditEventBuilder",
    "AuditSeverity",
]
