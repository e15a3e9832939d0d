"""
Application Wiring for Homebook

This module ties the components together for each app:
store → repository → view → controller.

DESIGN DECISION: The two apps share a store but nothing else.
Each repository owns its own key, and neither controller knows the
other exists.
"""

from typing import NamedTuple, Optional

import structlog

from homebook.audit import AuditLogger, configure_logging
from homebook.config import get_settings
from homebook.controllers import ExpenseController, TaskController
from homebook.queries import StatisticsService
from homebook.repositories import ExpenseRepository, TaskRepository
from homebook.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
)
from homebook.ui import (
    Document,
    NotificationSystem,
    build_expense_document,
    build_task_document,
)
from homebook.views import ExpenseView, TaskView

logger = structlog.get_logger(__name__)


class ExpenseApp(NamedTuple):
    document: Document
    controller: ExpenseController


class TaskApp(NamedTuple):
    document: Document
    controller: TaskController


def create_store() -> KeyValueStore:
    """Build the key-value store named in the storage settings."""
    storage = get_settings().storage
    if storage.backend == "memory":
        return MemoryStore(quota=storage.quota_bytes)
    return JsonFileStore(storage.path, quota=storage.quota_bytes)


def create_expense_app(
    store: KeyValueStore,
    document: Optional[Document] = None,
) -> ExpenseApp:
    settings = get_settings()
    document = document or build_expense_document()

    repository = ExpenseRepository(store, settings.storage.expenses_key)
    notifications = NotificationSystem(
        document.get_element_by_id("feedback") or document.body,
        dismiss_after=settings.notifications.dismiss_after_seconds,
    )
    view = ExpenseView(document, notifications=notifications)
    controller = ExpenseController(repository, view, StatisticsService(repository))
    return ExpenseApp(document, controller)


def create_task_app(
    store: KeyValueStore,
    document: Optional[Document] = None,
    audit_storage: Optional[AuditStorageInterface] = None,
) -> TaskApp:
    settings = get_settings()
    document = document or build_task_document()

    repository = TaskRepository(store, settings.storage.tasks_key)
    notifications = NotificationSystem(
        document.get_element_by_id("notifications") or document.body,
        dismiss_after=settings.notifications.dismiss_after_seconds,
    )
    audit_logger = AuditLogger(audit_storage or InMemoryAuditStorage())
    controller = TaskController(repository, TaskView(document), notifications, audit_logger)
    return TaskApp(document, controller)


def create_app_components(
    store: Optional[KeyValueStore] = None,
) -> tuple[ExpenseApp, TaskApp]:
    """
    Factory function to create both apps.

    Args:
        store: Key-value store to use. Defaults to the one
               configured in the storage settings.

    Returns:
        (expense_app, task_app)
    """
    configure_logging(get_settings().app.log_level)
    store = store or create_store()
    logger.info("app_components_created", store=type(store).__name__)
    return create_expense_app(store), create_task_app(store)
