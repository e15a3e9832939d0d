"""Shared fixtures: stores, a controllable clock, wired-up apps."""

from types import SimpleNamespace
from typing import Optional

import pytest

from homebook.audit import AuditLogger
from homebook.controllers import ExpenseController, TaskController
from homebook.repositories import ExpenseRepository, TaskRepository
from homebook.services.storage import InMemoryAuditStorage, MemoryStore, StorageError
from homebook.ui import NotificationSystem, build_expense_document, build_task_document
from homebook.views import ExpenseView, TaskView


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FlakyStore(MemoryStore):
    """Memory store whose reads or writes can be switched off."""

    def __init__(self, quota: Optional[int] = None):
        super().__init__(quota=quota)
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    def get_item(self, key):
        if self.fail_reads:
            raise StorageError("disk unavailable")
        return super().get_item(key)

    def set_item(self, key, value):
        if self.fail_writes:
            raise StorageError("disk full")
        self.writes += 1
        super().set_item(key, value)


@pytest.fixture
def store():
    return FlakyStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def expense_repository(store):
    return ExpenseRepository(store, "expenses_v2")


@pytest.fixture
def task_repository(store):
    return TaskRepository(store, "tasks_v3")


@pytest.fixture
def expense_app(store, clock, expense_repository):
    document = build_expense_document()
    notifications = NotificationSystem(
        document.get_element_by_id("feedback"), dismiss_after=3.0, clock=clock
    )
    view = ExpenseView(document, notifications=notifications)
    controller = ExpenseController(expense_repository, view)
    return SimpleNamespace(
        document=document,
        view=view,
        controller=controller,
        notifications=notifications,
        repository=expense_repository,
        store=store,
    )


@pytest.fixture
def task_app(store, clock, task_repository):
    document = build_task_document()
    notifications = NotificationSystem(
        document.get_element_by_id("notifications"), dismiss_after=3.0, clock=clock
    )
    audit_storage = InMemoryAuditStorage()
    view = TaskView(document)
    controller = TaskController(
        task_repository, view, notifications, AuditLogger(audit_storage)
    )
    return SimpleNamespace(
        document=document,
        view=view,
        controller=controller,
        notifications=notifications,
        audit=audit_storage,
        repository=task_repository,
        store=store,
    )
