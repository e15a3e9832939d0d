"""
Integration tests: controllers wired to views and an in-memory store.

Every interaction goes through the document, the same way the front end
drives it.
"""

import json

import pytest

from homebook.controllers import ExpenseController, TaskController
from homebook.controllers.expense_controller import (
    SAVE_ERROR_MESSAGE,
    SUCCESS_MESSAGE,
    VALIDATION_ERROR_TITLE,
)
from homebook.controllers.task_controller import ADDED_MESSAGE, SAVE_FAILED_MESSAGE
from homebook.models.audit import AuditAction, AuditEvent, AuditEventBuilder
from homebook.models.expense import Expense
from homebook.repositories import ExpenseRepository, TaskRepository
from homebook.services.storage import MemoryStore
from homebook.ui import NotificationSystem, build_expense_document, build_task_document
from homebook.views import ExpenseView, TaskView

LUNCH = {
    "year": "2026",
    "month": "1",
    "day": "5",
    "type": "1",
    "description": "Lunch",
    "value": "R$ 10,00",
}


def fill_form(document, data):
    for field_id, value in data.items():
        document.get_element_by_id(field_id).value = value


def click(document, element_id):
    document.get_element_by_id(element_id).click()


def toast_messages(notifications):
    return [toast.message for toast in notifications.active()]


class TestExpenseController:
    """Tests for registering, searching and deleting expenses."""

    def test_register(self, expense_app):
        document = expense_app.document
        fill_form(document, LUNCH)
        click(document, "register-expense")

        [expense] = expense_app.repository.get_all()
        assert expense.value == 10.0
        assert expense.description == "Lunch"
        assert toast_messages(expense_app.notifications) == [SUCCESS_MESSAGE]
        assert all(value == "" for value in expense_app.view.get_form_data().values())

        rows = document.get_element_by_id("expense-list").children
        assert [row.dataset["id"] for row in rows] == [expense.id]
        assert document.get_element_by_id("expense-total").text_content == "R$ 10,00"

    def test_register_invalid_keeps_form(self, expense_app):
        document = expense_app.document
        fill_form(document, {**LUNCH, "description": ""})
        assert expense_app.controller.handle_register() is None

        assert expense_app.repository.get_all() == []
        [toast] = expense_app.notifications.active()
        assert toast.title == VALIDATION_ERROR_TITLE
        assert toast.level.value == "danger"
        assert document.get_element_by_id("year").value == "2026"

    def test_register_zero_value_is_rejected(self, expense_app):
        fill_form(expense_app.document, {**LUNCH, "value": "R$ 0,00"})
        assert expense_app.controller.handle_register() is None
        assert expense_app.repository.get_all() == []

    def test_register_storage_failure_keeps_form(self, clock):
        document = build_expense_document()
        notifications = NotificationSystem(document.get_element_by_id("feedback"), clock=clock)
        repository = ExpenseRepository(MemoryStore(quota=50), "expenses_v2")
        ExpenseController(repository, ExpenseView(document, notifications=notifications))

        fill_form(document, LUNCH)
        click(document, "register-expense")

        assert toast_messages(notifications) == [SAVE_ERROR_MESSAGE]
        assert document.get_element_by_id("description").value == "Lunch"
        assert repository.get_all() == []

    def test_search_renders_subset(self, expense_app):
        controller = expense_app.controller
        fill_form(expense_app.document, LUNCH)
        controller.handle_register()
        fill_form(expense_app.document, {**LUNCH, "description": "Bus", "type": "5", "value": "R$ 4,50"})
        controller.handle_register()

        fill_form(expense_app.document, {**{k: "" for k in LUNCH}, "type": "5"})
        click(expense_app.document, "search-expense")

        rows = expense_app.document.get_element_by_id("expense-list").children
        assert [row.children[2].text_content for row in rows] == ["Bus"]
        assert expense_app.document.get_element_by_id("expense-total").text_content == "R$ 4,50"
        assert len(expense_app.repository.get_all()) == 2

    def test_delete(self, expense_app):
        fill_form(expense_app.document, LUNCH)
        expense = expense_app.controller.handle_register()

        row = expense_app.document.get_element_by_id("expense-list").children[0]
        row.find(lambda el: el.dataset.get("action") == "delete").click()

        assert expense_app.repository.get_all() == []
        assert expense_app.document.get_element_by_id("expense-list").children == []
        assert expense.id not in expense_app.store.get_item("expenses_v2")

    def test_initial_render_reads_storage(self, store):
        ExpenseRepository(store, "expenses_v2").save(Expense.from_form(LUNCH))
        document = build_expense_document()
        ExpenseController(ExpenseRepository(store, "expenses_v2"), ExpenseView(document))
        assert len(document.get_element_by_id("expense-list").children) == 1


class TestTaskController:
    """Tests for the to-do list flows."""

    def add(self, app, name):
        app.document.get_element_by_id("item-input").value = name
        app.document.get_element_by_id("todo-add").submit()

    def item(self, app, task_id):
        return app.document.get_element_by_id("todo-list").find(
            lambda el: el.dataset.get("id") == task_id
        )

    def control(self, app, task_id, action):
        return self.item(app, task_id).find(lambda el: el.dataset.get("action") == action)

    def count(self, app):
        return app.document.get_element_by_id("count-number").text_content

    def stored(self, app):
        return json.loads(app.store.get_item("tasks_v3"))

    def test_buy_milk_walkthrough(self, task_app):
        """Add, complete, filter, then clear a single task."""
        self.add(task_app, "Buy milk")
        [task] = task_app.controller.tasks
        assert self.count(task_app) == "1"
        assert self.stored(task_app)[0]["name"] == "Buy milk"
        assert task_app.document.get_element_by_id("item-input").value == ""

        self.control(task_app, task.id, "checkButton").click()
        assert self.count(task_app) == "0"
        assert self.item(task_app, task.id).has_class("completed")
        assert self.stored(task_app)[0]["completed"] is True

        filters = task_app.document.query_all_by_class("filter-btn")
        filters[1].click()
        assert task_app.document.get_element_by_id("todo-list").children[0].has_class("todo-empty")
        filters[2].click()
        assert self.item(task_app, task.id) is not None

        task_app.document.get_element_by_id("clear-completed").click()
        assert task_app.controller.tasks == []
        assert self.count(task_app) == "0"
        assert self.stored(task_app) == []

    def test_blank_name_is_ignored(self, task_app):
        self.add(task_app, "   ")
        assert task_app.controller.tasks == []
        assert task_app.store.get_item("tasks_v3") is None

    def test_name_is_stripped(self, task_app):
        assert task_app.controller.handle_add_task("  Buy milk  ")
        assert task_app.controller.tasks[0].name == "Buy milk"

    def test_long_name_is_added_and_audited(self, task_app):
        name = "x" * 600
        self.add(task_app, name)

        [task] = task_app.controller.tasks
        assert task.name == name
        assert self.stored(task_app)[0]["name"] == name
        assert task_app.document.get_element_by_id("item-input").value == ""
        assert toast_messages(task_app.notifications) == [ADDED_MESSAGE]
        [event] = task_app.audit.get_recent_events()
        assert event.action == AuditAction.ADD
        assert event.details["name"] == name

    def test_long_name_edit_is_audited(self, task_app):
        self.add(task_app, "Buy milk")
        [task] = task_app.controller.tasks
        assert task_app.controller.handle_edit_task(task.id, "y" * 600)
        assert task_app.audit.get_recent_events(limit=1)[0].action == AuditAction.EDIT

    def test_invalid_audit_event_does_not_break_handler(self, task_app, monkeypatch):
        def oversized(task_id):
            return AuditEvent(action=AuditAction.DELETE, entity_id=task_id, description="x" * 600)

        monkeypatch.setattr(AuditEventBuilder, "task_deleted", staticmethod(oversized))
        self.add(task_app, "Buy milk")
        [task] = task_app.controller.tasks

        assert task_app.controller.handle_delete_task(task.id) is True
        assert task_app.controller.tasks == []
        assert self.stored(task_app) == []
        assert [e.action for e in task_app.audit.get_recent_events()] == [AuditAction.ADD]

    def test_add_notifies(self, task_app):
        self.add(task_app, "Buy milk")
        assert toast_messages(task_app.notifications) == [ADDED_MESSAGE]

    def test_delete(self, task_app):
        self.add(task_app, "Buy milk")
        self.add(task_app, "Pay rent")
        first, second = task_app.controller.tasks
        self.control(task_app, first.id, "deleteButton").click()
        assert [t.id for t in task_app.controller.tasks] == [second.id]
        assert [r["id"] for r in self.stored(task_app)] == [second.id]
        assert self.item(task_app, first.id) is None

    def test_edit(self, task_app):
        self.add(task_app, "Buy milk")
        [task] = task_app.controller.tasks
        self.control(task_app, task.id, "editButton").click()
        li = self.item(task_app, task.id)
        li.query_by_class("editInput").value = "Buy oat milk"
        li.query_by_class("editButton").click()

        assert task_app.controller.tasks[0].name == "Buy oat milk"
        assert self.stored(task_app)[0]["name"] == "Buy oat milk"
        assert self.item(task_app, task.id).query_by_class("task-name").text_content == "Buy oat milk"

    def test_edit_to_blank_is_ignored(self, task_app):
        self.add(task_app, "Buy milk")
        [task] = task_app.controller.tasks
        assert task_app.controller.handle_edit_task(task.id, "  ") is False
        assert task_app.controller.tasks[0].name == "Buy milk"

    def test_unknown_id_is_ignored(self, task_app):
        assert task_app.controller.handle_toggle_task("missing") is False
        assert task_app.controller.handle_delete_task("missing") is False

    def test_filter_change_does_not_persist(self, task_app):
        self.add(task_app, "Buy milk")
        writes = task_app.store.writes
        task_app.controller.handle_filter_change("completed")
        task_app.controller.handle_filter_change("bogus")
        assert task_app.controller.filter.value == "all"
        assert task_app.store.writes == writes

    def test_save_failure_rolls_back(self, task_app):
        self.add(task_app, "Buy milk")
        [task] = task_app.controller.tasks

        task_app.store.fail_writes = True
        self.add(task_app, "Pay rent")
        self.control(task_app, task.id, "checkButton").click()

        assert [t.name for t in task_app.controller.tasks] == ["Buy milk"]
        assert task_app.controller.tasks[0].completed is False
        assert task_app.document.get_element_by_id("item-input").value == "Pay rent"
        assert SAVE_FAILED_MESSAGE in toast_messages(task_app.notifications)
        assert self.count(task_app) == "1"

    def test_audit_trail(self, task_app):
        self.add(task_app, "Buy milk")
        [task] = task_app.controller.tasks
        task_app.controller.handle_toggle_task(task.id)
        task_app.controller.handle_edit_task(task.id, "Buy oat milk")
        task_app.controller.handle_clear_completed()

        actions = [e.action for e in reversed(task_app.audit.get_recent_events())]
        assert actions == [AuditAction.ADD, AuditAction.TOGGLE, AuditAction.EDIT, AuditAction.CLEAR]
        clear_event = task_app.audit.get_recent_events(limit=1)[0]
        assert clear_event.details["removed_ids"] == [task.id]

    def test_save_failure_is_audited(self, task_app):
        task_app.store.fail_writes = True
        task_app.controller.handle_add_task("Buy milk")
        [event] = task_app.audit.get_recent_events()
        assert event.action == AuditAction.SAVE_FAILED

    @pytest.mark.parametrize("payload", ["{broken", '[{"id": "t1"}]'])
    def test_unreadable_storage_starts_empty(self, store, task_app, payload):
        store.set_item("tasks_v3", payload)
        document = build_task_document()
        controller = TaskController(
            TaskRepository(store, "tasks_v3"), TaskView(document), task_app.notifications
        )
        assert controller.tasks == []
        assert document.get_element_by_id("todo-list").children[0].has_class("todo-empty")
