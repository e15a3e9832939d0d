"""
Tests for Homebook

Test strategy:
1. Unit tests for individual components (models, parsers, stores)
2. Integration tests for flows (controllers wired to in-memory stores)
3. No real disk access outside pytest's tmp_path
"""

import pytest
from datetime import datetime, timezone

from homebook.models.expense import (
    Expense,
    ExpenseFilter,
    ExpenseType,
    expense_type_label,
)
from homebook.models.task import Task, TaskFilter, count_active
from homebook.models.audit import (
    AuditAction,
    AuditEvent,
    AuditEventBuilder,
    AuditSeverity,
)


def make_expense(**overrides) -> Expense:
    data = {
        "year": "2026",
        "month": "1",
        "day": "5",
        "type": "1",
        "description": "Lunch",
        "value": "R$ 10,00",
    }
    data.update(overrides)
    return Expense.from_form(data)


class TestExpenseModel:
    """Tests for the Expense model."""

    def test_expense_from_form(self):
        """Test building an expense from raw form strings."""
        expense = make_expense()
        assert expense.year == 2026
        assert expense.month == 1
        assert expense.day == 5
        assert expense.type == "1"
        assert expense.description == "Lunch"
        assert expense.value == 10.0
        assert expense.is_valid()

    def test_expense_gets_unique_id(self):
        """Test that ids are generated and distinct."""
        first, second = make_expense(), make_expense()
        assert first.id
        assert first.id != second.id

    def test_expense_keeps_given_id(self):
        expense = Expense(id="abc", year=2026, month=1, day=5, type="1", description="x", value=1.0)
        assert expense.id == "abc"

    def test_expense_strips_description(self):
        """Test that whitespace is stripped from the description."""
        assert make_expense(description="  Lunch  ").description == "Lunch"

    @pytest.mark.parametrize("field", ["year", "month", "day", "type", "description"])
    def test_blank_field_is_invalid(self, field):
        """Test that a blank field leaves the expense invalid."""
        expense = make_expense(**{field: "  "})
        assert getattr(expense, field) is None
        assert not expense.is_valid()

    def test_unparseable_date_part_is_empty(self):
        """Test that bad date parts never raise."""
        expense = make_expense(year="abc", day="-3")
        assert expense.year is None
        assert expense.day is None
        assert not expense.is_valid()

    def test_zero_value_is_invalid(self):
        expense = make_expense(value="R$ 0,00")
        assert expense.value == 0.0
        assert not expense.is_valid()

    def test_value_without_digits_is_zero(self):
        expense = make_expense(value="junk")
        assert expense.value == 0.0
        assert not expense.is_valid()

    def test_nan_value_is_invalid(self):
        assert not make_expense(value=float("nan")).is_valid()

    def test_numeric_value_passes_through(self):
        """Test that rehydrated records keep their float amount."""
        expense = Expense.model_validate({
            "id": "e1", "year": 2026, "month": 1, "day": 5,
            "type": "1", "description": "Lunch", "value": 10.5,
        })
        assert expense.value == 10.5
        assert expense.is_valid()


class TestExpenseTypes:
    """Tests for expense category codes."""

    def test_category_values(self):
        assert [code.value for code in ExpenseType] == ["1", "2", "3", "4", "5"]

    def test_category_labels(self):
        assert ExpenseType.FOOD.label == "Food"
        assert ExpenseType.TRANSPORT.label == "Transport"

    @pytest.mark.parametrize("code", ["9", "", None, "food"])
    def test_unknown_code_is_other(self, code):
        assert expense_type_label(code) == "Other"

    def test_expense_type_label(self):
        assert make_expense(type="2").type_label == "Education"
        assert make_expense(type="7").type_label == "Other"


class TestExpenseFilter:
    """Tests for partial-match expense search."""

    def test_blank_fields_become_none(self):
        expense_filter = ExpenseFilter.from_form({"year": "", "description": "lun"})
        assert expense_filter.year is None
        assert expense_filter.description == "lun"
        assert not expense_filter.is_empty

    def test_empty_filter_matches_everything(self):
        expense_filter = ExpenseFilter.from_form({name: "" for name in ("year", "value")})
        assert expense_filter.is_empty
        assert expense_filter.matches(make_expense())

    def test_description_is_case_insensitive_substring(self):
        assert ExpenseFilter(description="LUN").matches(make_expense())
        assert not ExpenseFilter(description="dinner").matches(make_expense())

    def test_type_is_exact(self):
        assert ExpenseFilter(type="1").matches(make_expense())
        assert not ExpenseFilter(type="2").matches(make_expense())

    def test_date_parts_compare_as_numbers(self):
        assert ExpenseFilter(month="01").matches(make_expense())
        assert not ExpenseFilter(year="2025").matches(make_expense())

    def test_unparseable_date_matches_nothing(self):
        assert not ExpenseFilter(year="abc").matches(make_expense())

    def test_value_compares_masked_amount(self):
        assert ExpenseFilter(value="R$ 10,00").matches(make_expense())
        assert not ExpenseFilter(value="R$ 10,01").matches(make_expense())

    def test_all_fields_must_match(self):
        expense_filter = ExpenseFilter(year="2026", description="lunch", type="3")
        assert not expense_filter.matches(make_expense())


class TestTaskModel:
    """Tests for the Task model."""

    def test_task_creation(self):
        task = Task(name="Buy milk")
        assert task.name == "Buy milk"
        assert task.completed is False
        assert task.id
        assert task.created_at.tzinfo is not None

    def test_task_strips_name(self):
        assert Task(name="  Buy milk  ").name == "Buy milk"

    def test_toggle(self):
        task = Task(name="Buy milk")
        task.toggle()
        assert task.completed is True
        task.toggle()
        assert task.completed is False

    def test_update_name(self):
        task = Task(name="Buy milk")
        task.update_name("Buy oat milk")
        assert task.name == "Buy oat milk"

    def test_rehydrate_stored_record(self):
        """Test that stored records keep their id and timestamp."""
        task = Task.model_validate({
            "id": "t1",
            "name": "Buy milk",
            "completed": True,
            "created_at": "2026-01-01T00:00:00+00:00",
        })
        assert task.id == "t1"
        assert task.completed is True
        assert task.created_at == datetime(2026, 1, 1, tzinfo=timezone.utc)

    def test_record_without_name_is_rejected(self):
        with pytest.raises(ValueError):
            Task.model_validate({"id": "t1"})

    def test_count_active(self):
        tasks = [Task(name="a"), Task(name="b", completed=True), Task(name="c")]
        assert count_active(tasks) == 2
        assert count_active([]) == 0


class TestTaskFilter:
    """Tests for completion-state filtering."""

    @pytest.fixture
    def tasks(self):
        return [
            Task(name="a"),
            Task(name="b", completed=True),
            Task(name="c"),
        ]

    def test_all(self, tasks):
        assert TaskFilter.ALL.apply(tasks) == tasks

    def test_active_keeps_order(self, tasks):
        assert [t.name for t in TaskFilter.ACTIVE.apply(tasks)] == ["a", "c"]

    def test_completed(self, tasks):
        assert [t.name for t in TaskFilter.COMPLETED.apply(tasks)] == ["b"]

    def test_filter_values(self):
        assert [f.value for f in TaskFilter] == ["all", "active", "completed"]


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            action=AuditAction.DELETE,
            entity_id="t1",
            description="Task removed",
        )
        assert event.action == AuditAction.DELETE
        assert event.severity == AuditSeverity.INFO
        assert event.entity_type == "task"
        assert event.event_id is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.task_added("t1", "Buy milk")
        log_dict = event.to_log_dict()
        assert log_dict["action"] == "ADD"
        assert log_dict["severity"] == "info"
        assert log_dict["entity_id"] == "t1"
        assert log_dict["details"] == {"name": "Buy milk"}

    def test_task_added_keeps_long_name_out_of_description(self):
        """Test that task names of any length build a valid event."""
        event = AuditEventBuilder.task_added("t1", "x" * 600)
        assert event.description == "Task added"
        assert event.details["name"] == "x" * 600

    def test_audit_event_builder_task_edited(self):
        event = AuditEventBuilder.task_edited("t1", "Buy milk", "Buy oat milk")
        assert event.action == AuditAction.EDIT
        assert event.details == {"old_name": "Buy milk", "new_name": "Buy oat milk"}

    def test_audit_event_builder_completed_cleared(self):
        event = AuditEventBuilder.completed_cleared(["t1", "t2"])
        assert event.action == AuditAction.CLEAR
        assert event.entity_id is None
        assert "(2)" in event.description

    def test_audit_event_builder_save_failed(self):
        event = AuditEventBuilder.save_failed("t1", "disk full")
        assert event.action == AuditAction.SAVE_FAILED
        assert event.severity == AuditSeverity.ERROR
        assert event.details["error"] == "disk full"
