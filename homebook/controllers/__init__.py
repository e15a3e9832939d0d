"""Controllers: turn view events into repository calls and re-renders."""

from homebook.controllers.expense_controller import ExpenseController
from homebook.controllers.task_controller import TaskController

__all__ = ["ExpenseController", "TaskController"]
