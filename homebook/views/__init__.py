"""Views: render entities, forward raw input to controllers."""

from homebook.views.expense_view import ExpenseView, InputMask
from homebook.views.task_view import TaskListHandlers, TaskView

__all__ = ["ExpenseView", "InputMask", "TaskListHandlers", "TaskView"]
