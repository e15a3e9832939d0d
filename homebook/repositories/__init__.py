"""Repositories: one per entity type, each owning its storage key."""

from homebook.repositories.base import JsonArrayRepository
from homebook.repositories.expense_repository import ExpenseRepository
from homebook.repositories.task_repository import TaskRepository

__all__ = ["ExpenseRepository", "JsonArrayRepository", "TaskRepository"]
