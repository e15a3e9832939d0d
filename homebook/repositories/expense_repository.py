"""Expense ledger persistence."""

from typing import Any, Mapping, Union

import structlog

from homebook.models.expense import Expense, ExpenseFilter
from homebook.repositories.base import JsonArrayRepository
from homebook.services.storage import StorageError

logger = structlog.get_logger(__name__)


class ExpenseRepository(JsonArrayRepository[Expense]):
    """
    Expenses stored as a JSON array under one key (expenses_v2 by default).

    The repository is the source of truth; nothing is cached.
    """

    model = Expense

    def save(self, expense: Expense) -> Expense:
        """
        Append an expense and rewrite the collection.

        No duplicate check is made.

        Raises:
            StorageError: If the write fails
        """
        expenses = self.get_all()
        expenses.append(expense)
        self._persist(expenses)
        logger.info("expense_saved", expense_id=expense.id, value=expense.value)
        return expense

    def search(self, filter: Union[ExpenseFilter, Mapping[str, Any]]) -> list[Expense]:
        """Expenses matching every non-empty field of the filter."""
        if not isinstance(filter, ExpenseFilter):
            filter = ExpenseFilter.from_form(filter)
        return [expense for expense in self.get_all() if filter.matches(expense)]

    def delete(self, expense_id: str) -> None:
        """
        Remove an expense by id and persist the remainder.

        A failed write is logged and otherwise ignored.
        """
        remaining = [e for e in self.get_all() if e.id != expense_id]
        try:
            self._persist(remaining)
        except StorageError as e:
            logger.error("expense_delete_failed", expense_id=expense_id, error=str(e))
