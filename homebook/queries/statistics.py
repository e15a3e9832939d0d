"""
Expense Statistics

DESIGN DECISION: Statistics are computed on demand from the repository.
Nothing is cached, so totals can never drift from stored data.
"""

from homebook.repositories.expense_repository import ExpenseRepository


class StatisticsService:
    """
    Read-only aggregates over the expense ledger.

    GUARANTEES:
    - Only reads from the repository, never writes
    - An empty (or unreadable) ledger totals 0.0
    """

    def __init__(self, repository: ExpenseRepository):
        self._repository = repository

    def calculate_total(self) -> float:
        """Sum of every stored expense."""
        return sum((expense.value for expense in self._repository.get_all()), 0.0)

    def get_expenses_by_category(self) -> dict[str, float]:
        """Summed value per category code, e.g. {"1": 10.0}."""
        totals: dict[str, float] = {}
        for expense in self._repository.get_all():
            code = expense.type or ""
            totals[code] = totals.get(code, 0.0) + expense.value
        return totals
