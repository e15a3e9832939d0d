"""
Expense Ledger Controller

Wires the ledger view to the repository. The repository is the source
of truth: every render reads it again, nothing is cached here.
"""

from typing import Optional

import structlog

from homebook.models.expense import Expense, ExpenseFilter
from homebook.queries.statistics import StatisticsService
from homebook.repositories.expense_repository import ExpenseRepository
from homebook.services.storage import StorageError
from homebook.views.expense_view import ExpenseView

logger = structlog.get_logger(__name__)

SUCCESS_TITLE = "Success"
SUCCESS_MESSAGE = "Expense registered successfully!"
SAVE_ERROR_TITLE = "Error"
SAVE_ERROR_MESSAGE = "Failed to save the expense."
VALIDATION_ERROR_TITLE = "Validation error"
VALIDATION_ERROR_MESSAGE = "Check that every field has been filled in correctly."


class ExpenseController:
    def __init__(
        self,
        repository: ExpenseRepository,
        view: ExpenseView,
        statistics: Optional[StatisticsService] = None,
    ):
        self.repository = repository
        self.view = view
        self.statistics = statistics or StatisticsService(repository)

        self.view.bind_register(self.handle_register)
        self.view.bind_search(self.handle_search)
        self.view.bind_delete(self.handle_delete)

        if self.view.has_list:
            self.load_expenses()

    def handle_register(self) -> Optional[Expense]:
        """
        Build an expense from the form and store it.

        The form is only cleared once the expense is safely stored.
        Returns the stored expense, or None.
        """
        expense = Expense.from_form(self.view.get_form_data())

        if not expense.is_valid():
            self.view.show_feedback(VALIDATION_ERROR_TITLE, VALIDATION_ERROR_MESSAGE, "danger")
            return None

        try:
            self.repository.save(expense)
        except StorageError as e:
            logger.error("expense_save_failed", expense_id=expense.id, error=str(e))
            self.view.show_feedback(SAVE_ERROR_TITLE, SAVE_ERROR_MESSAGE, "danger")
            return None

        self.view.show_feedback(SUCCESS_TITLE, SUCCESS_MESSAGE, "success")
        self.view.clear_form()
        self.load_expenses()
        return expense

    def handle_search(self) -> list[Expense]:
        """Show only the expenses matching the filled-in form fields."""
        expense_filter = ExpenseFilter.from_form(self.view.get_form_data())
        expenses = self.repository.search(expense_filter)
        self.view.render_list(expenses)
        logger.info("expense_search", filter=expense_filter.model_dump(exclude_none=True), results=len(expenses))
        return expenses

    def handle_delete(self, expense_id: str) -> None:
        self.repository.delete(expense_id)
        self.load_expenses()

    def load_expenses(self) -> list[Expense]:
        expenses = self.repository.get_all()
        self.view.render_list(expenses)
        logger.info("expenses_loaded", count=len(expenses), total=self.statistics.calculate_total())
        return expenses
