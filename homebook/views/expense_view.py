"""
Expense Ledger View

Owns the ledger's elements: the entry form, the table body, the total
and the feedback mount. It forwards raw form strings to the controller
and renders whatever list it is given. It never validates or stores.
"""

from typing import Callable, Iterable, Optional

import structlog

from homebook.models.expense import Expense
from homebook.ui.dom import Document, Element, Event
from homebook.ui.documents import EXPENSE_FORM_IDS
from homebook.ui.notifications import NotificationSystem
from homebook.utils.formatting import format_currency, format_currency_input, format_date

logger = structlog.get_logger(__name__)


class InputMask:
    """Re-formats a currency input on every keystroke."""

    def __init__(self, element: Optional[Element]):
        self.element = element
        if self.element is not None:
            self.element.add_event_listener("input", self._on_input)

    @staticmethod
    def _on_input(event: Event) -> None:
        event.target.value = format_currency_input(event.target.value)


class ExpenseView:
    def __init__(self, document: Document, notifications: Optional[NotificationSystem] = None):
        get = document.get_element_by_id
        self.elements: dict[str, Optional[Element]] = {
            name: get(name) for name in EXPENSE_FORM_IDS
        }
        self.elements.update(
            list=get("expense-list"),
            total=get("expense-total"),
            btn_register=get("register-expense"),
            btn_search=get("search-expense"),
        )

        mount = get("feedback")
        if notifications is None and mount is not None:
            notifications = NotificationSystem(mount)
        self.notifications = notifications

        self.input_mask = InputMask(self.elements["value"])

    @property
    def has_list(self) -> bool:
        return self.elements["list"] is not None

    # -------------------- bindings --------------------
    def bind_register(self, handler: Callable[[], None]) -> None:
        button = self.elements["btn_register"]
        if button is not None:
            button.add_event_listener("click", lambda event: handler())

    def bind_search(self, handler: Callable[[], None]) -> None:
        button = self.elements["btn_search"]
        if button is not None:
            button.add_event_listener("click", lambda event: handler())

    def bind_delete(self, handler: Callable[[str], None]) -> None:
        """One delegated listener for every row's delete button."""
        list_el = self.elements["list"]
        if list_el is None:
            return

        def on_click(event: Event) -> None:
            control = event.target.closest(data_key="action")
            if control is None or control.dataset["action"] != "delete":
                return
            row = event.target.closest(tag="tr")
            if row is not None and row.dataset.get("id"):
                handler(row.dataset["id"])

        list_el.add_event_listener("click", on_click)

    # -------------------- form --------------------
    def get_form_data(self) -> dict[str, Optional[str]]:
        return {
            name: (self.elements[name].value if self.elements[name] is not None else None)
            for name in EXPENSE_FORM_IDS
        }

    def clear_form(self) -> None:
        for name in EXPENSE_FORM_IDS:
            element = self.elements[name]
            if element is not None:
                element.value = ""

    # -------------------- rendering --------------------
    def render_list(self, expenses: Iterable[Expense]) -> None:
        """Replace the table rows and show the total of the rows shown."""
        list_el = self.elements["list"]
        if list_el is None:
            return

        list_el.clear_children()
        total = 0.0

        for expense in expenses:
            total += expense.value
            row = list_el.append_child(Element("tr", dataset={"id": expense.id}))
            row.append_child(Element("td", text_content=format_date(expense.day, expense.month, expense.year)))
            row.append_child(Element("td", text_content=expense.type_label))
            row.append_child(Element("td", text_content=expense.description or ""))
            row.append_child(Element("td", text_content=format_currency(expense.value)))

            action_cell = row.append_child(Element("td"))
            button = action_cell.append_child(Element(
                "button",
                class_name="btn btn-danger btn-sm",
                dataset={"action": "delete"},
            ))
            button.append_child(Element("i", class_name="fas fa-times"))

        if self.elements["total"] is not None:
            self.elements["total"].text_content = format_currency(total)

    def show_feedback(self, title: str, message: str, type: str) -> None:
        if self.notifications is None:
            logger.warning("feedback_without_mount", title=title, message=message, level=type)
            return
        self.notifications.show(message, type, title=title)
