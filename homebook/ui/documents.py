"""
Host Documents

Builders for the page each app renders into. Element ids are the
contract between a page and its view; the views look them up by id
and degrade gracefully when one is missing.
"""

from homebook.models.expense import ExpenseType
from homebook.models.task import TaskFilter
from homebook.ui.dom import Document, Element

EXPENSE_FORM_IDS = ("year", "month", "day", "type", "description", "value")


def build_expense_document() -> Document:
    """Form, table body, total and feedback mount of the expense ledger."""
    document = Document()
    body = document.body

    form = body.append_child(Element("form", id="expense-form"))
    for field_id in EXPENSE_FORM_IDS:
        tag = "select" if field_id == "type" else "input"
        form.append_child(Element(tag, id=field_id))

    type_select = document.get_element_by_id("type")
    for code in ExpenseType:
        type_select.append_child(
            Element("option", text_content=code.label, attributes={"value": code.value})
        )

    form.append_child(Element("button", id="register-expense", text_content="Register"))
    form.append_child(Element("button", id="search-expense", text_content="Search"))

    table = body.append_child(Element("table", id="expense-table"))
    table.append_child(Element("tbody", id="expense-list"))
    body.append_child(Element("span", id="expense-total", text_content=""))
    body.append_child(Element("div", id="feedback", class_name="toast-container"))
    return document


def build_task_document() -> Document:
    """Add form, list, counter, filter buttons and toast mount of the to-do list."""
    document = Document()
    body = document.body

    form = body.append_child(Element("form", id="todo-add"))
    form.append_child(Element("input", id="item-input", attributes={"type": "text"}))
    form.append_child(Element("button", text_content="Add", attributes={"type": "submit"}))

    body.append_child(Element("ul", id="todo-list"))

    footer = body.append_child(Element("div", id="todo-footer"))
    footer.append_child(Element("span", id="count-number", text_content="0"))
    for task_filter in TaskFilter:
        footer.append_child(Element(
            "button",
            class_name="filter-btn active" if task_filter is TaskFilter.ALL else "filter-btn",
            text_content=task_filter.value.capitalize(),
            dataset={"filter": task_filter.value},
        ))
    footer.append_child(Element("button", id="clear-completed", text_content="Clear completed"))

    body.append_child(Element("div", id="notifications", class_name="toast-container"))
    return document
