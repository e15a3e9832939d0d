"""
To-do List View

Renders the task list, the active counter and the filter buttons, and
turns clicks into handler calls. The list container carries a single
delegated click listener: rows are rebuilt on every render, so nothing
is ever attached to a row itself.

Task names are user input. They only ever reach markup through
Element.to_html(), which escapes them in text and in the edit input's
value attribute alike.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from homebook.models.task import Task, TaskFilter, count_active
from homebook.ui.dom import Document, Element, Event

EMPTY_STATE_TEXT = "No tasks found."


@dataclass(frozen=True)
class TaskListHandlers:
    """Callbacks the list needs from its controller."""
    toggle: Callable[[str], None]
    delete: Callable[[str], None]
    edit: Callable[[str, str], None]


def _coerce_filter(value: Union[TaskFilter, str]) -> TaskFilter:
    try:
        return TaskFilter(value)
    except ValueError:
        return TaskFilter.ALL


class TaskView:
    def __init__(self, document: Document):
        self.list_element = document.get_element_by_id("todo-list")
        self.input_element = document.get_element_by_id("item-input")
        self.form_element = document.get_element_by_id("todo-add")
        self.count_element = document.get_element_by_id("count-number")
        self.filter_buttons = document.query_all_by_class("filter-btn")
        self.clear_button = document.get_element_by_id("clear-completed")

    # -------------------- bindings --------------------
    def bind_add_task(self, handler: Callable[[str], Optional[bool]]) -> None:
        """
        Call handler with the typed name, unless it is blank.

        The input is cleared afterwards unless the handler returns False.
        """
        if self.form_element is None or self.input_element is None:
            return

        def on_submit(event: Event) -> None:
            event.prevent_default()
            text = self.input_element.value
            if text.strip():
                if handler(text) is not False:
                    self.input_element.value = ""

        self.form_element.add_event_listener("submit", on_submit)

    def bind_list_events(self, handlers: TaskListHandlers) -> None:
        if self.list_element is None:
            return

        def on_click(event: Event) -> None:
            li = event.target.closest(tag="li")
            if li is None or "id" not in li.dataset:
                return
            task_id = li.dataset["id"]
            control = event.target.closest(data_key="action")
            action = control.dataset["action"] if control is not None else None

            if action == "checkButton":
                handlers.toggle(task_id)
            elif action == "deleteButton":
                handlers.delete(task_id)
            elif action == "editButton":
                self._show_edit_mode(li)
            elif action == "containerCancelButton":
                self._hide_edit_mode(li)
            elif action == "containerEditButton":
                edit_input = li.query_by_class("editInput")
                handlers.edit(task_id, edit_input.value if edit_input is not None else "")

        self.list_element.add_event_listener("click", on_click)

    def bind_filter_change(self, handler: Callable[[str], None]) -> None:
        for button in self.filter_buttons:
            button.add_event_listener("click", self._filter_click(button, handler))

    def _filter_click(self, button: Element, handler: Callable[[str], None]):
        def on_click(event: Event) -> None:
            for other in self.filter_buttons:
                other.remove_class("active")
            button.add_class("active")
            handler(button.dataset["filter"])
        return on_click

    def bind_clear_completed(self, handler: Callable[[], None]) -> None:
        if self.clear_button is not None:
            self.clear_button.add_event_listener("click", lambda event: handler())

    # -------------------- rendering --------------------
    def render(self, tasks: Iterable[Task], filter: Union[TaskFilter, str] = TaskFilter.ALL) -> None:
        """
        Replace the list with the tasks passing the filter.

        The counter always shows the not-completed tasks of the full
        list, whatever the filter.
        """
        if self.list_element is None:
            return
        tasks = list(tasks)
        current = _coerce_filter(filter)

        self.list_element.clear_children()
        if self.count_element is not None:
            self.count_element.text_content = str(count_active(tasks))
        for button in self.filter_buttons:
            button.toggle_class("active", button.dataset.get("filter") == current.value)

        visible = current.apply(tasks)
        if not visible:
            self.list_element.append_child(
                Element("li", class_name="todo-empty", text_content=EMPTY_STATE_TEXT)
            )
            return

        for task in visible:
            self.list_element.append_child(self._create_task_element(task))

    def render_html(self) -> str:
        return self.list_element.to_html() if self.list_element is not None else ""

    def _create_task_element(self, task: Task) -> Element:
        li = Element(
            "li",
            class_name="todo-item completed" if task.completed else "todo-item",
            dataset={"id": task.id},
        )

        check = li.append_child(Element("button", class_name="button-check", dataset={"action": "checkButton"}))
        check.append_child(Element("i", class_name="fas fa-check" if task.completed else "fas fa-check displayNone"))

        li.append_child(Element("p", class_name="task-name", text_content=task.name))
        li.append_child(Element("i", class_name="fas fa-edit", dataset={"action": "editButton"}))
        li.append_child(Element("i", class_name="fas fa-trash-alt", dataset={"action": "deleteButton"}))

        container = li.append_child(Element("div", class_name="editContainer", hidden=True))
        container.append_child(Element(
            "input",
            class_name="editInput",
            value=task.name,
            attributes={"type": "text"},
        ))
        container.append_child(Element(
            "button", class_name="editButton", text_content="Save",
            dataset={"action": "containerEditButton"},
        ))
        container.append_child(Element(
            "button", class_name="cancelButton", text_content="Cancel",
            dataset={"action": "containerCancelButton"},
        ))
        return li

    def _show_edit_mode(self, li: Element) -> None:
        for container in self.list_element.find_all(lambda el: el.has_class("editContainer")):
            container.hidden = True
        container = li.query_by_class("editContainer")
        if container is not None:
            container.hidden = False

    def _hide_edit_mode(self, li: Element) -> None:
        container = li.query_by_class("editContainer")
        if container is not None:
            container.hidden = True
