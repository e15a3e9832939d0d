"""
To-do List Controller

Holds the canonical in-memory task list and the current filter. Every
mutation rewrites the whole list to storage, re-renders, notifies the
user and leaves an audit entry.

If a write fails the mutation is rolled back, so the list on screen
never disagrees with what is stored.
"""

from typing import Callable, Optional, Union

import structlog

from homebook.audit.logger import AuditLogger
from homebook.models.task import Task, TaskFilter
from homebook.repositories.task_repository import TaskRepository
from homebook.services.storage import StorageError
from homebook.ui.notifications import NotificationSystem
from homebook.views.task_view import TaskListHandlers, TaskView

logger = structlog.get_logger(__name__)

ADDED_MESSAGE = "Task added successfully!"
REMOVED_MESSAGE = "Task removed."
UPDATED_MESSAGE = "Task updated."
COMPLETED_MESSAGE = "Task completed."
REOPENED_MESSAGE = "Task reopened."
CLEARED_MESSAGE = "Completed tasks cleared."
SAVE_FAILED_MESSAGE = "Failed to save tasks."


class TaskController:
    def __init__(
        self,
        repository: TaskRepository,
        view: TaskView,
        notifications: NotificationSystem,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.repository = repository
        self.view = view
        self.notifications = notifications
        self.audit_logger = audit_logger or AuditLogger()
        self.filter = TaskFilter.ALL

        self.tasks: list[Task] = self.repository.get_all()
        self._render()

        self.view.bind_add_task(self.handle_add_task)
        self.view.bind_filter_change(self.handle_filter_change)
        self.view.bind_clear_completed(self.handle_clear_completed)
        self.view.bind_list_events(TaskListHandlers(
            toggle=self.handle_toggle_task,
            delete=self.handle_delete_task,
            edit=self.handle_edit_task,
        ))

    # -------------------- internals --------------------
    def _render(self) -> None:
        self.view.render(self.tasks, self.filter)

    def _find(self, task_id: str) -> Optional[Task]:
        return next((task for task in self.tasks if task.id == task_id), None)

    def _commit(self, mutate: Callable[[], None], task_id: Optional[str] = None) -> bool:
        """
        Apply a mutation, persist the full list and re-render.

        On a failed write the previous list is restored.
        """
        snapshot = [task.model_copy() for task in self.tasks]
        mutate()
        try:
            self.repository.save_all(self.tasks)
        except StorageError as e:
            self.tasks = snapshot
            logger.error("tasks_save_failed", task_id=task_id, error=str(e))
            self.audit_logger.log_save_failed(task_id, str(e))
            self.notifications.show(SAVE_FAILED_MESSAGE, "danger")
            self._render()
            return False
        self._render()
        return True

    # -------------------- handlers --------------------
    def handle_add_task(self, task_name: str) -> bool:
        name = task_name.strip()
        if not name:
            return False
        task = Task(name=name)
        if not self._commit(lambda: self.tasks.append(task), task.id):
            return False
        self.notifications.show(ADDED_MESSAGE, "success")
        self.audit_logger.log_task_added(task.id, task.name)
        return True

    def handle_toggle_task(self, task_id: str) -> bool:
        task = self._find(task_id)
        if task is None:
            return False
        if not self._commit(task.toggle, task_id):
            return False
        completed = self._find(task_id).completed
        self.notifications.show(COMPLETED_MESSAGE if completed else REOPENED_MESSAGE, "info")
        self.audit_logger.log_task_toggled(task_id, completed)
        return True

    def handle_delete_task(self, task_id: str) -> bool:
        if self._find(task_id) is None:
            return False

        def remove() -> None:
            self.tasks = [task for task in self.tasks if task.id != task_id]

        if not self._commit(remove, task_id):
            return False
        self.notifications.show(REMOVED_MESSAGE, "danger")
        self.audit_logger.log_task_deleted(task_id)
        return True

    def handle_edit_task(self, task_id: str, new_name: str) -> bool:
        task = self._find(task_id)
        name = new_name.strip()
        if task is None or not name:
            return False
        old_name = task.name
        if not self._commit(lambda: task.update_name(name), task_id):
            return False
        self.notifications.show(UPDATED_MESSAGE, "info")
        self.audit_logger.log_task_edited(task_id, old_name, name)
        return True

    def handle_filter_change(self, value: Union[TaskFilter, str]) -> None:
        try:
            self.filter = TaskFilter(value)
        except ValueError:
            logger.warning("unknown_task_filter", value=value)
            self.filter = TaskFilter.ALL
        self._render()

    def handle_clear_completed(self) -> bool:
        removed_ids = [task.id for task in self.tasks if task.completed]

        def clear() -> None:
            self.tasks = [task for task in self.tasks if not task.completed]

        if not self._commit(clear):
            return False
        self.notifications.show(CLEARED_MESSAGE, "info")
        self.audit_logger.log_completed_cleared(removed_ids)
        return True
