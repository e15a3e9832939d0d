"""To-do list persistence."""

from typing import Iterable

import structlog

from homebook.models.task import Task
from homebook.repositories.base import JsonArrayRepository

logger = structlog.get_logger(__name__)


class TaskRepository(JsonArrayRepository[Task]):
    """
    Tasks stored as a JSON array under one key (tasks_v3 by default).

    The controller owns the canonical list and flushes all of it after
    every mutation, so the only write is save_all.
    """

    model = Task

    def save_all(self, tasks: Iterable[Task]) -> None:
        """
        Overwrite the stored collection with the given tasks, in order.

        Raises:
            StorageError: If the write fails
        """
        tasks = list(tasks)
        self._persist(tasks)
        logger.debug("tasks_saved", count=len(tasks))
