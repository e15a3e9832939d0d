"""
To-do List Models

A Task is created on add, toggled and renamed in place, and removed
one by one or in bulk. The same constructor is used for fresh tasks and
for rehydrating stored records: id and created_at default when absent.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskFilter(str, Enum):
    """Completion-state filter applied by the task view."""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    def matches(self, task: "Task") -> bool:
        if self is TaskFilter.ACTIVE:
            return not task.completed
        if self is TaskFilter.COMPLETED:
            return task.completed
        return True

    def apply(self, tasks: Iterable["Task"]) -> list["Task"]:
        """Filter tasks, keeping collection order."""
        return [task for task in tasks if self.matches(task)]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(BaseModel):
    """A single to-do item."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    id: str = Field(
        default="",
        validate_default=True,
        description="Unique task ID (generated when absent)"
    )
    name: str = Field(
        ...,
        description="What needs doing"
    )
    completed: bool = False
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="Creation time; not used for ordering"
    )

    @field_validator('id', mode='before')
    @classmethod
    def default_id(cls, v: Any) -> str:
        return str(v) if v else str(uuid4())

    def toggle(self) -> None:
        self.completed = not self.completed

    def update_name(self, new_name: str) -> None:
        self.name = new_name


def count_active(tasks: Iterable[Task]) -> int:
    """Number of tasks still to do."""
    return sum(1 for task in tasks if not task.completed)
