"""
Transient Notifications

Toasts that disappear on their own after a fixed time, unless the user
closes them first. The level (success / danger / info) only picks the
CSS class; it never changes what happens next.

Auto-dismiss is fire-and-forget: each toast carries a deadline, and
expired toasts are dropped whenever the system is touched. Nothing here
reads or writes domain state.
"""

import time
from enum import Enum
from typing import Callable, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from homebook.ui.dom import Element, Event

DEFAULT_DISMISS_AFTER = 3.0


class FeedbackLevel(str, Enum):
    """Visual treatment of a message."""
    SUCCESS = "success"
    DANGER = "danger"
    INFO = "info"

    @classmethod
    def coerce(cls, value) -> "FeedbackLevel":
        """Unknown levels fall back to info."""
        try:
            return cls(value)
        except ValueError:
            return cls.INFO


class Toast(BaseModel):
    """One message currently on screen."""

    toast_id: str = Field(default_factory=lambda: uuid4().hex)
    message: str
    level: FeedbackLevel = FeedbackLevel.SUCCESS
    title: Optional[str] = None
    expires_at: float


class NotificationSystem:
    """Stack of toasts rendered into a mount element."""

    def __init__(
        self,
        mount: Element,
        dismiss_after: float = DEFAULT_DISMISS_AFTER,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._mount = mount
        self._dismiss_after = dismiss_after
        self._clock = clock
        self._toasts: dict[str, Toast] = {}
        self._elements: dict[str, Element] = {}
        self._mount.add_event_listener("click", self._on_click)

    def _on_click(self, event: Event) -> None:
        if event.target.dataset.get("action") != "dismiss":
            return
        toast_el = event.target.closest(data_key="toast_id")
        if toast_el is not None:
            self.dismiss(toast_el.dataset["toast_id"])

    def show(self, message: str, type="success", title: Optional[str] = None) -> Toast:
        self.expire()
        toast = Toast(
            message=message,
            level=FeedbackLevel.coerce(type),
            title=title,
            expires_at=self._clock() + self._dismiss_after,
        )

        element = Element(
            "div",
            class_name=f"toast toast-{toast.level.value}",
            dataset={"toast_id": toast.toast_id},
        )
        if title:
            element.append_child(Element("strong", class_name="toast-title", text_content=title))
        element.append_child(Element("span", class_name="toast-message", text_content=message))
        element.append_child(Element("i", class_name="fas fa-times", dataset={"action": "dismiss"}))

        self._mount.append_child(element)
        self._toasts[toast.toast_id] = toast
        self._elements[toast.toast_id] = element
        return toast

    def dismiss(self, toast_id: str) -> bool:
        """Remove a toast now. Returns False if it was already gone."""
        toast = self._toasts.pop(toast_id, None)
        element = self._elements.pop(toast_id, None)
        if element is not None:
            element.remove()
        return toast is not None

    def expire(self) -> int:
        """Drop every toast past its deadline; returns how many went."""
        now = self._clock()
        expired = [tid for tid, toast in self._toasts.items() if toast.expires_at <= now]
        for toast_id in expired:
            self.dismiss(toast_id)
        return len(expired)

    def active(self) -> list[Toast]:
        """Toasts still on screen, oldest first."""
        self.expire()
        return list(self._toasts.values())
