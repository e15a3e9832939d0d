"""Presentation boundary: element tree, host documents, notifications."""

from homebook.ui.dom import Document, Element, Event, escape_html
from homebook.ui.documents import build_expense_document, build_task_document
from homebook.ui.notifications import FeedbackLevel, NotificationSystem, Toast

__all__ = [
    "Document",
    "Element",
    "Event",
    "FeedbackLevel",
    "NotificationSystem",
    "Toast",
    "build_expense_document",
    "build_task_document",
    "escape_html",
]
