"""Audit logging package."""

from homebook.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
