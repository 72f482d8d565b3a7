"""Audit logging package."""

from terminal_budget.audit.logger import (
    AuditLogger,
    configure_file_logging,
    create_session_id,
)

__all__ = ["AuditLogger", "configure_file_logging", "create_session_id"]
