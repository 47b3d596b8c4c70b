"""
Audit trail for paper trading operations.

Key Components:
    - AuditLogEntry: immutable record of one state-changing action
    - AuditLog: bounded, append-only, oldest-first sequence of entries
"""

from .events import AuditLogEntry
from .logger import AuditLog

__all__ = ["AuditLog", "AuditLogEntry"]
