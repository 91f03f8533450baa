"""
Data Models Package

This package contains all Pydantic models used by CashApp.
"""

from cashapp.models.item import (
    Category,
    Collection,
    ExpenseItem,
)
from cashapp.models.outcome import (
    OutcomeKind,
    StoreOutcome,
)
from cashapp.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Item models
    "Category",
    "Collection",
    "ExpenseItem",
    # Outcome models
    "OutcomeKind",
    "StoreOutcome",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
