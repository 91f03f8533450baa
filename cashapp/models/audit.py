"""
Audit Models for CashApp

Every store action produces one audit event. Events are written to the
structured log so that lost or corrupted data can be traced afterwards.

DESIGN DECISION: Audit events describe what happened, they never change
what happens. A failed audit write does not affect the store.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from cashapp.models.item import Collection, ExpenseItem


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Loading
    ITEMS_LOADED = "items_loaded"
    LOAD_DATA_CORRUPT = "load_data_corrupt"
    
    # Mutations
    ITEM_ADDED = "item_added"
    ITEMS_REMOVED = "items_removed"
    
    # Persistence
    PERSISTENCE_WRITE_FAILED = "persistence_write_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""
    
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO
    
    collection: Optional[Collection] = Field(
        default=None,
        description="Collection the event relates to"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="Item ID, for single-item events"
    )
    
    description: str = Field(
        ...,
        max_length=500,
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None
    
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )
    
    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "collection": self.collection.value if self.collection else None,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.
    
    Usage:
        event = AuditEventBuilder.item_added(Collection.PRIVATE, item)
        event = AuditEventBuilder.items_removed(Collection.BUSINESS, [0, 2], 3)
    """
    
    @staticmethod
    def items_loaded(
        collection: Collection,
        key: str,
        count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ITEMS_LOADED,
            collection=collection,
            description=f"Loaded {count} items from {key}",
            details={
                "key": key,
                "count": count,
            },
        )
    
    @staticmethod
    def load_data_corrupt(
        collection: Collection,
        key: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_DATA_CORRUPT,
            severity=AuditSeverity.WARNING,
            collection=collection,
            description=f"Stored data under {key} is unreadable, starting empty",
            details={"key": key},
            error_message=error_message,
        )
    
    @staticmethod
    def item_added(
        collection: Collection,
        item: ExpenseItem,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ITEM_ADDED,
            collection=collection,
            entity_id=item.id,
            description=f"Expense added to {collection.value} list",
            details={
                "name": item.name,
                "category": item.category,
                "price": str(item.price),
            },
            is_user_action=True,
        )
    
    @staticmethod
    def items_removed(
        collection: Collection,
        offsets: list[int],
        remaining: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ITEMS_REMOVED,
            collection=collection,
            description=f"Removed {len(offsets)} items",
            details={
                "offsets": offsets,
                "remaining": remaining,
            },
            is_user_action=True,
        )
    
    @staticmethod
    def persistence_write_failed(
        collection: Collection,
        key: str,
        error_message: str,
        total: Optional[Decimal] = None,
    ) -> AuditEvent:
        details: dict[str, Any] = {"key": key}
        if total is not None:
            details["unsaved_total"] = str(total)
        return AuditEvent(
            event_type=AuditEventType.PERSISTENCE_WRITE_FAILED,
            severity=AuditSeverity.ERROR,
            collection=collection,
            description=f"Failed to persist {key}",
            details=details,
            error_message=error_message,
        )
