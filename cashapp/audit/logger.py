"""
Audit Logger

DESIGN DECISION: Every store action is logged.
This provides:
1. Traceability when a list comes back empty after a restart
2. Debugging capability for failed writes
3. A history of what the user added and removed

The audit logger:
- Is synchronous, like the store it serves
- Gracefully handles failures (never crashes the app if logging fails)
"""

from decimal import Decimal
from typing import Callable, Optional

import structlog

from cashapp.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from cashapp.models.item import Collection, ExpenseItem


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.
    
    Writes each event to the structured log at a level matching its
    severity. Optionally keeps the events in memory for inspection.
    """
    
    def __init__(self, keep_history: bool = False):
        """
        Initialize audit logger.
        
        Args:
            keep_history: Also retain events in memory (see `history`).
        """
        self._logger = structlog.get_logger("cashapp.audit")
        self._keep_history = keep_history
        self._history: list[AuditEvent] = []
    
    @property
    def history(self) -> list[AuditEvent]:
        return list(self._history)
    
    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.
        
        Returns True if the event was written.
        """
        if self._keep_history:
            self._history.append(event)
        
        log_dict = event.to_log_dict()
        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # Logging must never break a store operation
            return False
        return True
    
    def _record(self, build: Callable[..., AuditEvent], **kwargs) -> bool:
        """Build an event and log it. Construction failures are logged, not raised."""
        try:
            event = build(**kwargs)
        except Exception as e:
            self._logger.error(
                "audit_event_build_failed",
                builder=getattr(build, "__name__", str(build)),
                error=str(e),
            )
            return False
        return self.log(event)
    
    def log_items_loaded(self, collection: Collection, key: str, count: int) -> None:
        self._record(
            AuditEventBuilder.items_loaded,
            collection=collection,
            key=key,
            count=count,
        )
    
    def log_load_data_corrupt(
        self,
        collection: Collection,
        key: str,
        error_message: str,
    ) -> None:
        self._record(
            AuditEventBuilder.load_data_corrupt,
            collection=collection,
            key=key,
            error_message=error_message,
        )
    
    def log_item_added(self, collection: Collection, item: ExpenseItem) -> None:
        """Log an expense being added."""
        self._record(AuditEventBuilder.item_added, collection=collection, item=item)
    
    def log_items_removed(
        self,
        collection: Collection,
        offsets: list[int],
        remaining: int,
    ) -> None:
        """Log expenses being removed."""
        self._record(
            AuditEventBuilder.items_removed,
            collection=collection,
            offsets=offsets,
            remaining=remaining,
        )
    
    def log_write_failed(
        self,
        collection: Collection,
        key: str,
        error_message: str,
        total: Optional[Decimal] = None,
    ) -> None:
        """Log a failed persistence write."""
        self._record(
            AuditEventBuilder.persistence_write_failed,
            collection=collection,
            key=key,
            error_message=error_message,
            total=total,
        )
