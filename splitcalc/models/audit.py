"""
Audit Models for Split Calculator

Every ledger mutation and export produces an audit event.
Events go to the structured log only. Nothing here is stored,
the calculator keeps no history between calls.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # People
    PERSON_ADDED = "person_added"
    PERSON_REMOVED = "person_removed"

    # Items
    ITEM_ADDED = "item_added"
    ITEM_REMOVED = "item_removed"
    SHARED_BY_CHANGED = "shared_by_changed"

    # Validation
    VALIDATION_FAILED = "validation_failed"

    # Export
    EXPORT_COMPLETED = "export_completed"
    EXPORT_FAILED = "export_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    entity_id is a string because people are keyed by name
    and items by UUID.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity ('person', 'item', 'export')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Person name or item id"
    )

    # Correlation - ties every event of one session together
    correlation_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_code: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.person_added("Alice", correlation_id)
        event = AuditEventBuilder.item_removed(item_id, correlation_id)
    """

    @staticmethod
    def person_added(
        name: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSON_ADDED,
            entity_type="person",
            entity_id=name,
            correlation_id=correlation_id,
            description=f"Person added: {name}",
        )

    @staticmethod
    def person_removed(
        name: str,
        stripped_from: list[str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSON_REMOVED,
            entity_type="person",
            entity_id=name,
            correlation_id=correlation_id,
            description=f"Person removed: {name}",
            details={
                "stripped_from_items": stripped_from,
            },
        )

    @staticmethod
    def item_added(
        item_id: UUID,
        name: str,
        total: float,
        shared_by: list[str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ITEM_ADDED,
            entity_type="item",
            entity_id=str(item_id),
            correlation_id=correlation_id,
            description=f"Item added: {name}",
            details={
                "name": name,
                "total": total,
                "shared_by": shared_by,
            },
        )

    @staticmethod
    def item_removed(
        item_id: UUID,
        removed: bool,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ITEM_REMOVED,
            severity=AuditSeverity.INFO if removed else AuditSeverity.DEBUG,
            entity_type="item",
            entity_id=str(item_id),
            correlation_id=correlation_id,
            description="Item removed" if removed else "Remove requested for unknown item",
            details={
                "removed": removed,
            },
        )

    @staticmethod
    def shared_by_changed(
        item_id: UUID,
        shared_by: list[str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SHARED_BY_CHANGED,
            entity_type="item",
            entity_id=str(item_id),
            correlation_id=correlation_id,
            description=f"Item now shared by {len(shared_by)} people",
            details={
                "shared_by": shared_by,
            },
        )

    @staticmethod
    def validation_failed(
        operation: str,
        error_code: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type=operation,
            correlation_id=correlation_id,
            description=f"{operation} rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
            error_code=error_code,
        )

    @staticmethod
    def export_completed(
        filename: str,
        row_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_COMPLETED,
            entity_type="export",
            entity_id=filename,
            correlation_id=correlation_id,
            description=f"Exported {row_count} items",
            details={
                "row_count": row_count,
            },
        )

    @staticmethod
    def export_failed(
        filename: str,
        error_code: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="export",
            entity_id=filename,
            correlation_id=correlation_id,
            description="Export refused",
            error_code=error_code,
        )
