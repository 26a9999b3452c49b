"""
Data Models Package

This package contains all Pydantic models used by the Split Calculator.
Everything passed between the ledger, the allocator and the caller
conforms to these schemas.
"""

from splitcalc.models.ledger import (
    Allocation,
    ExportResult,
    Item,
    LedgerErrorCode,
    LedgerResult,
    Person,
    RemovalPolicy,
    ValidationIssue,
    ValidationResult,
)
from splitcalc.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Allocation",
    "ExportResult",
    "Item",
    "LedgerErrorCode",
    "LedgerResult",
    "Person",
    "RemovalPolicy",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
