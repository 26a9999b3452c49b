"""
Audit Logger

DESIGN DECISION: Every ledger mutation and export is logged as a
structured event. This provides:
1. Traceability of what the user did in a session
2. Debugging capability when a split looks wrong

The audit logger:
- Is synchronous, like every other part of the calculator
- Only writes to the local structured log (no storage, no history)
- Supports correlation IDs to tie one session's events together
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from splitcalc.config import AppSettings, get_settings
from splitcalc.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from splitcalc.models.ledger import ExportResult, LedgerResult


def configure_logging(settings: Optional[AppSettings] = None) -> None:
    """
    Configure structlog on top of the standard logging module.

    Called once at import; call again after changing settings.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level)

    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("splitcalc").setLevel(level)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.log_format == "console"
        else structlog.processors.JSONRenderer()
    )

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
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    One instance per session; every event it emits carries the
    session's correlation ID.
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        self.correlation_id = correlation_id or create_correlation_id()
        self._logger = structlog.get_logger("splitcalc.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_rejected(self, operation: str, result: LedgerResult) -> None:
        """Log a validation failure for any operation."""
        self.log(AuditEventBuilder.validation_failed(
            operation=operation,
            error_code=result.error_code.value if result.error_code else "unknown",
            issues=[issue.model_dump(mode="json") for issue in result.issues],
            correlation_id=self.correlation_id,
        ))

    def log_person_added(self, name: str) -> None:
        """Log person creation."""
        self.log(AuditEventBuilder.person_added(
            name=name,
            correlation_id=self.correlation_id,
        ))

    def log_person_removed(self, name: str, stripped_from: list[str]) -> None:
        """Log person removal and the items it touched."""
        self.log(AuditEventBuilder.person_removed(
            name=name,
            stripped_from=stripped_from,
            correlation_id=self.correlation_id,
        ))

    def log_item_added(
        self,
        item_id: UUID,
        name: str,
        total: float,
        shared_by: list[str],
    ) -> None:
        """Log item creation."""
        self.log(AuditEventBuilder.item_added(
            item_id=item_id,
            name=name,
            total=total,
            shared_by=shared_by,
            correlation_id=self.correlation_id,
        ))

    def log_item_removed(self, item_id: UUID, removed: bool) -> None:
        """Log item removal, including no-op removals."""
        self.log(AuditEventBuilder.item_removed(
            item_id=item_id,
            removed=removed,
            correlation_id=self.correlation_id,
        ))

    def log_shared_by_changed(self, item_id: UUID, shared_by: list[str]) -> None:
        """Log a sharer change."""
        self.log(AuditEventBuilder.shared_by_changed(
            item_id=item_id,
            shared_by=shared_by,
            correlation_id=self.correlation_id,
        ))

    def log_export(self, result: ExportResult) -> None:
        """Log an export attempt."""
        if result.success:
            event = AuditEventBuilder.export_completed(
                filename=result.filename,
                row_count=result.row_count,
                correlation_id=self.correlation_id,
            )
        else:
            event = AuditEventBuilder.export_failed(
                filename=result.filename,
                error_code=result.error_code.value if result.error_code else "unknown",
                correlation_id=self.correlation_id,
            )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new session.
    """
    return uuid4()
