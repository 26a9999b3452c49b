"""
Main Orchestrator for Split Calculator

Ties the ledger, the allocator, the exporter and the audit log together
behind one object that a presentation layer can hold for a session.

Flow for every user action:
1. Mutate → Ledger validates and applies (or rejects) the change
2. Reallocate → done by the ledger before it returns
3. Audit → the outcome is logged with the session's correlation ID
4. Render → the caller shows result.message and result.allocation

DESIGN DECISION: The session adds no rules of its own. Everything it
returns comes straight from the ledger or the exporter, so the UI and
the tests see exactly the same behaviour.
"""

from collections.abc import Iterable
from typing import Any, Optional
from uuid import UUID

from splitcalc.audit import AuditLogger
from splitcalc.config import AppSettings, get_settings
from splitcalc.export import serialize
from splitcalc.ledger import Ledger
from splitcalc.models.ledger import (
    Allocation,
    ExportResult,
    Item,
    LedgerResult,
    Person,
)


def format_currency(amount: float, settings: Optional[AppSettings] = None) -> str:
    """
    Render an amount for display, e.g. "$10.00".

    This is the only place amounts get rounded.
    """
    settings = settings or get_settings()
    return f"{settings.currency_symbol}{amount:,.{settings.display_precision}f}"


class SplitSession:
    """
    One user's bill-splitting session.

    Operations mirror the ledger's and return its LedgerResult unchanged.
    """

    def __init__(
        self,
        ledger: Optional[Ledger] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._settings = settings or get_settings()
        self._ledger = ledger or Ledger(
            removal_policy=self._settings.person_removal_policy,
        )
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def people(self) -> list[str]:
        return self._ledger.people

    @property
    def items(self) -> tuple[Item, ...]:
        return self._ledger.items

    @property
    def allocation(self) -> Allocation:
        return self._ledger.allocation

    @property
    def owed_amounts(self) -> dict[str, float]:
        return self._ledger.owed_amounts

    @property
    def grand_total(self) -> float:
        return self._ledger.grand_total

    def person_views(self) -> list[Person]:
        return self._ledger.person_views()

    def format(self, amount: float) -> str:
        return format_currency(amount, self._settings)

    def describe(self, result: LedgerResult) -> str:
        """Notification text; lists every issue when there are several."""
        if len(result.issues) > 1:
            return self._ledger.validator.get_user_friendly_summary(result.issues)
        return result.message

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_person(self, name: Any) -> LedgerResult:
        result = self._ledger.add_person(name)
        if result.success:
            self._audit_logger.log_person_added(name.strip())
        else:
            self._audit_logger.log_rejected("add_person", result)
        return result

    def remove_person(self, name: str) -> LedgerResult:
        name = name.strip() if isinstance(name, str) else name
        touched = [
            str(item.item_id) for item in self._ledger.items
            if name in item.shared_by
        ]
        result = self._ledger.remove_person(name)
        if not result.success:
            self._audit_logger.log_rejected("remove_person", result)
        elif result.changed:
            self._audit_logger.log_person_removed(name, touched)
        return result

    def add_item(
        self,
        name: Any,
        unit_price: Any,
        quantity: Any = 1,
        shared_by: Optional[Iterable[str]] = None,
    ) -> LedgerResult:
        result = self._ledger.add_item(name, unit_price, quantity, shared_by)
        if result.success:
            item = self._ledger.get_item(result.item_id)
            self._audit_logger.log_item_added(
                item_id=item.item_id,
                name=item.name,
                total=item.total,
                shared_by=item.shared_by,
            )
        else:
            self._audit_logger.log_rejected("add_item", result)
        return result

    def remove_item(self, item_id: UUID) -> LedgerResult:
        result = self._ledger.remove_item(item_id)
        self._audit_logger.log_item_removed(item_id, removed=result.changed)
        return result

    def set_item_shared_by(
        self,
        item_id: UUID,
        shared_by: Optional[Iterable[str]],
    ) -> LedgerResult:
        result = self._ledger.set_item_shared_by(item_id, shared_by)
        self._log_sharer_change("set_item_shared_by", result)
        return result

    def toggle_sharer(self, item_id: UUID, name: str, included: bool) -> LedgerResult:
        result = self._ledger.toggle_sharer(item_id, name, included)
        self._log_sharer_change("toggle_sharer", result)
        return result

    def _log_sharer_change(self, operation: str, result: LedgerResult) -> None:
        if not result.success:
            self._audit_logger.log_rejected(operation, result)
        elif result.changed:
            item = self._ledger.get_item(result.item_id)
            self._audit_logger.log_shared_by_changed(item.item_id, item.shared_by)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_csv(self) -> ExportResult:
        """Serialize the current items; the caller delivers the file."""
        result = serialize(
            self._ledger.items,
            filename=self._settings.export_filename,
            separator=self._settings.sharer_separator,
        )
        self._audit_logger.log_export(result)
        return result


def create_session(settings: Optional[AppSettings] = None) -> SplitSession:
    """
    Create a session with default components.

    Used by the Streamlit app; tests build sessions directly.
    """
    settings = settings or get_settings()
    return SplitSession(settings=settings)
