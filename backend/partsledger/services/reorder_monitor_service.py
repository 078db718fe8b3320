"""
Reorder Monitor Service

Compares on-hand stock with reorder points and records ReorderAlert snapshots.
A partial unique index guarantees a single PENDING alert per part even when
two scans race; the loser's insert is rolled back to its savepoint and skipped.
"""
import logging
from decimal import Decimal
from typing import Optional, List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from partsledger.database import atomic
from partsledger.models.inventory import Inventory
from partsledger.models.reorder_alert import ReorderAlert, ALERT_PENDING
from partsledger.repositories.inventory_repository import InventoryRepository
from partsledger.repositories.reorder_alert_repository import ReorderAlertRepository
from partsledger.schemas.reorder import (
    ReorderSuggestion,
    ReorderSuggestionSummary,
    ReorderSuggestionsResponse,
    VendorSuggestionGroup,
)
from partsledger.utils.events import get_event_bus, ReorderAlertCreatedEvent
from partsledger.utils.money import to_money

logger = logging.getLogger(__name__)

DEFAULT_LEAD_TIME_DAYS = 7


class ReorderMonitorService:

    def __init__(self, db: Session):
        self._db = db
        self._repo = ReorderAlertRepository(db)
        self._inventory_repo = InventoryRepository(db)
        self._bus = get_event_bus()

    def scan(self) -> List[ReorderAlert]:
        """Create a PENDING alert for every low active part that lacks one."""
        created: List[ReorderAlert] = []
        with atomic(self._db):
            for inv in self._inventory_repo.list_low_stock(active_only=True):
                if self._repo.get_pending_by_part(inv.part_id):
                    continue
                alert = self._snapshot(inv)
                try:
                    with self._db.begin_nested():
                        self._db.add(alert)
                        self._db.flush()
                except IntegrityError:
                    if not self._repo.get_pending_by_part(inv.part_id):
                        raise
                    logger.info("reorder_alert_already_pending part_id=%s", inv.part_id)
                    continue
                created.append(alert)
                logger.info("reorder_alert_created part_number=%s qty=%s", alert.part_number, alert.current_qty)

        for alert in created:
            self._bus.publish(ReorderAlertCreatedEvent(
                alert_id=alert.id,
                part_id=alert.part_id,
                part_number=alert.part_number,
                current_qty=alert.current_qty,
                reorder_point=alert.reorder_point,
            ))
        logger.info("reorder_scan_complete created=%s", len(created))
        return created

    def list_alerts(self, status: Optional[str] = None, limit: int = 50) -> List[ReorderAlert]:
        return self._repo.list_filtered(status=status, limit=limit)

    def get_pending(self) -> Tuple[int, List[ReorderAlert]]:
        alerts = self._repo.list_filtered(status=ALERT_PENDING, limit=None)
        return len(alerts), alerts

    def get_suggestions(self) -> ReorderSuggestionsResponse:
        suggestions = [
            self._suggestion(inv)
            for inv in self._inventory_repo.list_low_stock(active_only=True)
        ]
        suggestions.sort(key=lambda s: s.shortfall, reverse=True)

        groups = {}
        for s in suggestions:
            if s.vendor_id is None:
                continue
            group = groups.get(s.vendor_id)
            if group is None:
                group = groups[s.vendor_id] = VendorSuggestionGroup(
                    vendor_id=s.vendor_id,
                    vendor_name=s.vendor_name,
                    items=[],
                    total_estimated_cost=Decimal("0"),
                )
            group.items.append(s)
            group.total_estimated_cost = to_money(group.total_estimated_cost + s.estimated_cost)

        by_vendor = sorted(groups.values(), key=lambda g: len(g.items), reverse=True)
        return ReorderSuggestionsResponse(
            suggestions=suggestions,
            by_vendor=by_vendor,
            summary=ReorderSuggestionSummary(
                total_items=len(suggestions),
                total_estimated_cost=to_money(sum((s.estimated_cost for s in suggestions), Decimal("0"))),
                vendor_count=len(groups),
            ),
        )

    @staticmethod
    def _snapshot(inv: Inventory) -> ReorderAlert:
        part = inv.part
        return ReorderAlert(
            part_id=inv.part_id,
            part_number=part.part_number,
            part_name=part.name,
            current_qty=inv.quantity_on_hand,
            reorder_point=inv.reorder_point,
            reorder_qty=inv.reorder_quantity,
            vendor_id=part.vendor_id,
            vendor_name=part.vendor.name if part.vendor else None,
            status=ALERT_PENDING,
        )

    @staticmethod
    def _suggestion(inv: Inventory) -> ReorderSuggestion:
        part = inv.part
        vendor = part.vendor
        return ReorderSuggestion(
            part_id=inv.part_id,
            part_number=part.part_number,
            part_name=part.name,
            vendor_id=part.vendor_id,
            vendor_name=vendor.name if vendor else None,
            current_quantity=inv.quantity_on_hand,
            reorder_point=inv.reorder_point,
            reorder_quantity=inv.reorder_quantity,
            shortfall=inv.shortfall,
            estimated_cost=to_money((part.unit_price or Decimal("0")) * inv.reorder_quantity),
            lead_time_days=vendor.lead_time_days if vendor and vendor.lead_time_days else DEFAULT_LEAD_TIME_DAYS,
        )
