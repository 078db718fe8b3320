"""
Alert Processor Service

Turns PENDING reorder alerts into purchase orders. Each alert resolves in its
own transaction together with the order it creates, so a batch run reports
per-alert outcomes instead of failing as a whole.
"""
import logging
from datetime import datetime
from typing import Optional, List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from partsledger.core.exceptions import (
    EntityNotFoundException,
    PartsLedgerException,
    StateTransitionException,
    ValidationException,
)
from partsledger.database import atomic
from partsledger.models.order import Order, STATUS_PENDING
from partsledger.models.reorder_alert import (
    ReorderAlert,
    ALERT_PENDING,
    ALERT_ORDERED,
    ALERT_DISMISSED,
)
from partsledger.repositories.inventory_repository import InventoryRepository
from partsledger.repositories.part_repository import PartRepository
from partsledger.repositories.reorder_alert_repository import ReorderAlertRepository
from partsledger.schemas.order import OrderItemCreate, OrderResponse
from partsledger.schemas.reorder import AlertProcessResult, ProcessAllResponse
from partsledger.services.order_service import OrderService
from partsledger.utils.events import get_event_bus, ReorderAlertResolvedEvent

logger = logging.getLogger(__name__)


class AlertProcessorService:

    def __init__(self, db: Session):
        self._db = db
        self._repo = ReorderAlertRepository(db)
        self._part_repo = PartRepository(db)
        self._inventory_repo = InventoryRepository(db)
        self._orders = OrderService(db)
        self._bus = get_event_bus()

    def process_alert(self, alert_id: int) -> Tuple[ReorderAlert, Order]:
        """Create a PENDING auto-generated order for one alert and mark it ORDERED."""
        with atomic(self._db):
            alert = self._repo.get_for_update(alert_id)
            if not alert:
                raise EntityNotFoundException("ReorderAlert", alert_id)
            if alert.status != ALERT_PENDING:
                raise StateTransitionException("Alert is not pending")
            if not alert.vendor_id:
                raise StateTransitionException("No vendor assigned to this part")
            part = self._part_repo.get_by_id(alert.part_id)
            if not part:
                raise EntityNotFoundException("Part", alert.part_id)
            if alert.reorder_qty is None or alert.reorder_qty < 1:
                raise ValidationException("Reorder quantity must be at least 1")

            order = self._orders.stage_order(
                vendor_id=alert.vendor_id,
                items=[OrderItemCreate(part_id=part.id, quantity=alert.reorder_qty)],
                notes=f"Auto-generated from reorder alert #{alert.id}",
                status=STATUS_PENDING,
                is_auto_generated=True,
            )
            self._resolve(alert, ALERT_ORDERED, order_id=order.id)

        self._orders.publish_created(order)
        self._publish_resolved(alert)
        return alert, order

    def process_all(self) -> ProcessAllResponse:
        results: List[AlertProcessResult] = []
        for alert in self._repo.list_pending():
            alert_id, part_number = alert.id, alert.part_number
            try:
                _, order = self.process_alert(alert_id)
            except (PartsLedgerException, SQLAlchemyError) as exc:
                message = exc.message if isinstance(exc, PartsLedgerException) else str(exc)
                logger.warning("reorder_alert_failed alert_id=%s error=%s", alert_id, message)
                results.append(AlertProcessResult(
                    alert_id=alert_id, part_number=part_number, success=False, error=message,
                ))
                continue
            results.append(AlertProcessResult(
                alert_id=alert_id,
                part_number=part_number,
                success=True,
                order=OrderResponse.model_validate(order),
            ))

        successful = sum(1 for r in results if r.success)
        failed = len(results) - successful
        logger.info("reorder_alerts_processed total=%s successful=%s failed=%s", len(results), successful, failed)
        return ProcessAllResponse(
            message=f"Processed {len(results)} alerts: {successful} successful, {failed} failed",
            processed=len(results),
            successful=successful,
            failed=failed,
            results=results,
        )

    def dismiss_alert(self, alert_id: int) -> ReorderAlert:
        with atomic(self._db):
            alert = self._repo.get_for_update(alert_id)
            if not alert:
                raise EntityNotFoundException("ReorderAlert", alert_id)
            if alert.status != ALERT_PENDING:
                raise StateTransitionException("Alert is not pending")
            self._resolve(alert, ALERT_DISMISSED)
        self._publish_resolved(alert)
        return alert

    def create_orders_for_vendors(self, vendor_ids: Optional[List[int]] = None) -> List[Order]:
        """
        Consolidate every low-stock active part into one PENDING order per vendor.

        ``vendor_ids=None`` covers every vendor; an empty list covers none.
        """
        if vendor_ids is not None and not vendor_ids:
            return []

        by_vendor = {}
        for inv in self._inventory_repo.list_low_stock(active_only=True, with_vendor=True):
            if vendor_ids is not None and inv.part.vendor_id not in vendor_ids:
                continue
            if inv.reorder_quantity < 1:
                continue
            by_vendor.setdefault(inv.part.vendor_id, []).append(
                OrderItemCreate(part_id=inv.part_id, quantity=inv.reorder_quantity)
            )

        orders: List[Order] = []
        with atomic(self._db):
            for vendor_id in sorted(by_vendor):
                orders.append(self._orders.stage_order(
                    vendor_id=vendor_id,
                    items=by_vendor[vendor_id],
                    notes="Auto-generated consolidated reorder",
                    status=STATUS_PENDING,
                    is_auto_generated=True,
                ))

        for order in orders:
            self._orders.publish_created(order)
        logger.info("vendor_orders_created count=%s", len(orders))
        return orders

    def _resolve(self, alert: ReorderAlert, status: str, order_id: Optional[int] = None) -> None:
        self._repo.update(alert, {
            "status": status,
            "order_id": order_id,
            "processed_at": datetime.utcnow(),
        })

    def _publish_resolved(self, alert: ReorderAlert) -> None:
        self._bus.publish(ReorderAlertResolvedEvent(
            alert_id=alert.id,
            part_id=alert.part_id,
            status=alert.status,
            order_id=alert.order_id,
        ))
        logger.info("reorder_alert_resolved alert_id=%s status=%s", alert.id, alert.status)
