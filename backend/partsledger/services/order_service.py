"""
Order Service — purchase-order lifecycle (Service Layer, State pattern)

Owns order headers, line items and the status state machine. Receiving an
order posts every line to the inventory ledger inside the same transaction
as the status change.
"""
import logging
from datetime import datetime
from decimal import Decimal
from math import ceil
from typing import Optional, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from partsledger.config import settings
from partsledger.core.exceptions import (
    DuplicateEntityException,
    EntityNotFoundException,
    StateTransitionException,
    ValidationException,
)
from partsledger.database import atomic
from partsledger.models.inventory_log import InventoryLog
from partsledger.models.order import (
    Order,
    OrderItem,
    STATUS_DRAFT,
    STATUS_PENDING,
    STATUS_APPROVED,
    STATUS_ORDERED,
    STATUS_SHIPPED,
    STATUS_RECEIVED,
    STATUS_CANCELLED,
)
from partsledger.repositories.inventory_log_repository import InventoryLogRepository
from partsledger.repositories.order_repository import OrderRepository
from partsledger.repositories.part_repository import PartRepository, VendorRepository
from partsledger.schemas.order import OrderCreate, OrderItemCreate, OrderListResponse, OrderSummary
from partsledger.services.inventory_ledger_service import InventoryLedgerService
from partsledger.utils.events import (
    get_event_bus,
    OrderCreatedEvent,
    OrderDeletedEvent,
    OrderStatusChangedEvent,
)
from partsledger.utils.money import to_money

logger = logging.getLogger(__name__)

VALID_TRANSITIONS = {
    STATUS_DRAFT: (STATUS_PENDING, STATUS_CANCELLED),
    STATUS_PENDING: (STATUS_APPROVED, STATUS_CANCELLED),
    STATUS_APPROVED: (STATUS_ORDERED, STATUS_CANCELLED),
    STATUS_ORDERED: (STATUS_SHIPPED, STATUS_CANCELLED),
    STATUS_SHIPPED: (STATUS_RECEIVED,),
    STATUS_RECEIVED: (),
    STATUS_CANCELLED: (),
}

ORDER_NUMBER_PREFIX = "PO"


def order_number_prefix(moment: datetime) -> str:
    return f"{ORDER_NUMBER_PREFIX}{moment:%Y%m}"


def can_transition(current: str, target: str) -> bool:
    return target in VALID_TRANSITIONS.get(current, ())


class OrderService:

    def __init__(self, db: Session):
        self._db = db
        self._repo = OrderRepository(db)
        self._part_repo = PartRepository(db)
        self._vendor_repo = VendorRepository(db)
        self._log_repo = InventoryLogRepository(db)
        self._ledger = InventoryLedgerService(db)
        self._bus = get_event_bus()

    # ── Reads ────────────────────────────────────────────────────────────────

    def list_orders(
        self,
        page: int = 1,
        page_size: int = 50,
        status: Optional[str] = None,
        vendor_id: Optional[int] = None,
    ) -> OrderListResponse:
        items, total = self._repo.list_paginated(
            page=page, page_size=page_size, status=status, vendor_id=vendor_id,
        )
        return OrderListResponse(
            items=items, total=total, page=page, page_size=page_size,
            total_pages=ceil(total / page_size) if total else 0,
        )

    def get_order(self, order_id: int) -> Order:
        order = self._repo.get_with_items(order_id)
        if not order:
            raise EntityNotFoundException("Order", order_id)
        return order

    def get_order_logs(self, order_id: int) -> List[InventoryLog]:
        return self._log_repo.list_for_order(order_id)

    def get_summary(self) -> OrderSummary:
        orders = self._repo.list_all()
        now = datetime.utcnow()
        start_of_month = datetime(now.year, now.month, 1)

        by_status = {}
        total_value = Decimal("0")
        this_month = 0
        this_month_value = Decimal("0")
        for order in orders:
            by_status[order.status] = by_status.get(order.status, 0) + 1
            total_value += order.total or Decimal("0")
            if order.created_at and order.created_at >= start_of_month:
                this_month += 1
                this_month_value += order.total or Decimal("0")

        return OrderSummary(
            total=len(orders),
            by_status=by_status,
            total_value=to_money(total_value),
            this_month=this_month,
            this_month_value=to_money(this_month_value),
        )

    # ── Creation ─────────────────────────────────────────────────────────────

    def create_order(self, data: OrderCreate) -> Order:
        with atomic(self._db):
            order = self.stage_order(
                vendor_id=data.vendor_id,
                items=data.items,
                notes=data.notes,
                tax=data.tax,
                shipping=data.shipping,
                shipping_address=data.shipping_address,
            )
        self.publish_created(order)
        return order

    def stage_order(
        self,
        vendor_id: int,
        items: List[OrderItemCreate],
        notes: Optional[str] = None,
        tax=Decimal("0"),
        shipping=Decimal("0"),
        shipping_address: Optional[str] = None,
        status: str = STATUS_DRAFT,
        is_auto_generated: bool = False,
    ) -> Order:
        """Validate, price, number and flush an order without committing."""
        if not items:
            raise ValidationException("At least one item is required")
        if not self._vendor_repo.get_by_id(vendor_id):
            raise EntityNotFoundException("Vendor", vendor_id)

        tax = to_money(tax)
        shipping = to_money(shipping)
        if tax < 0 or shipping < 0:
            raise ValidationException("Tax and shipping cannot be negative")

        lines = []
        for item in items:
            if item.quantity is None or item.quantity < 1:
                raise ValidationException("Item quantity must be a positive integer")
            part = self._part_repo.get_by_id(item.part_id)
            if not part:
                raise EntityNotFoundException("Part", item.part_id)
            unit_price = to_money(item.unit_price if item.unit_price is not None else part.unit_price)
            lines.append(OrderItem(
                part_id=part.id,
                quantity=item.quantity,
                unit_price=unit_price,
                total_price=to_money(unit_price * item.quantity),
                quantity_received=0,
                notes=item.notes,
            ))

        subtotal = to_money(sum((line.total_price for line in lines), Decimal("0")))
        order = Order(
            vendor_id=vendor_id,
            status=status,
            notes=notes,
            shipping_address=shipping_address,
            is_auto_generated=is_auto_generated,
            subtotal=subtotal,
            tax=tax,
            shipping=shipping,
            total=to_money(subtotal + tax + shipping),
            items=lines,
        )
        return self._insert_numbered(order)

    def publish_created(self, order: Order) -> None:
        self._bus.publish(OrderCreatedEvent(
            order_id=order.id,
            order_number=order.order_number,
            vendor_id=order.vendor_id,
            status=order.status,
            total=str(order.total),
            is_auto_generated=order.is_auto_generated,
        ))
        logger.info(
            "order_created order_number=%s vendor_id=%s status=%s total=%s",
            order.order_number, order.vendor_id, order.status, order.total,
        )

    # ── Lifecycle ────────────────────────────────────────────────────────────

    def update_status(
        self,
        order_id: int,
        status: str,
        tracking_number: Optional[str] = None,
        performed_by: Optional[str] = None,
    ) -> Order:
        receipts = []
        with atomic(self._db):
            order = self._repo.get_with_items(order_id, for_update=True)
            if not order:
                raise EntityNotFoundException("Order", order_id)

            old_status = order.status
            if not can_transition(old_status, status):
                raise StateTransitionException(f"Cannot transition from {old_status} to {status}")

            now = datetime.utcnow()
            updates = {"status": status}
            if status == STATUS_ORDERED:
                updates["order_date"] = now
            if status == STATUS_SHIPPED and tracking_number:
                updates["tracking_number"] = tracking_number
            if status == STATUS_RECEIVED:
                updates["received_date"] = now
                for item in order.items:
                    receipts.append(self._ledger.apply_receipt(
                        item.part_id,
                        item.quantity,
                        order_id=order.id,
                        performed_by=performed_by,
                        reason=f"Received from order {order.order_number}",
                    ))
                    item.quantity_received = item.quantity

            order = self._repo.update(order, updates)

        for entry in receipts:
            self._ledger.publish_change(entry)
        self._bus.publish(OrderStatusChangedEvent(
            order_id=order.id,
            order_number=order.order_number,
            old_status=old_status,
            new_status=status,
            performed_by=performed_by,
        ))
        logger.info(
            "order_status_changed order_number=%s old=%s new=%s",
            order.order_number, old_status, status,
        )
        return order

    def delete_order(self, order_id: int) -> None:
        with atomic(self._db):
            order = self._repo.get_with_items(order_id, for_update=True)
            if not order:
                raise EntityNotFoundException("Order", order_id)
            if order.status != STATUS_DRAFT:
                raise StateTransitionException("Can only delete draft orders")
            if self._log_repo.list_for_order(order.id):
                raise StateTransitionException("Order is referenced by inventory history")
            order_number = order.order_number
            self._repo.delete(order)

        self._bus.publish(OrderDeletedEvent(order_id=order_id, order_number=order_number))
        logger.info("order_deleted order_number=%s", order_number)

    # ── Numbering ────────────────────────────────────────────────────────────

    def next_order_number(self, moment: Optional[datetime] = None, skip: int = 0) -> str:
        prefix = order_number_prefix(moment or datetime.utcnow())
        latest = self._repo.get_latest_number(prefix)
        sequence = int(latest[len(prefix):]) + 1 if latest else 1
        return f"{prefix}{sequence + skip:04d}"

    def _insert_numbered(self, order: Order) -> Order:
        attempts = settings.ORDER_NUMBER_MAX_RETRIES
        for attempt in range(attempts):
            order.order_number = self.next_order_number(skip=attempt)
            try:
                with self._db.begin_nested():
                    self._db.add(order)
                    self._db.flush()
                return order
            except IntegrityError:
                # anything other than a taken number is a real integrity failure
                if not self._repo.number_exists(order.order_number):
                    raise
                logger.warning(
                    "order_number_conflict order_number=%s attempt=%s",
                    order.order_number, attempt + 1,
                )
        raise DuplicateEntityException(
            f"Could not allocate a unique order number after {attempts} attempts"
        )
