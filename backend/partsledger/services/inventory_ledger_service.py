"""
Inventory Ledger Service — Service Layer (SRP / DIP)

Owns per-part on-hand quantities. Every mutation updates the inventory row and
appends exactly one InventoryLog row in the same transaction.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, List

from sqlalchemy.orm import Session

from partsledger.core.exceptions import EntityNotFoundException, ValidationException
from partsledger.database import atomic
from partsledger.models.inventory import Inventory
from partsledger.models.inventory_log import (
    InventoryLog,
    CHANGE_ADJUST,
    CHANGE_RECEIVE,
    CHANGE_SHIP,
)
from partsledger.models.order import Order
from partsledger.repositories.inventory_repository import InventoryRepository
from partsledger.repositories.inventory_log_repository import InventoryLogRepository
from partsledger.schemas.inventory import InventorySettingsUpdate, InventorySummary
from partsledger.utils.events import get_event_bus, InventoryChangedEvent
from partsledger.utils.money import to_money

logger = logging.getLogger(__name__)


@dataclass
class LedgerEntry:
    inventory: Inventory
    log: InventoryLog
    variance: Optional[int] = None


class InventoryLedgerService:

    def __init__(self, db: Session):
        self._db = db
        self._repo = InventoryRepository(db)
        self._log_repo = InventoryLogRepository(db)
        self._bus = get_event_bus()

    # ── Reads ────────────────────────────────────────────────────────────────

    def get_inventory(self, part_id: int) -> Inventory:
        inv = self._repo.get_by_part_id(part_id)
        if not inv:
            raise EntityNotFoundException("Inventory", part_id)
        return inv

    def list_inventory(self, low_stock: bool = False, location: Optional[str] = None) -> List[Inventory]:
        items = self._repo.list_with_parts(location=location)
        if low_stock:
            items = [i for i in items if i.is_low_stock]
        return items

    def get_low_stock(self) -> List[Inventory]:
        return self._repo.list_low_stock()

    def get_summary(self) -> InventorySummary:
        items = self._repo.list_with_parts()
        total_value = sum(
            (Decimal(i.quantity_on_hand) * (i.part.unit_price or Decimal("0")) for i in items if i.part),
            Decimal("0"),
        )
        low_stock = sum(1 for i in items if i.is_low_stock)
        return InventorySummary(
            total_items=len(items),
            total_value=to_money(total_value),
            low_stock_count=low_stock,
            out_of_stock_count=sum(1 for i in items if i.quantity_on_hand == 0),
            healthy_stock_count=len(items) - low_stock,
        )

    def list_logs(self, part_id: int, limit: int = 50, offset: int = 0) -> List[InventoryLog]:
        self.get_inventory(part_id)
        return self._log_repo.list_for_part(part_id, limit=limit, offset=offset)

    # ── Mutations ────────────────────────────────────────────────────────────

    def adjust(
        self,
        part_id: int,
        quantity: int,
        reason: str,
        performed_by: Optional[str] = None,
    ) -> LedgerEntry:
        if not reason or not reason.strip():
            raise ValidationException("Reason is required")
        with atomic(self._db):
            inv = self._locked_inventory(part_id)
            entry = self._write(
                inv,
                quantity,
                CHANGE_ADJUST,
                reason=reason.strip(),
                performed_by=performed_by,
                negative_message="Cannot adjust below zero",
            )
        self.publish_change(entry)
        return entry

    def receive(
        self,
        part_id: int,
        quantity: int,
        order_id: Optional[int] = None,
        performed_by: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> LedgerEntry:
        with atomic(self._db):
            entry = self.apply_receipt(
                part_id,
                quantity,
                order_id=order_id,
                performed_by=performed_by,
                reason=reason,
            )
        self.publish_change(entry)
        return entry

    def apply_receipt(
        self,
        part_id: int,
        quantity: int,
        order_id: Optional[int] = None,
        performed_by: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> LedgerEntry:
        """Receive stock inside the caller's transaction; does not commit."""
        if quantity is None or quantity <= 0:
            raise ValidationException("Quantity must be a positive integer")
        if order_id is not None and self._db.get(Order, order_id) is None:
            raise EntityNotFoundException("Order", order_id)
        if not reason:
            reason = f"Received from order #{order_id}" if order_id else "Manual receipt"
        inv = self._locked_inventory(part_id)
        return self._write(
            inv,
            quantity,
            CHANGE_RECEIVE,
            reason=reason,
            performed_by=performed_by,
            order_id=order_id,
            stamps={"last_order_date": datetime.utcnow()},
        )

    def ship(
        self,
        part_id: int,
        quantity: int,
        reason: Optional[str] = None,
        performed_by: Optional[str] = None,
    ) -> LedgerEntry:
        if quantity is None or quantity <= 0:
            raise ValidationException("Quantity must be a positive integer")
        with atomic(self._db):
            inv = self._locked_inventory(part_id)
            entry = self._write(
                inv,
                -quantity,
                CHANGE_SHIP,
                reason=reason or "Shipped/consumed",
                performed_by=performed_by,
                negative_message="Insufficient inventory",
            )
        self.publish_change(entry)
        return entry

    def count(
        self,
        part_id: int,
        actual_quantity: int,
        performed_by: Optional[str] = None,
    ) -> LedgerEntry:
        if actual_quantity is None or actual_quantity < 0:
            raise ValidationException("Actual quantity must be a non-negative integer")
        with atomic(self._db):
            inv = self._locked_inventory(part_id)
            variance = actual_quantity - inv.quantity_on_hand
            entry = self._write(
                inv,
                variance,
                CHANGE_ADJUST,
                reason=f"Physical count adjustment (variance: {variance})",
                performed_by=performed_by,
                stamps={"last_count_date": datetime.utcnow()},
            )
            entry.variance = variance
        self.publish_change(entry)
        return entry

    def update_settings(self, part_id: int, data: InventorySettingsUpdate) -> Inventory:
        updates = data.model_dump(exclude_unset=True)
        with atomic(self._db):
            inv = self._locked_inventory(part_id)
            result = self._repo.update(inv, updates)
        logger.info("inventory_settings_updated part_id=%s fields=%s", part_id, sorted(updates))
        return result

    def publish_change(self, entry: LedgerEntry) -> None:
        log = entry.log
        self._bus.publish(InventoryChangedEvent(
            part_id=log.part_id,
            change_type=log.change_type,
            quantity_change=log.quantity_change,
            previous_qty=log.previous_qty,
            new_qty=log.new_qty,
            log_id=log.id,
            order_id=log.order_id,
            performed_by=log.performed_by,
        ))

    # ── Internals ────────────────────────────────────────────────────────────

    def _locked_inventory(self, part_id: int) -> Inventory:
        inv = self._repo.get_by_part_id(part_id, for_update=True)
        if not inv:
            raise EntityNotFoundException("Inventory", part_id)
        return inv

    def _write(
        self,
        inv: Inventory,
        delta: int,
        change_type: str,
        reason: str,
        performed_by: Optional[str] = None,
        order_id: Optional[int] = None,
        negative_message: str = "Quantity on hand cannot be negative",
        stamps: Optional[dict] = None,
    ) -> LedgerEntry:
        previous_qty = inv.quantity_on_hand
        new_qty = previous_qty + delta
        if new_qty < 0:
            raise ValidationException(negative_message)

        inv.quantity_on_hand = new_qty
        for field, value in (stamps or {}).items():
            setattr(inv, field, value)

        log = self._log_repo.add(InventoryLog(
            part_id=inv.part_id,
            change_type=change_type,
            quantity_change=delta,
            previous_qty=previous_qty,
            new_qty=new_qty,
            order_id=order_id,
            reason=reason,
            performed_by=performed_by,
        ))
        logger.info(
            "inventory_mutation part_id=%s change_type=%s change=%s previous=%s new=%s",
            inv.part_id, change_type, delta, previous_qty, new_qty,
        )
        return LedgerEntry(inventory=inv, log=log)
