from typing import List

from sqlalchemy.orm import Session

from partsledger.models.inventory_log import InventoryLog
from partsledger.repositories.base import BaseRepository


class InventoryLogRepository(BaseRepository[InventoryLog]):
    """Insert and read only; log rows are never updated or removed."""

    def __init__(self, db: Session):
        super().__init__(InventoryLog, db)

    def list_for_part(self, part_id: int, limit: int = 50, offset: int = 0) -> List[InventoryLog]:
        return (
            self.db.query(InventoryLog)
            .filter(InventoryLog.part_id == part_id)
            .order_by(InventoryLog.created_at.desc(), InventoryLog.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def list_for_order(self, order_id: int) -> List[InventoryLog]:
        return (
            self.db.query(InventoryLog)
            .filter(InventoryLog.order_id == order_id)
            .order_by(InventoryLog.id)
            .all()
        )
