"""
Inventory Repository
"""
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from partsledger.models.inventory import Inventory
from partsledger.models.part import Part
from partsledger.repositories.base import BaseRepository


class InventoryRepository(BaseRepository[Inventory]):

    def __init__(self, db: Session):
        super().__init__(Inventory, db)

    def get_by_part_id(self, part_id: int, for_update: bool = False) -> Optional[Inventory]:
        q = self.db.query(Inventory).filter(Inventory.part_id == part_id)
        if for_update:
            q = q.with_for_update().populate_existing()
        return q.first()

    def list_with_parts(self, location: Optional[str] = None) -> List[Inventory]:
        q = self.db.query(Inventory).options(
            joinedload(Inventory.part).joinedload(Part.vendor)
        )
        if location:
            q = q.filter(Inventory.location.ilike(f"%{location}%"))
        return q.order_by(Inventory.part_id).all()

    def list_low_stock(self, active_only: bool = False, with_vendor: bool = False) -> List[Inventory]:
        q = (
            self.db.query(Inventory)
            .join(Inventory.part)
            .options(joinedload(Inventory.part).joinedload(Part.vendor))
            .filter(Inventory.quantity_on_hand <= Inventory.reorder_point)
        )
        if active_only:
            q = q.filter(Part.is_active.is_(True))
        if with_vendor:
            q = q.filter(Part.vendor_id.isnot(None))
        return q.order_by(Inventory.part_id).all()
