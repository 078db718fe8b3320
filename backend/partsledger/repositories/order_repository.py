from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from partsledger.models.order import Order, OrderItem
from partsledger.repositories.base import BaseRepository


class OrderRepository(BaseRepository[Order]):

    def __init__(self, db: Session):
        super().__init__(Order, db)

    def get_with_items(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        q = (
            self.db.query(Order)
            .options(selectinload(Order.items).selectinload(OrderItem.part))
            .filter(Order.id == order_id)
        )
        if for_update:
            q = q.with_for_update().populate_existing()
        return q.first()

    def get_latest_number(self, prefix: str) -> Optional[str]:
        row = (
            self.db.query(Order.order_number)
            .filter(Order.order_number.like(f"{prefix}%"))
            .order_by(Order.order_number.desc())
            .first()
        )
        return row[0] if row else None

    def list_paginated(
        self,
        page: int = 1,
        page_size: int = 50,
        status: Optional[str] = None,
        vendor_id: Optional[int] = None,
    ) -> Tuple[List[Order], int]:
        q = self.db.query(Order)
        if status:
            q = q.filter(Order.status == status)
        if vendor_id is not None:
            q = q.filter(Order.vendor_id == vendor_id)
        total = q.count()
        items = (
            q.options(selectinload(Order.items))
            .order_by(Order.created_at.desc(), Order.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return items, total

    def number_exists(self, order_number: str) -> bool:
        return (
            self.db.query(Order.id).filter(Order.order_number == order_number).first()
            is not None
        )
