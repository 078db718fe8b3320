from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    CheckConstraint,
    func,
)
from sqlalchemy.orm import relationship
from partsledger.database import Base


class Inventory(Base):
    __tablename__ = "inventory"
    __table_args__ = (
        CheckConstraint("quantity_on_hand >= 0", name="ck_inventory_on_hand_non_negative"),
        CheckConstraint("quantity_reserved >= 0", name="ck_inventory_reserved_non_negative"),
        CheckConstraint("reorder_point >= 0", name="ck_inventory_reorder_point_non_negative"),
        CheckConstraint("reorder_quantity >= 0", name="ck_inventory_reorder_quantity_non_negative"),
        CheckConstraint(
            "max_quantity IS NULL OR max_quantity >= 0",
            name="ck_inventory_max_quantity_non_negative",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    part_id = Column(
        Integer,
        ForeignKey("parts.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    quantity_on_hand = Column(Integer, nullable=False, default=0)
    quantity_reserved = Column(Integer, nullable=False, default=0)
    reorder_point = Column(Integer, nullable=False, default=10)
    reorder_quantity = Column(Integer, nullable=False, default=50)
    max_quantity = Column(Integer, nullable=True)
    location = Column(String(100), nullable=True)
    last_count_date = Column(DateTime, nullable=True)
    last_order_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    part = relationship("Part", back_populates="inventory")

    @property
    def is_low_stock(self) -> bool:
        return self.quantity_on_hand <= self.reorder_point

    @property
    def available(self) -> int:
        return self.quantity_on_hand - self.quantity_reserved

    @property
    def shortfall(self) -> int:
        return self.reorder_point - self.quantity_on_hand
