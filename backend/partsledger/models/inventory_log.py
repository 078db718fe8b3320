from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Text,
    CheckConstraint,
    Index,
    func,
)
from partsledger.database import Base

CHANGE_ADJUST = "ADJUST"
CHANGE_RECEIVE = "RECEIVE"
CHANGE_SHIP = "SHIP"
CHANGE_TYPES = (CHANGE_ADJUST, CHANGE_RECEIVE, CHANGE_SHIP)


class InventoryLog(Base):
    """Append-only audit row; one per committed quantity mutation."""

    __tablename__ = "inventory_logs"
    __table_args__ = (
        CheckConstraint(
            "change_type IN ('ADJUST', 'RECEIVE', 'SHIP')",
            name="ck_inventory_logs_change_type",
        ),
        CheckConstraint(
            "new_qty = previous_qty + quantity_change",
            name="ck_inventory_logs_balanced",
        ),
        Index("ix_inventory_logs_part_created", "part_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    part_id = Column(Integer, ForeignKey("parts.id", ondelete="CASCADE"), nullable=False, index=True)
    change_type = Column(String(20), nullable=False)
    quantity_change = Column(Integer, nullable=False)
    previous_qty = Column(Integer, nullable=False)
    new_qty = Column(Integer, nullable=False)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=True, index=True)
    reason = Column(Text, nullable=True)
    performed_by = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
