from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    CheckConstraint,
    Index,
    func,
    text,
)
from partsledger.database import Base

ALERT_PENDING = "PENDING"
ALERT_ORDERED = "ORDERED"
ALERT_DISMISSED = "DISMISSED"


class ReorderAlert(Base):
    """Point-in-time low-stock snapshot; at most one PENDING row per part."""

    __tablename__ = "reorder_alerts"
    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING', 'ORDERED', 'DISMISSED')",
            name="ck_reorder_alerts_status",
        ),
        Index(
            "uq_reorder_alerts_pending_part",
            "part_id",
            unique=True,
            sqlite_where=text("status = 'PENDING'"),
            postgresql_where=text("status = 'PENDING'"),
        ),
        Index("ix_reorder_alerts_status_created", "status", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # Alerts are deleted with their part.
    part_id = Column(Integer, ForeignKey("parts.id", ondelete="CASCADE"), nullable=False, index=True)
    part_number = Column(String(100), nullable=False)
    part_name = Column(String(200), nullable=False)
    current_qty = Column(Integer, nullable=False)
    reorder_point = Column(Integer, nullable=False)
    reorder_qty = Column(Integer, nullable=False)
    vendor_id = Column(Integer, nullable=True)
    vendor_name = Column(String(200), nullable=True)
    status = Column(String(20), nullable=False, default=ALERT_PENDING)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    processed_at = Column(DateTime, nullable=True)
