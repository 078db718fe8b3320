from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    Boolean,
    DateTime,
    ForeignKey,
    Text,
    CheckConstraint,
    func,
)
from sqlalchemy.orm import relationship
from partsledger.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    parent_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    created_at = Column(DateTime, default=func.now())


class Part(Base):
    __tablename__ = "parts"
    __table_args__ = (
        CheckConstraint("unit_price >= 0", name="ck_parts_unit_price_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    part_number = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=True, index=True)
    unit_price = Column(Numeric(12, 2), nullable=False, default=0)
    unit_of_measure = Column(String(20), default="EA")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    vendor = relationship("Vendor", back_populates="parts")
    category = relationship("Category")
    inventory = relationship(
        "Inventory",
        back_populates="part",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
