from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, CheckConstraint, func
from sqlalchemy.orm import relationship
from partsledger.database import Base


class Vendor(Base):
    __tablename__ = "vendors"
    __table_args__ = (
        CheckConstraint("lead_time_days >= 0", name="ck_vendors_lead_time_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    code = Column(String(50), unique=True, nullable=False)
    contact_name = Column(String(200), nullable=True)
    email = Column(String(200), nullable=True)
    phone = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    lead_time_days = Column(Integer, nullable=False, default=7)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    parts = relationship("Part", back_populates="vendor")
