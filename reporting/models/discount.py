from sqlalchemy import CheckConstraint, Column, DateTime, Numeric, String, UniqueConstraint, func

from reporting.core.database import Base
from reporting.models.shared import UUIDType, generate_uuid


class Discount(Base):
    """Discount fraction in [0, 1); 0.3 means 30% off the price per unit."""

    __tablename__ = "discounts"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    source = Column(String(255), index=True, nullable=False)
    discount = Column(Numeric(5, 4), nullable=False, default=0)
    during_start = Column(DateTime(timezone=True), nullable=True)
    during_end = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("discount >= 0 AND discount < 1", name="ck_discounts_discount_range"),
        UniqueConstraint("source", "during_start", name="uq_discounts_source_during_start"),
    )
