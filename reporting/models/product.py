from sqlalchemy import Column, DateTime, String, UniqueConstraint, func

from reporting.core.database import Base
from reporting.models.shared import AMOUNT_TYPE, UUIDType, generate_uuid


class Product(Base):
    """Priced product, valid during ``[during_start, during_end)``."""

    __tablename__ = "products"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    source = Column(String(255), index=True, nullable=False)
    target = Column(String(255), nullable=True)
    amount = Column(AMOUNT_TYPE, nullable=False, default=0)  # price per unit
    unit = Column(String(50), nullable=False, default="")
    during_start = Column(DateTime(timezone=True), nullable=True)
    during_end = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("source", "during_start", name="uq_products_source_during_start"),
    )
