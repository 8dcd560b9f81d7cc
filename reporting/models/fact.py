"""Fact model: one usage measurement per dimension combination."""

from sqlalchemy import CheckConstraint, Column, UniqueConstraint
from sqlalchemy.schema import ForeignKey

from reporting.core.database import Base
from reporting.models.shared import AMOUNT_TYPE, UUIDType, generate_uuid


class Fact(Base):
    __tablename__ = "facts"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    date_time_id = Column(
        UUIDType, ForeignKey("date_times.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    query_id = Column(
        UUIDType, ForeignKey("queries.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    tenant_id = Column(
        UUIDType, ForeignKey("tenants.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    category_id = Column(
        UUIDType, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    product_id = Column(
        UUIDType, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    discount_id = Column(
        UUIDType, ForeignKey("discounts.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    quantity = Column(AMOUNT_TYPE, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_facts_quantity_non_negative"),
        UniqueConstraint(
            "date_time_id",
            "query_id",
            "tenant_id",
            "category_id",
            "product_id",
            "discount_id",
            name="uq_facts_dimensions",
        ),
    )
