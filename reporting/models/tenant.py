from sqlalchemy import Column, DateTime, String, func

from reporting.core.database import Base
from reporting.models.shared import UUIDType, generate_uuid


class Tenant(Base):
    """A billed customer, the grouping key of an invoice."""

    __tablename__ = "tenants"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    source = Column(String(255), unique=True, index=True, nullable=False)
    target = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
