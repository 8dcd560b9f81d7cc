from sqlalchemy import Column, DateTime, String, func

from reporting.core.database import Base
from reporting.models.shared import UUIDType, generate_uuid


class Category(Base):
    """Namespace-like cost attribution unit, e.g. ``cluster:namespace``."""

    __tablename__ = "categories"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    source = Column(String(255), unique=True, index=True, nullable=False)
    target = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
