from sqlalchemy import Column, DateTime, Integer, UniqueConstraint
from sqlalchemy.schema import Index

from reporting.core.database import Base
from reporting.models.shared import UUIDType, generate_uuid


class DateTimeBucket(Base):
    """Hourly time bucket facts are recorded against."""

    __tablename__ = "date_times"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    day = Column(Integer, nullable=False)
    hour = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("timestamp", name="uq_date_times_timestamp"),
        Index("ix_date_times_year_month", "year", "month"),
    )
