from datetime import UTC, datetime

from sqlalchemy.orm import Session

from reporting.models.date_time import DateTimeBucket


def truncate_to_hour(ts: datetime) -> datetime:
    """Normalize a timestamp to the start of its UTC hour.

    Naive timestamps are taken to be UTC already.
    """
    if ts.tzinfo is not None:
        ts = ts.astimezone(UTC)
    else:
        ts = ts.replace(tzinfo=UTC)
    return ts.replace(minute=0, second=0, microsecond=0)


class DateTimeRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_timestamp(self, ts: datetime) -> DateTimeBucket | None:
        bucket_ts = truncate_to_hour(ts)
        return (
            self.db.query(DateTimeBucket)
            .filter(DateTimeBucket.timestamp == bucket_ts)
            .first()
        )

    def get_or_create(self, ts: datetime) -> DateTimeBucket:
        """Get the hourly bucket containing ``ts``, creating it if missing."""
        existing = self.get_by_timestamp(ts)
        if existing:
            return existing

        bucket_ts = truncate_to_hour(ts)
        bucket = DateTimeBucket(
            timestamp=bucket_ts,
            year=bucket_ts.year,
            month=bucket_ts.month,
            day=bucket_ts.day,
            hour=bucket_ts.hour,
        )
        self.db.add(bucket)
        self.db.commit()
        self.db.refresh(bucket)
        return bucket
