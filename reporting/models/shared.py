"""Shared model utilities used across all models."""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, Numeric, String, TypeDecorator, and_, or_
from sqlalchemy.engine import Dialect


class UUIDType(TypeDecorator[uuid.UUID]):
    """Platform-independent UUID type.

    Uses String(36) for SQLite, native UUID for PostgreSQL.
    """

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return value
        if isinstance(value, uuid.UUID):
            return str(value)
        return str(uuid.UUID(value))

    def process_result_value(self, value: Any, dialect: Dialect) -> uuid.UUID | None:
        if value is None:
            return value
        if isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


# Quantities and prices share one precision so that sums never lose digits.
AMOUNT_TYPE = Numeric(20, 6)


def generate_uuid() -> uuid.UUID:
    """Generate a new UUID."""
    return uuid.uuid4()


def during_contains(model: Any, at: datetime) -> ColumnElement[bool]:
    """Filter clause selecting rows whose validity interval contains ``at``.

    Intervals are half-open ``[during_start, during_end)``; a NULL bound is
    unbounded on that side.
    """
    return and_(
        or_(model.during_start.is_(None), model.during_start <= at),
        or_(model.during_end.is_(None), model.during_end > at),
    )
