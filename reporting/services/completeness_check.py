"""Data completeness check run by operators before invoicing.

Reports dimension rows lacking a value an invoice needs: billing targets for
tenants, categories and products, and a price and unit for products. The
invoice generation service never calls this itself.
"""

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from reporting.models.category import Category
from reporting.models.product import Product
from reporting.models.tenant import Tenant
from reporting.schemas.check import MissingField

logger = logging.getLogger(__name__)


class CompletenessCheckService:
    def __init__(self, db: Session):
        self.db = db

    def check_missing(self) -> list[MissingField]:
        """Return one entry per row and missing field, sorted by table, source and field."""
        missing: list[MissingField] = []
        missing.extend(self._missing_string(Tenant, "target"))
        missing.extend(self._missing_string(Category, "target"))
        missing.extend(self._missing_string(Product, "target"))
        missing.extend(self._missing_string(Product, "unit"))
        missing.extend(
            MissingField(
                table=Product.__tablename__,
                id=row.id,
                source=row.source,
                missing_field="amount",
            )
            for row in self.db.query(Product.id, Product.source)
            .filter(or_(Product.amount.is_(None), Product.amount == 0))
            .all()
        )

        missing.sort(key=lambda m: (m.table, m.source, m.missing_field, str(m.id)))
        if missing:
            logger.warning("Found %d missing fields in dimension tables", len(missing))
        return missing

    def _missing_string(self, model, column: str) -> list[MissingField]:  # type: ignore[no-untyped-def]
        field = getattr(model, column)
        rows = (
            self.db.query(model.id, model.source)
            .filter(or_(field.is_(None), field == ""))
            .all()
        )
        return [
            MissingField(
                table=model.__tablename__,
                id=row.id,
                source=row.source,
                missing_field=column,
            )
            for row in rows
        ]
