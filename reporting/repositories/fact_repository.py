"""Fact repository: creation of facts and the billable-fact read path."""

from decimal import Decimal
from typing import NamedTuple
from uuid import UUID

from sqlalchemy.orm import Session

from reporting.models.date_time import DateTimeBucket
from reporting.models.discount import Discount
from reporting.models.fact import Fact
from reporting.models.product import Product
from reporting.models.query import Query
from reporting.schemas.fact import FactCreate


class BillableFact(NamedTuple):
    """A fact joined to the dimension values it is priced with."""

    description: str
    product_id: UUID
    product_source: str
    product_target: str | None
    unit: str
    amount: Decimal
    discount: Decimal
    quantity: Decimal


class FactRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_billable_facts(
        self,
        tenant_id: UUID,
        category_id: UUID,
        year: int,
        month: int,
    ) -> list[BillableFact]:
        """Get the facts of a tenant and category in a month, priced and discounted.

        Only facts of top-level queries are returned. All dimensions are inner
        joined, so a fact whose product, discount or query row is missing is
        not returned.
        """
        rows = (
            self.db.query(
                Query.description,
                Product.id,
                Product.source,
                Product.target,
                Product.unit,
                Product.amount,
                Discount.discount,
                Fact.quantity,
            )
            .select_from(Fact)
            .join(Query, Fact.query_id == Query.id)
            .join(Product, Fact.product_id == Product.id)
            .join(Discount, Fact.discount_id == Discount.id)
            .join(DateTimeBucket, Fact.date_time_id == DateTimeBucket.id)
            .filter(
                Fact.tenant_id == tenant_id,
                Fact.category_id == category_id,
                DateTimeBucket.year == year,
                DateTimeBucket.month == month,
                Query.is_top_level,
            )
            .all()
        )
        return [BillableFact(*row) for row in rows]

    def create(self, data: FactCreate) -> Fact:
        fact = Fact(**data.model_dump())
        self.db.add(fact)
        self.db.commit()
        self.db.refresh(fact)
        return fact
