"""Aggregate usage facts into priced invoice items."""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from reporting.core.exceptions import InvoiceGenerationError
from reporting.models.category import Category
from reporting.models.tenant import Tenant
from reporting.repositories.fact_repository import BillableFact, FactRepository
from reporting.schemas.invoice import InvoiceItem, ProductRef
from reporting.services.billing_period import BillingPeriod

# description, product id, unit, price per unit, discount
ItemKey = tuple[str, UUID, str, Decimal, Decimal]


@dataclass
class _ItemAccumulator:
    """Running quantity statistics of one item group."""

    first: BillableFact
    quantity_sum: Decimal
    quantity_min: Decimal
    quantity_max: Decimal
    count: int = 1

    @classmethod
    def start(cls, fact: BillableFact) -> "_ItemAccumulator":
        quantity = Decimal(str(fact.quantity))
        return cls(
            first=fact,
            quantity_sum=quantity,
            quantity_min=quantity,
            quantity_max=quantity,
        )

    def add(self, fact: BillableFact) -> None:
        quantity = Decimal(str(fact.quantity))
        self.quantity_sum += quantity
        self.quantity_min = min(self.quantity_min, quantity)
        self.quantity_max = max(self.quantity_max, quantity)
        self.count += 1

    def to_item(self) -> InvoiceItem:
        fact = self.first
        return InvoiceItem(
            description=fact.description,
            product=ProductRef(
                id=fact.product_id,
                source=fact.product_source,
                target=fact.product_target or "",
            ),
            quantity=self.quantity_sum,
            quantity_min=self.quantity_min,
            quantity_avg=self.quantity_sum / self.count,
            quantity_max=self.quantity_max,
            unit=fact.unit,
            price_per_unit=Decimal(str(fact.amount)),
            discount=Decimal(str(fact.discount)),
        )


def item_key(fact: BillableFact) -> ItemKey:
    """Return the grouping key of a fact.

    Facts only merge into one item when they share description, product,
    unit, price and discount.
    """
    return (
        fact.description,
        fact.product_id,
        fact.unit,
        Decimal(str(fact.amount)),
        Decimal(str(fact.discount)),
    )


def group_facts(facts: list[BillableFact]) -> list[InvoiceItem]:
    """Reduce billable facts to one item per grouping key.

    Items are ordered by description, product source, product id and
    discount so that repeated runs produce identical invoices.
    """
    groups: dict[ItemKey, _ItemAccumulator] = {}
    for fact in facts:
        key = item_key(fact)
        accumulator = groups.get(key)
        if accumulator is None:
            groups[key] = _ItemAccumulator.start(fact)
        else:
            accumulator.add(fact)

    items = [accumulator.to_item() for accumulator in groups.values()]
    items.sort(
        key=lambda item: (
            item.description,
            item.product.source,
            str(item.product.id),
            item.price_per_unit,
            item.discount,
        )
    )
    return items


class UsageAggregationService:
    """Service for aggregating a tenant's facts of one category into items."""

    def __init__(self, db: Session):
        self.db = db
        self.fact_repo = FactRepository(db)

    def aggregate(
        self,
        tenant: Tenant,
        category: Category,
        period: BillingPeriod,
    ) -> list[InvoiceItem]:
        """Aggregate the facts of a tenant and category in a period.

        Args:
            tenant: Tenant to aggregate for.
            category: Category of the tenant to aggregate for.
            period: Billing period.

        Returns:
            Priced items, empty when there are no billable facts.

        Raises:
            InvoiceGenerationError: If the fact store query fails.
        """
        try:
            facts = self.fact_repo.get_billable_facts(
                tenant.id, category.id, period.year, period.month
            )
        except SQLAlchemyError as exc:
            raise InvoiceGenerationError(
                f"failed to load items for '{tenant.source}'/'{category.source}' "
                f"at {period}: {exc}"
            ) from exc

        return group_facts(facts)
