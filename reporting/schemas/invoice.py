"""Invoice document produced by the invoice generation service.

Totals are computed fields: an item's total is derived from its quantity,
price and discount, and every category and invoice total is the sum of its
children. They are included when the document is serialized.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, computed_field


class TenantRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    source: str
    target: str = ""


class ProductRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    source: str
    target: str = ""


class InvoiceItem(BaseModel):
    """A priced line of an invoice category."""

    model_config = ConfigDict(frozen=True)

    description: str
    product: ProductRef
    quantity: Decimal
    quantity_min: Decimal
    quantity_avg: Decimal
    quantity_max: Decimal
    unit: str
    price_per_unit: Decimal
    # 0.3 means the unit price is charged at 70%
    discount: Decimal

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> Decimal:
        return self.quantity * self.price_per_unit * (1 - self.discount)


class InvoiceCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    source: str
    target: str = ""
    items: list[InvoiceItem]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> Decimal:
        return sum((item.total for item in self.items), Decimal("0"))


class Invoice(BaseModel):
    model_config = ConfigDict(frozen=True)

    tenant: TenantRef
    period_start: datetime
    period_end: datetime
    categories: list[InvoiceCategory]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> Decimal:
        return sum((category.total for category in self.categories), Decimal("0"))
