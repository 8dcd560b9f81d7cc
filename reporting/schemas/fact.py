from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class FactCreate(BaseModel):
    date_time_id: UUID
    query_id: UUID
    tenant_id: UUID
    category_id: UUID
    product_id: UUID
    discount_id: UUID
    quantity: Decimal = Field(default=Decimal("0"), ge=0)
