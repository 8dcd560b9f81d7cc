from datetime import datetime
from decimal import Decimal
from typing import Self

from pydantic import BaseModel, Field, model_validator


class DiscountCreate(BaseModel):
    source: str = Field(..., min_length=1, max_length=255)
    discount: Decimal = Field(default=Decimal("0"), ge=0, lt=1)
    during_start: datetime | None = None
    during_end: datetime | None = None

    @model_validator(mode="after")
    def validate_during(self) -> Self:
        """Validate the validity interval is not inverted."""
        if self.during_start and self.during_end and self.during_end <= self.during_start:
            raise ValueError("during_end must be after during_start")
        return self
