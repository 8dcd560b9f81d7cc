from datetime import datetime

from sqlalchemy.orm import Session

from reporting.models.discount import Discount
from reporting.models.shared import during_contains
from reporting.schemas.discount import DiscountCreate


class DiscountRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_active(self, source: str, at: datetime) -> Discount | None:
        """Get the discount with the given source whose validity interval contains ``at``."""
        return (
            self.db.query(Discount)
            .filter(Discount.source == source, during_contains(Discount, at))
            .first()
        )

    def create(self, data: DiscountCreate) -> Discount:
        discount = Discount(**data.model_dump())
        self.db.add(discount)
        self.db.commit()
        self.db.refresh(discount)
        return discount
