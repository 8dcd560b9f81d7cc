from uuid import UUID

from sqlalchemy.orm import Session

from reporting.models.category import Category
from reporting.models.date_time import DateTimeBucket
from reporting.models.fact import Fact
from reporting.schemas.category import CategoryCreate


class CategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_source(self, source: str) -> Category | None:
        return self.db.query(Category).filter(Category.source == source).first()

    def get_for_tenant_and_period(self, tenant_id: UUID, year: int, month: int) -> list[Category]:
        """Get categories with at least one fact of the tenant in the given month."""
        return (
            self.db.query(Category)
            .join(Fact, Fact.category_id == Category.id)
            .join(DateTimeBucket, Fact.date_time_id == DateTimeBucket.id)
            .filter(
                Fact.tenant_id == tenant_id,
                DateTimeBucket.year == year,
                DateTimeBucket.month == month,
            )
            .distinct()
            .order_by(Category.source)
            .all()
        )

    def create(self, data: CategoryCreate) -> Category:
        category = Category(**data.model_dump())
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category
