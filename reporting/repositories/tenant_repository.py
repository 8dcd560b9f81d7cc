from uuid import UUID

from sqlalchemy.orm import Session

from reporting.models.date_time import DateTimeBucket
from reporting.models.fact import Fact
from reporting.models.tenant import Tenant
from reporting.schemas.tenant import TenantCreate


class TenantRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, tenant_id: UUID) -> Tenant | None:
        return self.db.query(Tenant).filter(Tenant.id == tenant_id).first()

    def get_by_source(self, source: str) -> Tenant | None:
        return self.db.query(Tenant).filter(Tenant.source == source).first()

    def get_for_period(self, year: int, month: int) -> list[Tenant]:
        """Get tenants with at least one fact in the given month, ordered by source."""
        return (
            self.db.query(Tenant)
            .join(Fact, Fact.tenant_id == Tenant.id)
            .join(DateTimeBucket, Fact.date_time_id == DateTimeBucket.id)
            .filter(DateTimeBucket.year == year, DateTimeBucket.month == month)
            .distinct()
            .order_by(Tenant.source)
            .all()
        )

    def create(self, data: TenantCreate) -> Tenant:
        tenant = Tenant(**data.model_dump())
        self.db.add(tenant)
        self.db.commit()
        self.db.refresh(tenant)
        return tenant
