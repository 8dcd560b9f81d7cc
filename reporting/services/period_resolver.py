"""Resolve which tenants and categories have usage in a billing period."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from reporting.core.exceptions import InvoiceGenerationError
from reporting.models.category import Category
from reporting.models.tenant import Tenant
from reporting.repositories.category_repository import CategoryRepository
from reporting.repositories.tenant_repository import TenantRepository
from reporting.services.billing_period import BillingPeriod


class PeriodResolver:
    """Selects the tenants and categories an invoice run has to cover."""

    def __init__(self, db: Session):
        self.db = db
        self.tenant_repo = TenantRepository(db)
        self.category_repo = CategoryRepository(db)

    def resolve_tenants(self, period: BillingPeriod) -> list[Tenant]:
        """Get every tenant with at least one fact in the period, ordered by source."""
        try:
            return self.tenant_repo.get_for_period(period.year, period.month)
        except SQLAlchemyError as exc:
            raise InvoiceGenerationError(f"failed to load tenants for {period}: {exc}") from exc

    def resolve_categories(self, tenant: Tenant, period: BillingPeriod) -> list[Category]:
        """Get every category of the tenant with at least one fact in the period."""
        try:
            return self.category_repo.get_for_tenant_and_period(
                tenant.id, period.year, period.month
            )
        except SQLAlchemyError as exc:
            raise InvoiceGenerationError(
                f"failed to load categories for '{tenant.source}' at {period}: {exc}"
            ) from exc
