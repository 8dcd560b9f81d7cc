import logging

from sqlalchemy.orm import Session

from reporting.models.tenant import Tenant
from reporting.schemas.invoice import Invoice, InvoiceCategory, TenantRef
from reporting.services.billing_period import BillingPeriod
from reporting.services.period_resolver import PeriodResolver
from reporting.services.usage_aggregation import UsageAggregationService

logger = logging.getLogger(__name__)


class InvoiceGenerationService:
    """Service for generating monthly invoices from the fact store.

    Nothing is written to the database, so the session may be read-only.
    """

    def __init__(self, db: Session):
        self.db = db
        self.resolver = PeriodResolver(db)
        self.usage_service = UsageAggregationService(db)

    def generate(self, period: BillingPeriod) -> list[Invoice]:
        """Generate one invoice per tenant with billable usage in the period.

        Invoices are ordered by tenant source and categories by category
        source. A failure for any tenant or category aborts the whole run.

        Raises:
            InvoiceGenerationError: If reading the fact store fails.
        """
        invoices = []
        for tenant in self.resolver.resolve_tenants(period):
            invoice = self._invoice_for_tenant(tenant, period)
            if invoice is not None:
                invoices.append(invoice)

        logger.info("Generated %d invoices for %s", len(invoices), period)
        return invoices

    def _invoice_for_tenant(self, tenant: Tenant, period: BillingPeriod) -> Invoice | None:
        categories = []
        for category in self.resolver.resolve_categories(tenant, period):
            items = self.usage_service.aggregate(tenant, category, period)
            # Categories with only subquery facts have nothing to bill.
            if not items:
                logger.debug(
                    "Skipping %s/%s at %s: no billable facts",
                    tenant.source,
                    category.source,
                    period,
                )
                continue
            categories.append(
                InvoiceCategory(
                    id=category.id,
                    source=str(category.source),
                    target=str(category.target or ""),
                    items=items,
                )
            )

        if not categories:
            return None

        return Invoice(
            tenant=TenantRef(
                id=tenant.id,
                source=str(tenant.source),
                target=str(tenant.target or ""),
            ),
            period_start=period.start_datetime,
            period_end=period.end_datetime,
            categories=categories,
        )
