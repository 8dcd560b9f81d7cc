from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from reporting.core.database import get_db
from reporting.core.exceptions import InvoiceGenerationError
from reporting.schemas.invoice import Invoice
from reporting.services.billing_period import BillingPeriod
from reporting.services.invoice_generation import InvoiceGenerationService

router = APIRouter()


@router.get(
    "/",
    response_model=list[Invoice],
    summary="Generate invoices",
    responses={500: {"description": "Reading the fact store failed"}},
)
async def list_invoices(
    year: int = Query(..., ge=1),
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
) -> list[Invoice]:
    """Generate the invoices of all tenants for a calendar month.

    Nothing is persisted; the same month always yields the same invoices
    as long as the underlying facts do not change.
    """
    period = BillingPeriod(year, month)
    try:
        return InvoiceGenerationService(db).generate(period)
    except InvoiceGenerationError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    finally:
        db.rollback()
