from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from reporting.core.database import get_db
from reporting.schemas.check import MissingField
from reporting.services.completeness_check import CompletenessCheckService

router = APIRouter()


@router.get(
    "/missing",
    response_model=list[MissingField],
    summary="List missing dimension fields",
)
async def list_missing_fields(db: Session = Depends(get_db)) -> list[MissingField]:
    """List tenants, categories and products lacking data required for invoicing."""
    return CompletenessCheckService(db).check_missing()
