from uuid import UUID

from pydantic import BaseModel, ConfigDict


class MissingField(BaseModel):
    """A dimension row lacking a value required for invoicing."""

    model_config = ConfigDict(frozen=True)

    table: str
    id: UUID
    source: str
    missing_field: str
