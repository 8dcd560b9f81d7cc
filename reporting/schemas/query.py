from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class QueryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    parent_id: UUID | None = None
    description: str = ""
    display_name: str = Field(default="", max_length=255)
    query: str = ""
    unit: str = Field(default="", max_length=50)
    during_start: datetime | None = None
    during_end: datetime | None = None
