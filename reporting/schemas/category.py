from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    source: str = Field(..., min_length=1, max_length=255)
    target: str | None = Field(default=None, max_length=255)
