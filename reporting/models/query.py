from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, func
from sqlalchemy.ext.hybrid import hybrid_property

from reporting.core.database import Base
from reporting.models.shared import UUIDType, generate_uuid


class QueryKind(str, Enum):
    TOP_LEVEL = "top_level"
    SUBQUERY = "subquery"


class Query(Base):
    """A metering query whose samples become facts.

    Queries form a two-level tree: a query without a parent is billed
    directly, a subquery breaks its parent down and is never billed itself.
    """

    __tablename__ = "queries"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    parent_id = Column(
        UUIDType,
        ForeignKey("queries.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    name = Column(String(255), index=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    display_name = Column(String(255), nullable=False, default="")
    query = Column(Text, nullable=False, default="")
    unit = Column(String(50), nullable=False, default="")
    during_start = Column(DateTime(timezone=True), nullable=True)
    during_end = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @hybrid_property
    def is_top_level(self) -> bool:
        return self.parent_id is None

    @is_top_level.inplace.expression
    @classmethod
    def _is_top_level_expression(cls):  # type: ignore[no-untyped-def]
        return cls.parent_id.is_(None)

    @property
    def kind(self) -> QueryKind:
        return QueryKind.TOP_LEVEL if self.parent_id is None else QueryKind.SUBQUERY
