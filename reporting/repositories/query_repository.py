from uuid import UUID

from sqlalchemy.orm import Session

from reporting.models.query import Query
from reporting.schemas.query import QueryCreate


class QueryRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, query_id: UUID) -> Query | None:
        return self.db.query(Query).filter(Query.id == query_id).first()

    def get_subqueries(self, parent_id: UUID) -> list[Query]:
        return (
            self.db.query(Query)
            .filter(Query.parent_id == parent_id)
            .order_by(Query.name)
            .all()
        )

    def create(self, data: QueryCreate) -> Query:
        if data.parent_id is not None:
            parent = self.get_by_id(data.parent_id)
            if parent is None:
                raise ValueError(f"Parent query {data.parent_id} not found")
            if parent.parent_id is not None:
                raise ValueError("Subqueries cannot have subqueries of their own")
        query = Query(**data.model_dump())
        self.db.add(query)
        self.db.commit()
        self.db.refresh(query)
        return query
