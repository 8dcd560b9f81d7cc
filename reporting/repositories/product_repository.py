from datetime import datetime

from sqlalchemy.orm import Session

from reporting.models.product import Product
from reporting.models.shared import during_contains
from reporting.schemas.product import ProductCreate


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_active(self, source: str, at: datetime) -> Product | None:
        """Get the product with the given source whose validity interval contains ``at``."""
        return (
            self.db.query(Product)
            .filter(Product.source == source, during_contains(Product, at))
            .first()
        )

    def create(self, data: ProductCreate) -> Product:
        product = Product(**data.model_dump())
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product
