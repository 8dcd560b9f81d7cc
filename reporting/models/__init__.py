from reporting.models.category import Category
from reporting.models.date_time import DateTimeBucket
from reporting.models.discount import Discount
from reporting.models.fact import Fact
from reporting.models.product import Product
from reporting.models.query import Query, QueryKind
from reporting.models.tenant import Tenant

__all__ = [
    "Category",
    "DateTimeBucket",
    "Discount",
    "Fact",
    "Product",
    "Query",
    "QueryKind",
    "Tenant",
]
