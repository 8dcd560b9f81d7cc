"""Shared test fixtures for all test modules."""

import contextlib
from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import reporting.models  # noqa: F401
from reporting.core import database as db_module
from reporting.core.database import Base, get_db
from reporting.models.category import Category
from reporting.models.discount import Discount
from reporting.models.fact import Fact
from reporting.models.product import Product
from reporting.models.query import Query
from reporting.models.tenant import Tenant
from reporting.repositories.category_repository import CategoryRepository
from reporting.repositories.date_time_repository import DateTimeRepository
from reporting.repositories.discount_repository import DiscountRepository
from reporting.repositories.fact_repository import FactRepository
from reporting.repositories.product_repository import ProductRepository
from reporting.repositories.query_repository import QueryRepository
from reporting.repositories.tenant_repository import TenantRepository
from reporting.schemas.category import CategoryCreate
from reporting.schemas.discount import DiscountCreate
from reporting.schemas.fact import FactCreate
from reporting.schemas.product import ProductCreate
from reporting.schemas.query import QueryCreate
from reporting.schemas.tenant import TenantCreate

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)

MARCH_2022 = datetime(2022, 3, 1, tzinfo=UTC)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and delete all rows after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    yield
    with _test_engine.connect() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.commit()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def db_session():
    """Create a database session for direct repository testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def tenant(db_session) -> Tenant:
    return TenantRepository(db_session).create(
        TenantCreate(source="my-tenant", target="12345")
    )


@pytest.fixture
def other_tenant(db_session) -> Tenant:
    return TenantRepository(db_session).create(
        TenantCreate(source="other-tenant", target="67890")
    )


@pytest.fixture
def category(db_session) -> Category:
    return CategoryRepository(db_session).create(
        CategoryCreate(source="my-cluster:my-namespace", target="ns-1")
    )


@pytest.fixture
def product(db_session) -> Product:
    return ProductRepository(db_session).create(
        ProductCreate(source="my-product", target="P-1", amount=Decimal("1"), unit="tps")
    )


@pytest.fixture
def discount(db_session) -> Discount:
    return DiscountRepository(db_session).create(DiscountCreate(source="my-product"))


@pytest.fixture
def query(db_session) -> Query:
    return QueryRepository(db_session).create(
        QueryCreate(
            name="test",
            description="test description",
            display_name="Tests",
            query="test",
            unit="tps",
        )
    )


@pytest.fixture
def subquery(db_session, query) -> Query:
    return QueryRepository(db_session).create(
        QueryCreate(
            name="sub-test",
            parent_id=query.id,
            description="A sub query of Test",
            display_name="Sub Tests",
            query="sub-test",
            unit="tps",
        )
    )


@pytest.fixture
def make_fact(db_session) -> Callable[..., Fact]:
    """Return a factory recording one fact in an hourly bucket."""

    def _make_fact(
        *,
        tenant: Tenant,
        category: Category,
        query: Query,
        product: Product,
        discount: Discount,
        quantity: Decimal | int | str,
        at: datetime = MARCH_2022,
    ) -> Fact:
        bucket = DateTimeRepository(db_session).get_or_create(at)
        return FactRepository(db_session).create(
            FactCreate(
                date_time_id=bucket.id,
                query_id=query.id,
                tenant_id=tenant.id,
                category_id=category.id,
                product_id=product.id,
                discount_id=discount.id,
                quantity=Decimal(str(quantity)),
            )
        )

    return _make_fact
