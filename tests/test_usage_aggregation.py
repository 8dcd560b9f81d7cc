"""Usage aggregation service tests."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from reporting.core.exceptions import InvoiceGenerationError
from reporting.repositories.date_time_repository import DateTimeRepository
from reporting.repositories.discount_repository import DiscountRepository
from reporting.repositories.fact_repository import BillableFact, FactRepository
from reporting.repositories.product_repository import ProductRepository
from reporting.repositories.query_repository import QueryRepository
from reporting.schemas.discount import DiscountCreate
from reporting.schemas.fact import FactCreate
from reporting.schemas.product import ProductCreate
from reporting.schemas.query import QueryCreate
from reporting.services.billing_period import BillingPeriod
from reporting.services.usage_aggregation import UsageAggregationService, group_facts

MARCH = BillingPeriod(2022, 3)


def _hour(hour: int) -> datetime:
    return datetime(2022, 3, 10, hour, tzinfo=UTC)


def _billable(
    description="test description",
    product_source="my-product",
    amount="1",
    discount="0",
    quantity="1",
    product_id=None,
) -> BillableFact:
    return BillableFact(
        description=description,
        product_id=product_id or uuid4(),
        product_source=product_source,
        product_target=None,
        unit="tps",
        amount=Decimal(amount),
        discount=Decimal(discount),
        quantity=Decimal(quantity),
    )


class TestAggregate:
    def test_single_fact(self, db_session, tenant, category, product, discount, query, make_fact):
        make_fact(
            tenant=tenant,
            category=category,
            query=query,
            product=product,
            discount=discount,
            quantity=42,
        )

        items = UsageAggregationService(db_session).aggregate(tenant, category, MARCH)

        assert len(items) == 1
        item = items[0]
        assert item.description == "test description"
        assert item.quantity == Decimal("42")
        assert item.quantity_min == Decimal("42")
        assert item.quantity_avg == Decimal("42")
        assert item.quantity_max == Decimal("42")
        assert item.unit == "tps"
        assert item.price_per_unit == Decimal("1")
        assert item.discount == Decimal("0")
        assert item.total == Decimal("42")
        assert item.product.id == product.id
        assert item.product.source == "my-product"
        assert item.product.target == "P-1"

    def test_subquery_facts_excluded(
        self, db_session, tenant, category, product, discount, query, subquery, make_fact
    ):
        dims = {"tenant": tenant, "category": category, "product": product, "discount": discount}
        make_fact(query=query, quantity=42, **dims)
        make_fact(query=subquery, quantity=4, **dims)

        items = UsageAggregationService(db_session).aggregate(tenant, category, MARCH)

        assert len(items) == 1
        assert items[0].quantity == Decimal("42")

    def test_only_subquery_facts(
        self, db_session, tenant, category, product, discount, subquery, make_fact
    ):
        make_fact(
            tenant=tenant,
            category=category,
            query=subquery,
            product=product,
            discount=discount,
            quantity=4,
        )

        assert UsageAggregationService(db_session).aggregate(tenant, category, MARCH) == []

    def test_quantity_statistics(
        self, db_session, tenant, category, product, discount, query, make_fact
    ):
        dims = {
            "tenant": tenant,
            "category": category,
            "query": query,
            "product": product,
            "discount": discount,
        }
        for hour, quantity in enumerate([10, 20, 30, 20]):
            make_fact(quantity=quantity, at=_hour(hour), **dims)

        [item] = UsageAggregationService(db_session).aggregate(tenant, category, MARCH)

        assert item.quantity == Decimal("80")
        assert item.quantity_min == Decimal("10")
        assert item.quantity_avg == Decimal("20")
        assert item.quantity_max == Decimal("30")
        assert item.total == Decimal("80")

    def test_discount_and_price_applied(self, db_session, tenant, category, query, make_fact):
        product = ProductRepository(db_session).create(
            ProductCreate(source="storage", amount=Decimal("10"), unit="GiB")
        )
        discount = DiscountRepository(db_session).create(
            DiscountCreate(source="storage", discount=Decimal("0.3"))
        )
        make_fact(
            tenant=tenant,
            category=category,
            query=query,
            product=product,
            discount=discount,
            quantity=2,
            at=_hour(1),
        )
        make_fact(
            tenant=tenant,
            category=category,
            query=query,
            product=product,
            discount=discount,
            quantity=3,
            at=_hour(2),
        )

        [item] = UsageAggregationService(db_session).aggregate(tenant, category, MARCH)

        assert item.quantity == Decimal("5")
        assert item.total == Decimal("35.0")
        assert item.total == item.quantity * item.price_per_unit * (1 - item.discount)

    def test_different_discounts_never_merge(
        self, db_session, tenant, category, product, discount, query, make_fact
    ):
        reduced = DiscountRepository(db_session).create(
            DiscountCreate(
                source="my-product",
                discount=Decimal("0.5"),
                during_start=datetime(2022, 3, 15, tzinfo=UTC),
            )
        )
        dims = {"tenant": tenant, "category": category, "query": query, "product": product}
        make_fact(discount=discount, quantity=10, at=_hour(1), **dims)
        make_fact(discount=reduced, quantity=10, at=_hour(2), **dims)

        items = UsageAggregationService(db_session).aggregate(tenant, category, MARCH)

        assert [(i.quantity, i.discount) for i in items] == [
            (Decimal("10"), Decimal("0")),
            (Decimal("10"), Decimal("0.5")),
        ]
        assert [i.total for i in items] == [Decimal("10"), Decimal("5")]

    def test_price_change_splits_items(
        self, db_session, tenant, category, discount, query, make_fact
    ):
        repo = ProductRepository(db_session)
        old = repo.create(
            ProductCreate(
                source="memory",
                amount=Decimal("2"),
                unit="MiB",
                during_end=datetime(2022, 3, 15, tzinfo=UTC),
            )
        )
        new = repo.create(
            ProductCreate(
                source="memory",
                amount=Decimal("3"),
                unit="MiB",
                during_start=datetime(2022, 3, 15, tzinfo=UTC),
            )
        )
        dims = {"tenant": tenant, "category": category, "query": query, "discount": discount}
        make_fact(product=old, quantity=1, at=datetime(2022, 3, 1, tzinfo=UTC), **dims)
        make_fact(product=new, quantity=1, at=datetime(2022, 3, 20, tzinfo=UTC), **dims)

        items = UsageAggregationService(db_session).aggregate(tenant, category, MARCH)

        assert sorted(i.price_per_unit for i in items) == [Decimal("2"), Decimal("3")]
        assert sum(i.total for i in items) == Decimal("5")

    def test_items_ordered_by_description(
        self, db_session, tenant, category, product, discount, query, make_fact
    ):
        first = QueryRepository(db_session).create(
            QueryCreate(name="cpu", description="a CPU request", unit="tps")
        )
        dims = {"tenant": tenant, "category": category, "product": product, "discount": discount}
        make_fact(query=query, quantity=1, **dims)
        make_fact(query=first, quantity=1, **dims)

        items = UsageAggregationService(db_session).aggregate(tenant, category, MARCH)

        assert [i.description for i in items] == ["a CPU request", "test description"]

    def test_no_facts(self, db_session, tenant, category):
        assert UsageAggregationService(db_session).aggregate(tenant, category, MARCH) == []

    def test_other_period_ignored(
        self, db_session, tenant, category, product, discount, query, make_fact
    ):
        make_fact(
            tenant=tenant,
            category=category,
            query=query,
            product=product,
            discount=discount,
            quantity=42,
            at=datetime(2022, 4, 1, tzinfo=UTC),
        )

        assert UsageAggregationService(db_session).aggregate(tenant, category, MARCH) == []

    def test_fact_with_missing_discount_is_dropped(
        self, db_session, tenant, category, product, discount, query, make_fact
    ):
        make_fact(
            tenant=tenant,
            category=category,
            query=query,
            product=product,
            discount=discount,
            quantity=42,
        )
        bucket = DateTimeRepository(db_session).get_or_create(_hour(5))
        # SQLite does not enforce foreign keys unless asked to
        FactRepository(db_session).create(
            FactCreate(
                date_time_id=bucket.id,
                query_id=query.id,
                tenant_id=tenant.id,
                category_id=category.id,
                product_id=product.id,
                discount_id=uuid4(),
                quantity=Decimal("100"),
            )
        )

        [item] = UsageAggregationService(db_session).aggregate(tenant, category, MARCH)

        assert item.quantity == Decimal("42")

    def test_store_failure_is_wrapped(self, db_session, tenant, category):
        service = UsageAggregationService(db_session)
        with patch.object(
            service.fact_repo,
            "get_billable_facts",
            side_effect=OperationalError("SELECT", {}, Exception("boom")),
        ):
            with pytest.raises(
                InvoiceGenerationError,
                match="'my-tenant'/'my-cluster:my-namespace' at 2022 March",
            ):
                service.aggregate(tenant, category, MARCH)


class TestGroupFacts:
    def test_empty(self):
        assert group_facts([]) == []

    def test_same_key_merges(self):
        product_id = uuid4()
        items = group_facts(
            [
                _billable(quantity="1.5", product_id=product_id),
                _billable(quantity="2.5", product_id=product_id),
            ]
        )

        assert len(items) == 1
        assert items[0].quantity == Decimal("4.0")
        assert items[0].quantity_avg == Decimal("2")

    def test_distinct_products_split(self):
        items = group_facts([_billable(product_source="b"), _billable(product_source="a")])

        assert [i.product.source for i in items] == ["a", "b"]

    def test_total_uses_sum_not_average(self):
        product_id = uuid4()
        items = group_facts(
            [
                _billable(quantity="1", amount="3", discount="0.25", product_id=product_id),
                _billable(quantity="2", amount="3", discount="0.25", product_id=product_id),
                _billable(quantity="4", amount="3", discount="0.25", product_id=product_id),
            ]
        )

        assert items[0].total == Decimal("7") * Decimal("3") * Decimal("0.75")

    def test_deterministic(self):
        facts = [
            _billable(description="z", quantity="1"),
            _billable(description="a", quantity="2"),
            _billable(description="m", quantity="3"),
        ]

        assert group_facts(facts) == group_facts(list(reversed(facts)))
