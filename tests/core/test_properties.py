"""
Property checks for the query engine over generated datasets.

Each property is checked against several seeded datasets from the seed
generator rather than a single hand-written fixture.
"""

from datetime import date
from decimal import Decimal
from operator import attrgetter

import pytest

from shopquery import queries
from shopquery.core.domain import Snapshot
from shopquery.core.engine import (
    counting,
    filter_by,
    flatten,
    group_by,
    sort_limit,
    summarize,
    total,
)
from shopquery.core.predicates import category_is, price_above
from shopquery.db.seed import generate_dataset

price = attrgetter("price")


# -----------------------------
# Fixtures
# -----------------------------


@pytest.fixture(params=[1, 7, 2021, 4242])
def generated(request) -> Snapshot:
    """Snapshot over a generated dataset for several seeds."""
    dataset = generate_dataset(customers=8, products=15, orders=40, seed=request.param)
    return Snapshot(dataset.customers, dataset.products, dataset.orders)


# -----------------------------
# Properties
# -----------------------------


class TestFilterProperties:
    def test_idempotent(self, generated: Snapshot) -> None:
        predicate = category_is("Books") | price_above(150)
        once = filter_by(generated.products, predicate)

        assert filter_by(once, predicate) == once

    def test_order_preserving_subsequence(self, generated: Snapshot) -> None:
        kept = filter_by(generated.products, price_above(100))
        positions = [generated.products.index(p) for p in kept]

        assert positions == sorted(positions)
        assert all(p.price > 100 for p in kept)


class TestFlattenProperties:
    def test_length_is_sum_of_children(self, generated: Snapshot) -> None:
        flat = flatten(generated.orders, generated.products_of)

        assert len(flat) == sum(len(o.product_ids) for o in generated.orders)

    def test_distinct_has_unique_ids_and_same_set(self, generated: Snapshot) -> None:
        flat = flatten(generated.orders, generated.products_of)
        distinct = flatten(generated.orders, generated.products_of, distinct=True)
        ids = [p.id for p in distinct]

        assert len(ids) == len(set(ids))
        assert set(ids) == {p.id for p in flat}


class TestReverseIndexProperties:
    def test_reverse_agrees_with_forward(self, generated: Snapshot) -> None:
        for product in generated.products:
            expected = [o for o in generated.orders if product.id in o.product_ids]

            assert list(generated.orders_of(product)) == expected


class TestSortProperties:
    @pytest.mark.parametrize("limit", [0, 1, 5, 1000])
    def test_limit_and_ordering(self, generated: Snapshot, limit: int) -> None:
        full = sort_limit(generated.products, price)
        limited = sort_limit(generated.products, price, limit=limit)

        assert len(limited) == min(limit, len(generated.products))
        assert limited == full[:limit]
        assert [p.price for p in full] == sorted(p.price for p in generated.products)


class TestGroupProperties:
    def test_groups_cover_input(self, generated: Snapshot) -> None:
        groups = group_by(generated.orders, attrgetter("customer_id"))

        assert sum(len(members) for members in groups.values()) == len(generated.orders)
        assert all(
            order.customer_id == key for key, members in groups.items() for order in members
        )

    def test_counting_agrees_with_lists(self, generated: Snapshot) -> None:
        lists = group_by(generated.products, attrgetter("category_key"))
        counts = group_by(generated.products, attrgetter("category_key"), counting())

        assert counts == {key: len(members) for key, members in lists.items()}


class TestAggregateProperties:
    def test_statistics_agree_with_individual_folds(self, generated: Snapshot) -> None:
        stats = summarize(generated.products, price)

        assert stats.count == len(generated.products)
        assert stats.sum == total(generated.products, price)
        assert stats.min == min(p.price for p in generated.products)
        assert stats.max == max(p.price for p in generated.products)
        assert stats.average == stats.sum / stats.count
        assert all(stats.min <= p.price <= stats.max for p in generated.products)

    def test_lump_sum_equals_sum_of_order_totals(self, generated: Snapshot) -> None:
        start = date(2021, 2, 1)
        totals = queries.order_totals(generated)
        expected = sum(
            (value for order, value in totals.items() if order.order_date >= start),
            Decimal(0),
        )

        assert queries.lump_sum_since(generated, start) == expected
        assert queries.lump_sum_since_by_reduce(generated, start) == expected
