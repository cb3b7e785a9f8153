"""
Tests for the SQL data sources.

Writes a dataset through the ORM, then reads it back through the sources
and checks the resulting snapshot.
"""

from datetime import date
from decimal import Decimal

import pytest

from shopquery import queries
from shopquery.core.domain import BrokenReferenceError, Snapshot
from shopquery.db.seed import Dataset, write_dataset
from shopquery.db.sources import (
    InMemorySource,
    SqlCustomerSource,
    SqlOrderSource,
    SqlProductSource,
)


# -----------------------------
# Fixtures
# -----------------------------


@pytest.fixture
def stored(session_factory, customers, products, orders):
    """The shared fixture dataset, committed to the test database."""
    with session_factory() as session:
        write_dataset(session, Dataset(tuple(customers), tuple(products), tuple(orders)))
        session.commit()
    return session_factory


@pytest.fixture
def loaded(stored) -> Snapshot:
    return Snapshot.load(
        SqlCustomerSource(stored),
        SqlProductSource(stored),
        SqlOrderSource(stored),
    )


# -----------------------------
# Source Tests
# -----------------------------


class TestSqlSources:
    """Each source returns full collections as domain entities."""

    def test_customers_round_trip(self, stored, customers) -> None:
        assert list(SqlCustomerSource(stored).load_all()) == customers

    def test_products_keep_decimal_prices(self, stored) -> None:
        products = SqlProductSource(stored).load_all()

        assert products[5].price == Decimal("20.50")
        assert isinstance(products[5].price, Decimal)
        assert products[4].category == "books"

    def test_orders_keep_attachment_order_and_repeats(self, stored) -> None:
        orders = {o.id: o for o in SqlOrderSource(stored).load_all()}

        assert orders[3].product_ids == (2, 3, 2)
        assert orders[10].product_ids == ()

    def test_orders_keep_optional_fields(self, stored) -> None:
        orders = {o.id: o for o in SqlOrderSource(stored).load_all()}

        assert orders[4].status == "DELIVERED"
        assert orders[4].delivery_date == date(2021, 3, 3)
        assert orders[1].status is None
        assert orders[1].delivery_date is None

    def test_empty_database(self, session_factory) -> None:
        assert list(SqlOrderSource(session_factory).load_all()) == []
        assert list(SqlProductSource(session_factory).load_all()) == []


# -----------------------------
# Snapshot Over SQL
# -----------------------------


class TestSnapshotFromDatabase:
    """Queries answer the same over a database-loaded snapshot."""

    def test_matches_in_memory_snapshot(self, loaded: Snapshot, snapshot: Snapshot) -> None:
        assert loaded.orders == snapshot.orders
        assert loaded.products == snapshot.products

    def test_queries_agree(self, loaded: Snapshot) -> None:
        assert queries.lump_sum_since(loaded) == Decimal("1490.50")
        assert [p.id for p in queries.tier2_products_feb_to_apr(loaded)] == [1, 4, 2, 3, 5, 7, 8]

    def test_missing_products_surface_as_broken_references(self, stored) -> None:
        """Orders read from the database still point at products by id."""
        snapshot = Snapshot.load(
            SqlCustomerSource(stored),
            InMemorySource([]),
            SqlOrderSource(stored),
        )

        with pytest.raises(BrokenReferenceError, match="referenced by Order 1"):
            snapshot.verify()
