"""
Data sources feeding a Snapshot.

A source exposes exactly one operation, ``load_all()``, returning the full
collection of one entity kind. The SQL sources are read-only: they issue a
single SELECT per call and convert rows into immutable domain entities.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Generic, Protocol, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from shopquery.core.domain.models import Customer, Order, Product
from shopquery.db.models import CustomerRecord, OrderRecord, ProductRecord, order_product
from shopquery.db.session import make_session_factory

logger = logging.getLogger(__name__)

E = TypeVar("E", Customer, Product, Order)


# -----------------------------
# Source contracts
# -----------------------------


class CustomerSource(Protocol):
    def load_all(self) -> Sequence[Customer]: ...


class ProductSource(Protocol):
    def load_all(self) -> Sequence[Product]: ...


class OrderSource(Protocol):
    def load_all(self) -> Sequence[Order]: ...


# -----------------------------
# In-memory source
# -----------------------------


class InMemorySource(Generic[E]):
    """Source over entities that are already in memory."""

    def __init__(self, entities: Iterable[E]):
        self._entities = tuple(entities)

    def load_all(self) -> Sequence[E]:
        return self._entities


# -----------------------------
# SQL sources
# -----------------------------


class _SqlSource:
    """Shared session handling for the SQL sources."""

    def __init__(self, session_factory: sessionmaker[Session] | None = None):
        """
        Initialize the source.

        Args:
            session_factory: Factory for read sessions.
                Uses the configured database if not provided.
        """
        self._session_factory = session_factory or make_session_factory()


class SqlCustomerSource(_SqlSource):
    """Loads every row of the ``customers`` table."""

    def load_all(self) -> Sequence[Customer]:
        with self._session_factory() as session:
            rows = session.scalars(select(CustomerRecord).order_by(CustomerRecord.id)).all()
            customers = [Customer(id=row.id, name=row.name, tier=row.tier) for row in rows]
        logger.info("Loaded %d customers", len(customers))
        return customers


class SqlProductSource(_SqlSource):
    """Loads every row of the ``products`` table."""

    def load_all(self) -> Sequence[Product]:
        with self._session_factory() as session:
            rows = session.scalars(select(ProductRecord).order_by(ProductRecord.id)).all()
            products = [
                Product(id=row.id, name=row.name, category=row.category, price=row.price)
                for row in rows
            ]
        logger.info("Loaded %d products", len(products))
        return products


class SqlOrderSource(_SqlSource):
    """Loads every order together with its ordered product ids."""

    def load_all(self) -> Sequence[Order]:
        with self._session_factory() as session:
            links = session.execute(
                select(order_product.c.order_id, order_product.c.product_id).order_by(
                    order_product.c.order_id, order_product.c.position
                )
            ).all()
            product_ids: dict[int, list[int]] = {}
            for order_id, product_id in links:
                product_ids.setdefault(order_id, []).append(product_id)

            rows = session.scalars(select(OrderRecord).order_by(OrderRecord.id)).all()
            orders = [
                Order(
                    id=row.id,
                    order_date=row.order_date,
                    customer_id=row.customer_id,
                    product_ids=tuple(product_ids.get(row.id, ())),
                    status=row.status,
                    delivery_date=row.delivery_date,
                )
                for row in rows
            ]
        logger.info("Loaded %d orders", len(orders))
        return orders
