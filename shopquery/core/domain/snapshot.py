"""
Snapshot of a single load cycle.

A Snapshot owns the immutable customer, product and order collections and
resolves the relationships between them through id-indexed lookup tables:

- Order -> Customer   (forward, via ``customer_id``)
- Order -> Products   (forward, via ``product_ids``)
- Product -> Orders   (reverse index, built lazily and only once)

Entities never hold references to each other.
"""

import logging
import threading
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, TypeVar

from shopquery.core.domain.models import Customer, Order, Product
from shopquery.core.errors import QueryEngineError

if TYPE_CHECKING:
    from shopquery.db.sources import CustomerSource, OrderSource, ProductSource

logger = logging.getLogger(__name__)

_E = TypeVar("_E", Customer, Product, Order)


# -----------------------------
# Errors
# -----------------------------


class BrokenReferenceError(QueryEngineError):
    """Raised when a relationship points at an id missing from the snapshot."""

    def __init__(self, entity: str, entity_id: int, referenced_by: str | None = None):
        self.entity = entity
        self.entity_id = entity_id
        self.referenced_by = referenced_by
        message = f"{entity} {entity_id} is not part of the loaded snapshot"
        if referenced_by:
            message += f" (referenced by {referenced_by})"
        super().__init__(message)


# -----------------------------
# Snapshot
# -----------------------------


class Snapshot:
    """
    Read-only view over one load of customers, products and orders.

    Forward lookups use maps built at construction time. The reverse
    product -> orders index is built on first use under a lock, so that
    concurrent readers sharing a snapshot trigger at most one build.
    """

    def __init__(
        self,
        customers: Iterable[Customer],
        products: Iterable[Product],
        orders: Iterable[Order],
    ):
        self._customers: tuple[Customer, ...] = tuple(customers)
        self._products: tuple[Product, ...] = tuple(products)
        self._orders: tuple[Order, ...] = tuple(orders)

        self._customer_index = _index(self._customers)
        self._product_index = _index(self._products)
        self._order_index = _index(self._orders)

        self._orders_by_product: Mapping[int, tuple[int, ...]] | None = None
        self._reverse_lock = threading.Lock()
        self.reverse_index_builds = 0

    @classmethod
    def load(
        cls,
        customer_source: "CustomerSource",
        product_source: "ProductSource",
        order_source: "OrderSource",
    ) -> "Snapshot":
        """Read every source once and build a snapshot from the results."""
        snapshot = cls(
            customers=customer_source.load_all(),
            products=product_source.load_all(),
            orders=order_source.load_all(),
        )
        logger.info(
            "Loaded snapshot: %d customers, %d products, %d orders",
            len(snapshot.customers),
            len(snapshot.products),
            len(snapshot.orders),
        )
        return snapshot

    # -------------------------
    # Collections
    # -------------------------

    @property
    def customers(self) -> tuple[Customer, ...]:
        return self._customers

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    @property
    def orders(self) -> tuple[Order, ...]:
        return self._orders

    # -------------------------
    # Lookups
    # -------------------------

    def customer(self, customer_id: int) -> Customer:
        """Get a customer by id."""
        try:
            return self._customer_index[customer_id]
        except KeyError:
            raise BrokenReferenceError("Customer", customer_id) from None

    def product(self, product_id: int) -> Product:
        """Get a product by id."""
        try:
            return self._product_index[product_id]
        except KeyError:
            raise BrokenReferenceError("Product", product_id) from None

    def order(self, order_id: int) -> Order:
        """Get an order by id."""
        try:
            return self._order_index[order_id]
        except KeyError:
            raise BrokenReferenceError("Order", order_id) from None

    # -------------------------
    # Traversal
    # -------------------------

    def customer_of(self, order: Order) -> Customer:
        """Resolve the customer who placed ``order``."""
        customer = self._customer_index.get(order.customer_id)
        if customer is None:
            raise BrokenReferenceError(
                "Customer", order.customer_id, referenced_by=f"Order {order.id}"
            )
        return customer

    def products_of(self, order: Order) -> tuple[Product, ...]:
        """Resolve the products attached to ``order``, in attachment order."""
        products = []
        for product_id in order.product_ids:
            product = self._product_index.get(product_id)
            if product is None:
                raise BrokenReferenceError(
                    "Product", product_id, referenced_by=f"Order {order.id}"
                )
            products.append(product)
        return tuple(products)

    def orders_of(self, product: Product) -> tuple[Order, ...]:
        """Resolve the orders containing ``product``, in snapshot order."""
        order_ids = self._reverse_index().get(product.id, ())
        return tuple(self._order_index[order_id] for order_id in order_ids)

    def verify(self) -> None:
        """
        Walk every forward reference once.

        Raises:
            BrokenReferenceError: On the first reference that does not resolve.
        """
        for order in self._orders:
            self.customer_of(order)
            self.products_of(order)

    # -------------------------
    # Helpers
    # -------------------------

    def _reverse_index(self) -> Mapping[int, tuple[int, ...]]:
        """Return the product -> order ids index, building it on first use."""
        index = self._orders_by_product
        if index is not None:
            return index

        with self._reverse_lock:
            if self._orders_by_product is None:
                self._orders_by_product = self._build_reverse_index()
            return self._orders_by_product

    def _build_reverse_index(self) -> Mapping[int, tuple[int, ...]]:
        buckets: dict[int, list[int]] = {}
        for order in self._order_index.values():
            # dict.fromkeys drops repeats while keeping attachment order
            for product_id in dict.fromkeys(order.product_ids):
                buckets.setdefault(product_id, []).append(order.id)

        self.reverse_index_builds += 1
        logger.debug("Built reverse index for %d products", len(buckets))
        return {product_id: tuple(ids) for product_id, ids in buckets.items()}


def _index(entities: Sequence[_E]) -> dict[int, _E]:
    """Map entity id to entity. Later duplicates do not replace earlier ones."""
    index: dict[int, _E] = {}
    for entity in entities:
        index.setdefault(entity.id, entity)
    return index
