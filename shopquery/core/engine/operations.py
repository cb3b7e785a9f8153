"""
Query Engine operations for ShopQuery.

Each operation reads immutable inputs and returns a new list or dict; no
input is ever modified. All of them accept empty inputs and return empty
results for them.
"""

import logging
from collections.abc import Callable, Hashable, Iterable
from decimal import ROUND_HALF_UP, Decimal
from operator import attrgetter
from typing import Any, TypeVar

from shopquery.core.domain.models import Product
from shopquery.core.engine.collectors import Collector, to_list
from shopquery.core.errors import QueryEngineError
from shopquery.core.query_ast.models import OrderBy, OrderDirection
from shopquery.core.safety.validator import FilterValidator
from shopquery.core.schema_registry.registry import EntityKind, EntityRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")
C = TypeVar("C")
K = TypeVar("K", bound=Hashable)

_CENT = Decimal("0.01")


# -----------------------------
# Errors
# -----------------------------


class DuplicateKeyError(QueryEngineError):
    """Raised when index_by meets the same key twice."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Duplicate key {key!r}")


# -----------------------------
# Filter
# -----------------------------


def filter_by(items: Iterable[T], predicate: Callable[[T], bool]) -> list[T]:
    """Keep the items satisfying ``predicate``, in input order."""
    result = [item for item in items if predicate(item)]
    logger.debug("filter_by(%s) kept %d items", _describe(predicate), len(result))
    return result


# -----------------------------
# Join-flatten
# -----------------------------


def flatten(
    parents: Iterable[T],
    children: Callable[[T], Iterable[C]],
    *,
    distinct: bool = False,
    key: Callable[[C], Hashable] = attrgetter("id"),
) -> list[C]:
    """
    Concatenate the children of every parent.

    Args:
        parents: Parent entities, e.g. orders.
        children: Resolves one parent to its children, e.g.
            ``snapshot.products_of``.
        distinct: Drop children whose ``key`` was already emitted, keeping
            the first occurrence.
        key: Identity of a child for de-duplication (entity id by default).
    """
    result: list[C] = []
    seen: set[Hashable] = set()
    for parent in parents:
        for child in children(parent):
            if distinct:
                identity = key(child)
                if identity in seen:
                    continue
                seen.add(identity)
            result.append(child)
    return result


# -----------------------------
# Transform-with-copy
# -----------------------------


def transform(items: Iterable[T], fn: Callable[[T], T]) -> list[T]:
    """Return ``fn(item)`` for every item; ``fn`` must build new values."""
    return [fn(item) for item in items]


def discount(rate: Decimal | float | str) -> Callable[[Product], Product]:
    """
    Build a copy function that lowers a product's price by ``rate``.

    ``discount("0.1")`` takes 10% off; prices are rounded half-up to cents.
    """
    rate = Decimal(str(rate))
    if not Decimal(0) <= rate <= Decimal(1):
        raise ValueError(f"Discount rate must be within [0, 1], got {rate}")
    factor = Decimal(1) - rate

    def apply(product: Product) -> Product:
        return product.with_price((product.price * factor).quantize(_CENT, ROUND_HALF_UP))

    return apply


# -----------------------------
# Sort + Limit
# -----------------------------


def sort_limit(
    items: Iterable[T],
    key: Callable[[T], Any],
    *,
    descending: bool = False,
    limit: int | None = None,
) -> list[T]:
    """
    Sort by ``key`` and keep at most ``limit`` items.

    The sort is stable in both directions: items with equal keys keep their
    input order. A limit above the item count keeps everything.
    """
    if limit is not None and limit < 0:
        raise ValueError(f"Limit must be non-negative, got {limit}")

    # sorted(reverse=True) preserves the input order of equal keys
    ordered = sorted(items, key=key, reverse=descending)
    return ordered if limit is None else ordered[:limit]


def order_by(
    items: Iterable[T],
    kind: EntityKind,
    order: OrderBy,
    registry: EntityRegistry | None = None,
) -> list[T]:
    """
    Sort by a declarative OrderBy over entities of ``kind``.

    The field is validated against the registry and read the way filters
    read it, so case-insensitive strings sort by their casefolded form.
    Items whose field is missing (None) follow every other item, in input
    order, whatever the direction.

    Raises:
        FilterValidationError: If ``order.field`` does not exist on ``kind``.
    """
    field_meta = FilterValidator(registry=registry).validate_order_by(kind, order)

    present: list[T] = []
    missing: list[T] = []
    for item in items:
        if field_meta.nullable and field_meta.read(item) is None:
            missing.append(item)
        else:
            present.append(item)

    ordered = sort_limit(
        present, field_meta.read, descending=order.direction == OrderDirection.DESC
    )
    ordered.extend(missing)
    return ordered if order.limit is None else ordered[: order.limit]


# -----------------------------
# Group-By
# -----------------------------


def group_by(
    items: Iterable[T],
    key: Callable[[T], K],
    collector: Collector | None = None,
) -> dict[K, Any]:
    """
    Group items by ``key`` and collect each group.

    Keys appear in the order they were first seen; members are handed to
    the collector in input order.
    """
    collector = collector or to_list()
    buckets: dict[K, list[T]] = {}
    for item in items:
        buckets.setdefault(key(item), []).append(item)

    logger.debug("group_by produced %d groups via %s", len(buckets), collector.name)
    return {group_key: collector(members) for group_key, members in buckets.items()}


def index_by(
    items: Iterable[T],
    key: Callable[[T], K],
    value: Callable[[T], Any] | None = None,
) -> dict[K, Any]:
    """
    Build a one-to-one mapping ``key(item) -> value(item)``.

    Raises:
        DuplicateKeyError: If two items share a key.
    """
    result: dict[K, Any] = {}
    for item in items:
        item_key = key(item)
        if item_key in result:
            raise DuplicateKeyError(item_key)
        result[item_key] = value(item) if value is not None else item
    return result


def _describe(predicate: Callable) -> str:
    return getattr(predicate, "description", getattr(predicate, "__name__", "predicate"))
