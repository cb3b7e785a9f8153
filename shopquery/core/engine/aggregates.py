"""
Reduce/aggregate operations.

Folds are seeded explicitly, so a sum over nothing is just its seed. The
average, minimum and maximum of an empty sequence have no meaningful value
and raise EmptyAggregationError instead.
"""

from collections.abc import Callable, Iterable
from decimal import Decimal
from typing import TypeVar

from shopquery.core.errors import QueryEngineError

T = TypeVar("T")
A = TypeVar("A")

Number = Decimal | int | float


# -----------------------------
# Errors
# -----------------------------


class EmptyAggregationError(QueryEngineError):
    """Raised when an aggregate needs at least one value and got none."""

    def __init__(self, aggregate: str):
        self.aggregate = aggregate
        super().__init__(f"Cannot compute {aggregate} of an empty sequence")


# -----------------------------
# Folds
# -----------------------------


def reduce_values(
    items: Iterable[T],
    extract: Callable[[T], A],
    combiner: Callable[[A, A], A],
    seed: A,
) -> A:
    """
    Fold ``extract(item)`` values into ``seed`` using ``combiner``.

    Returns ``seed`` unchanged for an empty input.
    """
    result = seed
    for item in items:
        result = combiner(result, extract(item))
    return result


def total(items: Iterable[T], extract: Callable[[T], Number], seed: Number = 0) -> Number:
    """Sum of extracted values; ``seed`` for an empty input."""
    return reduce_values(items, extract, lambda acc, value: acc + value, seed)


def average(items: Iterable[T], extract: Callable[[T], Number]) -> Number:
    """
    Arithmetic mean of extracted values.

    Raises:
        EmptyAggregationError: If ``items`` is empty.
    """
    count = 0
    running = 0
    for item in items:
        running += extract(item)
        count += 1
    if count == 0:
        raise EmptyAggregationError("average")
    return running / count


def minimum(items: Iterable[T], extract: Callable[[T], Number]) -> Number:
    """Smallest extracted value. Raises EmptyAggregationError when empty."""
    return _extreme(items, extract, "minimum", lambda value, best: value < best)


def maximum(items: Iterable[T], extract: Callable[[T], Number]) -> Number:
    """Largest extracted value. Raises EmptyAggregationError when empty."""
    return _extreme(items, extract, "maximum", lambda value, best: value > best)


def _extreme(items, extract, name, better):
    found = False
    best = None
    for item in items:
        value = extract(item)
        if not found or better(value, best):
            best = value
            found = True
    if not found:
        raise EmptyAggregationError(name)
    return best
