"""
Predicate Library for ShopQuery.

Predicates are pure boolean functions over a single entity. They compose
with ``&`` (and), ``|`` (or) and ``~`` (not); composition evaluates left to
right and short-circuits like Python's own boolean operators.

Relationship-aware predicates (``has_product``, ``ordered_where``,
``customer_tier_is``) take the snapshot they traverse.
"""

import calendar
from collections.abc import Callable
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Generic, TypeVar

from shopquery.core.domain.models import Customer, Order, Product

if TYPE_CHECKING:
    from shopquery.core.domain.snapshot import Snapshot

T = TypeVar("T")

Number = Decimal | int | float


class Predicate(Generic[T]):
    """A named, composable boolean test over one entity."""

    __slots__ = ("_test", "description")

    def __init__(self, test: Callable[[T], bool], description: str = "predicate"):
        self._test = test
        self.description = description

    def __call__(self, item: T) -> bool:
        return bool(self._test(item))

    def and_(self, other: "Predicate[T]") -> "Predicate[T]":
        return Predicate(
            lambda item: self(item) and other(item),
            f"({self.description} and {other.description})",
        )

    def or_(self, other: "Predicate[T]") -> "Predicate[T]":
        return Predicate(
            lambda item: self(item) or other(item),
            f"({self.description} or {other.description})",
        )

    def negate(self) -> "Predicate[T]":
        return Predicate(lambda item: not self(item), f"not {self.description}")

    __and__ = and_
    __or__ = or_
    __invert__ = negate

    def __repr__(self) -> str:
        return f"Predicate({self.description})"


def always() -> Predicate:
    """Predicate accepting everything (identity for ``all_of``)."""
    return Predicate(lambda _item: True, "always")


def never() -> Predicate:
    """Predicate rejecting everything (identity for ``any_of``)."""
    return Predicate(lambda _item: False, "never")


def all_of(*predicates: Predicate[T]) -> Predicate[T]:
    """Conjunction of ``predicates``; true for an empty argument list."""
    if not predicates:
        return always()
    combined = predicates[0]
    for predicate in predicates[1:]:
        combined = combined & predicate
    return combined


def any_of(*predicates: Predicate[T]) -> Predicate[T]:
    """Disjunction of ``predicates``; false for an empty argument list."""
    if not predicates:
        return never()
    combined = predicates[0]
    for predicate in predicates[1:]:
        combined = combined | predicate
    return combined


# -----------------------------
# Product predicates
# -----------------------------


def category_is(category: str) -> Predicate[Product]:
    """Case-insensitive category match."""
    wanted = category.casefold()
    return Predicate(lambda p: p.category_key == wanted, f"category = {category!r}")


def price_above(threshold: Number) -> Predicate[Product]:
    limit = _decimal(threshold)
    return Predicate(lambda p: p.price > limit, f"price > {limit}")


def price_at_least(threshold: Number) -> Predicate[Product]:
    limit = _decimal(threshold)
    return Predicate(lambda p: p.price >= limit, f"price >= {limit}")


def price_below(threshold: Number) -> Predicate[Product]:
    limit = _decimal(threshold)
    return Predicate(lambda p: p.price < limit, f"price < {limit}")


def price_at_most(threshold: Number) -> Predicate[Product]:
    limit = _decimal(threshold)
    return Predicate(lambda p: p.price <= limit, f"price <= {limit}")


def price_between(low: Number, high: Number) -> Predicate[Product]:
    """Inclusive price range."""
    lo, hi = _decimal(low), _decimal(high)
    return Predicate(lambda p: lo <= p.price <= hi, f"price between {lo} and {hi}")


def ordered_where(snapshot: "Snapshot", predicate: Predicate[Order]) -> Predicate[Product]:
    """Products appearing in at least one order matching ``predicate``."""
    return Predicate(
        lambda p: any(predicate(order) for order in snapshot.orders_of(p)),
        f"any order where {predicate.description}",
    )


# -----------------------------
# Order predicates
# -----------------------------


def ordered_between(start: date, end: date) -> Predicate[Order]:
    """Order date within ``[start, end]``, both ends inclusive."""
    return Predicate(
        lambda o: start <= o.order_date <= end,
        f"order_date between {start} and {end}",
    )


def ordered_on(day: date) -> Predicate[Order]:
    return Predicate(lambda o: o.order_date == day, f"order_date = {day}")


def ordered_from_to_month_end(start: date) -> Predicate[Order]:
    """
    Order date on or after ``start`` and no later than the last day of the
    order's own month.
    """
    return Predicate(
        lambda o: start <= o.order_date <= last_day_of_month(o.order_date),
        f"order_date >= {start} and within its month",
    )


def customer_tier_is(snapshot: "Snapshot", tier: int) -> Predicate[Order]:
    """Orders placed by a customer of the given tier."""
    return Predicate(
        lambda o: snapshot.customer_of(o).tier == tier, f"customer tier = {tier}"
    )


def has_product(snapshot: "Snapshot", predicate: Predicate[Product]) -> Predicate[Order]:
    """Orders holding at least one product matching ``predicate``."""
    return Predicate(
        lambda o: any(predicate(product) for product in snapshot.products_of(o)),
        f"any product where {predicate.description}",
    )


# -----------------------------
# Customer predicates
# -----------------------------


def tier_is(tier: int) -> Predicate[Customer]:
    return Predicate(lambda c: c.tier == tier, f"tier = {tier}")


# -----------------------------
# Helpers
# -----------------------------


def last_day_of_month(day: date) -> date:
    """Return the last calendar day of ``day``'s month."""
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def _decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
