"""
Catalogue of named analytical queries.

Each query is a small pipeline of engine operations over a Snapshot and
returns a plain Python value. Presentation is left to the caller.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from operator import attrgetter
from typing import Any

from shopquery.core.domain import Customer, Order, Product, Snapshot
from shopquery.core.engine import (
    SummaryStatistics,
    average,
    collecting_and_then,
    discount,
    filter_by,
    flatten,
    group_by,
    index_by,
    mapping,
    max_by,
    order_by,
    reduce_values,
    sort_limit,
    summarize,
    total,
    transform,
)
from shopquery.core.predicates import (
    category_is,
    customer_tier_is,
    has_product,
    ordered_between,
    ordered_from_to_month_end,
    ordered_on,
    ordered_where,
    price_above,
)
from shopquery.core.query_ast.models import OrderBy, OrderDirection
from shopquery.core.schema_registry.registry import EntityKind

price = attrgetter("price")


def books_over_100(snapshot: Snapshot) -> list[Product]:
    """Products in the Books category priced above 100."""
    return filter_by(snapshot.products, category_is("Books") & price_above(100))


def orders_with_baby_products(snapshot: Snapshot) -> list[Order]:
    """Orders containing at least one Baby product."""
    return filter_by(snapshot.orders, has_product(snapshot, category_is("Baby")))


def orders_of_baby_products(snapshot: Snapshot) -> list[Order]:
    """
    Orders reached from each Baby product through the reverse index.

    An order holding two Baby products appears once per product.
    """
    return flatten(filter_by(snapshot.products, category_is("Baby")), snapshot.orders_of)


def discounted_toys(snapshot: Snapshot, rate: str = "0.1") -> list[Product]:
    """Toys with a discount applied; the snapshot keeps the original prices."""
    return transform(filter_by(snapshot.products, category_is("Toys")), discount(rate))


def tier2_products_feb_to_apr(snapshot: Snapshot) -> list[Product]:
    """Distinct products ordered by tier 2 customers from 2021-02-01 to 2021-04-01."""
    orders = filter_by(
        snapshot.orders,
        customer_tier_is(snapshot, 2) & ordered_between(date(2021, 2, 1), date(2021, 4, 1)),
    )
    return flatten(orders, snapshot.products_of, distinct=True)


def tier2_products_feb_to_apr_by_product(snapshot: Snapshot) -> list[Product]:
    """Same question answered from the product side, through the reverse index."""
    return filter_by(
        snapshot.products,
        ordered_where(
            snapshot,
            customer_tier_is(snapshot, 2)
            & ordered_between(date(2021, 2, 1), date(2021, 4, 1)),
        ),
    )


def cheapest_books(snapshot: Snapshot, limit: int = 3) -> list[Product]:
    return sort_limit(filter_by(snapshot.products, category_is("Books")), price, limit=limit)


def latest_orders(snapshot: Snapshot, limit: int = 3) -> list[Order]:
    return order_by(
        snapshot.orders,
        EntityKind.ORDER,
        OrderBy(field="order_date", direction=OrderDirection.DESC, limit=limit),
    )


def products_ordered_on(snapshot: Snapshot, day: date = date(2021, 3, 15)) -> list[Product]:
    return filter_by(snapshot.products, ordered_where(snapshot, ordered_on(day)))


def lump_sum_since(snapshot: Snapshot, start: date = date(2021, 2, 1)) -> Decimal:
    """
    Total price of every product in orders placed from ``start`` up to the
    end of each order's own month.
    """
    orders = filter_by(snapshot.orders, ordered_from_to_month_end(start))
    return total(flatten(orders, snapshot.products_of), price)


def lump_sum_since_by_reduce(snapshot: Snapshot, start: date = date(2021, 2, 1)) -> Decimal:
    orders = filter_by(snapshot.orders, ordered_from_to_month_end(start))
    return reduce_values(
        flatten(orders, snapshot.products_of),
        price,
        lambda acc, value: acc + value,
        Decimal(0),
    )


def average_price_on(snapshot: Snapshot, day: date = date(2021, 3, 15)) -> Decimal:
    """Average product price over orders placed on ``day``; raises when none."""
    orders = filter_by(snapshot.orders, ordered_on(day))
    return average(flatten(orders, snapshot.products_of), price)


def books_statistics(snapshot: Snapshot) -> SummaryStatistics:
    return summarize(filter_by(snapshot.products, category_is("Books")), price)


def product_count_by_order(snapshot: Snapshot) -> dict[int, int]:
    return index_by(snapshot.orders, attrgetter("id"), lambda o: len(o.product_ids))


def orders_by_customer(snapshot: Snapshot) -> dict[Customer, list[Order]]:
    return group_by(snapshot.orders, snapshot.customer_of)


def order_ids_by_customer_id(snapshot: Snapshot) -> dict[int, list[int]]:
    return group_by(snapshot.orders, attrgetter("customer_id"), mapping(attrgetter("id")))


def order_totals(snapshot: Snapshot) -> dict[Order, Decimal]:
    return index_by(
        snapshot.orders,
        lambda o: o,
        lambda o: total(snapshot.products_of(o), price),
    )


def product_names_by_category(snapshot: Snapshot) -> dict[str, list[str]]:
    return group_by(snapshot.products, attrgetter("category_key"), mapping(attrgetter("name")))


def most_expensive_by_category(snapshot: Snapshot) -> dict[str, Product | None]:
    return group_by(snapshot.products, attrgetter("category_key"), max_by(price))


def most_expensive_name_by_category(snapshot: Snapshot) -> dict[str, str | None]:
    return group_by(
        snapshot.products,
        attrgetter("category_key"),
        collecting_and_then(max_by(price), lambda p: p.name if p is not None else None),
    )


@dataclass(frozen=True)
class NamedQuery:
    """A catalogue entry: a title plus the pipeline answering it."""

    key: str
    title: str
    run: Callable[[Snapshot], Any]


CATALOGUE: tuple[NamedQuery, ...] = (
    NamedQuery("1", "Books priced above 100", books_over_100),
    NamedQuery("2", "Orders containing Baby products", orders_with_baby_products),
    NamedQuery(
        "2a", "Orders of Baby products (reverse index)", orders_of_baby_products
    ),
    NamedQuery("3", "Toys with a 10% discount", discounted_toys),
    NamedQuery("4", "Products ordered by tier 2, Feb-Apr 2021", tier2_products_feb_to_apr),
    NamedQuery(
        "4a",
        "Products ordered by tier 2, Feb-Apr 2021 (reverse index)",
        tier2_products_feb_to_apr_by_product,
    ),
    NamedQuery("5", "3 cheapest Books", cheapest_books),
    NamedQuery("6", "3 most recent orders", latest_orders),
    NamedQuery("7", "Products ordered on 2021-03-15", products_ordered_on),
    NamedQuery("8", "Lump sum of orders since 2021-02-01", lump_sum_since),
    NamedQuery("8a", "Lump sum of orders since 2021-02-01 (reduce)", lump_sum_since_by_reduce),
    NamedQuery("9", "Average price of 2021-03-15 orders", average_price_on),
    NamedQuery("10", "Books price statistics", books_statistics),
    NamedQuery("11", "Product count per order", product_count_by_order),
    NamedQuery("12", "Orders per customer", orders_by_customer),
    NamedQuery("12a", "Order ids per customer id", order_ids_by_customer_id),
    NamedQuery("13", "Total price per order", order_totals),
    NamedQuery("14", "Product names per category", product_names_by_category),
    NamedQuery("15", "Most expensive product per category", most_expensive_by_category),
    NamedQuery(
        "15a", "Most expensive product name per category", most_expensive_name_by_category
    ),
)
