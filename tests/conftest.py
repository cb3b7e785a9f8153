"""
Shared fixtures: a small, hand-checked dataset.

Customers
    1 Alice (tier 1), 2 Bob (tier 2), 3 Carol (tier 2), 4 Dan (tier 3)

Products
    1 Dune      Books   120.00
    2 Emma      Books    80.00
    3 Robot     Toys     50.00
    4 Stroller  Baby    300.00
    5 Ulysses   books   150.00   (lower-case category on purpose)
    6 Blocks    Toys     20.50
    7 Bottle    Baby     15.00
    8 Chess     Games    40.00

Orders
    1  2021-01-20  Alice  [1, 3]
    2  2021-02-01  Bob    [1, 4]
    3  2021-02-14  Bob    [2, 3, 2]   (product 2 twice)
    4  2021-02-28  Carol  [5]
    5  2021-03-01  Alice  [6, 7]
    6  2021-03-15  Bob    [7, 8]
    7  2021-03-15  Dan    [1]
    8  2021-04-01  Carol  [3, 4]
    9  2021-04-02  Bob    [5]
    10 2021-03-15  Carol  []
"""

from datetime import date
from decimal import Decimal

import pytest

from shopquery.core.domain import Customer, Order, Product, Snapshot


@pytest.fixture
def customers() -> list[Customer]:
    return [
        Customer(id=1, name="Alice", tier=1),
        Customer(id=2, name="Bob", tier=2),
        Customer(id=3, name="Carol", tier=2),
        Customer(id=4, name="Dan", tier=3),
    ]


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(id=1, name="Dune", category="Books", price=Decimal("120.00")),
        Product(id=2, name="Emma", category="Books", price=Decimal("80.00")),
        Product(id=3, name="Robot", category="Toys", price=Decimal("50.00")),
        Product(id=4, name="Stroller", category="Baby", price=Decimal("300.00")),
        Product(id=5, name="Ulysses", category="books", price=Decimal("150.00")),
        Product(id=6, name="Blocks", category="Toys", price=Decimal("20.50")),
        Product(id=7, name="Bottle", category="Baby", price=Decimal("15.00")),
        Product(id=8, name="Chess", category="Games", price=Decimal("40.00")),
    ]


@pytest.fixture
def orders() -> list[Order]:
    return [
        Order(id=1, order_date=date(2021, 1, 20), customer_id=1, product_ids=(1, 3)),
        Order(id=2, order_date=date(2021, 2, 1), customer_id=2, product_ids=(1, 4)),
        Order(id=3, order_date=date(2021, 2, 14), customer_id=2, product_ids=(2, 3, 2)),
        Order(
            id=4,
            order_date=date(2021, 2, 28),
            customer_id=3,
            product_ids=(5,),
            status="DELIVERED",
            delivery_date=date(2021, 3, 3),
        ),
        Order(id=5, order_date=date(2021, 3, 1), customer_id=1, product_ids=(6, 7)),
        Order(id=6, order_date=date(2021, 3, 15), customer_id=2, product_ids=(7, 8)),
        Order(id=7, order_date=date(2021, 3, 15), customer_id=4, product_ids=(1,)),
        Order(
            id=8,
            order_date=date(2021, 4, 1),
            customer_id=3,
            product_ids=(3, 4),
            status="pending",
        ),
        Order(id=9, order_date=date(2021, 4, 2), customer_id=2, product_ids=(5,)),
        Order(id=10, order_date=date(2021, 3, 15), customer_id=3, product_ids=()),
    ]


@pytest.fixture
def snapshot(customers, products, orders) -> Snapshot:
    return Snapshot(customers=customers, products=products, orders=orders)