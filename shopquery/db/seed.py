"""Synthetic dataset generator and seed script for local development."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from faker import Faker
from sqlalchemy import insert
from sqlalchemy.orm import Session

from shopquery.config import configure_logging, get_settings
from shopquery.core.domain.models import Customer, Order, Product
from shopquery.db.base import Base, get_engine
from shopquery.db.models import CustomerRecord, OrderRecord, ProductRecord, order_product
from shopquery.db.session import make_session_factory

logger = logging.getLogger(__name__)

PRODUCT_CATEGORIES = ["Books", "Toys", "Baby", "Games", "Grocery"]
ORDER_STATUSES = ["NEW", "PENDING", "DELIVERED"]
TIERS = [1, 2, 3]
PERIOD_START = date(2021, 1, 1)
PERIOD_DAYS = 120  # Jan 1st to Apr 30th 2021
MAX_PRODUCTS_PER_ORDER = 4


@dataclass(frozen=True)
class Dataset:
    """Customers, products and orders that reference each other consistently."""

    customers: tuple[Customer, ...]
    products: tuple[Product, ...]
    orders: tuple[Order, ...]


def generate_customers(fake: Faker, rng: random.Random, count: int) -> list[Customer]:
    return [
        Customer(id=idx, name=fake.name(), tier=rng.choice(TIERS))
        for idx in range(1, count + 1)
    ]


def generate_products(fake: Faker, rng: random.Random, count: int) -> list[Product]:
    products = []
    for idx in range(1, count + 1):
        category = rng.choice(PRODUCT_CATEGORIES)
        products.append(
            Product(
                id=idx,
                name=f"{fake.word().title()} {category.rstrip('s')}",
                category=category,
                price=Decimal(rng.randint(500, 30000)) / 100,
            )
        )
    return products


def generate_orders(
    rng: random.Random,
    count: int,
    customers: list[Customer],
    products: list[Product],
) -> list[Order]:
    if count and not customers:
        raise ValueError("Cannot generate orders without customers")

    orders = []
    for idx in range(1, count + 1):
        order_date = PERIOD_START + timedelta(days=rng.randint(0, PERIOD_DAYS - 1))
        status = rng.choice(ORDER_STATUSES)
        size = rng.randint(0, min(MAX_PRODUCTS_PER_ORDER, len(products)))
        chosen = rng.sample(products, size)
        orders.append(
            Order(
                id=idx,
                order_date=order_date,
                customer_id=rng.choice(customers).id,
                product_ids=tuple(product.id for product in chosen),
                status=status,
                delivery_date=(
                    order_date + timedelta(days=rng.randint(1, 7))
                    if status == "DELIVERED"
                    else None
                ),
            )
        )
    return orders


def generate_dataset(
    customers: int | None = None,
    products: int | None = None,
    orders: int | None = None,
    seed: int | None = None,
) -> Dataset:
    """
    Generate a referentially consistent dataset.

    Counts and seed default to the configured ``seed_*`` settings; the same
    seed always yields the same dataset.
    """
    settings = get_settings()
    seed = settings.seed_random_seed if seed is None else seed

    fake = Faker()
    fake.seed_instance(seed)
    rng = random.Random(seed)

    customer_list = generate_customers(
        fake, rng, settings.seed_customers if customers is None else customers
    )
    product_list = generate_products(
        fake, rng, settings.seed_products if products is None else products
    )
    order_list = generate_orders(
        rng, settings.seed_orders if orders is None else orders, customer_list, product_list
    )
    logger.info(
        "Generated dataset: %d customers, %d products, %d orders (seed=%d)",
        len(customer_list),
        len(product_list),
        len(order_list),
        seed,
    )
    return Dataset(tuple(customer_list), tuple(product_list), tuple(order_list))


def write_dataset(session: Session, dataset: Dataset) -> None:
    """Insert a dataset through ``session``; the caller commits."""
    session.add_all(
        CustomerRecord(id=c.id, name=c.name, tier=c.tier) for c in dataset.customers
    )
    session.add_all(
        ProductRecord(id=p.id, name=p.name, category=p.category, price=p.price)
        for p in dataset.products
    )
    session.add_all(
        OrderRecord(
            id=o.id,
            order_date=o.order_date,
            delivery_date=o.delivery_date,
            status=o.status,
            customer_id=o.customer_id,
        )
        for o in dataset.orders
    )
    session.flush()

    links = [
        {"order_id": o.id, "position": position, "product_id": product_id}
        for o in dataset.orders
        for position, product_id in enumerate(o.product_ids)
    ]
    if links:
        session.execute(insert(order_product), links)


def main() -> None:
    configure_logging()
    engine = get_engine()
    Base.metadata.create_all(engine)

    session = make_session_factory(engine)()
    try:
        write_dataset(session, generate_dataset())
        session.commit()
        logger.info("Seeded %s with synthetic data", engine.url)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
