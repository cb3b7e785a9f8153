"""
Domain entities for ShopQuery.

Customers, products and orders are immutable values. Relationships are
expressed by id only; resolving an id to its entity is the job of the
Snapshot that owns the loaded collections.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class Customer(BaseModel):
    """A buyer, ranked by tier (1 = entry level)."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    tier: int


class Product(BaseModel):
    """
    A catalog item.

    Category labels are compared case-insensitively; use
    ``category_key`` when a normalized label is needed.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    category: str
    price: Decimal = Field(..., ge=0)

    @property
    def category_key(self) -> str:
        """Category normalized for case-insensitive comparison."""
        return self.category.casefold()

    def with_price(self, price: Decimal | int | float | str) -> "Product":
        """Return a copy of this product carrying a different price."""
        return Product.model_validate(
            {**self.model_dump(), "price": Decimal(str(price))}
        )

    def with_category(self, category: str) -> "Product":
        """Return a copy of this product filed under a different category."""
        return Product.model_validate({**self.model_dump(), "category": category})


class Order(BaseModel):
    """
    A purchase placed by one customer for zero or more products.

    ``product_ids`` keeps the order in which products were attached.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    order_date: date
    customer_id: int
    product_ids: tuple[int, ...] = ()
    status: str | None = None
    delivery_date: date | None = None
