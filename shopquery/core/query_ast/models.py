"""
Declarative query models for ShopQuery.

These models describe filters and sort orders as data, so that
callers (a console, an API, a test) can build queries without writing
lambdas. They represent query intent; the predicate compiler and the
engine turn them into executable predicates and keys.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# -----------------------------
# Enums
# -----------------------------


class FilterOperator(str, Enum):
    """Supported filter operators."""

    EQ = "="
    NOT_EQ = "!="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    BETWEEN = "between"
    IN = "in"
    NOT_IN = "not_in"


class OrderDirection(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


# -----------------------------
# Nodes
# -----------------------------


class Filter(BaseModel):
    """
    A single field condition.

    Examples:
        category = 'Books'
        price > 100
        order_date BETWEEN '2021-02-01' AND '2021-04-01'
    """

    model_config = ConfigDict(frozen=True)

    field: str
    operator: FilterOperator
    value: Any  # single value, or a 2-sequence for BETWEEN, or a list for IN


class OrderBy(BaseModel):
    """
    A sort instruction.

    Example:
        price ASC, limit 3
    """

    model_config = ConfigDict(frozen=True)

    field: str
    direction: OrderDirection = OrderDirection.ASC
    limit: int | None = Field(default=None, ge=0, description="Maximum items to keep")
