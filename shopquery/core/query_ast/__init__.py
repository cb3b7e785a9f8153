"""Declarative filter and sort models."""

from .models import (
    Filter,
    FilterOperator,
    OrderBy,
    OrderDirection,
)

__all__ = [
    "Filter",
    "FilterOperator",
    "OrderBy",
    "OrderDirection",
]
