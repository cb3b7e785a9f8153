"""Predicate library: composable entity conditions and the filter compiler."""

from .compiler import PredicateCompiler
from .predicates import (
    Predicate,
    all_of,
    always,
    any_of,
    category_is,
    customer_tier_is,
    has_product,
    last_day_of_month,
    never,
    ordered_between,
    ordered_from_to_month_end,
    ordered_on,
    ordered_where,
    price_above,
    price_at_least,
    price_at_most,
    price_below,
    price_between,
    tier_is,
)

__all__ = [
    "Predicate",
    "PredicateCompiler",
    "all_of",
    "always",
    "any_of",
    "category_is",
    "customer_tier_is",
    "has_product",
    "last_day_of_month",
    "never",
    "ordered_between",
    "ordered_from_to_month_end",
    "ordered_on",
    "ordered_where",
    "price_above",
    "price_at_least",
    "price_at_most",
    "price_below",
    "price_between",
    "tier_is",
]
