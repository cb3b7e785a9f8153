"""Safety module for ShopQuery - filter and sort validation."""

from .validator import FilterValidationError, FilterValidator

__all__ = [
    "FilterValidationError",
    "FilterValidator",
]
