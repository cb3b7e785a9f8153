"""Domain model: immutable entities and the snapshot that relates them."""

from .models import Customer, Order, Product
from .snapshot import BrokenReferenceError, Snapshot

__all__ = [
    "BrokenReferenceError",
    "Customer",
    "Order",
    "Product",
    "Snapshot",
]
