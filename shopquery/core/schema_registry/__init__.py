"""Field Registry for ShopQuery - defines entities and their fields."""

from .registry import (
    EntityKind,
    EntityMeta,
    EntityRegistry,
    FieldMeta,
    FieldType,
    get_default_registry,
)

__all__ = [
    "EntityKind",
    "EntityMeta",
    "EntityRegistry",
    "FieldMeta",
    "FieldType",
    "get_default_registry",
]
