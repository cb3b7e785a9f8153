"""
Field Registry for ShopQuery.

This module defines:
- Which entity kinds exist
- Which fields each entity exposes (and their types)
- How a field's value is read for comparison

Declarative filters and sort orders are checked against this registry
before they are turned into predicates or sort keys.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# -----------------------------
# Field Types
# -----------------------------


class FieldType(str, Enum):
    """Supported field data types."""

    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    DATE = "date"


class EntityKind(str, Enum):
    """Entity collections held by a snapshot."""

    CUSTOMER = "customers"
    PRODUCT = "products"
    ORDER = "orders"


# -----------------------------
# Field & Entity Metadata
# -----------------------------


@dataclass(frozen=True)
class FieldMeta:
    """Metadata for a single entity field."""

    entity: EntityKind
    attribute: str  # attribute name on the domain model
    field_type: FieldType
    case_insensitive: bool = False  # string comparisons ignore case
    nullable: bool = False

    def read(self, entity: Any) -> Any:
        """
        Read this field from ``entity`` in comparable form.

        Case-insensitive strings come back casefolded; a missing value
        comes back as None.
        """
        value = getattr(entity, self.attribute)
        if value is not None and self.case_insensitive and self.field_type == FieldType.STRING:
            return value.casefold()
        return value


@dataclass(frozen=True)
class EntityMeta:
    """Metadata for an entity kind."""

    kind: EntityKind
    fields: dict[str, FieldMeta] = field(default_factory=dict)


# -----------------------------
# Registry Class
# -----------------------------


class EntityRegistry:
    """
    Central registry for entity metadata.

    Provides lookup methods for entities and their fields.
    """

    def __init__(self, entities: dict[EntityKind, EntityMeta]):
        self._entities = entities

    # -------------------------
    # Lookup Methods
    # -------------------------

    def get_field(self, kind: EntityKind, field_name: str) -> FieldMeta | None:
        """Get field metadata for an entity kind."""
        entity = self._entities.get(kind)
        if entity is None:
            return None
        return entity.fields.get(field_name)

    def field_exists(self, kind: EntityKind, field_name: str) -> bool:
        """Check if a field exists on an entity kind."""
        return self.get_field(kind, field_name) is not None

    def list_fields(self, kind: EntityKind) -> list[str]:
        """List field names available on an entity kind."""
        entity = self._entities.get(kind)
        return list(entity.fields.keys()) if entity else []


# -----------------------------
# Default Registry Definition
# -----------------------------

_DEFAULT_ENTITIES: dict[EntityKind, EntityMeta] = {
    EntityKind.CUSTOMER: EntityMeta(
        kind=EntityKind.CUSTOMER,
        fields={
            "id": FieldMeta(EntityKind.CUSTOMER, "id", FieldType.INTEGER),
            "name": FieldMeta(
                EntityKind.CUSTOMER, "name", FieldType.STRING, case_insensitive=True
            ),
            "tier": FieldMeta(EntityKind.CUSTOMER, "tier", FieldType.INTEGER),
        },
    ),
    EntityKind.PRODUCT: EntityMeta(
        kind=EntityKind.PRODUCT,
        fields={
            "id": FieldMeta(EntityKind.PRODUCT, "id", FieldType.INTEGER),
            "name": FieldMeta(
                EntityKind.PRODUCT, "name", FieldType.STRING, case_insensitive=True
            ),
            "category": FieldMeta(
                EntityKind.PRODUCT, "category", FieldType.STRING, case_insensitive=True
            ),
            "price": FieldMeta(EntityKind.PRODUCT, "price", FieldType.DECIMAL),
        },
    ),
    EntityKind.ORDER: EntityMeta(
        kind=EntityKind.ORDER,
        fields={
            "id": FieldMeta(EntityKind.ORDER, "id", FieldType.INTEGER),
            "order_date": FieldMeta(EntityKind.ORDER, "order_date", FieldType.DATE),
            "delivery_date": FieldMeta(
                EntityKind.ORDER, "delivery_date", FieldType.DATE, nullable=True
            ),
            "status": FieldMeta(
                EntityKind.ORDER,
                "status",
                FieldType.STRING,
                case_insensitive=True,
                nullable=True,
            ),
            "customer_id": FieldMeta(EntityKind.ORDER, "customer_id", FieldType.INTEGER),
        },
    ),
}


def get_default_registry() -> EntityRegistry:
    """Get the default entity registry instance."""
    return EntityRegistry(entities=_DEFAULT_ENTITIES)
