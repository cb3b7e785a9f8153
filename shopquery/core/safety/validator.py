"""
Filter Validator for ShopQuery.

Validates declarative filters and sort orders against the field registry
before they are compiled into predicates or sort keys.
"""

from collections.abc import Iterable

from shopquery.core.errors import QueryEngineError
from shopquery.core.query_ast.models import Filter, FilterOperator, OrderBy
from shopquery.core.schema_registry.registry import (
    EntityKind,
    EntityRegistry,
    FieldMeta,
    FieldType,
    get_default_registry,
)


# -----------------------------
# Errors
# -----------------------------


class FilterValidationError(QueryEngineError):
    """Raised when a filter or sort order is invalid for its entity."""

    pass


# -----------------------------
# Operator Validation Rules
# -----------------------------

_ORDERING = {
    FilterOperator.EQ,
    FilterOperator.NOT_EQ,
    FilterOperator.GT,
    FilterOperator.GTE,
    FilterOperator.LT,
    FilterOperator.LTE,
    FilterOperator.BETWEEN,
}

# Operators allowed for each field type
ALLOWED_OPERATORS: dict[FieldType, set[FilterOperator]] = {
    FieldType.STRING: {
        FilterOperator.EQ,
        FilterOperator.NOT_EQ,
        FilterOperator.IN,
        FilterOperator.NOT_IN,
    },
    FieldType.INTEGER: _ORDERING | {FilterOperator.IN, FilterOperator.NOT_IN},
    FieldType.DECIMAL: _ORDERING | {FilterOperator.IN, FilterOperator.NOT_IN},
    FieldType.DATE: set(_ORDERING),
}


# -----------------------------
# Validator
# -----------------------------


class FilterValidator:
    """
    Validates Filter and OrderBy objects against the entity registry.

    Ensures fields exist on the target entity and that operators and
    values fit the field type.
    """

    def __init__(self, registry: EntityRegistry | None = None):
        """
        Initialize the validator.

        Args:
            registry: Entity registry to validate against.
                     Uses default registry if not provided.
        """
        self._registry = registry or get_default_registry()

    def validate(self, kind: EntityKind, filters: Iterable[Filter]) -> None:
        """
        Validate every filter for the given entity kind.

        Raises:
            FilterValidationError: If any filter is invalid.
        """
        for f in filters:
            field_meta = self._require_field(kind, f.field)
            self._validate_operator(f, field_meta)
            self._validate_filter_value(f)

    def validate_order_by(self, kind: EntityKind, order: OrderBy) -> FieldMeta:
        """
        Validate a sort order and return the metadata of its field.

        Raises:
            FilterValidationError: If the field does not exist on ``kind``.
        """
        return self._require_field(kind, order.field)

    # -------------------------
    # Validation Methods
    # -------------------------

    def _require_field(self, kind: EntityKind, field_name: str) -> FieldMeta:
        field_meta = self._registry.get_field(kind, field_name)
        if field_meta is None:
            available = ", ".join(self._registry.list_fields(kind))
            raise FilterValidationError(
                f"Unknown field '{field_name}' for {kind.value}. "
                f"Available fields: {available}"
            )
        return field_meta

    def _validate_operator(self, f: Filter, field_meta: FieldMeta) -> None:
        """Validate that the operator is allowed for the field type."""
        allowed = ALLOWED_OPERATORS.get(field_meta.field_type, set())

        if f.operator not in allowed:
            raise FilterValidationError(
                f"Operator '{f.operator.value}' not allowed for "
                f"{field_meta.field_type.value} field '{f.field}'"
            )

    def _validate_filter_value(self, f: Filter) -> None:
        """Validate that the filter value matches operator expectations."""
        # BETWEEN requires a 2-element sequence
        if f.operator == FilterOperator.BETWEEN:
            if not isinstance(f.value, (list, tuple)) or len(f.value) != 2:
                raise FilterValidationError(
                    f"BETWEEN operator for '{f.field}' requires exactly 2 values"
                )

        # IN/NOT_IN requires a list
        elif f.operator in (FilterOperator.IN, FilterOperator.NOT_IN):
            if not isinstance(f.value, (list, tuple, set, frozenset)):
                raise FilterValidationError(
                    f"IN/NOT_IN operator for '{f.field}' requires a list of values"
                )

        elif f.value is None:
            raise FilterValidationError(
                f"Operator '{f.operator.value}' for '{f.field}' requires a value"
            )
