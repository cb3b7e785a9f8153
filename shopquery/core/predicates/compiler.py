"""
Predicate Compiler for ShopQuery.

Transforms validated declarative filters into a composed Predicate.
"""

import operator as op
from collections.abc import Callable, Iterable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from shopquery.core.predicates.predicates import Predicate, all_of
from shopquery.core.query_ast.models import Filter, FilterOperator
from shopquery.core.safety.validator import FilterValidationError, FilterValidator
from shopquery.core.schema_registry.registry import (
    EntityKind,
    EntityRegistry,
    FieldMeta,
    FieldType,
    get_default_registry,
)

_COMPARISONS: dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.EQ: op.eq,
    FilterOperator.NOT_EQ: op.ne,
    FilterOperator.GT: op.gt,
    FilterOperator.GTE: op.ge,
    FilterOperator.LT: op.lt,
    FilterOperator.LTE: op.le,
}


class PredicateCompiler:
    """
    Compiles Filter objects into predicates over domain entities.

    Every filter is validated first. String comparisons honour the
    registry's case-insensitivity flag, and a missing (None) attribute
    never matches, whatever the operator.
    """

    def __init__(self, registry: EntityRegistry | None = None):
        """
        Initialize the compiler.

        Args:
            registry: Entity registry for field lookups.
                     Uses default registry if not provided.
        """
        self._registry = registry or get_default_registry()
        self._validator = FilterValidator(registry=self._registry)

    def compile(self, kind: EntityKind, filters: Iterable[Filter]) -> Predicate:
        """
        Compile filters into a single conjunctive predicate.

        Args:
            kind: Entity kind the filters apply to.
            filters: Filters to combine; an empty list accepts everything.

        Returns:
            A Predicate over entities of ``kind``.

        Raises:
            FilterValidationError: If any filter is invalid.
        """
        filters = list(filters)
        self._validator.validate(kind, filters)
        return all_of(*(self._compile_one(kind, f) for f in filters))

    # -------------------------
    # Filter Resolution
    # -------------------------

    def _compile_one(self, kind: EntityKind, filter_: Filter) -> Predicate:
        field_meta = self._registry.get_field(kind, filter_.field)
        test = self._apply_filter_operator(field_meta, filter_)

        def matches(entity) -> bool:
            value = field_meta.read(entity)
            if value is None:
                return False
            return test(value)

        value_text = (
            f"{filter_.value[0]} and {filter_.value[1]}"
            if filter_.operator == FilterOperator.BETWEEN
            else repr(filter_.value)
        )
        return Predicate(matches, f"{filter_.field} {filter_.operator.value} {value_text}")

    def _apply_filter_operator(
        self, field_meta: FieldMeta, filter_: Filter
    ) -> Callable[[Any], bool]:
        """Build a test over an attribute value for the filter operator."""
        match filter_.operator:
            case FilterOperator.BETWEEN:
                low = _coerce(field_meta, filter_.value[0])
                high = _coerce(field_meta, filter_.value[1])
                return lambda value: low <= value <= high
            case FilterOperator.IN:
                members = {_coerce(field_meta, v) for v in filter_.value}
                return lambda value: value in members
            case FilterOperator.NOT_IN:
                members = {_coerce(field_meta, v) for v in filter_.value}
                return lambda value: value not in members
            case _:
                compare = _COMPARISONS[filter_.operator]
                expected = _coerce(field_meta, filter_.value)
                return lambda value: compare(value, expected)


# -----------------------------
# Helpers
# -----------------------------


def _coerce(field_meta: FieldMeta, value: Any) -> Any:
    """Convert a filter value to the Python type of the field."""
    try:
        match field_meta.field_type:
            case FieldType.DATE:
                if isinstance(value, datetime):
                    return value.date()
                if isinstance(value, date):
                    return value
                return date.fromisoformat(str(value))
            case FieldType.DECIMAL:
                return value if isinstance(value, Decimal) else Decimal(str(value))
            case FieldType.INTEGER:
                number = value if isinstance(value, Decimal) else Decimal(str(value))
                if number != number.to_integral_value():
                    raise ValueError(f"{value!r} is not a whole number")
                return int(number)
            case FieldType.STRING:
                text = str(value)
                return text.casefold() if field_meta.case_insensitive else text
    except (ValueError, TypeError, OverflowError, InvalidOperation) as e:
        raise FilterValidationError(
            f"Value {value!r} is not a valid {field_meta.field_type.value} "
            f"for field '{field_meta.attribute}'"
        ) from e

    raise FilterValidationError(f"Unsupported field type: {field_meta.field_type}")
