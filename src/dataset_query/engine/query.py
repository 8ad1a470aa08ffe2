"""Query evaluation over normalized records.

Filtering, ordering, slicing and distinct-value extraction. Every function
is pure: inputs are never mutated and results are new lists. Values are
compared through their typed variant for the field's schema type, so a
string ``"30"`` in an INTEGER field orders numerically.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from dataset_query.core.exceptions import InvalidConditionError, UnknownFieldError
from dataset_query.engine.inference import distinct_values_in_order, non_null_values
from dataset_query.engine.values import TypedValue, to_typed_value
from dataset_query.models.requests import Condition, SortDirection
from dataset_query.models.schema import FieldSchema, FieldType

logger = logging.getLogger(__name__)

Row = dict[str, Any]

ORDERING_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
}


def _field_types(schema: Sequence[FieldSchema]) -> dict[str, FieldType]:
    return {field.name: field.type for field in schema}


def _resolve_field(field_name: str, types: Mapping[str, FieldType]) -> FieldType:
    if field_name not in types:
        raise UnknownFieldError(field_name, available=list(types))
    return types[field_name]


def _typed_operand(
    field_name: str, op: str, operand: Any, field_type: FieldType
) -> TypedValue:
    try:
        return to_typed_value(operand, field_type)
    except ValueError:
        # Fractional bounds are still meaningful against integer fields.
        if field_type == FieldType.INTEGER:
            try:
                return to_typed_value(operand, FieldType.FLOAT)
            except ValueError:
                pass
        raise InvalidConditionError(field_name, op, operand, field_type.value) from None


def _compile_condition(
    field_name: str, condition: Condition, field_type: FieldType
) -> Callable[[Row], bool] | None:
    active = condition.active_operator()
    if active is None:
        return None
    op, operand = active
    target = _typed_operand(field_name, op, operand, field_type)

    if op == "eq":
        return lambda row: to_typed_value(row.get(field_name), field_type) == target

    compare = ORDERING_OPERATORS[op]

    def predicate(row: Row) -> bool:
        value = to_typed_value(row.get(field_name), field_type)
        if value is None or target is None:
            return False
        return compare(value, target)

    return predicate


def filter_rows(
    rows: Sequence[Row],
    where: Mapping[str, Condition] | None,
    schema: Sequence[FieldSchema],
) -> list[Row]:
    """Keep rows satisfying every field condition, in original order.

    Args:
        rows: Normalized records.
        where: Field name to condition; None or empty keeps every row.
        schema: Schema the rows were normalized with.

    Returns:
        Matching rows.

    Raises:
        UnknownFieldError: If a condition names a field not in the schema.
        InvalidConditionError: If an operand does not fit the field type.
    """
    if not where:
        return list(rows)

    types = _field_types(schema)
    predicates = []
    for field_name, condition in where.items():
        predicate = _compile_condition(field_name, condition, _resolve_field(field_name, types))
        if predicate is not None:
            predicates.append(predicate)

    matched = [row for row in rows if all(p(row) for p in predicates)]
    logger.debug(
        "Rows filtered",
        extra={"conditions": len(predicates), "input": len(rows), "matched": len(matched)},
    )
    return matched


def sort_rows(
    rows: Sequence[Row],
    order_by: str | None,
    direction: SortDirection | str = SortDirection.ASC,
    schema: Sequence[FieldSchema] = (),
) -> list[Row]:
    """Stable sort on one field.

    Nulls come after values when ascending and before them when descending.

    Raises:
        UnknownFieldError: If order_by is not in the schema.
    """
    if not order_by:
        return list(rows)

    field_type = _resolve_field(order_by, _field_types(schema))
    descending = SortDirection(direction) == SortDirection.DESC

    def sort_key(row: Row) -> tuple[bool, TypedValue]:
        value = to_typed_value(row.get(order_by), field_type)
        return (value is None, 0 if value is None else value)

    # Python's sort is stable, including with reverse=True.
    return sorted(rows, key=sort_key, reverse=descending)


def paginate_rows(
    rows: Sequence[Row],
    limit: int | None = None,
    offset: int | None = None,
) -> list[Row]:
    """Return ``rows[offset:offset + limit]``.

    Offset defaults to 0 and a missing limit means all remaining rows.
    Bounds past the end clamp to an empty or shorter page.
    """
    start = offset or 0
    if start < 0 or (limit is not None and limit < 0):
        raise ValueError("limit and offset must be non-negative")
    end = None if limit is None else start + limit
    return list(rows[start:end])


def distinct_values(
    rows: Sequence[Row],
    field_name: str,
    schema: Sequence[FieldSchema],
) -> list[Any]:
    """Distinct non-null, non-empty raw values of a field in first-occurrence order.

    Raises:
        UnknownFieldError: If field_name is not in the schema.
    """
    _resolve_field(field_name, _field_types(schema))
    return distinct_values_in_order(non_null_values(row.get(field_name) for row in rows))
