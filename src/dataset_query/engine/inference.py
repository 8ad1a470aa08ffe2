"""Field type inference for columns of raw JSON values."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from dataset_query.engine.values import (
    distinct_key,
    is_blank,
    is_integral,
    is_plain_decimal,
    parse_date,
)
from dataset_query.models.schema import FieldType

# Maximum distinct values for a column to be offered as a fixed option set
MAX_OPTION_VALUES = 10


def non_null_values(values: Iterable[Any]) -> list[Any]:
    """Drop nulls and empty strings, keeping order."""
    return [v for v in values if not is_blank(v)]


def distinct_values_in_order(values: Iterable[Any]) -> list[Any]:
    """Distinct values in first-occurrence order."""
    seen: dict[tuple[str, Any], Any] = {}
    for value in values:
        seen.setdefault(distinct_key(value), value)
    return list(seen.values())


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool) or value in ("true", "false")


def infer_field_type(values: Iterable[Any]) -> FieldType:
    """Classify a column of raw values into a FieldType.

    Rules are tried in priority order and the first one satisfied by every
    non-null value wins: BOOLEAN, INTEGER, FLOAT, DATE, then OPTION when
    there are at most ``MAX_OPTION_VALUES`` distinct values, else TEXT.
    A column with no non-null values is TEXT.

    Args:
        values: Raw values of one field across the sample records.

    Returns:
        The inferred FieldType.
    """
    present = non_null_values(values)
    if not present:
        return FieldType.TEXT

    if all(_is_boolean(v) for v in present):
        return FieldType.BOOLEAN

    if all(is_integral(v) for v in present):
        return FieldType.INTEGER

    if all(is_plain_decimal(v) for v in present):
        return FieldType.FLOAT

    if all(parse_date(v) is not None for v in present):
        return FieldType.DATE

    if len(distinct_values_in_order(present)) <= MAX_OPTION_VALUES:
        return FieldType.OPTION

    return FieldType.TEXT
