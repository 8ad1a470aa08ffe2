"""Schema derivation from a sample of raw records.

Field order and membership follow the keys of the first record. Keys that
only appear in later records are not part of the schema.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from dataset_query.core.exceptions import (
    EmptyDatasetError,
    FieldNameCollisionError,
    SchemaError,
)
from dataset_query.engine.inference import (
    distinct_values_in_order,
    infer_field_type,
    non_null_values,
)
from dataset_query.engine.naming import to_field_name
from dataset_query.models.schema import FieldSchema, FieldType

logger = logging.getLogger(__name__)

# Marker for a key missing from a record; dropped by type inference.
_MISSING = None


def _column(sample: Sequence[Any], key: str) -> list[Any]:
    return [
        record.get(key, _MISSING) if isinstance(record, Mapping) else _MISSING
        for record in sample
    ]


def build_schema(sample: Sequence[Mapping[str, Any]]) -> list[FieldSchema]:
    """Derive the field schema of a dataset.

    Args:
        sample: Raw records; the first one defines the fields.

    Returns:
        One FieldSchema per key of the first record, in key order.

    Raises:
        EmptyDatasetError: If sample has no records.
        SchemaError: If the first record is not an object.
        FieldNameCollisionError: If two keys normalize to the same name.
    """
    if not sample:
        raise EmptyDatasetError()

    first = sample[0]
    if not isinstance(first, Mapping):
        raise SchemaError(
            f"First record must be an object, got {type(first).__name__}",
            details={"record_type": type(first).__name__},
        )

    schema: list[FieldSchema] = []
    displays_by_name: dict[str, str] = {}

    for display in first:
        name = to_field_name(display)
        if name in displays_by_name:
            raise FieldNameCollisionError(name, [displays_by_name[name], display])
        displays_by_name[name] = display

        values = _column(sample, display)
        field_type = infer_field_type(values)
        options = (
            distinct_values_in_order(non_null_values(values))
            if field_type == FieldType.OPTION
            else None
        )
        schema.append(FieldSchema(display=display, name=name, type=field_type, options=options))

    logger.debug(
        "Schema built",
        extra={"field_count": len(schema), "record_count": len(sample)},
    )
    return schema
