"""Mapping of raw records onto normalized field names."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from dataset_query.models.schema import FieldSchema


def normalize_record(row: Any, schema: list[FieldSchema]) -> dict[str, Any]:
    """Re-key a raw record by normalized field name.

    Values are copied verbatim; fields missing from the row become None and
    keys not in the schema are dropped. Never raises.
    """
    if not isinstance(row, Mapping):
        return {field.name: None for field in schema}
    return {field.name: row.get(field.display) for field in schema}


def normalize_records(rows: Iterable[Any], schema: list[FieldSchema]) -> list[dict[str, Any]]:
    return [normalize_record(row, schema) for row in rows]
