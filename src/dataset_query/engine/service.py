"""Per-request dataset pipeline.

Every call fetches the dataset afresh, derives its schema, normalizes the
records and then applies the query steps. Nothing is cached between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from dataset_query.engine.normalizer import normalize_records
from dataset_query.engine.query import distinct_values, filter_rows, paginate_rows, sort_rows
from dataset_query.engine.schema_builder import build_schema
from dataset_query.engine.source import DataSource
from dataset_query.models.requests import Condition, SortDirection
from dataset_query.models.schema import FieldSchema

logger = logging.getLogger(__name__)

Where = Mapping[str, Condition] | None


class DatasetService:
    """Schema and query operations over a remote dataset.

    An empty dataset has no schema: ``get_schema`` raises EmptyDatasetError,
    while the data, count and distinct operations return empty results.
    """

    def __init__(self, source: DataSource) -> None:
        self.source = source

    async def _load(self) -> tuple[list[FieldSchema], list[dict[str, Any]]]:
        records = await self.source.fetch()
        if not records:
            logger.info("Dataset is empty")
            return [], []
        schema = build_schema(records)
        rows = normalize_records(records, schema)
        logger.debug(
            "Dataset loaded",
            extra={"record_count": len(rows), "field_count": len(schema)},
        )
        return schema, rows

    async def get_schema(self) -> list[FieldSchema]:
        return build_schema(await self.source.fetch())

    async def get_data(self, where: Where = None) -> list[dict[str, Any]]:
        schema, rows = await self._load()
        if not rows:
            return []
        return filter_rows(rows, where, schema)

    async def get_data_paginated(
        self,
        where: Where = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        return paginate_rows(await self.get_data(where), limit=limit, offset=offset)

    async def get_data_sorted(
        self,
        where: Where = None,
        order_by: str | None = None,
        direction: SortDirection = SortDirection.ASC,
    ) -> list[dict[str, Any]]:
        schema, rows = await self._load()
        if not rows:
            return []
        return sort_rows(filter_rows(rows, where, schema), order_by, direction, schema)

    async def get_count(self) -> int:
        _, rows = await self._load()
        return len(rows)

    async def get_count_filtered(self, where: Where = None) -> int:
        return len(await self.get_data(where))

    async def get_distinct(self, field_name: str) -> list[Any]:
        schema, rows = await self._load()
        if not rows:
            return []
        return distinct_values(rows, field_name, schema)
