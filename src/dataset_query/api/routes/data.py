"""Schema, data, count and distinct endpoints.

Paths are camel-cased and bodies carry ``where`` conditions,
``limit``/``offset`` pagination and ``orderBy``/``direction`` sorting.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body

from dataset_query.api.dependencies import DatasetServiceDep, request_id_ctx
from dataset_query.models.requests import (
    CountRequest,
    DataRequest,
    PaginatedDataRequest,
    SortedDataRequest,
)
from dataset_query.models.responses import ErrorResponse
from dataset_query.models.schema import FieldSchema

logger = logging.getLogger(__name__)

router = APIRouter(tags=["data"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Unknown field"},
    422: {"model": ErrorResponse, "description": "Invalid condition operand"},
    502: {"model": ErrorResponse, "description": "Data source unavailable or malformed"},
}


@router.get(
    "/schema",
    response_model=list[FieldSchema],
    response_model_exclude_none=True,
    responses={
        404: {"model": ErrorResponse, "description": "Dataset has no records"},
        502: ERROR_RESPONSES[502],
    },
)
async def get_schema(service: DatasetServiceDep) -> list[FieldSchema]:
    """Infer the field schema of the dataset."""
    schema = await service.get_schema()
    logger.info(
        "Schema served",
        extra={"request_id": request_id_ctx.get(), "field_count": len(schema)},
    )
    return schema


@router.post("/data", responses=ERROR_RESPONSES)
async def get_data(
    service: DatasetServiceDep,
    body: DataRequest | None = Body(default=None),
) -> list[dict[str, Any]]:
    """Return normalized records matching the ``where`` conditions."""
    body = body or DataRequest()
    return await service.get_data(body.where)


@router.post("/dataWithPagination", responses=ERROR_RESPONSES)
async def get_data_paginated(
    service: DatasetServiceDep,
    body: PaginatedDataRequest | None = Body(default=None),
) -> list[dict[str, Any]]:
    """Return one page of matching records.

    ``offset`` matching rows are skipped and at most ``limit`` rows are
    returned; without a limit every remaining row is returned.
    """
    body = body or PaginatedDataRequest()
    return await service.get_data_paginated(body.where, limit=body.limit, offset=body.offset)


@router.post("/dataWithBasicSorting", responses=ERROR_RESPONSES)
async def get_data_sorted(
    service: DatasetServiceDep,
    body: SortedDataRequest | None = Body(default=None),
) -> list[dict[str, Any]]:
    """Return matching records ordered by ``orderBy`` in ``direction``."""
    body = body or SortedDataRequest()
    return await service.get_data_sorted(
        body.where,
        order_by=body.order_by,
        direction=body.direction,
    )


@router.get("/count", responses={502: ERROR_RESPONSES[502]})
async def get_count(service: DatasetServiceDep) -> int:
    """Return the total number of records."""
    return await service.get_count()


@router.post("/countWithFilter", responses=ERROR_RESPONSES)
async def get_count_filtered(
    service: DatasetServiceDep,
    body: CountRequest | None = Body(default=None),
) -> int:
    """Return the number of records matching the ``where`` conditions."""
    body = body or CountRequest()
    return await service.get_count_filtered(body.where)


@router.get(
    "/distinct/{field}",
    responses={400: ERROR_RESPONSES[400], 502: ERROR_RESPONSES[502]},
)
async def get_distinct(field: str, service: DatasetServiceDep) -> list[Any]:
    """Return the distinct non-empty values of one field."""
    return await service.get_distinct(field)
