"""Pydantic models for API requests, responses, and the field schema."""

from dataset_query.models.requests import (
    Condition,
    CountRequest,
    DataRequest,
    PaginatedDataRequest,
    SortDirection,
    SortedDataRequest,
)
from dataset_query.models.responses import ErrorResponse, HealthResponse
from dataset_query.models.schema import FieldSchema, FieldType

__all__ = [
    # Schema models
    "FieldType",
    "FieldSchema",
    # Request/Response models
    "Condition",
    "DataRequest",
    "CountRequest",
    "PaginatedDataRequest",
    "SortedDataRequest",
    "SortDirection",
    "ErrorResponse",
    "HealthResponse",
]
