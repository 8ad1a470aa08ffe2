"""Core utilities: configuration, logging, exceptions."""

from dataset_query.core.config import Settings, get_settings
from dataset_query.core.exceptions import (
    ConfigurationError,
    DataSourceError,
    DatasetQueryError,
    EmptyDatasetError,
    FieldNameCollisionError,
    InvalidConditionError,
    SchemaError,
    UnknownFieldError,
)

__all__ = [
    "Settings",
    "get_settings",
    "DatasetQueryError",
    "DataSourceError",
    "EmptyDatasetError",
    "SchemaError",
    "FieldNameCollisionError",
    "UnknownFieldError",
    "InvalidConditionError",
    "ConfigurationError",
]
