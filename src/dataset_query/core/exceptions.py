"""Custom exceptions for the Dataset Query API."""

from typing import Any


class DatasetQueryError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class DataSourceError(DatasetQueryError):
    """Raised when the remote dataset cannot be fetched or decoded."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        original_error: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DATA_SOURCE_ERROR",
            details={
                "url": url,
                "status_code": status_code,
                "original_error": original_error,
            },
        )
        self.url = url
        self.status_code = status_code
        self.original_error = original_error


class EmptyDatasetError(DatasetQueryError):
    """Raised when a schema is requested from a dataset with no records."""

    def __init__(self, message: str = "Dataset contains no records") -> None:
        super().__init__(message=message, error_code="EMPTY_DATASET")


class SchemaError(DatasetQueryError):
    """Raised when a schema cannot be derived from the sample records."""

    def __init__(
        self,
        message: str,
        error_code: str = "SCHEMA_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class FieldNameCollisionError(SchemaError):
    """Raised when two display names normalize to the same field name."""

    def __init__(self, name: str, displays: list[str]) -> None:
        super().__init__(
            message=f"Display names {displays!r} all normalize to field {name!r}",
            error_code="FIELD_NAME_COLLISION",
            details={"name": name, "displays": displays},
        )
        self.name = name
        self.displays = displays


class UnknownFieldError(DatasetQueryError):
    """Raised when a query references a field that is not in the schema."""

    def __init__(self, field_name: str, available: list[str] | None = None) -> None:
        super().__init__(
            message=f"Unknown field: {field_name!r}",
            error_code="UNKNOWN_FIELD",
            details={"field": field_name, "available": available or []},
        )
        self.field_name = field_name
        self.available = available or []


class InvalidConditionError(DatasetQueryError):
    """Raised when a condition operand does not fit the field's type."""

    def __init__(
        self,
        field_name: str,
        operator: str,
        operand: Any,
        field_type: str,
    ) -> None:
        super().__init__(
            message=(
                f"Operand {operand!r} for {field_name}.{operator} "
                f"is not a valid {field_type} value"
            ),
            error_code="INVALID_CONDITION",
            details={
                "field": field_name,
                "operator": operator,
                "operand": operand,
                "field_type": field_type,
            },
        )
        self.field_name = field_name
        self.operator = operator
        self.operand = operand
        self.field_type = field_type


class ConfigurationError(DatasetQueryError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details={"config_key": config_key},
        )
        self.config_key = config_key
