"""API response models for the Dataset Query API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response for API errors.

    Attributes:
        error: Machine-readable error code.
        message: Human-readable error message.
        details: Optional additional error details.
        request_id: Request ID for tracing.
    """

    error: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional additional error details",
    )
    request_id: str | None = Field(default=None, description="Request ID for tracing")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "UNKNOWN_FIELD",
                    "message": "Unknown field: 'bikez'",
                    "details": {"field": "bikez", "available": ["name", "bikes"]},
                    "request_id": "4f1c2d3e",
                }
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Application version")
    request_id: str | None = Field(default=None, description="Request ID for tracing")
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp of the response",
    )
