"""Schema models for fields inferred from a schemaless dataset.

A schema is an ordered list of FieldSchema, one per key of the first
record in the dataset.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class FieldType(StrEnum):
    """Semantic field types, listed in inference priority order."""

    BOOLEAN = "BOOLEAN"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    DATE = "DATE"
    OPTION = "OPTION"
    TEXT = "TEXT"


class FieldSchema(BaseModel):
    """Schema for a single field.

    Attributes:
        display: Original key as it appears in the raw records.
        name: Normalized camel-case identifier derived from display.
        type: Inferred semantic type.
        options: Distinct raw values, only for OPTION fields.
    """

    display: str = Field(..., description="Original field key")
    name: str = Field(..., description="Normalized field name")
    type: FieldType = Field(..., description="Inferred field type")
    options: list[Any] | None = Field(
        default=None,
        description="Distinct values when type is OPTION",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "display": "Status",
                "name": "status",
                "type": "OPTION",
                "options": ["OPEN", "CLOSED"],
            }
        }
    }

    @model_validator(mode="after")
    def check_options(self) -> "FieldSchema":
        """Options are present exactly when the field is an OPTION."""
        if self.type == FieldType.OPTION and self.options is None:
            raise ValueError("OPTION fields require options")
        if self.type != FieldType.OPTION and self.options is not None:
            raise ValueError(f"{self.type} fields cannot carry options")
        return self
