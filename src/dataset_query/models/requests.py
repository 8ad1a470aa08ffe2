"""API request models for the Dataset Query API.

Request bodies carry a ``where`` clause mapping normalized field names
to conditions, plus optional pagination and ordering parameters.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Operators in the order they are checked; only the first one present applies.
CONDITION_OPERATORS = ("eq", "gt", "gte", "lt", "lte")


class SortDirection(StrEnum):
    """Direction for ordering rows."""

    ASC = "asc"
    DESC = "desc"


class Condition(BaseModel):
    """Comparison spec for a single field.

    An operator counts as present when its key appears in the payload,
    even with a null operand.
    """

    model_config = ConfigDict(extra="ignore")

    eq: Any = None
    gt: Any = None
    gte: Any = None
    lt: Any = None
    lte: Any = None

    def active_operator(self) -> tuple[str, Any] | None:
        """Return the first present (operator, operand) pair, if any."""
        for op in CONDITION_OPERATORS:
            if op in self.model_fields_set:
                return op, getattr(self, op)
        return None


class DataRequest(BaseModel):
    """Request for filtered data.

    Attributes:
        where: Mapping of field name to condition, AND-ed together.
    """

    where: dict[str, Condition] | None = Field(
        default=None,
        description="Field conditions, all of which must hold",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"where": {"availableBikes": {"gte": 5}, "status": {"eq": "OPEN"}}}
            ]
        }
    )


class CountRequest(DataRequest):
    """Request for the number of rows matching a filter."""


class PaginatedDataRequest(DataRequest):
    """Request for a page of filtered data.

    Attributes:
        limit: Maximum number of rows to return; all remaining rows if omitted.
        offset: Number of matching rows to skip.
    """

    limit: int | None = Field(default=None, ge=0, description="Maximum rows to return")
    offset: int | None = Field(default=None, ge=0, description="Matching rows to skip")


class SortedDataRequest(DataRequest):
    """Request for filtered data ordered by a single field.

    Attributes:
        order_by: Normalized field name to sort on (``orderBy`` in JSON).
        direction: ``asc`` (default) or ``desc``.
    """

    model_config = ConfigDict(populate_by_name=True)

    order_by: str | None = Field(
        default=None,
        alias="orderBy",
        description="Field name to sort on",
    )
    direction: SortDirection = Field(
        default=SortDirection.ASC,
        description="Sort direction",
    )
