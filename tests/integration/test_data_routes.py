"""Integration tests for the schema, data, count and distinct routes."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from dataset_query.core.config import Settings
from dataset_query.core.exceptions import (
    ConfigurationError,
    DataSourceError,
    DatasetQueryError,
    EmptyDatasetError,
    FieldNameCollisionError,
    InvalidConditionError,
    UnknownFieldError,
)
from dataset_query.engine.service import DatasetService
from tests.fixtures.stations import StaticDataSource


def ids(rows: list[dict]) -> list[int]:
    return [row["stationId"] for row in rows]


class TestSchemaEndpoint:
    """Tests for GET /schema."""

    def test_schema(self, client: TestClient) -> None:
        response = client.get("/schema")
        assert response.status_code == 200
        schema = response.json()
        assert schema[0] == {"display": "Station ID", "name": "stationId", "type": "INTEGER"}
        assert schema[2] == {
            "display": "Status",
            "name": "status",
            "type": "OPTION",
            "options": ["OPEN", "CLOSED"],
        }
        assert [f["type"] for f in schema] == [
            "INTEGER",
            "OPTION",
            "OPTION",
            "INTEGER",
            "FLOAT",
            "BOOLEAN",
            "DATE",
        ]

    def test_empty_dataset(self, app: FastAPI, client: TestClient) -> None:
        app.state.dataset_service = DatasetService(StaticDataSource([]))
        response = client.get("/schema")
        assert response.status_code == 404
        assert response.json()["error"] == "EMPTY_DATASET"

    def test_data_source_failure(self, app: FastAPI, client: TestClient) -> None:
        source = StaticDataSource([])
        source.fetch = AsyncMock(
            side_effect=DataSourceError("Data source responded with HTTP 500", status_code=500)
        )
        app.state.dataset_service = DatasetService(source)
        response = client.get("/schema")
        assert response.status_code == 502
        body = response.json()
        assert body["error"] == "DATA_SOURCE_ERROR"
        assert body["details"]["status_code"] == 500

    def test_name_collision(self, app: FastAPI, client: TestClient) -> None:
        source = StaticDataSource([{"Station ID": 1, "station id": 2}])
        app.state.dataset_service = DatasetService(source)
        response = client.get("/schema")
        assert response.status_code == 502
        assert response.json()["error"] == "FIELD_NAME_COLLISION"


class TestDataEndpoint:
    """Tests for POST /data."""

    def test_without_body(self, client: TestClient) -> None:
        response = client.post("/data")
        assert response.status_code == 200
        rows = response.json()
        assert ids(rows) == [1, 2, 3, 4, 5]
        assert list(rows[0]) == [
            "stationId",
            "name",
            "status",
            "availableBikes",
            "latitude",
            "banking",
            "lastUpdate",
        ]
        assert rows[4]["latitude"] is None

    def test_values_are_returned_verbatim(self, client: TestClient) -> None:
        rows = client.post("/data", json={}).json()
        assert rows[0]["availableBikes"] == "5"
        assert rows[3]["banking"] is True

    def test_where(self, client: TestClient) -> None:
        response = client.post("/data", json={"where": {"availableBikes": {"gte": 5}}})
        assert response.status_code == 200
        assert ids(response.json()) == [1, 2, 5]

    def test_unknown_field(self, client: TestClient) -> None:
        response = client.post("/data", json={"where": {"bikes": {"gt": 1}}})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "UNKNOWN_FIELD"
        assert body["details"]["field"] == "bikes"

    def test_invalid_operand(self, client: TestClient) -> None:
        response = client.post("/data", json={"where": {"lastUpdate": {"gt": "whenever"}}})
        assert response.status_code == 422
        assert response.json()["error"] == "INVALID_CONDITION"

    def test_operand_beyond_float_range(self, client: TestClient) -> None:
        response = client.post("/data", json={"where": {"latitude": {"gt": 10**400}}})
        assert response.status_code == 422
        assert response.json()["error"] == "INVALID_CONDITION"

    def test_malformed_where(self, client: TestClient) -> None:
        response = client.post("/data", json={"where": ["not", "a", "mapping"]})
        assert response.status_code == 422

    def test_response_carries_request_id(self, client: TestClient) -> None:
        response = client.post("/data", headers={"X-Request-ID": "req-42"})
        assert response.headers["X-Request-ID"] == "req-42"


class TestPaginationEndpoint:
    """Tests for POST /dataWithPagination."""

    def test_limit_and_offset(self, client: TestClient) -> None:
        response = client.post("/dataWithPagination", json={"limit": 2, "offset": 1})
        assert response.status_code == 200
        assert ids(response.json()) == [2, 3]

    def test_filter_then_paginate(self, client: TestClient) -> None:
        response = client.post(
            "/dataWithPagination",
            json={"where": {"status": {"eq": "OPEN"}}, "offset": 2},
        )
        assert ids(response.json()) == [4, 5]

    def test_offset_past_end(self, client: TestClient) -> None:
        response = client.post("/dataWithPagination", json={"offset": 99})
        assert response.json() == []

    def test_negative_limit_rejected(self, client: TestClient) -> None:
        response = client.post("/dataWithPagination", json={"limit": -1})
        assert response.status_code == 422


class TestSortingEndpoint:
    """Tests for POST /dataWithBasicSorting."""

    def test_order_by_desc(self, client: TestClient) -> None:
        response = client.post(
            "/dataWithBasicSorting",
            json={"orderBy": "availableBikes", "direction": "desc"},
        )
        assert response.status_code == 200
        assert ids(response.json()) == [4, 2, 5, 1, 3]

    def test_default_direction(self, client: TestClient) -> None:
        response = client.post("/dataWithBasicSorting", json={"orderBy": "lastUpdate"})
        assert ids(response.json()) == [3, 1, 5, 2, 4]

    def test_without_order_by(self, client: TestClient) -> None:
        response = client.post("/dataWithBasicSorting", json={})
        assert ids(response.json()) == [1, 2, 3, 4, 5]

    def test_unknown_order_by(self, client: TestClient) -> None:
        response = client.post("/dataWithBasicSorting", json={"orderBy": "Name"})
        assert response.status_code == 400

    def test_invalid_direction(self, client: TestClient) -> None:
        response = client.post(
            "/dataWithBasicSorting",
            json={"orderBy": "name", "direction": "up"},
        )
        assert response.status_code == 422


class TestCountEndpoints:
    """Tests for GET /count and POST /countWithFilter."""

    def test_count(self, client: TestClient) -> None:
        response = client.get("/count")
        assert response.status_code == 200
        assert response.json() == 5

    def test_count_with_filter(self, client: TestClient) -> None:
        response = client.post("/countWithFilter", json={"where": {"banking": {"eq": True}}})
        assert response.json() == 3

    def test_count_with_filter_without_body(self, client: TestClient) -> None:
        assert client.post("/countWithFilter").json() == 5

    def test_count_of_empty_dataset(self, app: FastAPI, client: TestClient) -> None:
        app.state.dataset_service = DatasetService(StaticDataSource([]))
        assert client.get("/count").json() == 0


class TestDistinctEndpoint:
    """Tests for GET /distinct/{field}."""

    def test_distinct(self, client: TestClient) -> None:
        response = client.get("/distinct/status")
        assert response.status_code == 200
        assert response.json() == ["OPEN", "CLOSED"]

    def test_distinct_skips_empty(self, client: TestClient) -> None:
        assert client.get("/distinct/availableBikes").json() == ["5", "12", "0"]

    def test_unknown_field(self, client: TestClient) -> None:
        response = client.get("/distinct/colour")
        assert response.status_code == 400
        assert response.json()["error"] == "UNKNOWN_FIELD"


class TestHealthEndpoints:
    """Tests for the banner and health routes."""

    def test_index(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert "/schema" in response.text

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_settings_read_from_application_state(self, app: FastAPI, client: TestClient) -> None:
        app.state.settings = Settings(APP_NAME="Bikes API", APP_VERSION="9.9.9")

        assert client.get("/").text.startswith("Bikes API is running")
        assert client.get("/health").json()["version"] == "9.9.9"

    def test_health_echoes_request_id(self, client: TestClient) -> None:
        response = client.get("/health", headers={"X-Request-ID": "req-42"})
        assert response.json()["request_id"] == "req-42"

    def test_missing_settings_is_unavailable(self, app: FastAPI, client: TestClient) -> None:
        del app.state.settings
        assert client.get("/health").status_code == 503

    def test_security_headers(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestReferenceScenario:
    """Schema, normalization and filtering for a two-record dataset."""

    def test_end_to_end(self, app: FastAPI, client: TestClient) -> None:
        source = StaticDataSource([{"Name": "Alice", "Age": "30"}, {"Name": "Bob", "Age": "25"}])
        app.state.dataset_service = DatasetService(source)

        assert client.get("/schema").json() == [
            {"display": "Name", "name": "name", "type": "OPTION", "options": ["Alice", "Bob"]},
            {"display": "Age", "name": "age", "type": "INTEGER"},
        ]
        assert client.post("/data").json() == [
            {"name": "Alice", "age": "30"},
            {"name": "Bob", "age": "25"},
        ]
        assert client.post("/data", json={"where": {"age": {"gt": 26}}}).json() == [
            {"name": "Alice", "age": "30"}
        ]


class TestErrorStatusCodes:
    """Status mapping for application errors."""

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (DataSourceError("down"), 502),
            (FieldNameCollisionError("a", ["A", "a"]), 502),
            (EmptyDatasetError(), 404),
            (UnknownFieldError("x"), 400),
            (InvalidConditionError("x", "gt", "y", "INTEGER"), 422),
            (ConfigurationError("missing", config_key="DATA_URL"), 500),
            (DatasetQueryError("boom"), 500),
        ],
    )
    def test_mapping(self, error: DatasetQueryError, expected: int) -> None:
        from dataset_query.api.app import error_status_code

        assert error_status_code(error) == expected
