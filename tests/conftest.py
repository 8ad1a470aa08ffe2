"""Pytest fixtures for the test suite."""

from __future__ import annotations

from typing import Any

import pytest

from dataset_query.core.config import Settings
from dataset_query.engine.normalizer import normalize_records
from dataset_query.engine.schema_builder import build_schema
from dataset_query.engine.service import DatasetService
from dataset_query.models.schema import FieldSchema
from tests.fixtures.stations import STATION_RECORDS, StaticDataSource


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings for testing."""
    return Settings(
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        DATA_URL="https://example.test/stations.json",
        DATA_TIMEOUT_SECONDS=5,
    )


@pytest.fixture
def station_records() -> list[dict[str, Any]]:
    """Raw station records, copied so tests can check they are not mutated."""
    return [dict(record) for record in STATION_RECORDS]


@pytest.fixture
def station_schema(station_records: list[dict[str, Any]]) -> list[FieldSchema]:
    return build_schema(station_records)


@pytest.fixture
def station_rows(
    station_records: list[dict[str, Any]], station_schema: list[FieldSchema]
) -> list[dict[str, Any]]:
    return normalize_records(station_records, station_schema)


@pytest.fixture
def station_source(station_records: list[dict[str, Any]]) -> StaticDataSource:
    return StaticDataSource(station_records)


@pytest.fixture
def dataset_service(station_source: StaticDataSource) -> DatasetService:
    return DatasetService(station_source)
