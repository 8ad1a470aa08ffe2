"""Integration test fixtures."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from dataset_query.engine.service import DatasetService


@pytest.fixture(autouse=True)
def mock_env():
    """Set environment variables for integration tests."""
    with patch.dict(
        os.environ,
        {
            "DEBUG": "true",
            "ENVIRONMENT": "development",
            "DATA_URL": "https://example.test/stations.json",
        },
    ):
        from dataset_query.core.config import get_settings

        get_settings.cache_clear()
        yield
        get_settings.cache_clear()


@pytest.fixture
def app(dataset_service: DatasetService) -> FastAPI:
    """Create the application with an in-memory dataset service.

    The lifespan is not run; state is set the way startup would set it.
    """
    from dataset_query.api.app import create_app
    from dataset_query.core.config import get_settings

    test_app = create_app()
    test_app.state.settings = get_settings()
    test_app.state.dataset_service = dataset_service
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app)
