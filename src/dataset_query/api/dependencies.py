"""FastAPI dependency injection for settings and the dataset service."""

from __future__ import annotations

from contextvars import ContextVar
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from dataset_query.core.config import Settings
from dataset_query.engine.service import DatasetService


# Request ID context variable for tracing
request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")


def get_settings(request: Request) -> Settings:
    """Retrieve settings from application state.

    Raises:
        HTTPException: If settings are not initialized.
    """
    if not hasattr(request.app.state, "settings"):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Application settings not initialized",
        )
    return request.app.state.settings


def get_dataset_service(request: Request) -> DatasetService:
    """Retrieve the dataset service from application state.

    The service is built once during application startup; it holds only
    the data source configuration, never fetched data.

    Raises:
        HTTPException: If the service is not initialized.
    """
    if not hasattr(request.app.state, "dataset_service"):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Dataset service not initialized",
        )
    return request.app.state.dataset_service


# Type aliases for dependency injection
DatasetServiceDep = Annotated[DatasetService, Depends(get_dataset_service)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
