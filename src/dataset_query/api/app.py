"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from dataset_query.api.dependencies import SettingsDep, request_id_ctx
from dataset_query.api.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from dataset_query.api.routes.data import router as data_router
from dataset_query.core.config import get_settings
from dataset_query.core.exceptions import (
    DataSourceError,
    DatasetQueryError,
    EmptyDatasetError,
    InvalidConditionError,
    SchemaError,
    UnknownFieldError,
)
from dataset_query.core.logging import configure_logging
from dataset_query.engine.service import DatasetService
from dataset_query.engine.source import JsonDataSource
from dataset_query.models.responses import HealthResponse

logger = logging.getLogger(__name__)

# HTTP status per application error; the most specific class wins.
ERROR_STATUS_CODES: dict[type[DatasetQueryError], int] = {
    DataSourceError: status.HTTP_502_BAD_GATEWAY,
    SchemaError: status.HTTP_502_BAD_GATEWAY,
    EmptyDatasetError: status.HTTP_404_NOT_FOUND,
    UnknownFieldError: status.HTTP_400_BAD_REQUEST,
    InvalidConditionError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DatasetQueryError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events.

    Initializes:
    - Settings configuration
    - Data source and dataset service for the configured URL
    """
    # Startup
    settings = get_settings()
    app.state.settings = settings

    source = JsonDataSource.from_settings(settings)
    app.state.dataset_service = DatasetService(source)
    logger.info("Dataset service initialized", extra={"data_url": settings.DATA_URL})

    yield

    # Shutdown
    logger.info("Application shutdown complete")


def error_status_code(exc: DatasetQueryError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI) -> None:
    """Register the handler that renders application errors."""

    @app.exception_handler(DatasetQueryError)
    async def dataset_query_error_handler(request: Request, exc: DatasetQueryError) -> JSONResponse:
        """Render an application error with its mapped status code."""
        status_code = error_status_code(exc)
        if status_code >= 500:
            logger.warning(
                "Request failed",
                extra={"error_code": exc.error_code, "request_id": request_id_ctx.get()},
            )
        return JSONResponse(
            status_code=status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": exc.details,
                "request_id": request_id_ctx.get(),
            },
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Schema inference and filtering over a remote JSON dataset",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added last so it wraps the others and sees every request first.
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    app.include_router(data_router)

    @app.get("/", response_class=PlainTextResponse, tags=["health"])
    async def index(app_settings: SettingsDep) -> str:
        return f"{app_settings.APP_NAME} is running. Use /schema and /data endpoints."

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health_check(app_settings: SettingsDep) -> HealthResponse:
        """Basic health check endpoint."""
        return HealthResponse(
            status="healthy",
            version=app_settings.APP_VERSION,
            request_id=request_id_ctx.get(),
        )

    return app


# Lazy-loaded app for uvicorn deployment
# Usage: uvicorn dataset_query.api.app:app --host 0.0.0.0
# Or with factory: uvicorn dataset_query.api.app:create_app --factory
def __getattr__(name: str):
    """Lazy load the app when accessed.

    Settings are only read when the app is first requested, so tests can
    patch environment variables before app creation.
    """
    if name == "app":
        return create_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
