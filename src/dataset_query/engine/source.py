"""Remote JSON data source.

Fetches the raw record array from a single configured URL. The URL is
given at construction; nothing is read from global state.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from dataset_query.core.exceptions import ConfigurationError, DataSourceError

if TYPE_CHECKING:
    from dataset_query.core.config import Settings

logger = logging.getLogger(__name__)


class DataSource(Protocol):
    """Anything that can supply the raw record array."""

    async def fetch(self) -> list[dict[str, Any]]: ...


class JsonDataSource:
    """Fetch a JSON array of records over HTTP.

    Attributes:
        url: Location of the JSON resource.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the data source.

        Args:
            url: Location of the JSON resource.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).

        Raises:
            ConfigurationError: If url is empty.
        """
        if not url:
            raise ConfigurationError("A data source URL is required", config_key="DATA_URL")
        self.url = url
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> JsonDataSource:
        return cls(url=settings.DATA_URL, timeout=settings.DATA_TIMEOUT_SECONDS)

    async def fetch(self) -> list[dict[str, Any]]:
        """Fetch the record array.

        Returns:
            Raw records exactly as decoded from the response body.

        Raises:
            DataSourceError: On network failure, a non-success status,
                an undecodable body, or a body that is not a JSON array.
        """
        start_time = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(self.url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Data source returned error status",
                extra={"url": self.url, "status_code": e.response.status_code},
            )
            raise DataSourceError(
                f"Data source responded with HTTP {e.response.status_code}",
                url=self.url,
                status_code=e.response.status_code,
                original_error=str(e),
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                "Data source request failed",
                extra={"url": self.url, "error_type": type(e).__name__},
            )
            raise DataSourceError(
                f"Failed to fetch data source: {type(e).__name__}",
                url=self.url,
                original_error=str(e),
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise DataSourceError(
                "Data source did not return valid JSON",
                url=self.url,
                status_code=response.status_code,
                original_error=str(e),
            ) from e

        if not isinstance(data, list):
            raise DataSourceError(
                f"Data source must return a JSON array, got {type(data).__name__}",
                url=self.url,
                status_code=response.status_code,
            )

        logger.info(
            "Data source fetched",
            extra={
                "url": self.url,
                "record_count": len(data),
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )
        return data
