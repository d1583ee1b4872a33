"""Base HTTP client for the public blockchain-data APIs.

This module provides the shared JSON GET used by the explorer and price
clients, translating transport and decoding failures into the stats error
taxonomy.
"""

# Standard library imports
import json
from typing import Any, Dict, Optional

# Third-party library imports
import httpx

# Internal imports
from based_dropouts.config import StatsConfig, get_stats_config
from based_dropouts.logging_config import get_logger
from based_dropouts.utils.errors import MalformedResponseError, NetworkFailureError

# Get logger
logger = get_logger(__name__)


class BaseApiClient:
    """Base client for a JSON-over-HTTP data source."""

    # Short name used in logs and error details
    source = "api"

    def __init__(
        self,
        config: Optional[StatsConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the client.

        Args:
            config: Stats configuration. Defaults to environment-based config.
            http_client: Shared HTTP client. Created lazily when omitted.
        """
        self.config = config or get_stats_config()
        self.headers = {"Accept": "application/json"}
        self._http_client = http_client
        self._owns_client = http_client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.config.request_timeout,
                headers=self.headers,
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            )
        return self._http_client

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make a GET request and decode the JSON body.

        Args:
            url: Request URL
            params: Query parameters

        Returns:
            The decoded JSON body

        Raises:
            NetworkFailureError: On transport errors, timeouts or HTTP error status
            MalformedResponseError: If the body is not valid JSON
        """
        client = self._get_client()
        logger.debug(f"GET {url} ({self.source})")
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NetworkFailureError(
                f"{self.source} returned HTTP {e.response.status_code}",
                details={"source": self.source, "url": url, "status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            raise NetworkFailureError(
                f"{self.source} request failed: {e.__class__.__name__}",
                details={"source": self.source, "url": url},
            ) from e

        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise MalformedResponseError(
                f"{self.source} returned a body that is not JSON",
                details={"source": self.source, "url": url},
            ) from e

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "BaseApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
