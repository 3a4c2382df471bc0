"""
Webpublication HTTP Client

Authenticated access to the Webpublication API. Every request carries the
session token as the WP_token cookie and the client identifier as the
clientId query parameter.

One outbound request per call: no retries, no caching.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union
import logging

import httpx

from webpub_mcp.config import WebPublicationConfig
from webpub_mcp.exceptions import (
    HttpConnectionError,
    HttpStatusError,
    MalformedResponseError,
)

logger = logging.getLogger(__name__)


class ApiEndpoint(str, Enum):
    """Remote web services of the Webpublication API"""

    WORKSPACE_MANAGER = "workspaceManagerWs"
    GENERATION = "generationWs"


def join_url(base_url: str, path: str) -> str:
    """Join a base URL and a relative path with exactly one slash between them"""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class WebPublicationClient:
    """
    Async client for the Webpublication API and drive.

    Wraps a single httpx.AsyncClient whose connection pool is shared by all
    tool calls. Credentials come from the immutable process configuration.
    """

    def __init__(
        self,
        config: WebPublicationConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.config = config
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.HTTP_TIMEOUT),
            transport=transport,
        )
        logger.debug(f"WebPublicationClient initialized for {config.API_URL}")

    async def __aenter__(self) -> "WebPublicationClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _auth_headers(self) -> Dict[str, str]:
        return {"Cookie": f"WP_token={self.config.WP_TOKEN}"}

    async def send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        base_url: Optional[str] = None,
        expect: str = "json"
    ) -> Union[Any, bytes]:
        """
        Send one authenticated request.

        Args:
            method: HTTP method (GET, PUT, ...)
            path: Path relative to the base URL
            params: Query parameters
            json: JSON request body
            base_url: Base URL, defaults to API_URL
            expect: "json" to parse the body, "bytes" to return it raw

        Returns:
            Parsed JSON document or raw response bytes

        Raises:
            HttpConnectionError: Network failure or timeout
            HttpStatusError: Non-2xx response
            MalformedResponseError: Body is not valid JSON
        """
        url = join_url(base_url or self.config.API_URL, path)
        headers = self._auth_headers()
        if expect == "json":
            headers["Content-Type"] = "application/json"

        logger.info(f"Making {method} request to: {url}")

        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.TransportError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise HttpConnectionError(f"Request failed: {e}", url=url, original_error=e) from e

        if not response.is_success:
            logger.warning(f"Request to {url} failed with status {response.status_code}")
            raise HttpStatusError(
                f"Request failed with status: {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        if expect == "bytes":
            return response.content

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Failed to parse response: {e}",
                url=url,
                status_code=response.status_code,
                original_error=e,
            ) from e

    async def get_json(
        self,
        endpoint: ApiEndpoint,
        method: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """GET {API_URL}{endpoint}/{method} with clientId added to the query"""
        query = {"clientId": self.config.CLIENT_ID}
        query.update(params or {})
        return await self.send("GET", f"{endpoint.value}/{method}", params=query)

    async def put_json(
        self,
        endpoint: ApiEndpoint,
        method: str,
        body: Dict[str, Any],
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """PUT a JSON body to {API_URL}{endpoint}/{method}"""
        query = {"clientId": self.config.CLIENT_ID}
        query.update(params or {})
        return await self.send("PUT", f"{endpoint.value}/{method}", params=query, json=body)

    async def get_bytes(self, rel_url: str) -> bytes:
        """Fetch a drive file at {DRIVE_URL}{CLIENT_ID}/{rel_url} as raw bytes"""
        params = {}
        if self.config.DRIVE_TOKEN:
            params["token"] = self.config.DRIVE_TOKEN
        return await self.send(
            "GET",
            join_url(self.config.CLIENT_ID, rel_url),
            params=params or None,
            base_url=self.config.DRIVE_URL,
            expect="bytes",
        )
