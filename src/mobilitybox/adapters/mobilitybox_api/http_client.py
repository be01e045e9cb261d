"""HTTP client for Mobilitybox API requests.

Owns the credentials of one client instance: the optional bearer token and
the session token the server hands out. Every successful response carrying
a ``Session-Token`` header replaces the stored session token.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from mobilitybox.adapters.api_request_logger import log_api_request
from mobilitybox.adapters.mobilitybox_api.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_HEADERS,
    ERROR_BODY_MAX_LENGTH,
    SESSION_TOKEN_HEADER,
)
from mobilitybox.domain.cancellation import CancellationToken
from mobilitybox.domain.errors import HttpStatusError, MalformedResponseError, TransportError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


class MobilityboxHttpClient:
    """HTTP client for Mobilitybox API requests."""

    def __init__(
        self,
        access_token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        session: "ClientSession | None" = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            access_token: Optional API access token sent as bearer token.
            base_url: API base URL.
            session: Optional aiohttp session. If omitted, one is created on
                first use and closed by ``close()``.
        """
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.session_token: str | None = None
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> "ClientSession":
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def build_headers(self) -> dict[str, str]:
        """Build request headers from the current credentials."""
        headers = dict(DEFAULT_HEADERS)
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        if self.session_token:
            headers[SESSION_TOKEN_HEADER] = self.session_token
        return headers

    def _store_session_token(self, response: "ClientResponse") -> None:
        """Remember the session token of a successful response, if it carries one."""
        session_token = response.headers.get(SESSION_TOKEN_HEADER)
        if session_token:
            if session_token != self.session_token:
                logger.debug("Received new Mobilitybox session token")
            self.session_token = session_token

    async def _log_error_response(self, response: "ClientResponse", url: str) -> str:
        """Log error response details and return the truncated body."""
        error_text = await response.text(errors="replace")
        error_body = error_text[:ERROR_BODY_MAX_LENGTH] if error_text else "(empty response body)"
        content_type = response.headers.get("Content-Type", "unknown")
        logger.error(
            f"Mobilitybox API returned status {response.status} for {url}: "
            f"{error_body} (Content-Type: {content_type})"
        )
        return error_body

    async def _handle_response(self, response: "ClientResponse", url: str) -> Any:
        """Check status, pick up the session token and decode the JSON body."""
        if not 200 <= response.status < 300:
            error_body = await self._log_error_response(response, url)
            raise HttpStatusError(response.status, error_body)

        self._store_session_token(response)

        try:
            return await response.json(content_type=None)
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON in response from {url}: {e}") from e

    async def get_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Any:
        """Perform a GET request and return the decoded JSON body.

        Args:
            path: Endpoint path relative to the base URL.
            params: Query parameters; entries with value None are omitted.
            cancellation: Token checked before sending and after decoding.

        Returns:
            Decoded JSON body.

        Raises:
            TransportError: If the connection failed.
            HttpStatusError: If the response status is not 2xx.
            MalformedResponseError: If the body is not valid JSON.
            asyncio.CancelledError: If the token was cancelled.
        """
        token = cancellation or CancellationToken()
        token.raise_if_cancelled()

        url = f"{self.base_url}{path}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        headers = self.build_headers()
        log_api_request("GET", url, params=query, headers=headers)

        try:
            async with self._get_session().get(url, params=query, headers=headers) as response:
                data = await self._handle_response(response, url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Error requesting {url}: {e}")
            raise TransportError(f"Request to {url} failed: {e}") from e

        token.raise_if_cancelled()
        return data
