"""JSON-over-HTTP transport for the git data API, built on httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from gitdata.errors import DecodeError, NotFoundError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"


class RestTransport:
    """Issues one request per call and returns the decoded JSON body.

    No retries or caching. Failures are raised as TransportError
    (NotFoundError for 404) or DecodeError for a non-JSON body.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        user_agent: str = "gitdata",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={
                "Accept": "application/vnd.github+json",
                "User-Agent": user_agent,
            },
        )

    async def get_json(
        self,
        path: str,
        *,
        operation: str,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        return await self._request("GET", path, operation, None, headers, params)

    async def send_json(
        self,
        method: str,
        path: str,
        body: Any,
        *,
        operation: str,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Send ``body`` as JSON with ``method`` (POST, PATCH, ...)."""
        return await self._request(method, path, operation, body, headers, params)

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        body: Any,
        headers: dict[str, str] | None,
        params: dict[str, str] | None,
    ) -> Any:
        logger.debug("%s %s", method, path)
        try:
            resp = await self._client.request(
                method, path, json=body, headers=headers, params=params
            )
        except httpx.HTTPError as e:
            raise TransportError(operation, f"{method} {path}: {e}", cause=e) from e

        if resp.status_code == 404:
            raise NotFoundError(operation, f"{method} {path} returned 404")
        if resp.is_error:
            raise TransportError(
                operation,
                f"{method} {path} returned {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(operation, f"{method} {path}: response is not JSON", cause=e) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
