"""HTTP fetching with failure classification.

Every outbound request is bounded by ``fetcher.timeout_seconds`` as a total
deadline, on top of httpx's per-phase timeouts. Failures leave this module as
``GoDocError`` with exactly one code:

- HTTP 404                          -> NOT_FOUND
- deadline or httpx timeout         -> TIMEOUT
- any other transport or HTTP error -> NETWORK_ERROR
"""

from __future__ import annotations

import asyncio

import httpx
import structlog

from godoc_mcp.config import FetcherSettings
from godoc_mcp.errors import network_error, not_found, timeout

log = structlog.get_logger()

HTML_ACCEPT = "text/html,application/xhtml+xml"
JSON_ACCEPT = "application/json"


def build_http_client(settings: FetcherSettings | None = None) -> httpx.AsyncClient:
    """Shared AsyncClient used by the page fetcher and the module index."""
    settings = settings or FetcherSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
    )


class Fetcher:
    def __init__(self, client: httpx.AsyncClient, settings: FetcherSettings | None = None) -> None:
        self._client = client
        self._settings = settings or FetcherSettings()

    @property
    def base_url(self) -> str:
        return self._settings.base_url.rstrip("/")

    async def fetch(
        self,
        url: str,
        *,
        params: dict[str, str | int] | None = None,
        accept: str = HTML_ACCEPT,
    ) -> str:
        """GET ``url`` and return the body text."""
        log.debug("fetch_start", url=url, params=params)
        try:
            async with asyncio.timeout(self._settings.timeout_seconds):
                response = await self._client.get(url, params=params, headers={"Accept": accept})
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise timeout(f"Request timeout: {url}", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise network_error(f"Network error: {exc}", cause=exc) from exc

        if response.status_code == 404:
            raise not_found(
                f"Package not found: {url}",
                suggestion="Check the import path and version.",
            )
        if response.is_error:
            raise network_error(f"HTTP {response.status_code}: {response.reason_phrase}")

        log.debug("fetch_complete", url=url, status=response.status_code, size=len(response.text))
        return response.text
