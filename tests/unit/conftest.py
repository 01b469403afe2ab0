"""Unit-specific fixtures (no real network; httpx traffic is mocked with respx)."""

from __future__ import annotations

import httpx
import pytest

from godoc_mcp.cache import DocumentCache
from godoc_mcp.config import FetcherSettings, IndexSettings
from godoc_mcp.extractor import DocExtractor
from godoc_mcp.fetcher import Fetcher
from godoc_mcp.module_index import ModuleIndex


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> DocumentCache:
    return DocumentCache(default_ttl=60, max_entries=5, clock=clock)


@pytest.fixture()
async def http_client():
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture()
def fetcher(http_client: httpx.AsyncClient) -> Fetcher:
    return Fetcher(http_client, FetcherSettings(timeout_seconds=5))


@pytest.fixture()
def extractor(fetcher: Fetcher) -> DocExtractor:
    return DocExtractor(fetcher)


@pytest.fixture()
def module_index(fetcher: Fetcher, clock: FakeClock) -> ModuleIndex:
    return ModuleIndex(fetcher, IndexSettings(), clock=clock)
