"""Process-wide application state.

One instance is built at startup and shared by every tool call. The cache and
the module index snapshot are mutated in place; both are safe without locks
because all access happens on the single event loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from godoc_mcp.cache import DocumentCache
from godoc_mcp.extractor import DocExtractor
from godoc_mcp.fetcher import Fetcher
from godoc_mcp.module_index import ModuleIndex
from godoc_mcp.service import DocService

if TYPE_CHECKING:
    import httpx

    from godoc_mcp.config import Settings


@dataclass
class AppState:
    settings: Settings
    http_client: httpx.AsyncClient
    cache: DocumentCache
    fetcher: Fetcher
    extractor: DocExtractor
    index: ModuleIndex
    service: DocService


def build_app_state(settings: Settings, http_client: httpx.AsyncClient) -> AppState:
    cache = DocumentCache(
        default_ttl=settings.cache.ttl_seconds,
        max_entries=settings.cache.max_entries,
    )
    fetcher = Fetcher(http_client, settings.fetcher)
    extractor = DocExtractor(fetcher)
    index = ModuleIndex(fetcher, settings.index)
    return AppState(
        settings=settings,
        http_client=http_client,
        cache=cache,
        fetcher=fetcher,
        extractor=extractor,
        index=index,
        service=DocService(cache, extractor, index, settings.cache),
    )
