"""Query orchestration: cache keys, "latest" resolution, get-or-fetch.

Cache keys are colon-delimited strings::

    <kind>:<path>                    package, examples, versions
    <kind>:<path>@<version>
    <kind>:<path>:<symbol>           function, type
    <kind>:<path>@<version>:<symbol>
    search:<query>:<limit>

The get-or-fetch sequence awaits the network between the cache check and the
cache write. Concurrent misses on the same key each fetch independently; there
is no request coalescing.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import TYPE_CHECKING, TypeVar

import structlog

from godoc_mcp.errors import not_found

if TYPE_CHECKING:
    from godoc_mcp.cache import DocumentCache
    from godoc_mcp.config import CacheSettings
    from godoc_mcp.extractor import DocExtractor
    from godoc_mcp.models.docs import CodeExample, FunctionDoc, PackageDoc, SearchResult, TypeDoc
    from godoc_mcp.models.index import PackageVersions
    from godoc_mcp.module_index import ModuleIndex

log = structlog.get_logger()

T = TypeVar("T")

LATEST = "latest"


class CacheKind(StrEnum):
    PACKAGE = "package"
    FUNCTION = "function"
    TYPE = "type"
    SEARCH = "search"
    EXAMPLES = "examples"
    VERSIONS = "versions"


def build_cache_key(
    kind: CacheKind, path: str, version: str | None = None, symbol: str | None = None
) -> str:
    key = f"{kind}:{path}"
    if version:
        key = f"{key}@{version}"
    if symbol is not None:
        key = f"{key}:{symbol}"
    return key


class DocService:
    """The six documentation queries, served from cache when possible."""

    def __init__(
        self,
        cache: DocumentCache,
        extractor: DocExtractor,
        index: ModuleIndex,
        settings: CacheSettings,
    ) -> None:
        self._cache = cache
        self._extractor = extractor
        self._index = index
        self._document_ttl = settings.ttl_seconds
        self._volatile_ttl = settings.volatile_ttl_seconds

    async def resolve_version(self, path: str, version: str | None) -> str | None:
        """Replace the ``"latest"`` sentinel with a concrete version.

        Falls back to the unversioned page when the index knows no version.
        """
        if version != LATEST:
            return version
        resolved = await self._index.get_latest_version(path)
        if resolved is None:
            log.info("latest_version_unresolved", package=path)
        else:
            log.debug("latest_version_resolved", package=path, version=resolved)
        return resolved

    async def _get_or_fetch(self, key: str, fetch: Callable[[], Awaitable[T]], ttl: int) -> T:
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        value = await fetch()
        self._cache.set(key, value, ttl)
        return value

    async def get_package_doc(self, path: str, version: str | None = None) -> PackageDoc:
        version = await self.resolve_version(path, version)
        return await self._get_or_fetch(
            build_cache_key(CacheKind.PACKAGE, path, version),
            lambda: self._extractor.get_package_doc(path, version),
            self._document_ttl,
        )

    async def get_function_doc(
        self, path: str, function_name: str, version: str | None = None
    ) -> FunctionDoc:
        version = await self.resolve_version(path, version)
        return await self._get_or_fetch(
            build_cache_key(CacheKind.FUNCTION, path, version, function_name),
            lambda: self._extractor.get_function_doc(path, function_name, version),
            self._document_ttl,
        )

    async def get_type_doc(self, path: str, type_name: str, version: str | None = None) -> TypeDoc:
        version = await self.resolve_version(path, version)
        return await self._get_or_fetch(
            build_cache_key(CacheKind.TYPE, path, version, type_name),
            lambda: self._extractor.get_type_doc(path, type_name, version),
            self._document_ttl,
        )

    async def get_package_examples(
        self, path: str, version: str | None = None
    ) -> list[CodeExample]:
        version = await self.resolve_version(path, version)
        return await self._get_or_fetch(
            build_cache_key(CacheKind.EXAMPLES, path, version),
            lambda: self._extractor.get_package_examples(path, version),
            self._document_ttl,
        )

    async def search_packages(self, query: str, limit: int = 10) -> list[SearchResult]:
        return await self._get_or_fetch(
            build_cache_key(CacheKind.SEARCH, query, symbol=str(limit)),
            lambda: self._extractor.search_packages(query, limit),
            self._volatile_ttl,
        )

    async def get_package_versions(self, path: str) -> PackageVersions:
        key = build_cache_key(CacheKind.VERSIONS, path)
        versions: PackageVersions | None = self._cache.get(key)
        if versions is None:
            versions = await self._index.get_package_versions(path)
            if versions is None:
                raise not_found(f"No versions found for package: {path}")
            self._cache.set(key, versions, self._volatile_ttl)
        return versions
