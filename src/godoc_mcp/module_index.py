"""Client for the Go module index (index.golang.org).

The index is a newline-delimited JSON feed of ``{Path, Version, Timestamp}``
records. The client keeps one in-memory snapshot of the whole feed and
replaces it wholesale once it is older than ``index.refresh_seconds``;
there is no incremental refresh.

"Latest" means the newest stable version (no ``-`` in the version string),
falling back to the newest version of any kind when no stable one exists.
"""

from __future__ import annotations

import json
import re
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from godoc_mcp.config import IndexSettings
from godoc_mcp.errors import ErrorCode, GoDocError, network_error
from godoc_mcp.fetcher import JSON_ACCEPT, Fetcher
from godoc_mcp.models.index import IndexMatch, ModuleVersion, PackageVersions, VersionInfo

log = structlog.get_logger()

_FRACTION = re.compile(r"(\.\d{6})\d+")
_OLDEST = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True)
class IndexSnapshot:
    """The last successfully fetched feed and when it was fetched."""

    rows: tuple[ModuleVersion, ...] = ()
    refreshed_at: float | None = None

    def is_fresh(self, now: float, max_age: float) -> bool:
        return self.refreshed_at is not None and (now - self.refreshed_at) < max_age


def _field(record: dict[str, object], name: str) -> object:
    for key, value in record.items():
        if key.lower() == name:
            return value
    return None


def parse_index(text: str) -> list[ModuleVersion]:
    """Parse feed text, skipping any line that is not a complete record."""
    rows: list[ModuleVersion] = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
            if not isinstance(record, dict):
                raise ValueError("record is not an object")
            path, version, timestamp = (
                _field(record, "path"),
                _field(record, "version"),
                _field(record, "timestamp"),
            )
            if not all(isinstance(value, str) and value for value in (path, version, timestamp)):
                raise ValueError("record is missing a required field")
        except ValueError:
            log.warning("module_index_line_skipped", line=line[:200])
            continue
        rows.append(ModuleVersion(path=path, version=version, timestamp=timestamp))
    return rows


def _timestamp_key(timestamp: str) -> datetime:
    # Go emits up to nanosecond precision; datetime stops at microseconds
    try:
        parsed = datetime.fromisoformat(_FRACTION.sub(r"\1", timestamp))
    except ValueError:
        return _OLDEST
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def newest_first(rows: Iterable[ModuleVersion]) -> list[ModuleVersion]:
    return sorted(rows, key=lambda row: _timestamp_key(row.timestamp), reverse=True)


def is_stable(version: str) -> bool:
    return "-" not in version


def select_latest(sorted_rows: list[ModuleVersion]) -> str | None:
    """Newest stable version, else the newest version. Input must be newest-first."""
    if not sorted_rows:
        return None
    for row in sorted_rows:
        if is_stable(row.version):
            return row.version
    return sorted_rows[0].version


class ModuleIndex:
    def __init__(
        self,
        fetcher: Fetcher,
        settings: IndexSettings | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetcher = fetcher
        self._settings = settings or IndexSettings()
        self._clock = clock
        self._snapshot = IndexSnapshot()

    @property
    def snapshot(self) -> IndexSnapshot:
        return self._snapshot

    async def get_index(self) -> tuple[ModuleVersion, ...]:
        """Return the cached feed, refreshing it if it has expired."""
        if self._snapshot.is_fresh(self._clock(), self._settings.refresh_seconds):
            log.debug("module_index_cache_hit", rows=len(self._snapshot.rows))
            return self._snapshot.rows
        return await self.refresh()

    async def refresh(self) -> tuple[ModuleVersion, ...]:
        """Fetch the whole feed and replace the snapshot."""
        rows = tuple(parse_index(await self._fetch_feed()))
        self._snapshot = IndexSnapshot(rows=rows, refreshed_at=self._clock())
        log.info("module_index_refreshed", rows=len(rows))
        return rows

    async def _fetch_feed(self) -> str:
        try:
            return await self._fetcher.fetch(self._settings.url, accept=JSON_ACCEPT)
        except GoDocError as exc:
            # A missing feed is a transport problem, not a missing package
            if exc.code is ErrorCode.NOT_FOUND:
                raise network_error(
                    f"Failed to fetch module index: {self._settings.url}", cause=exc
                ) from exc
            raise

    async def get_package_versions(self, path: str) -> PackageVersions | None:
        rows = newest_first(row for row in await self.get_index() if row.path == path)
        if not rows:
            return None
        return PackageVersions(
            path=path,
            versions=[VersionInfo(version=row.version, timestamp=row.timestamp) for row in rows],
            latest=select_latest(rows),
        )

    async def get_latest_version(self, path: str) -> str | None:
        versions = await self.get_package_versions(path)
        return versions.latest if versions else None

    async def search_packages(self, query: str) -> list[IndexMatch]:
        """Case-insensitive substring match on module path, one result per path."""
        needle = query.lower()
        groups: dict[str, list[ModuleVersion]] = {}
        for row in await self.get_index():
            if needle in row.path.lower():
                groups.setdefault(row.path, []).append(row)

        matches: list[IndexMatch] = []
        for path, rows in groups.items():
            latest = select_latest(newest_first(rows))
            if latest is not None:
                matches.append(IndexMatch(path=path, latest=latest))
        return matches[: self._settings.search_limit]
