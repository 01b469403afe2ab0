from __future__ import annotations

from pydantic import BaseModel


class ModuleVersion(BaseModel):
    """One row of the module index feed. A path appears once per version."""

    model_config = {"frozen": True}

    path: str
    version: str
    timestamp: str  # RFC 3339, as published by the index


class VersionInfo(BaseModel):
    version: str
    timestamp: str


class PackageVersions(BaseModel):
    path: str
    versions: list[VersionInfo]  # Newest timestamp first
    latest: str | None = None


class IndexMatch(BaseModel):
    """Single result of a substring search over the module index."""

    path: str
    latest: str
