from __future__ import annotations

from godoc_mcp.models.cache import CacheEntry, CacheStats
from godoc_mcp.models.docs import (
    CodeExample,
    FunctionDoc,
    MethodDoc,
    PackageDoc,
    SearchResult,
    TypeDoc,
    package_name,
)
from godoc_mcp.models.index import IndexMatch, ModuleVersion, PackageVersions, VersionInfo
from godoc_mcp.models.tools import (
    GetFunctionDocInput,
    GetPackageDocInput,
    GetPackageExamplesInput,
    GetPackageVersionsInput,
    GetTypeDocInput,
    SearchPackagesInput,
)

__all__ = [
    # docs
    "PackageDoc",
    "FunctionDoc",
    "TypeDoc",
    "MethodDoc",
    "CodeExample",
    "SearchResult",
    "package_name",
    # index
    "ModuleVersion",
    "VersionInfo",
    "PackageVersions",
    "IndexMatch",
    # cache
    "CacheEntry",
    "CacheStats",
    # tools
    "GetPackageDocInput",
    "GetFunctionDocInput",
    "GetTypeDocInput",
    "GetPackageExamplesInput",
    "GetPackageVersionsInput",
    "SearchPackagesInput",
]
