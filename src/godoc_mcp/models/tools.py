from __future__ import annotations

import re

from pydantic import BaseModel, field_validator

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_MAX_FIELD_LENGTH = 500


def _validate_package(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("package must not be empty")
    if len(v) > _MAX_FIELD_LENGTH:
        raise ValueError("package must not exceed 500 characters")
    if any(ch.isspace() for ch in v):
        raise ValueError(f"Invalid package path: {v!r}")
    return v.strip("/")


def _validate_identifier(v: str, field: str) -> str:
    v = v.strip()
    if not _IDENTIFIER.match(v):
        raise ValueError(f"Invalid {field} name: {v!r}")
    return v


def _validate_version(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    if not v:
        return None
    if any(ch.isspace() for ch in v) or "/" in v:
        raise ValueError(f"Invalid version: {v!r}")
    return v


class GetPackageDocInput(BaseModel):
    package: str
    version: str | None = None

    @field_validator("package")
    @classmethod
    def validate_package(cls, v: str) -> str:
        return _validate_package(v)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str | None) -> str | None:
        return _validate_version(v)


class GetFunctionDocInput(GetPackageDocInput):
    function: str

    @field_validator("function")
    @classmethod
    def validate_function(cls, v: str) -> str:
        return _validate_identifier(v, "function")


class GetTypeDocInput(GetPackageDocInput):
    type: str

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        return _validate_identifier(v, "type")


class GetPackageExamplesInput(GetPackageDocInput):
    pass


class GetPackageVersionsInput(BaseModel):
    package: str

    @field_validator("package")
    @classmethod
    def validate_package(cls, v: str) -> str:
        return _validate_package(v)


class SearchPackagesInput(BaseModel):
    query: str
    limit: int = 10

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("query must not be empty")
        if len(v) > _MAX_FIELD_LENGTH:
            raise ValueError("query must not exceed 500 characters")
        return v

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if not 1 <= v <= 50:
            raise ValueError("limit must be between 1 and 50")
        return v
