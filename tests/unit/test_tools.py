"""Unit tests for tool input models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from godoc_mcp.models.tools import (
    GetFunctionDocInput,
    GetPackageDocInput,
    GetPackageVersionsInput,
    GetTypeDocInput,
    SearchPackagesInput,
)


class TestPackageField:
    def test_strips_whitespace_and_slashes(self) -> None:
        parsed = GetPackageDocInput(package="  /github.com/gorilla/mux/ ")
        assert parsed.package == "github.com/gorilla/mux"

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValidationError, match="package must not be empty"):
            GetPackageDocInput(package="   ")

    def test_inner_whitespace_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Invalid package path"):
            GetPackageVersionsInput(package="github.com/a b")

    def test_too_long_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GetPackageDocInput(package="a" * 501)

    def test_missing_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GetPackageDocInput()  # type: ignore[call-arg]


class TestVersionField:
    def test_optional(self) -> None:
        assert GetPackageDocInput(package="fmt").version is None

    def test_blank_means_unversioned(self) -> None:
        assert GetPackageDocInput(package="fmt", version="  ").version is None

    def test_latest_kept(self) -> None:
        assert GetPackageDocInput(package="fmt", version="latest").version == "latest"

    def test_slash_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Invalid version"):
            GetPackageDocInput(package="fmt", version="v1/../v2")


class TestSymbolFields:
    def test_function_name(self) -> None:
        parsed = GetFunctionDocInput(package="fmt", function=" Println ")
        assert parsed.function == "Println"

    def test_function_name_rejects_punctuation(self) -> None:
        with pytest.raises(ValidationError, match="Invalid function name"):
            GetFunctionDocInput(package="fmt", function="Print(ln)")

    def test_type_name(self) -> None:
        assert GetTypeDocInput(package="net/http", type="Client").type == "Client"

    def test_type_name_rejects_leading_digit(self) -> None:
        with pytest.raises(ValidationError, match="Invalid type name"):
            GetTypeDocInput(package="net/http", type="1Client")


class TestSearchInput:
    def test_default_limit(self) -> None:
        assert SearchPackagesInput(query="router").limit == 10

    def test_query_stripped(self) -> None:
        assert SearchPackagesInput(query="  http router ").query == "http router"

    def test_empty_query_rejected(self) -> None:
        with pytest.raises(ValidationError, match="query must not be empty"):
            SearchPackagesInput(query="")

    @pytest.mark.parametrize("limit", [0, 51, -1])
    def test_limit_out_of_range(self, limit: int) -> None:
        with pytest.raises(ValidationError, match="limit must be between 1 and 50"):
            SearchPackagesInput(query="router", limit=limit)

    @pytest.mark.parametrize("limit", [1, 50])
    def test_limit_bounds_inclusive(self, limit: int) -> None:
        assert SearchPackagesInput(query="router", limit=limit).limit == limit

    def test_json_schema_lists_required_fields(self) -> None:
        schema = SearchPackagesInput.model_json_schema()
        assert schema["required"] == ["query"]
        assert schema["properties"]["limit"]["default"] == 10
