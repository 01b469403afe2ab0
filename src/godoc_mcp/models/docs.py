from __future__ import annotations

from pydantic import BaseModel


def package_name(import_path: str) -> str:
    """Last segment of an import path, or the whole path if that is empty."""
    return import_path.rsplit("/", 1)[-1] or import_path


class CodeExample(BaseModel):
    name: str
    code: str
    output: str | None = None


class PackageDoc(BaseModel):
    """Overview of one package as rendered on pkg.go.dev."""

    name: str
    import_path: str
    version: str | None = None
    synopsis: str
    overview: str | None = None  # HTML fragment
    readme: str | None = None  # HTML fragment
    subdirectories: list[str] | None = None
    imports: list[str] | None = None


class FunctionDoc(BaseModel):
    name: str
    signature: str
    documentation: str
    examples: list[CodeExample] | None = None
    package_path: str


class MethodDoc(BaseModel):
    name: str
    signature: str
    documentation: str
    receiver: str  # Owning type name


class TypeDoc(BaseModel):
    name: str
    definition: str
    documentation: str
    methods: list[MethodDoc] | None = None
    package_path: str


class SearchResult(BaseModel):
    path: str
    name: str
    synopsis: str
    score: float | None = None
