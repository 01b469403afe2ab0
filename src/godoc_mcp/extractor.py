"""Structured documentation extracted from pkg.go.dev pages.

Each operation fetches one page and reads every field through an ordered
fallback chain (see ``godoc_mcp.extraction``). Fetch failures arrive already
classified by the fetcher. Anything raised while reading a fetched page is
wrapped as PARSE_ERROR, except a NOT_FOUND for a missing symbol, which is
re-raised unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

import structlog
from bs4 import BeautifulSoup, Tag

from godoc_mcp.errors import ErrorCode, GoDocError, not_found, parse_error
from godoc_mcp.extraction import (
    Strategy,
    attr_of,
    child_paragraphs,
    first_matching,
    first_of,
    first_text_of,
    first_texts_of,
    html_of,
    own_attr,
)
from godoc_mcp.models.docs import (
    CodeExample,
    FunctionDoc,
    MethodDoc,
    PackageDoc,
    SearchResult,
    TypeDoc,
    package_name,
)

if TYPE_CHECKING:
    from godoc_mcp.fetcher import Fetcher

log = structlog.get_logger()

T = TypeVar("T")

NO_DESCRIPTION = "No description available"
DEFAULT_EXAMPLE_NAME = "Example"

# ---------------------------------------------------------------------------
# Package overview
# ---------------------------------------------------------------------------

SYNOPSIS = (
    attr_of('meta[name="description"]', "content"),
    first_text_of(".Documentation-overview p"),
)
OVERVIEW = (html_of(".Documentation-overview"),)
README = (
    html_of("#readme"),
    html_of(".Overview-readmeContent"),
    html_of(".UnitReadme-content"),
)
PAGE_VERSION = (
    first_text_of(".Documentation-version"),
    first_text_of('[data-test-id="UnitHeader-version"] a'),
)
SUBDIRECTORY_SELECTORS = (".Directories-list a", ".UnitDirectories-pathCell a")
IMPORT_SELECTORS = (".Documentation-imports a",)

# ---------------------------------------------------------------------------
# Symbols: functions, types, methods
# ---------------------------------------------------------------------------

FUNCTION_ID = (
    attr_of(".Documentation-functionHeader h4", "id"),
    attr_of("h4.Documentation-functionHeader", "id"),
    own_attr("id"),
)
TYPE_ID = (
    attr_of(".Documentation-typeHeader h4", "id"),
    attr_of("h4.Documentation-typeHeader", "id"),
    own_attr("id"),
)
METHOD_ID = (
    attr_of(".Documentation-functionHeader h4", "id"),
    attr_of(".Documentation-typeMethodHeader h4", "id"),
    attr_of("h4.Documentation-typeMethodHeader", "id"),
    own_attr("id"),
)
DECLARATION = (
    first_text_of(".Documentation-declaration pre"),
    first_text_of(".Documentation-declaration"),
)
DOCUMENTATION = (
    first_text_of(".Documentation-content"),
    child_paragraphs(),
)

# ---------------------------------------------------------------------------
# Examples
# ---------------------------------------------------------------------------

EXAMPLE_CONTAINER_SELECTORS = (".Documentation-example", ".Documentation-exampleDetails")
FUNCTION_EXAMPLE_SELECTORS = (".Documentation-exampleDetails",)
PACKAGE_EXAMPLE_NAME = (
    first_text_of(".Documentation-exampleHeader"),
    first_text_of(".Documentation-exampleDetailsHeader"),
    first_text_of("summary"),
)
FUNCTION_EXAMPLE_NAME = (
    first_text_of(".Documentation-exampleDetailsHeader"),
    first_text_of("summary"),
)
EXAMPLE_CODE = (
    first_text_of(".Documentation-exampleCode pre"),
    first_text_of("textarea.Documentation-exampleCode"),
    first_text_of(".Documentation-exampleCode"),
)
EXAMPLE_OUTPUT = (
    first_text_of(".Documentation-exampleOutput pre"),
    first_text_of(".Documentation-exampleOutput"),
)

# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

SEARCH_CONTAINER_SELECTORS = (
    ".SearchSnippet",
    '[data-test-id="snippet-title"]',
    ".SearchResult",
    "article",
)
SEARCH_NAME = (
    first_text_of("a"),
    first_text_of(".SearchSnippet-header"),
    first_text_of("h2"),
)
SEARCH_SYNOPSIS = (
    first_text_of(".SearchSnippet-synopsis"),
    first_text_of("p"),
    first_text_of('[data-test-id="snippet-synopsis"]'),
)


def _symbol_scope(marker: Tag) -> Tag:
    """Element holding a symbol's declaration.

    Older markup puts the kind marker on a wrapper around header and body;
    current markup puts it on the header itself, next to the body.
    """
    if marker.select_one(".Documentation-declaration") is None and isinstance(marker.parent, Tag):
        return marker.parent
    return marker


def _examples_in(
    node: Tag, selectors: tuple[str, ...], names: tuple[Strategy, ...]
) -> list[CodeExample]:
    examples: list[CodeExample] = []
    for container in first_matching(node, selectors):
        code = first_of(container, EXAMPLE_CODE)
        if not code:
            continue
        examples.append(
            CodeExample(
                name=first_of(container, names, DEFAULT_EXAMPLE_NAME),
                code=code,
                output=first_of(container, EXAMPLE_OUTPUT),
            )
        )
    return examples


def _search_path(href: str) -> str:
    return href.removeprefix("/").split("@", 1)[0]


def _normalize_version(text: str | None) -> str | None:
    if text is None:
        return None
    return text.removeprefix("Version:").strip() or None


class DocExtractor:
    """Fetches pkg.go.dev pages and extracts the five document shapes."""

    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    def page_url(self, package_path: str, version: str | None = None) -> str:
        url = f"{self._fetcher.base_url}/{package_path}"
        return f"{url}@{version}" if version else url

    async def _load(self, package_path: str, version: str | None) -> BeautifulSoup:
        html = await self._fetcher.fetch(self.page_url(package_path, version))
        return BeautifulSoup(html, "html.parser")

    def _extract(self, what: str, extract: Callable[[], T], **context: object) -> T:
        try:
            return extract()
        except Exception as exc:
            if isinstance(exc, GoDocError) and exc.code is ErrorCode.NOT_FOUND:
                raise
            log.error("extract_failed", what=what, exc_info=True, **context)
            raise parse_error(f"Failed to parse {what}", cause=exc) from exc

    # ------------------------------------------------------------------
    # Package overview
    # ------------------------------------------------------------------

    async def get_package_doc(self, package_path: str, version: str | None = None) -> PackageDoc:
        soup = await self._load(package_path, version)

        def extract() -> PackageDoc:
            subdirectories = first_texts_of(soup, SUBDIRECTORY_SELECTORS)
            imports = first_texts_of(soup, IMPORT_SELECTORS)
            return PackageDoc(
                name=package_name(package_path),
                import_path=package_path,
                version=_normalize_version(first_of(soup, PAGE_VERSION)) or version,
                synopsis=first_of(soup, SYNOPSIS, NO_DESCRIPTION),
                overview=first_of(soup, OVERVIEW),
                readme=first_of(soup, README),
                subdirectories=subdirectories or None,
                imports=imports or None,
            )

        return self._extract("package documentation", extract, package=package_path)

    # ------------------------------------------------------------------
    # Functions and types
    # ------------------------------------------------------------------

    async def get_function_doc(
        self, package_path: str, function_name: str, version: str | None = None
    ) -> FunctionDoc:
        soup = await self._load(package_path, version)

        def extract() -> FunctionDoc:
            for marker in soup.select('[data-kind="function"]'):
                if first_of(marker, FUNCTION_ID) != function_name:
                    continue
                scope = _symbol_scope(marker)
                signature = first_of(scope, DECLARATION)
                if not signature:
                    continue
                examples = _examples_in(scope, FUNCTION_EXAMPLE_SELECTORS, FUNCTION_EXAMPLE_NAME)
                return FunctionDoc(
                    name=function_name,
                    signature=signature,
                    documentation=first_of(scope, DOCUMENTATION, ""),
                    examples=examples or None,
                    package_path=package_path,
                )
            raise not_found(f"Function {function_name} not found in {package_path}")

        return self._extract(
            "function documentation", extract, package=package_path, function=function_name
        )

    async def get_type_doc(
        self, package_path: str, type_name: str, version: str | None = None
    ) -> TypeDoc:
        soup = await self._load(package_path, version)

        def find_definition() -> tuple[str, str] | None:
            for marker in soup.select('[data-kind="type"]'):
                if first_of(marker, TYPE_ID) != type_name:
                    continue
                scope = _symbol_scope(marker)
                definition = first_of(scope, DECLARATION)
                if definition:
                    return definition, first_of(scope, DOCUMENTATION, "")
            return None

        def find_methods() -> list[MethodDoc]:
            prefix = f"{type_name}."
            methods: list[MethodDoc] = []
            for marker in soup.select('[data-kind="method"]'):
                method_id = first_of(marker, METHOD_ID) or ""
                if not method_id.startswith(prefix):
                    continue
                scope = _symbol_scope(marker)
                signature = first_of(scope, DECLARATION)
                if signature:
                    methods.append(
                        MethodDoc(
                            name=method_id.removeprefix(prefix),
                            signature=signature,
                            documentation=first_of(scope, DOCUMENTATION, ""),
                            receiver=type_name,
                        )
                    )
            return methods

        def extract() -> TypeDoc:
            found = find_definition()
            if found is None:
                raise not_found(f"Type {type_name} not found in {package_path}")
            definition, documentation = found
            methods = find_methods()
            return TypeDoc(
                name=type_name,
                definition=definition,
                documentation=documentation,
                methods=methods or None,
                package_path=package_path,
            )

        return self._extract("type documentation", extract, package=package_path, type=type_name)

    # ------------------------------------------------------------------
    # Examples and search
    # ------------------------------------------------------------------

    async def get_package_examples(
        self, package_path: str, version: str | None = None
    ) -> list[CodeExample]:
        soup = await self._load(package_path, version)
        return self._extract(
            "package examples",
            lambda: _examples_in(soup, EXAMPLE_CONTAINER_SELECTORS, PACKAGE_EXAMPLE_NAME),
            package=package_path,
        )

    async def search_packages(self, query: str, limit: int = 10) -> list[SearchResult]:
        html = await self._fetcher.fetch(
            f"{self._fetcher.base_url}/search", params={"q": query, "limit": limit}
        )
        soup = BeautifulSoup(html, "html.parser")

        def extract() -> list[SearchResult]:
            results: dict[str, SearchResult] = {}
            for selector in SEARCH_CONTAINER_SELECTORS:
                for element in soup.select(selector):
                    link = element.select_one("a")
                    href = link.get("href") if link is not None else None
                    path = _search_path(href) if isinstance(href, str) else ""
                    name = first_of(element, SEARCH_NAME) or package_name(path)
                    if not path or not name or path in results:
                        continue
                    results[path] = SearchResult(
                        path=path,
                        name=name,
                        synopsis=first_of(element, SEARCH_SYNOPSIS, NO_DESCRIPTION),
                    )
                if results:
                    break
            return list(results.values())[:limit]

        return self._extract("search results", extract, query=query)
