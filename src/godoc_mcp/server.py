"""MCP stdio server exposing the documentation tools.

Run with ``godoc-mcp`` or ``python -m godoc_mcp.server``.

Tool failures are returned as an error result whose text is a JSON envelope::

    {"error": {"code": "...", "category": "...", "message": "...", "recoverable": false}}

NOT_FOUND and INVALID_INPUT keep their message (category ``invalid_request``);
every other failure gets a generic message (category ``internal_error``) and
the detail goes to the log only.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import mcp.types as types
import structlog
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from pydantic import BaseModel, ValidationError

from godoc_mcp import __version__
from godoc_mcp.config import Settings
from godoc_mcp.errors import ErrorCode, GoDocError
from godoc_mcp.fetcher import build_http_client
from godoc_mcp.logging_config import configure_logging
from godoc_mcp.models.tools import (
    GetFunctionDocInput,
    GetPackageDocInput,
    GetPackageExamplesInput,
    GetPackageVersionsInput,
    GetTypeDocInput,
    SearchPackagesInput,
)
from godoc_mcp.service import DocService
from godoc_mcp.state import AppState, build_app_state

if TYPE_CHECKING:
    from godoc_mcp.cache import DocumentCache

log = structlog.get_logger()

TOOLS: list[types.Tool] = [
    types.Tool(
        name="get_package_doc",
        description="Get comprehensive documentation for a Go package",
        inputSchema=GetPackageDocInput.model_json_schema(),
    ),
    types.Tool(
        name="get_function_doc",
        description="Get documentation for a specific function in a Go package",
        inputSchema=GetFunctionDocInput.model_json_schema(),
    ),
    types.Tool(
        name="get_type_doc",
        description="Get documentation for a type and its methods",
        inputSchema=GetTypeDocInput.model_json_schema(),
    ),
    types.Tool(
        name="search_packages",
        description="Search for Go packages by name or description",
        inputSchema=SearchPackagesInput.model_json_schema(),
    ),
    types.Tool(
        name="get_package_examples",
        description="Get example code for a Go package",
        inputSchema=GetPackageExamplesInput.model_json_schema(),
    ),
    types.Tool(
        name="get_package_versions",
        description="Get all available versions of a Go package",
        inputSchema=GetPackageVersionsInput.model_json_schema(),
    ),
]

_GENERIC_MESSAGE = "An error occurred while fetching documentation"


class ToolCallError(Exception):
    """Carries a serialized error envelope back through the MCP tool handler."""


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value


def _parse(model: type[BaseModel], arguments: dict[str, Any]) -> Any:
    try:
        return model.model_validate(arguments)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        message = f"{location}: {first['msg']}" if location else first["msg"]
        raise GoDocError(ErrorCode.INVALID_INPUT, message) from exc


_Handler = Callable[[DocService, Any], Awaitable[Any]]

# tool name -> (input model, call into the service)
_HANDLERS: dict[str, tuple[type[BaseModel], _Handler]] = {
    "get_package_doc": (
        GetPackageDocInput,
        lambda service, args: service.get_package_doc(args.package, args.version),
    ),
    "get_function_doc": (
        GetFunctionDocInput,
        lambda service, args: service.get_function_doc(args.package, args.function, args.version),
    ),
    "get_type_doc": (
        GetTypeDocInput,
        lambda service, args: service.get_type_doc(args.package, args.type, args.version),
    ),
    "search_packages": (
        SearchPackagesInput,
        lambda service, args: service.search_packages(args.query, args.limit),
    ),
    "get_package_examples": (
        GetPackageExamplesInput,
        lambda service, args: service.get_package_examples(args.package, args.version),
    ),
    "get_package_versions": (
        GetPackageVersionsInput,
        lambda service, args: service.get_package_versions(args.package),
    ),
}


async def dispatch(state: AppState, name: str, arguments: dict[str, Any]) -> str:
    """Run one tool call and return its JSON text."""
    if name not in _HANDLERS:
        raise GoDocError(ErrorCode.INVALID_INPUT, f"Unknown tool: {name}")
    model, handler = _HANDLERS[name]
    result = await handler(state.service, _parse(model, arguments))
    return json.dumps(_to_jsonable(result), indent=2)


def error_envelope(exc: BaseException) -> dict[str, Any]:
    if isinstance(exc, GoDocError):
        if exc.code in (ErrorCode.NOT_FOUND, ErrorCode.INVALID_INPUT):
            category, message = "invalid_request", exc.message
        elif exc.code is ErrorCode.TIMEOUT:
            category, message = "internal_error", "Request timeout"
        else:
            category, message = "internal_error", _GENERIC_MESSAGE
        return {
            "error": {
                "code": exc.code.value,
                "category": category,
                "message": message,
                "recoverable": exc.recoverable,
            }
        }
    return {
        "error": {
            "code": "INTERNAL_ERROR",
            "category": "internal_error",
            "message": _GENERIC_MESSAGE,
            "recoverable": False,
        }
    }


def create_server(state: AppState) -> Server:
    server: Server = Server("godoc-mcp", version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return TOOLS

    # Arguments are validated by the input models only
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        try:
            text = await dispatch(state, name, arguments or {})
        except Exception as exc:
            log.error("tool_failed", tool=name, arguments=arguments, exc_info=True)
            raise ToolCallError(json.dumps(error_envelope(exc))) from exc
        return [types.TextContent(type="text", text=text)]

    return server


async def _log_cache_stats(cache: DocumentCache, interval: int) -> None:
    while True:
        await asyncio.sleep(interval)
        log.debug("cache_stats", **cache.get_stats().model_dump())


async def serve(settings: Settings) -> None:
    async with build_http_client(settings.fetcher) as client:
        state = build_app_state(settings, client)
        server = create_server(state)
        stats_task: asyncio.Task[None] | None = None
        if settings.logging.level == "DEBUG":
            stats_task = asyncio.create_task(
                _log_cache_stats(state.cache, settings.logging.cache_stats_interval_seconds)
            )
        log.info("server_started", version=__version__)
        try:
            async with stdio_server() as (read_stream, write_stream):
                await server.run(
                    read_stream, write_stream, server.create_initialization_options()
                )
        finally:
            if stats_task is not None:
                stats_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await stats_task
            log.info("server_stopped")


def main() -> None:
    settings = Settings()
    configure_logging(settings.logging)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
