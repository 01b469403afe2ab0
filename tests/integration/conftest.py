"""Integration test fixtures.

Provides a fully wired AppState (real cache, fetcher, extractor, module index
and service) around an httpx client whose traffic is mocked with respx, plus
a clean environment for running the server as a subprocess.
"""

from __future__ import annotations

import os

import httpx
import pytest

from godoc_mcp.config import Settings
from godoc_mcp.state import AppState, build_app_state


@pytest.fixture()
async def app_state() -> AppState:
    """Full AppState wired the same way the server wires it at startup."""
    async with httpx.AsyncClient() as client:
        yield build_app_state(Settings(), client)


@pytest.fixture()
def subprocess_env(tmp_path) -> dict[str, str]:
    """Environment for ``python -m godoc_mcp.server`` without inherited overrides.

    The working directory is moved to tmp_path by callers so that no stray
    godoc-mcp.yaml is picked up.
    """
    env = {key: value for key, value in os.environ.items() if not key.startswith("GODOC_MCP__")}
    env["GODOC_MCP__LOGGING__LEVEL"] = "WARNING"
    return env
