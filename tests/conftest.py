"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from usecase_mcp.server import MCPServer
from usecase_mcp_server.app import build_server
from usecase_mcp_server.scheduler import CompletionScheduler
from usecase_mcp_server.use_cases import UseCaseRegistry, build_default_registry

TEST_COMPLETION_DELAY = 0.05


@pytest.fixture()
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture()
def registry() -> UseCaseRegistry:
    """Provide the four seeded demo use cases."""
    return build_default_registry()


@pytest.fixture()
def scheduler() -> Iterator[CompletionScheduler]:
    """Provide a scheduler with a short delay, cancelled after the test."""
    completion_scheduler = CompletionScheduler(delay=TEST_COMPLETION_DELAY)
    yield completion_scheduler
    completion_scheduler.shutdown()


@pytest.fixture()
def server(registry: UseCaseRegistry, scheduler: CompletionScheduler) -> MCPServer:
    """Provide a dispatcher with the use-case tools registered."""
    mcp_server, _ = build_server(registry, scheduler)
    return mcp_server
