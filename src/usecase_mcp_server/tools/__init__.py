"""Tool registration helpers for the use-case MCP server."""

from __future__ import annotations

from usecase_mcp.tools import ToolDefinition
from usecase_mcp_server.scheduler import CompletionScheduler
from usecase_mcp_server.tools.use_cases import (
    list_use_cases_tool,
    start_use_case_tool,
)
from usecase_mcp_server.use_cases import UseCaseRegistry


def build_tools(
    registry: UseCaseRegistry, scheduler: CompletionScheduler
) -> list[ToolDefinition]:
    """Instantiate all tool definitions bound to the given registry."""
    return [
        list_use_cases_tool(registry),
        start_use_case_tool(registry, scheduler),
    ]
