"""Assemble an :class:`MCPServer` serving the use-case tools."""

from __future__ import annotations

from usecase_mcp.server import DEFAULT_SERVER_NAME, MCPServer
from usecase_mcp.tools import ToolDefinition
from usecase_mcp_server.scheduler import CompletionScheduler
from usecase_mcp_server.tools import build_tools
from usecase_mcp_server.use_cases import UseCaseRegistry

STDIO_SERVER_NAME = DEFAULT_SERVER_NAME
HTTP_SERVER_NAME = "UseCase MCP Server HTTP"


def build_server(
    registry: UseCaseRegistry,
    scheduler: CompletionScheduler,
    *,
    name: str = STDIO_SERVER_NAME,
) -> tuple[MCPServer, list[ToolDefinition]]:
    """Create a server with every use-case tool registered.

    The registry must be fully populated before the server handles its
    first request.
    """
    server = MCPServer(name=name)
    tool_definitions = build_tools(registry, scheduler)
    server.register_tools(*tool_definitions)
    return server, tool_definitions
