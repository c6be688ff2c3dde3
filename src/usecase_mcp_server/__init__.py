"""Model Context Protocol server managing demo use cases."""

from usecase_mcp_server.errors import MCPError
from usecase_mcp_server.scheduler import CompletionScheduler
from usecase_mcp_server.use_cases import (
    UseCase,
    UseCaseRegistry,
    UseCaseStatus,
    build_default_registry,
)

__all__ = [
    "CompletionScheduler",
    "MCPError",
    "UseCase",
    "UseCaseRegistry",
    "UseCaseStatus",
    "build_default_registry",
]
