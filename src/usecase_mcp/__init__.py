"""usecase_mcp package initialization."""

from usecase_mcp.envelope import ErrorObject, RequestEnvelope, ResponseEnvelope
from usecase_mcp.server import MCPServer
from usecase_mcp.tools import ToolDefinition, ToolParameters, text_content

__all__ = [
    "ErrorObject",
    "MCPServer",
    "RequestEnvelope",
    "ResponseEnvelope",
    "ToolDefinition",
    "ToolParameters",
    "text_content",
]
