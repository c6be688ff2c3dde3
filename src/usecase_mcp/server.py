"""Transport-agnostic MCP request dispatcher.

:class:`MCPServer` holds the registered tools and routes decoded request
envelopes to the ``initialize``, ``tools/list`` and ``tools/call`` handlers.
Transports call :meth:`MCPServer.handle_message` with raw JSON text or
:meth:`MCPServer.process` with an already decoded envelope; neither raises.

Unknown methods and unknown tools are answered through the result channel
with a human-readable message. Clients depend on that shape, so it must not
be turned into JSON-RPC errors.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from pydantic import Field, ValidationError

from usecase_mcp.envelope import RequestEnvelope, ResponseEnvelope
from usecase_mcp.tools import ToolDefinition, ToolParameters

logger = logging.getLogger(__name__)

MCP_PROTOCOL_VERSION = "2024-11-05"
SERVER_VERSION = "1.0.0"
DEFAULT_SERVER_NAME = "UseCase MCP Server"
INTERNAL_ERROR_PREFIX = "Interner Server-Fehler: "


class ToolCallParams(ToolParameters):
    """Parameters of a ``tools/call`` request."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class MCPServer:
    """In-memory tool registry and request dispatcher.

    The server is safe to call from several threads at once: the tool table
    is only written during setup, and tool handlers own their own locking.
    """

    def __init__(
        self, name: str = DEFAULT_SERVER_NAME, version: str = SERVER_VERSION
    ) -> None:
        """Initialize an empty server registry."""
        self.name = name
        self.version = version
        self._tools: dict[str, ToolDefinition] = {}
        self._methods: dict[str, Callable[[Any], Any]] = {
            "initialize": self._initialize,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    def register_tool(self, tool: ToolDefinition) -> None:
        """Register a tool with the server.

        Args:
            tool: Tool definition to register.

        Raises:
            ValueError: If a tool with the same name is already registered.

        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def register_tools(self, *tools: ToolDefinition) -> None:
        """Register multiple tools at once.

        Args:
            *tools: Collection of tool definitions to register.

        """
        for tool in tools:
            self.register_tool(tool)

    def to_catalog(self) -> list[dict[str, Any]]:
        """Produce the tool descriptors returned by ``tools/list``."""
        return [tool.metadata() for tool in self._tools.values()]

    def run_tool(self, name: str, arguments: dict[str, Any] | None = None) -> Any:
        """Execute a registered tool.

        Args:
            name: Name of the registered tool to execute.
            arguments: Optional arguments for the tool.

        Raises:
            KeyError: If the tool name is not registered.
            ValueError: If argument validation fails.

        Returns:
            The value placed in the response ``result`` member.

        """
        if name not in self._tools:
            raise KeyError(f"Tool '{name}' is not registered")

        tool = self._tools[name]
        validated = tool.validate(arguments or {})
        return tool.handler(validated)

    def handle_message(self, raw: str | bytes) -> ResponseEnvelope:
        """Decode one JSON request and dispatch it.

        Decoding failures are reported like any other hard failure.
        """
        try:
            envelope = RequestEnvelope.from_json(raw)
        except ValueError as error:
            logger.warning("Rejected request: %s", error)
            return ResponseEnvelope.failure(f"{INTERNAL_ERROR_PREFIX}{error}")
        return self.process(envelope)

    def process(self, envelope: RequestEnvelope) -> ResponseEnvelope:
        """Route a request envelope to its method handler.

        Args:
            envelope: Decoded request.

        Returns:
            A response envelope. Every failure is converted into an error
            envelope, so this method never raises.

        """
        logger.debug("Dispatching method %r (id=%s)", envelope.method, envelope.id)
        handler = self._methods.get(envelope.method)
        if handler is None:
            return ResponseEnvelope.success(
                envelope.id, f"Unbekannte Methode: {envelope.method}"
            )
        try:
            result = handler(envelope.params)
        except ValueError as error:
            logger.warning("Method %r failed: %s", envelope.method, error)
            return ResponseEnvelope.failure(f"{INTERNAL_ERROR_PREFIX}{error}")
        except Exception as exc:
            logger.exception("Method %r failed", envelope.method)
            return ResponseEnvelope.failure(f"{INTERNAL_ERROR_PREFIX}{exc}")
        return ResponseEnvelope.success(envelope.id, result)

    def _initialize(self, _params: Any) -> dict[str, Any]:
        return {
            "protocolVersion": MCP_PROTOCOL_VERSION,
            "serverInfo": {"name": self.name, "version": self.version},
            "capabilities": {"tools": {}},
        }

    def _list_tools(self, _params: Any) -> dict[str, Any]:
        return {"tools": self.to_catalog()}

    def _call_tool(self, params: Any) -> Any:
        try:
            call = ToolCallParams.model_validate(params)
        except ValidationError as error:
            raise ValueError("Invalid parameters for 'tools/call'") from error

        if call.name not in self._tools:
            return f"Unbekanntes Tool: {call.name}"
        return self.run_tool(call.name, call.arguments)
