"""Tests for the MCP dispatcher."""

from __future__ import annotations

import json
from typing import Any

import pytest

from usecase_mcp.envelope import RequestEnvelope
from usecase_mcp.server import MCPServer
from usecase_mcp.tools import ToolDefinition, ToolParameters, text_content


class EchoParameters(ToolParameters):
    """Arguments for the echo tool."""

    text: str


def _echo_tool() -> ToolDefinition:
    def handler(arguments: dict[str, Any]) -> dict[str, Any]:
        return text_content(arguments["text"])

    return ToolDefinition(
        name="echo",
        description="Echo the given text.",
        parameters_model=EchoParameters,
        handler=handler,
    )


def _failing_tool() -> ToolDefinition:
    def handler(_: dict[str, Any]) -> dict[str, Any]:
        raise RuntimeError("database unavailable")

    return ToolDefinition(
        name="explode",
        description="Always fails.",
        parameters_model=ToolParameters,
        handler=handler,
    )


def _request(method: str, params: Any = None, id: str = "1") -> RequestEnvelope:
    return RequestEnvelope.model_validate(
        {"jsonrpc": "2.0", "method": method, "params": params, "id": id}
    )


class TestMCPServerRegistry:
    """Behavioral coverage for tool registration."""

    def test_register_and_list_tools(self) -> None:
        """Registers a tool and ensures it appears in the catalog."""
        # Arrange
        server = MCPServer()
        echo = _echo_tool()

        # Act
        server.register_tool(echo)

        # Assert
        assert [tool["name"] for tool in server.to_catalog()] == ["echo"]
        catalog = server.to_catalog()
        assert catalog[0]["name"] == "echo"
        assert catalog[0]["description"] == echo.description
        assert catalog[0]["inputSchema"] == {
            "type": "object",
            "properties": {"text": {"type": "string"}},
            "required": ["text"],
        }

    def test_prevents_duplicate_tool_names(self) -> None:
        """Duplicate tool registrations raise a ValueError."""
        server = MCPServer()
        server.register_tool(_echo_tool())

        with pytest.raises(ValueError):
            server.register_tool(_echo_tool())

    def test_running_unknown_tool_errors(self) -> None:
        """Direct invocations of unknown tools raise a KeyError."""
        with pytest.raises(KeyError):
            MCPServer().run_tool("missing")

    def test_rejects_invalid_arguments(self) -> None:
        """Invalid arguments are surfaced as validation errors."""
        server = MCPServer()
        server.register_tool(_echo_tool())

        with pytest.raises(ValueError, match="echo"):
            server.run_tool("echo", {"text": 3})


class TestMCPServerDispatch:
    """Routing of request envelopes."""

    def test_initialize_reports_fixed_server_info(self) -> None:
        """initialize returns the protocol version and an empty tools capability."""
        server = MCPServer(name="Test Server")

        response = server.process(_request("initialize", id="init"))

        assert response.id == "init"
        assert response.result == {
            "protocolVersion": "2024-11-05",
            "serverInfo": {"name": "Test Server", "version": "1.0.0"},
            "capabilities": {"tools": {}},
        }

    def test_initialize_and_list_are_repeatable(self) -> None:
        """Discovery methods are pure and serialize identically every time."""
        server = MCPServer()
        server.register_tool(_echo_tool())

        for method in ("initialize", "tools/list"):
            first = server.process(_request(method)).to_json()
            second = server.process(_request(method)).to_json()
            assert first == second

    def test_unknown_method_is_reported_as_result(self) -> None:
        """Unknown methods produce a result string, not an error member."""
        response = MCPServer().process(_request("resources/list", id="9"))

        assert response.error is None
        assert response.id == "9"
        assert response.result == "Unbekannte Methode: resources/list"

    def test_method_names_are_case_sensitive(self) -> None:
        """Routing uses exact string matches."""
        response = MCPServer().process(_request("Initialize"))

        assert response.result == "Unbekannte Methode: Initialize"

    def test_unknown_tool_is_reported_as_result(self) -> None:
        """Calling an unregistered tool yields a result string."""
        response = MCPServer().process(_request("tools/call", {"name": "nope"}))

        assert response.error is None
        assert response.result == "Unbekanntes Tool: nope"

    def test_tool_call_defaults_arguments(self) -> None:
        """Omitted arguments are treated as an empty object."""
        server = MCPServer()
        server.register_tool(
            ToolDefinition(
                name="ping",
                description="Reply with pong.",
                parameters_model=ToolParameters,
                handler=lambda _: text_content("pong"),
            )
        )

        response = server.process(_request("tools/call", {"name": "ping"}))

        assert response.result == {"content": [{"type": "text", "text": "pong"}]}

    @pytest.mark.parametrize(
        "params",
        [
            None,
            ["echo"],
            "echo",
            {"arguments": {"text": "hi"}},
            {"name": "echo", "arguments": None},
            {"name": "echo", "arguments": ["hi"]},
            {"name": "echo", "arguments": {}},
        ],
    )
    def test_malformed_tool_calls_are_hard_failures(self, params: Any) -> None:
        """Uninterpretable params produce an error envelope with id ``error``."""
        server = MCPServer()
        server.register_tool(_echo_tool())

        response = server.process(_request("tools/call", params, id="42"))

        assert response.result is None
        assert response.id == "error"
        assert response.error is not None
        assert response.error.code == -32603
        assert response.error.message.startswith("Interner Server-Fehler: ")

    def test_handler_exceptions_are_captured(self) -> None:
        """Exceptions raised by handlers never escape the dispatcher."""
        server = MCPServer()
        server.register_tool(_failing_tool())

        response = server.process(_request("tools/call", {"name": "explode"}))

        assert response.id == "error"
        assert response.error is not None
        assert "database unavailable" in response.error.message


class TestHandleMessage:
    """Decoding plus dispatch of raw JSON text."""

    def test_dispatches_valid_json(self) -> None:
        """Raw JSON requests are decoded and routed."""
        raw = json.dumps({"jsonrpc": "2.0", "method": "initialize", "id": "a"})

        response = MCPServer().handle_message(raw)

        assert response.id == "a"
        assert response.result["protocolVersion"] == "2024-11-05"

    @pytest.mark.parametrize(
        "raw", ['{"jsonrpc": "2.0", "method": "initialize", "id": "5"', "", "[]"]
    )
    def test_malformed_input_yields_error_envelope(self, raw: str) -> None:
        """Malformed input is answered with id ``error`` and code -32603."""
        response = MCPServer().handle_message(raw)

        payload = response.to_dict()
        assert payload["id"] == "error"
        assert payload["error"]["code"] == -32603
        assert "result" not in payload
