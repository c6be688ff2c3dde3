"""Structured error types raised inside the use-case server."""

from __future__ import annotations

from typing import NoReturn


class MCPError(Exception):
    """Hard failure raised by tool handlers.

    The dispatcher turns the string form into the error envelope message, so
    it carries the error type and the underlying cause, e.g.
    ``"Failed to start use case (StartError): timer pool exhausted"``.
    """

    def __init__(
        self, error_type: str, message: str, details: object | None = None
    ) -> None:
        """Create a structured MCP error."""
        self.error_type = error_type
        self.message = message
        self.details = details
        super().__init__(self.describe())

    def describe(self) -> str:
        """Return the client-facing description of the failure."""
        text = f"{self.message} ({self.error_type})"
        if self.details is None or self.details == "":
            return text
        return f"{text}: {self.details}"


def raise_mcp_error(
    error_type: str, message: str, details: object | None = None
) -> NoReturn:
    """Raise an :class:`MCPError` describing a failed tool call."""
    raise MCPError(error_type=error_type, message=message, details=details)
