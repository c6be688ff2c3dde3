"""Tool definitions for the use-case MCP server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict

from pydantic import BaseModel, ConfigDict, ValidationError

_SCHEMA_PROPERTY_KEYS = ("type", "description")


class ToolParameters(BaseModel):
    """Base arguments schema for MCP tools.

    Unknown arguments are ignored, as clients routinely send extra keys.
    """

    model_config = ConfigDict(extra="ignore")


@dataclass(frozen=True)
class ToolDefinition:
    """Description of a tool that can be registered with the server.

    Attributes:
        name: Unique name of the tool.
        description: Human-readable description of the tool purpose.
        parameters_model: Pydantic model used to validate tool arguments.
        handler: Callable that executes the tool logic. It receives the
            validated arguments and returns the response ``result`` value.
    """

    name: str
    description: str
    parameters_model: type[ToolParameters]
    handler: Callable[[Dict[str, Any]], Any]

    def validate(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """Validate and coerce incoming tool arguments.

        Args:
            arguments: Input arguments provided for the tool.

        Raises:
            ValueError: If argument validation fails.

        Returns:
            Validated argument dictionary.
        """

        try:
            model = self.parameters_model.model_validate(arguments)
        except ValidationError as error:
            fields = [
                ".".join(str(part) for part in item["loc"]) or "arguments"
                for item in error.errors()
            ]
            raise ValueError(
                f"Invalid arguments for tool '{self.name}': {', '.join(fields)}"
            ) from error
        return model.model_dump()

    def input_schema(self) -> Dict[str, Any]:
        """Return the JSON schema advertised by ``tools/list``.

        Pydantic titles are dropped and ``required`` is always present.
        """

        schema = self.parameters_model.model_json_schema()
        properties = {
            name: {
                key: prop[key] for key in _SCHEMA_PROPERTY_KEYS if key in prop
            }
            for name, prop in schema.get("properties", {}).items()
        }
        return {
            "type": "object",
            "properties": properties,
            "required": list(schema.get("required", [])),
        }

    def metadata(self) -> Dict[str, Any]:
        """Return a discovery-friendly description of the tool."""

        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


def text_content(text: str) -> Dict[str, Any]:
    """Wrap text in the MCP tool-result content shape."""

    return {"content": [{"type": "text", "text": text}]}
