"""JSON-RPC style request and response envelopes.

Requests are validated with pydantic on the way in. Responses are plain
dataclasses with an explicit :meth:`ResponseEnvelope.to_dict` so that exactly
one of ``result`` or ``error`` appears on the wire.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

JSONRPC_VERSION = "2.0"
INTERNAL_ERROR_CODE = -32603
ERROR_RESPONSE_ID = "error"


class RequestEnvelope(BaseModel):
    """A decoded request.

    Attributes:
        protocol_version: Value of the ``jsonrpc`` member, not checked.
        method: Method name used for routing.
        params: Untyped parameters, interpreted per method.
        id: Correlation id echoed in the response.

    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    protocol_version: str | None = Field(default=None, alias="jsonrpc")
    method: str
    params: Any = None
    id: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_numeric_id(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @classmethod
    def from_json(cls, raw: str | bytes) -> RequestEnvelope:
        """Decode one JSON document into a request envelope.

        Raises:
            ValueError: If the text is not JSON, not an object, or not a
                valid envelope.

        """
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as error:
            raise ValueError(f"Malformed JSON: {error.msg}") from error
        if not isinstance(payload, dict):
            raise ValueError("Request must be a JSON object")
        try:
            return cls.model_validate(payload)
        except ValidationError as error:
            raise ValueError(_describe_validation_error(error)) from error


@dataclass(frozen=True)
class ErrorObject:
    """Error member of a response envelope."""

    code: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation."""
        return {"code": self.code, "message": self.message}


@dataclass(frozen=True)
class ResponseEnvelope:
    """A response carrying either a result or an error."""

    id: str | None
    result: Any = None
    error: ErrorObject | None = None

    @classmethod
    def success(cls, request_id: str | None, result: Any) -> ResponseEnvelope:
        """Build a response carrying ``result``."""
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, message: str) -> ResponseEnvelope:
        """Build a hard-failure response.

        The correlation id is always ``"error"``; clients cannot match it to
        the request that failed.
        """
        return cls(
            id=ERROR_RESPONSE_ID,
            error=ErrorObject(code=INTERNAL_ERROR_CODE, message=message),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation with absent members omitted."""
        payload: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION}
        if self.error is not None:
            payload["error"] = self.error.to_dict()
        else:
            payload["result"] = self.result
        payload["id"] = self.id
        return payload

    def to_json(self) -> str:
        """Serialize the envelope as a single line of JSON."""
        return json.dumps(self.to_dict(), ensure_ascii=False)


def _describe_validation_error(error: ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or 'request'}: {item['msg']}"
        for item in error.errors()
    )
    return f"Invalid request envelope ({problems})"
