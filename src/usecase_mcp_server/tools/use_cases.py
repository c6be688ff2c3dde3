"""Tools for listing and starting use cases."""

from __future__ import annotations

import logging

from pydantic import Field, field_validator

from usecase_mcp.tools import ToolDefinition, ToolParameters, text_content
from usecase_mcp_server.errors import MCPError, raise_mcp_error
from usecase_mcp_server.scheduler import CompletionScheduler
from usecase_mcp_server.use_cases import (
    UseCase,
    UseCaseRegistry,
    UseCaseSnapshot,
    UseCaseStatus,
)

logger = logging.getLogger(__name__)


class ListUseCasesParams(ToolParameters):
    """Parameters for list_use_cases."""


class StartUseCaseParams(ToolParameters):
    """Parameters for start_use_case."""

    useCaseId: str = Field(  # noqa: N815 - wire name
        description="Die ID des zu startenden Anwendungsfalls"
    )

    @field_validator("useCaseId", mode="before")
    @classmethod
    def coerce_numeric_id(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


def format_use_case_list(snapshot: list[UseCaseSnapshot]) -> str:
    """Render the use-case overview text block."""
    text = f"Verfügbare Anwendungsfälle ({len(snapshot)}):\n\n"
    for entry in snapshot:
        text += (
            f"- [{entry.id}] {entry.name}\n"
            f"  Status: {entry.status.value}\n"
            f"  {entry.description}\n\n"
        )
    return text


def format_start_report(entry: UseCaseSnapshot) -> str:
    """Render the report returned when a use case was started."""
    return (
        f"✓ Use Case '{entry.name}' wurde gestartet!\n\n"
        "Details:\n"
        f"- ID: {entry.id}\n"
        f"- Name: {entry.name}\n"
        f"- Beschreibung: {entry.description}\n"
        f"- Status: {entry.status.value}\n\n"
        "Der Anwendungsfall wird nun ausgeführt..."
    )


def _complete(use_case: UseCase) -> None:
    use_case.transition(UseCaseStatus.DONE)
    logger.info("Use Case %s abgeschlossen.", use_case.id)


def list_use_cases_tool(registry: UseCaseRegistry) -> ToolDefinition:
    """Create the list_use_cases tool."""

    def handler(_: dict[str, object]) -> dict[str, object]:
        try:
            return text_content(format_use_case_list(registry.snapshot()))
        except Exception as exc:  # pragma: no cover
            raise_mcp_error("ListError", "Failed to list use cases", str(exc))

    return ToolDefinition(
        name="list_use_cases",
        description="Listet alle verfügbaren Anwendungsfälle auf",
        parameters_model=ListUseCasesParams,
        handler=handler,
    )


def start_use_case_tool(
    registry: UseCaseRegistry, scheduler: CompletionScheduler
) -> ToolDefinition:
    """Create the start_use_case tool.

    Starting sets the use case to RUNNING right away and schedules the switch
    to DONE. Repeated starts of the same id are not deduplicated: each one
    sets RUNNING again and schedules its own completion.
    """

    def handler(raw_params: dict[str, object]) -> object:
        try:
            params = StartUseCaseParams.model_validate(raw_params)
            use_case = registry.get(params.useCaseId)
            if use_case is None:
                return f"Use Case mit ID '{params.useCaseId}' nicht gefunden"

            report = format_start_report(use_case.transition(UseCaseStatus.RUNNING))
            logger.info("Use Case %s gestartet", use_case.id)
            scheduler.schedule(lambda: _complete(use_case))
            return text_content(report)
        except MCPError as error:
            raise error
        except Exception as exc:
            raise_mcp_error("StartError", "Failed to start use case", str(exc))

    return ToolDefinition(
        name="start_use_case",
        description="Startet einen bestimmten Anwendungsfall",
        parameters_model=StartUseCaseParams,
        handler=handler,
    )
