"""HTTP transport: one JSON request per POST.

Dispatch is synchronous and runs on Starlette's worker thread pool, so
concurrent requests reach :class:`MCPServer` from different threads.
"""

from __future__ import annotations

import logging

import uvicorn
from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from usecase_mcp.envelope import RequestEnvelope, ResponseEnvelope
from usecase_mcp.server import INTERNAL_ERROR_PREFIX, MCPServer
from usecase_mcp_server.use_cases import UseCaseRegistry

logger = logging.getLogger(__name__)

DEFAULT_MCP_PATH = "/mcp"
DEFAULT_HEALTH_PATH = "/health"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def build_http_app(
    server: MCPServer,
    registry: UseCaseRegistry,
    *,
    path: str = DEFAULT_MCP_PATH,
    health_path: str = DEFAULT_HEALTH_PATH,
) -> Starlette:
    """Create the Starlette application exposing ``server``.

    Args:
        server: Dispatcher handling decoded requests.
        registry: Registry reported by the health endpoint.
        path: Route accepting MCP requests.
        health_path: Route answering liveness checks.

    """

    async def mcp_endpoint(request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)
        if request.method != "POST":
            return JSONResponse(
                {"error": "Nur POST Methode erlaubt"},
                status_code=405,
                headers=CORS_HEADERS,
            )

        try:
            body = await request.body()
            logger.debug("<- Request: %s", body.decode("utf-8", errors="replace"))
            envelope = RequestEnvelope.from_json(body)
            response = await run_in_threadpool(server.process, envelope)
        except Exception as exc:
            logger.exception("Failed to handle HTTP request")
            failure = ResponseEnvelope.failure(f"{INTERNAL_ERROR_PREFIX}{exc}")
            return JSONResponse(
                failure.to_dict(), status_code=500, headers=CORS_HEADERS
            )

        payload = response.to_dict()
        logger.debug("-> Response: %s", payload)
        return JSONResponse(payload, status_code=200, headers=CORS_HEADERS)

    async def health_endpoint(_: Request) -> Response:
        return JSONResponse({"status": "ok", "useCases": len(registry)})

    return Starlette(
        routes=[
            Route(path, mcp_endpoint, methods=_ALL_METHODS),
            Route(health_path, health_endpoint, methods=["GET"]),
        ]
    )


def serve_http(
    app: Starlette,
    *,
    host: str,
    port: int,
    log_level: str = "info",
) -> None:  # pragma: no cover - exercised in real runtime
    """Serve ``app`` with uvicorn until interrupted."""
    logger.info("MCP endpoint listening on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level=log_level)
