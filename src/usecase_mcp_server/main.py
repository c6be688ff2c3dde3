"""Entry point for the use-case MCP server."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from usecase_mcp_server.app import HTTP_SERVER_NAME, STDIO_SERVER_NAME, build_server
from usecase_mcp_server.http_transport import (
    DEFAULT_HEALTH_PATH,
    DEFAULT_MCP_PATH,
    build_http_app,
    serve_http,
)
from usecase_mcp_server.scheduler import DEFAULT_COMPLETION_DELAY, CompletionScheduler
from usecase_mcp_server.stdio_transport import serve_stdio
from usecase_mcp_server.use_cases import build_default_registry

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the server CLI."""
    parser = argparse.ArgumentParser(description="Use-case MCP server")
    parser.add_argument(
        "--transport",
        choices=("stdio", "http"),
        default="stdio",
        help="Transport to serve requests on.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="HTTP bind address.")
    parser.add_argument("--port", type=int, default=3000, help="HTTP port.")
    parser.add_argument(
        "--path", default=DEFAULT_MCP_PATH, help="HTTP path of the MCP endpoint."
    )
    parser.add_argument(
        "--health-path",
        default=DEFAULT_HEALTH_PATH,
        help="HTTP path of the health endpoint.",
    )
    parser.add_argument(
        "--completion-delay",
        type=float,
        default=DEFAULT_COMPLETION_DELAY,
        help="Seconds until a started use case is marked done.",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    parser.add_argument("--catalog", action="store_true", help="Print the tool catalog")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Build the registry and serve it on the selected transport."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    registry = build_default_registry()
    scheduler = CompletionScheduler(delay=args.completion_delay)
    name = HTTP_SERVER_NAME if args.transport == "http" else STDIO_SERVER_NAME
    server, _ = build_server(registry, scheduler, name=name)

    if args.catalog:
        print(json.dumps({"tools": server.to_catalog()}, indent=2, ensure_ascii=False))
        return 0

    try:
        if args.transport == "http":
            app = build_http_app(
                server, registry, path=args.path, health_path=args.health_path
            )
            serve_http(
                app, host=args.host, port=args.port, log_level=args.log_level.lower()
            )
        else:
            serve_stdio(server)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        scheduler.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
