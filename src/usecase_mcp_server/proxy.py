"""Bridge a stdio MCP client to the HTTP transport.

Every line read from stdin is POSTed to the server and the response body is
written back as a single stdout line. Logs go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

import requests

from usecase_mcp.envelope import ResponseEnvelope
from usecase_mcp.server import INTERNAL_ERROR_PREFIX

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "http://localhost:3000/mcp"
DEFAULT_TIMEOUT = 30.0


class HTTPProxy:
    """Forward line-delimited JSON requests to an HTTP MCP endpoint."""

    def __init__(
        self,
        server_url: str = DEFAULT_SERVER_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Create a proxy targeting ``server_url``."""
        self.server_url = server_url
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()

    def forward(self, request_line: str) -> str:
        """POST one request and return the response body as one line.

        Error status codes are not special: their body is an envelope too.
        A request that never reaches the server yields a hard-failure
        envelope instead.
        """
        try:
            response = self._session.post(
                self.server_url,
                data=request_line.encode("utf-8"),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Forwarding to %s failed: %s", self.server_url, exc)
            failure = ResponseEnvelope.failure(f"{INTERNAL_ERROR_PREFIX}{exc}")
            return failure.to_json()
        response.encoding = "utf-8"
        return "".join(line.strip() for line in response.text.splitlines())

    def run(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
        """Forward lines until end of input and return how many were sent."""
        stdin = stdin if stdin is not None else sys.stdin
        stdout = stdout if stdout is not None else sys.stdout
        logger.info("MCP HTTP proxy connected to %s", self.server_url)
        forwarded = 0
        for line in stdin:
            request_line = line.strip()
            if not request_line:
                continue
            logger.debug("<- STDIN: %s", request_line)
            reply = self.forward(request_line)
            logger.debug("-> STDOUT: %s", reply)
            stdout.write(reply + "\n")
            stdout.flush()
            forwarded += 1
        return forwarded


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the proxy CLI."""
    parser = argparse.ArgumentParser(
        description="Bridge stdio MCP clients to the use-case HTTP server."
    )
    parser.add_argument(
        "url",
        nargs="?",
        default=DEFAULT_SERVER_URL,
        help="URL of the MCP HTTP endpoint.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Seconds to wait for each HTTP response.",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the proxy CLI."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    with requests.Session() as session:
        HTTPProxy(args.url, timeout=args.timeout, session=session).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
