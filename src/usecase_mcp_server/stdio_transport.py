"""Line-delimited JSON transport over standard input and output."""

from __future__ import annotations

import io
import logging
import sys
from typing import TextIO

from usecase_mcp.server import MCPServer

logger = logging.getLogger(__name__)


def serve_stdio(
    server: MCPServer,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Answer one request per input line until end of input.

    Each response is written as a single line and flushed before the next
    line is read. Blank lines are skipped.

    Returns:
        Number of requests handled.

    """
    if stdin is None:
        stdin = _utf8(sys.stdin)
    if stdout is None:
        stdout = _utf8(sys.stdout)
    handled = 0
    logger.info("%s listening on stdio", server.name)
    for line in stdin:
        if not line.strip():
            continue
        response = server.handle_message(line)
        stdout.write(response.to_json() + "\n")
        stdout.flush()
        handled += 1
    logger.info("stdin closed after %d request(s)", handled)
    return handled


def _utf8(stream: TextIO) -> TextIO:
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(encoding="utf-8")
    return stream
