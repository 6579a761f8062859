"""Line-delimited JSON-RPC over stdin/stdout."""

import json
import logging
import sys
from typing import BinaryIO, TextIO

from todoist_mcp.config import get_settings
from todoist_mcp.exceptions import ConfigurationError
from todoist_mcp.logging_config import configure_logging
from todoist_mcp.models.jsonrpc import PARSE_ERROR, error_response
from todoist_mcp.protocol import McpProtocol
from todoist_mcp.services.todoist import TodoistClient

logger = logging.getLogger(__name__)


def serve_stdio(protocol: McpProtocol, stdin: BinaryIO, stdout: TextIO) -> None:
    """Read one JSON value per line and answer each request on its own line until EOF.

    stdin is read as bytes so that a line of invalid UTF-8 becomes a parse
    error instead of ending the loop.
    """
    for line in stdin:
        line = line.strip()
        if not line:
            continue
        try:
            message = json.loads(line.decode("utf-8"))
        except (ValueError, RecursionError) as e:
            logger.warning("Unparseable input line: %s", e)
            response = error_response(None, PARSE_ERROR, "Parse error", str(e))
        else:
            response = protocol.handle(message)
        if response is not None:
            stdout.write(json.dumps(response, separators=(",", ":")) + "\n")
            stdout.flush()


def run():
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        client = TodoistClient(settings)
    except ConfigurationError as e:
        logger.error("%s", e)
        sys.exit(1)
    logger.info("Todoist MCP server ready on stdio")
    serve_stdio(McpProtocol(client), sys.stdin.buffer, sys.stdout)


if __name__ == "__main__":
    run()
