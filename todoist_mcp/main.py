import json
import logging
import sys
from functools import lru_cache

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from todoist_mcp.config import get_settings
from todoist_mcp.exceptions import ConfigurationError
from todoist_mcp.logging_config import configure_logging
from todoist_mcp.models.jsonrpc import INTERNAL_ERROR, error_response
from todoist_mcp.protocol import SERVER_NAME, SERVER_VERSION, McpProtocol
from todoist_mcp.services.todoist import TodoistClient

logger = logging.getLogger(__name__)


@lru_cache
def get_protocol() -> McpProtocol:
    return McpProtocol(TodoistClient(get_settings()))


# --- FastAPI app ---

app = FastAPI(title="Todoist MCP Server", version=SERVER_VERSION)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Authorization", "x-api-key"],
)


@app.get("/health")
def health() -> dict:
    return {"status": "OK", "service": SERVER_NAME}


@app.get("/")
def root() -> dict:
    return {
        "name": "Todoist MCP Server",
        "version": SERVER_VERSION,
        "protocol": "MCP over HTTP",
        "endpoint": "/mcp",
        "usage": "Claude-compatible MCP server for Todoist",
    }


@app.post("/mcp")
async def mcp_endpoint(request: Request, protocol: McpProtocol = Depends(get_protocol)):
    """One JSON-RPC message in, one out. JSON-RPC errors still answer 200."""
    raw = await request.body()
    try:
        message = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.warning("Unparseable MCP request body: %s", e)
        return JSONResponse(
            status_code=500,
            content=error_response(None, INTERNAL_ERROR, "Internal server error", f"Parse error: {e}"),
        )

    request_id = message.get("id") if isinstance(message, dict) else None
    logger.debug("MCP request from %s: %s", request.headers.get("user-agent"), message)
    try:
        response = await run_in_threadpool(protocol.handle, message)
    except Exception as e:
        logger.exception("Error handling MCP request")
        return JSONResponse(
            status_code=500,
            content=error_response(request_id, INTERNAL_ERROR, "Internal server error", str(e)),
        )

    # Notifications are acknowledged with an empty body.
    if response is None:
        return Response(status_code=200)
    logger.debug("MCP response: %s", response)
    return JSONResponse(content=response)


def run():
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        get_protocol()
    except ConfigurationError as e:
        logger.error("%s", e)
        sys.exit(1)
    logger.info("Todoist MCP server listening on port %s (MCP endpoint: /mcp)", settings.port)
    uvicorn.run(
        "todoist_mcp.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
