"""JSON-RPC dispatch shared by the stdio and HTTP transports."""

import logging
from typing import Any

from pydantic import ValidationError

from todoist_mcp.exceptions import JsonRpcError
from todoist_mcp.models.jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    JsonRpcRequest,
    error_response,
    success_response,
)
from todoist_mcp.services.projects import ProjectResolver
from todoist_mcp.services.todoist import TodoistClient
from todoist_mcp.tools import TOOLS

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "todoist-mcp-server"
SERVER_VERSION = "0.1.0"


class McpProtocol:
    """Turns one decoded JSON-RPC message into one response dict, or None.

    The connection state moves from uninitialized to initialized when the
    client sends notifications/initialized. It is logged, not enforced.
    """

    def __init__(self, client: TodoistClient, resolver: ProjectResolver | None = None):
        self.client = client
        self.resolver = resolver if resolver is not None else ProjectResolver(client)
        self.initialized = False
        self._methods = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
        }

    def handle(self, message: Any) -> dict | None:
        request_id = message.get("id") if isinstance(message, dict) else None
        try:
            request = JsonRpcRequest.model_validate(message)
        except ValidationError as e:
            if isinstance(message, dict) and "method" in message and request_id is None:
                return None
            return error_response(request_id, INVALID_REQUEST, "Invalid Request", str(e))

        if request.is_notification:
            self._notify(request)
            return None

        logger.info("%s request (id=%r)", request.method, request.id)
        method = self._methods.get(request.method)
        if method is None:
            logger.warning("Unknown method: %s", request.method)
            return error_response(request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}")
        try:
            return success_response(request.id, method(request.params or {}))
        except JsonRpcError as e:
            return error_response(request.id, e.code, e.message, e.data)
        except Exception as e:
            logger.exception("Error handling %s", request.method)
            return error_response(request.id, INTERNAL_ERROR, "Internal server error", str(e))

    def _notify(self, request: JsonRpcRequest) -> None:
        if request.method == "notifications/initialized":
            self.initialized = True
            logger.info("Client initialized")
        elif request.method.startswith("notifications/"):
            logger.debug("Ignoring notification %s", request.method)
        else:
            logger.warning("Dropping %s sent without an id", request.method)

    # --- Methods ---

    def _initialize(self, params: dict) -> dict:
        requested = params.get("protocolVersion")
        if requested and requested != PROTOCOL_VERSION:
            logger.info("Client asked for protocol %s, offering %s", requested, PROTOCOL_VERSION)
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {
                "tools": {"listChanged": True},
                "resources": {"subscribe": False, "listChanged": False},
                "prompts": {"listChanged": False},
            },
            "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
        }

    def _ping(self, params: dict) -> dict:
        return {}

    def _tools_list(self, params: dict) -> dict:
        return {"tools": [tool.describe() for tool in TOOLS.values()]}

    def _tools_call(self, params: dict) -> dict:
        name = params.get("name")
        tool = TOOLS.get(name) if isinstance(name, str) else None
        if tool is None:
            raise JsonRpcError(METHOD_NOT_FOUND, f"Unknown tool: {name}")
        try:
            args = tool.arguments.model_validate(params.get("arguments") or {})
        except ValidationError as e:
            raise JsonRpcError(
                INVALID_PARAMS,
                "Invalid params",
                e.errors(include_url=False, include_context=False, include_input=False),
            ) from e
        logger.info("Calling tool %s", name)
        return tool.handler(self.client, self.resolver, args).to_dict()
