"""
MCP JSON-RPC Handlers for the Mowen MCP Server
Shared by the STDIO and HTTP transports
"""
import logging
from typing import Any, Dict, Optional

from mcp_mowen import __version__
from mcp_mowen.mowen_errors import ArgumentError, MowenError, ToolExecutionError
from mcp_mowen.mowen_service import MowenService

from .tool_definitions import MCP_TOOLS

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "mowen"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def make_result(request_id: Any, result: Any) -> Dict[str, Any]:
    """Build JSON-RPC success response"""
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "result": result
    }


def make_error(request_id: Any, code: int, message: str, data: Any = None) -> Dict[str, Any]:
    """Build JSON-RPC error response"""
    error_response = {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {
            "code": code,
            "message": message
        }
    }
    if data is not None:
        error_response["error"]["data"] = data
    return error_response


class MCPHandler:
    """MCP protocol method router

    Requests (messages with an id) get a response dict.
    Notifications return None.
    """

    def __init__(self, service: MowenService):
        self.service = service
        self.shutdown_requested = False

    async def handle_initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle initialize request"""
        client_info = params.get("clientInfo", {})
        logger.info(f"Client connected: {client_info.get('name', 'unknown')}")

        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {
                "tools": {}
            },
            "serverInfo": {
                "name": SERVER_NAME,
                "version": __version__
            }
        }

    async def handle_tools_list(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle tools/list request"""
        return {"tools": MCP_TOOLS}

    async def handle_tools_call(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle tools/call request"""
        tool_name = params.get("name")
        arguments = params.get("arguments")

        if not tool_name:
            raise ArgumentError("tool name is required")

        logger.info(f"Calling tool: {tool_name}")
        text = await self.service.call_tool(tool_name, arguments)
        return {
            "content": [
                {
                    "type": "text",
                    "text": text
                }
            ]
        }

    async def handle_request(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Handle a single JSON-RPC request"""
        request_id = request.get("id")
        method = request.get("method")
        params = request.get("params") or {}

        if not method:
            return make_error(request_id, INVALID_REQUEST, "Invalid Request: missing method")

        try:
            if method == "initialize":
                result = await self.handle_initialize(params)
            elif method == "tools/list":
                result = await self.handle_tools_list(params)
            elif method == "tools/call":
                result = await self.handle_tools_call(params)
            elif method == "shutdown":
                logger.info("Shutdown requested")
                self.shutdown_requested = True
                result = {}
            elif method == "ping":
                result = {}
            else:
                return make_error(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")

            return make_result(request_id, result)

        except (ArgumentError, ToolExecutionError) as e:
            logger.warning(f"Invalid params for {method}: {e.message}")
            return make_error(request_id, INVALID_PARAMS, e.message, e.context or None)
        except MowenError as e:
            logger.error(f"Error handling {method}: {e.message}")
            return make_error(request_id, INTERNAL_ERROR, e.message, e.context or None)
        except Exception as e:
            logger.error(f"Error handling request: {e}", exc_info=True)
            return make_error(request_id, INTERNAL_ERROR, f"Internal error: {str(e)}")

    async def handle_notification(self, notification: Dict[str, Any]) -> None:
        """Handle JSON-RPC notifications (no response expected)"""
        method = notification.get("method")
        params = notification.get("params") or {}

        if method == "notifications/initialized":
            logger.info("Client initialization complete")
        elif method == "notifications/cancelled":
            logger.info(f"Request cancelled: {params.get('requestId')}")
        else:
            logger.debug(f"Received notification: {method}")

    async def handle_message(self, message: Any) -> Optional[Dict[str, Any]]:
        """Route one decoded JSON-RPC message"""
        if not isinstance(message, dict):
            return make_error(None, INVALID_REQUEST, "Invalid Request: expected a JSON object")

        if "id" in message:
            return await self.handle_request(message)

        await self.handle_notification(message)
        return None
