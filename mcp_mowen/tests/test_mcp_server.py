"""
MCP Server Tests
JSON-RPC 핸들러, STDIO 루프, FastAPI 엔드포인트 테스트
"""

import io
import json

import pytest
from unittest.mock import AsyncMock, MagicMock

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from mcp_mowen.mcp_server.mcp_handlers import MCPHandler
from mcp_mowen.mcp_server.run import parse_args
from mcp_mowen.mcp_server.server_rest import create_app
from mcp_mowen.mcp_server.server_stdio import StdioMCPServer
from mcp_mowen.mcp_server.tool_definitions import MCP_TOOLS, get_tool_config
from mcp_mowen.mowen_errors import BackendError
from mcp_mowen.mowen_response import MowenResponse
from mcp_mowen.mowen_service import MowenService


def _request(method, params=None, request_id=1):
    message = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


class TestToolDefinitions:
    def test_tool_names_match_service(self, mock_client):
        service = MowenService(client=mock_client)

        assert [tool["name"] for tool in MCP_TOOLS] == service.tool_names

    def test_get_tool_config(self):
        assert get_tool_config("upload_file")["inputSchema"]["required"] == [
            "file_path", "file_type", "file_name"
        ]
        assert get_tool_config("missing") == {}


class TestMCPHandler:
    """MCPHandler 테스트"""

    @pytest.fixture
    def handler(self, service):
        return MCPHandler(service)

    @pytest.mark.asyncio
    async def test_initialize(self, handler):
        response = await handler.handle_message(
            _request("initialize", {"clientInfo": {"name": "pytest"}})
        )

        result = response["result"]
        assert result["protocolVersion"] == "2024-11-05"
        assert result["serverInfo"]["name"] == "mowen"
        assert result["capabilities"] == {"tools": {}}

    @pytest.mark.asyncio
    async def test_tools_list(self, handler):
        response = await handler.handle_message(_request("tools/list"))

        assert len(response["result"]["tools"]) == 6

    @pytest.mark.asyncio
    async def test_tools_call_success(self, handler, mock_client):
        mock_client.create_note = AsyncMock(return_value=MowenResponse({"noteId": "n-1"}))

        response = await handler.handle_message(_request("tools/call", {
            "name": "create_note",
            "arguments": {"paragraphs": [{"texts": [{"text": "hi"}]}]},
        }, request_id=7))

        assert response["id"] == 7
        content = response["result"]["content"]
        assert content[0]["type"] == "text"
        assert content[0]["text"].startswith("노트 생성 성공!")

    @pytest.mark.asyncio
    async def test_tools_call_invalid_arguments(self, handler, mock_client):
        """인자 오류 → -32602, 네트워크 호출 없음"""
        response = await handler.handle_message(_request("tools/call", {
            "name": "edit_note",
            "arguments": {"paragraphs": []},
        }))

        assert response["error"]["code"] == -32602
        assert response["error"]["message"].startswith("invalid arguments")
        mock_client.edit_note.assert_not_called()

    @pytest.mark.asyncio
    async def test_tools_call_unknown_tool(self, handler):
        response = await handler.handle_message(_request("tools/call", {"name": "nope"}))

        assert response["error"]["code"] == -32602
        assert response["error"]["message"] == "Unknown tool: nope"

    @pytest.mark.asyncio
    async def test_tools_call_backend_error(self, handler, mock_client):
        """백엔드 오류 → -32603, 접두사 포함 메시지"""
        mock_client.reset_api_key = AsyncMock(
            side_effect=BackendError.from_status(500, "boom").with_prefix("key reset request")
        )

        response = await handler.handle_message(_request("tools/call", {"name": "reset_api_key"}))

        assert response["error"]["code"] == -32603
        assert response["error"]["message"] == (
            "failed to reset API key: key reset request: API request failed with status 500: boom"
        )

    @pytest.mark.asyncio
    async def test_method_not_found(self, handler):
        response = await handler.handle_message(_request("resources/list"))

        assert response["error"]["code"] == -32601

    @pytest.mark.asyncio
    async def test_missing_method(self, handler):
        response = await handler.handle_message({"jsonrpc": "2.0", "id": 3})

        assert response["error"]["code"] == -32600

    @pytest.mark.asyncio
    async def test_non_object_message(self, handler):
        response = await handler.handle_message([1, 2])

        assert response["error"]["code"] == -32600

    @pytest.mark.asyncio
    async def test_notification_has_no_response(self, handler):
        response = await handler.handle_message(
            {"jsonrpc": "2.0", "method": "notifications/initialized"}
        )

        assert response is None

    @pytest.mark.asyncio
    async def test_ping_and_shutdown(self, handler):
        assert (await handler.handle_message(_request("ping")))["result"] == {}

        response = await handler.handle_message(_request("shutdown"))

        assert response["result"] == {}
        assert handler.shutdown_requested is True


class TestStdioMCPServer:
    """STDIO 루프 테스트"""

    @pytest.mark.asyncio
    async def test_run_until_eof(self, mock_client):
        lines = [
            json.dumps(_request("initialize", {}, request_id=1)),
            "{broken json",
            "",
            json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}),
            json.dumps(_request("tools/list", request_id=2)),
        ]
        stdin = io.StringIO("\n".join(lines) + "\n")
        stdout = io.StringIO()

        server = StdioMCPServer(MowenService(client=mock_client), stdin=stdin, stdout=stdout)
        await server.run()

        responses = [json.loads(line) for line in stdout.getvalue().splitlines()]
        assert len(responses) == 3
        assert responses[0]["result"]["serverInfo"]["name"] == "mowen"
        assert responses[1]["error"]["code"] == -32700
        assert responses[1]["id"] is None
        assert responses[2]["id"] == 2
        mock_client.initialize.assert_awaited_once()
        mock_client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shutdown_stops_loop(self, mock_client):
        lines = [
            json.dumps(_request("shutdown", request_id=1)),
            json.dumps(_request("ping", request_id=2)),
        ]
        stdout = io.StringIO()

        server = StdioMCPServer(
            MowenService(client=mock_client),
            stdin=io.StringIO("\n".join(lines) + "\n"),
            stdout=stdout,
        )
        await server.run()

        responses = [json.loads(line) for line in stdout.getvalue().splitlines()]
        assert [r["id"] for r in responses] == [1]


class TestRestServer:
    """FastAPI 엔드포인트 테스트"""

    @staticmethod
    def _endpoint(app, path, method):
        for route in app.routes:
            if getattr(route, "path", None) == path and method in getattr(route, "methods", set()):
                return route.endpoint
        raise AssertionError(f"route not found: {method} {path}")

    def test_routes(self, mock_client):
        app = create_app(MowenService(client=mock_client))

        self._endpoint(app, "/", "POST")
        self._endpoint(app, "/mcp/v1", "POST")
        self._endpoint(app, "/health", "GET")

    @pytest.mark.asyncio
    async def test_mcp_request(self, service):
        app = create_app(service)
        endpoint = self._endpoint(app, "/mcp/v1", "POST")

        request = MagicMock()
        request.json = AsyncMock(return_value=_request("tools/list", request_id="a"))
        response = await endpoint(request)

        body = json.loads(response.body)
        assert response.status_code == 200
        assert body["id"] == "a"
        assert len(body["result"]["tools"]) == 6

    @pytest.mark.asyncio
    async def test_mcp_request_parse_error(self, service):
        app = create_app(service)
        endpoint = self._endpoint(app, "/", "POST")

        request = MagicMock()
        request.json = AsyncMock(side_effect=json.JSONDecodeError("Expecting value", "x", 0))
        response = await endpoint(request)

        assert response.status_code == 200
        assert json.loads(response.body)["error"]["code"] == -32700

    @pytest.mark.asyncio
    async def test_notification_accepted(self, service):
        app = create_app(service)
        endpoint = self._endpoint(app, "/mcp/v1", "POST")

        request = MagicMock()
        request.json = AsyncMock(return_value={"jsonrpc": "2.0", "method": "notifications/initialized"})
        response = await endpoint(request)

        assert response.status_code == 202

    @pytest.mark.asyncio
    async def test_health(self, service):
        app = create_app(service)

        assert await self._endpoint(app, "/health", "GET")() == {"status": "healthy"}


class TestRunArgs:
    def test_default_transport(self):
        assert parse_args([]).transport == "http"

    def test_stdio_transport(self):
        args = parse_args(["--transport", "stdio", "--port", "9000"])

        assert args.transport == "stdio"
        assert args.port == 9000

    def test_invalid_transport(self):
        with pytest.raises(SystemExit):
            parse_args(["--transport", "websocket"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
