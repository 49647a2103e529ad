"""
FastAPI MCP Server for the Mowen MCP Server
MCP Streamable HTTP (JSON-RPC 2.0 over POST)
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from mcp_mowen import __version__
from mcp_mowen.mowen_service import MowenService

from .mcp_handlers import MCPHandler, PARSE_ERROR, make_error
from .tool_definitions import MCP_TOOLS

logger = logging.getLogger(__name__)


def create_app(service: Optional[MowenService] = None) -> FastAPI:
    """Build the FastAPI app around a MowenService"""
    service = service or MowenService()
    handler = MCPHandler(service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await service.initialize()
        logger.info("Mowen MCP HTTP Server started")
        yield
        await service.close()
        logger.info("Mowen MCP HTTP Server stopped")

    app = FastAPI(title="Mowen MCP Server", version=__version__, lifespan=lifespan)
    app.state.service = service

    @app.get("/")
    async def root():
        return {
            "name": "Mowen MCP Server",
            "version": __version__,
            "tools": [tool["name"] for tool in MCP_TOOLS]
        }

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    async def mcp_request(request: Request):
        """MCP Streamable HTTP 단일 엔드포인트 - JSON-RPC 2.0"""
        try:
            data = await request.json()
        except ValueError as e:
            logger.error(f"Invalid JSON received: {e}")
            return JSONResponse(content=make_error(None, PARSE_ERROR, f"Parse error: {e}"))

        if isinstance(data, dict):
            logger.info(f"MCP Request: method={data.get('method')}, id={data.get('id')}")

        response = await handler.handle_message(data)
        if response is None:
            return Response(status_code=202)
        # MCP 프로토콜: 에러도 HTTP 200으로 응답
        return JSONResponse(content=response)

    app.add_api_route("/", mcp_request, methods=["POST"])
    app.add_api_route("/mcp/v1", mcp_request, methods=["POST"])

    return app
