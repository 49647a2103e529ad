"""
STDIO MCP Server for the Mowen MCP Server
Handles MCP protocol via standard input/output
"""
import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO

from mcp_mowen.mowen_service import MowenService

from .mcp_handlers import MCPHandler, PARSE_ERROR, make_error

logger = logging.getLogger(__name__)

_EOF = object()


class StdioMCPServer:
    """MCP STDIO Protocol Server

    Handles MCP protocol communication via standard input/output using JSON-RPC format.
    Messages are delimited by newlines. Logging goes to stderr only.
    """

    def __init__(
        self,
        service: MowenService,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.service = service
        self.handler = MCPHandler(service)
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.running = False
        logger.info("Mowen MCP STDIO Server initialized")

    async def read_message(self) -> Any:
        """Read a single JSON-RPC message from stdin

        Returns the decoded message, None for a blank or malformed line,
        or _EOF when the input stream is closed.
        """
        line = await asyncio.get_event_loop().run_in_executor(None, self.stdin.readline)
        if not line:
            return _EOF

        line = line.strip()
        if not line:
            return None

        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON received: {e}")
            self.write_message(make_error(None, PARSE_ERROR, f"Parse error: {e}"))
            return None

        logger.debug(f"Received message: {message}")
        return message

    def write_message(self, message: Dict[str, Any]):
        """Write a JSON-RPC message to stdout"""
        json_str = json.dumps(message, ensure_ascii=False)
        self.stdout.write(json_str + '\n')
        self.stdout.flush()
        logger.debug(f"Sent message: {message}")

    async def run(self):
        """Main server loop"""
        self.running = True

        await self.service.initialize()
        logger.info("Mowen MCP STDIO Server started")
        logger.info("Waiting for messages on stdin...")

        try:
            while self.running:
                message = await self.read_message()

                if message is _EOF:
                    logger.info("Input stream closed, shutting down")
                    break
                if message is None:
                    continue

                response = await self.handler.handle_message(message)
                if response is not None:
                    self.write_message(response)

                if self.handler.shutdown_requested:
                    self.running = False

        except KeyboardInterrupt:
            logger.info("Interrupted by user")
        finally:
            await self.service.close()
            logger.info("Mowen MCP STDIO Server stopped")


async def handle_stdio(service: Optional[MowenService] = None):
    """Run the STDIO server until stdin closes"""
    server = StdioMCPServer(service or MowenService())
    await server.run()
