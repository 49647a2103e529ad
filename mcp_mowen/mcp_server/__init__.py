"""
Mowen MCP Server
STDIO / HTTP transports
"""

from .mcp_handlers import MCPHandler
from .tool_definitions import MCP_TOOLS

__all__ = ["MCPHandler", "MCP_TOOLS"]
