#!/usr/bin/env python
"""
MCP Server Launcher
Starts the Mowen MCP server over STDIO or HTTP (FastAPI + uvicorn)
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import uvicorn

from mcp_mowen.mowen_client import MowenClient
from mcp_mowen.mowen_config import MowenSettings, load_env_file
from mcp_mowen.mowen_errors import ConfigurationError
from mcp_mowen.mowen_service import MowenService

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Configure logging (stderr, stdout is reserved for STDIO transport)"""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mowen MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="http",
        help="MCP transport (default: http)"
    )
    parser.add_argument("--host", help="HTTP bind host (overrides MOWEN_SERVER_HOST)")
    parser.add_argument("--port", type=int, help="HTTP bind port (overrides MOWEN_SERVER_PORT)")
    parser.add_argument("--env-file", help="Path to .env file")
    return parser.parse_args(argv)


def build_service(settings: MowenSettings) -> MowenService:
    """Create the service, failing fast when the API key is missing"""
    client = MowenClient.from_settings(settings)
    return MowenService(client=client, settings=settings)


def main(argv: Optional[List[str]] = None) -> int:
    """Launch the MCP server"""
    args = parse_args(argv)
    load_env_file(args.env_file)

    try:
        settings = MowenSettings()
        validation = settings.validate()
        setup_logging(settings.log_level)
        for warning in validation['warnings']:
            logger.warning(warning)
        service = build_service(settings)
        if not validation['valid']:
            raise ConfigurationError("; ".join(validation['errors']))
    except ConfigurationError as e:
        setup_logging()
        logger.error(e.message)
        return 1

    if args.transport == "stdio":
        from .server_stdio import handle_stdio

        asyncio.run(handle_stdio(service))
        return 0

    from .server_rest import create_app

    host = args.host or settings.server_host
    port = args.port or settings.server_port

    logger.info("=" * 60)
    logger.info("Starting Mowen MCP Server")
    logger.info(f"  - URL: http://{host}:{port}")
    logger.info("  - MCP Protocol Endpoints: POST /, POST /mcp/v1")
    logger.info("=" * 60)

    uvicorn.run(create_app(service), host=host, port=port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
