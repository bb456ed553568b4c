"""
Command-line entry point for the Signal MCP server.

Usage:
    signal-mcp-server [--config PATH] [--log-level LEVEL] [--log-dir DIR]
    python -m signal_mcp
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from . import SERVER_NAME, __version__
from .config import ConfigError, load_settings, setup_logging
from .server import SignalMcpServer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="MCP server exposing a signal-cli account over stdio",
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="JSON config file (default: config/mcp_server.json if present)")
    parser.add_argument("--log-level", default=None,
                        help="Logging level (default: SIGNAL_MCP_LOG_LEVEL or INFO)")
    parser.add_argument("--log-dir", type=Path, default=None,
                        help="Also write mcp_server.log into this directory")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_dir)

    logger.info(f"Starting {SERVER_NAME} v{__version__}")

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    server = SignalMcpServer(settings)
    logger.info(f"Account: {settings.account}")
    logger.info(f"signal-cli: {settings.signal_cli_path}")
    logger.info(f"Storage: {settings.storage}")

    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Shutdown signal received")
    except Exception as e:
        logger.error(f"Server terminated with error: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
