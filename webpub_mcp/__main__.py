"""
MCP Server Entry Point

Run the Webpublication MCP server via stdio transport for Claude Desktop integration.

Usage:
    python -m webpub_mcp              # Start server (stdio mode)
    python -m webpub_mcp setup        # Configure Claude Desktop
    python -m webpub_mcp health       # Health check
    python -m webpub_mcp --help       # Show help
"""

import asyncio
import logging
import os
import sys

from webpub_mcp import __version__
from webpub_mcp.config import SERVER_NAME, load_config
from webpub_mcp.exceptions import ConfigurationError

logger = logging.getLogger("webpub_mcp")


def configure_logging():
    """Log to stderr so stdout is clean for the MCP protocol"""
    level_name = os.getenv("MCP_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


def show_help():
    """Show help message"""
    print(f"""
Webpublication MCP Server

Usage:
  python -m webpub_mcp              Start MCP server (stdio mode)
  python -m webpub_mcp setup        Configure Claude Desktop
  python -m webpub_mcp health       Run health check
  python -m webpub_mcp version      Show version
  python -m webpub_mcp --help       Show this help

Environment:
  API_URL, DRIVE_URL, CLIENT_ID, WP_TOKEN   required
  DRIVE_TOKEN                               optional drive access token
  MCP_HTTP_TIMEOUT                          request timeout in seconds (default: 30)
  MCP_LOG_LEVEL                             log level (default: INFO)
    """)


def run_setup() -> int:
    """Run setup wizard"""
    from webpub_mcp.desktop_setup import main as setup_main
    return setup_main()


def run_health_check() -> int:
    """Run health check"""
    from webpub_mcp.health_check import main as health_main
    return health_main()


def run_server() -> int:
    """Run MCP server"""
    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}")
        return 1

    logger.info(f"Starting {config.SERVER_NAME} v{config.VERSION}")
    logger.info("Transport: stdio (Claude Desktop mode)")

    # Deferred so setup/version work without the MCP SDK loaded
    from webpub_mcp.server import run_stdio

    try:
        asyncio.run(run_stdio(config))
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        return 1
    return 0


def main():
    """Main entry point for MCP server"""
    configure_logging()

    if len(sys.argv) > 1:
        command = sys.argv[1].lower()

        if command in ("--help", "-h", "help"):
            show_help()
            sys.exit(0)
        elif command == "setup":
            sys.exit(run_setup())
        elif command in ("health", "check"):
            sys.exit(run_health_check())
        elif command == "version":
            print(f"{SERVER_NAME} v{__version__}")
            sys.exit(0)
        else:
            print(f"Unknown command: {command}")
            print("Run: python -m webpub_mcp --help")
            sys.exit(1)

    # No command = run server
    sys.exit(run_server())


if __name__ == "__main__":
    main()
