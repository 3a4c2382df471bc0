#!/usr/bin/env python3
"""
MCP Server Health Check

Quick diagnostic tool to verify the MCP server setup: dependencies,
configuration, tool catalog, Webpublication API access and Claude Desktop
registration.

Usage:
    python -m webpub_mcp health
"""

import asyncio
import importlib
import json
import sys

# Colors
GREEN = '\033[92m'
RED = '\033[91m'
YELLOW = '\033[93m'
BLUE = '\033[94m'
RESET = '\033[0m'

DEPENDENCIES = ("mcp", "httpx", "pydantic", "pydantic_settings")


def check_item(name: str, check_func) -> bool:
    """Run a check and print result"""
    try:
        result, message = check_func()
    except Exception as e:
        result, message = False, str(e)

    mark = f"{GREEN}✓{RESET}" if result else f"{RED}✗{RESET}"
    print(f"{mark} {name}: {message}")
    return result


def check_dependencies() -> tuple:
    """Check Python dependencies"""
    missing = []
    for module in DEPENDENCIES:
        try:
            importlib.import_module(module)
        except ImportError:
            missing.append(module)

    if missing:
        return False, f"Missing: {', '.join(missing)}"
    return True, "All installed"


def check_configuration() -> tuple:
    """Check that credentials and URLs are configured"""
    from webpub_mcp.config import load_config
    from webpub_mcp.exceptions import ConfigurationError

    try:
        config = load_config()
    except ConfigurationError as e:
        return False, e.message
    return True, f"API {config.API_URL}, drive {config.DRIVE_URL}, client {config.CLIENT_ID}"


def check_tool_catalog() -> tuple:
    """Check that the tool catalog builds valid MCP tool definitions"""
    from webpub_mcp.registry import TOOLS

    tools = [tool.to_mcp_tool() for tool in TOOLS.values()]
    return True, f"{len(tools)} tools: {', '.join(tool.name for tool in tools)}"


def check_api_access() -> tuple:
    """Call get_recent_resources against the configured API"""
    from webpub_mcp.config import load_config
    from webpub_mcp.registry import ToolDispatcher
    from webpub_mcp.services.http_client import WebPublicationClient

    async def fetch_recent():
        async with WebPublicationClient(load_config()) as client:
            return await ToolDispatcher(client).call_tool("get_recent_resources", {})

    response = asyncio.run(fetch_recent())
    if response.is_error:
        return False, response.error["message"]
    return True, f"{response.content['total']} recent publications"


def check_claude_config() -> tuple:
    """Check if Claude Desktop is configured"""
    from webpub_mcp.desktop_setup import SERVER_KEY, get_claude_config_path

    config_path = get_claude_config_path()
    if not config_path or not config_path.exists():
        return False, "Config file not found"

    with open(config_path) as f:
        config = json.load(f)

    if SERVER_KEY in config.get("mcpServers", {}):
        return True, "Webpublication MCP configured"
    return False, "Webpublication not in config"


def main() -> int:
    print(f"\n{BLUE}{'='*60}{RESET}")
    print(f"{BLUE}  Webpublication MCP Server Health Check{RESET}")
    print(f"{BLUE}{'='*60}{RESET}\n")

    checks = [
        ("Python Dependencies", check_dependencies),
        ("Configuration", check_configuration),
        ("Tool Catalog", check_tool_catalog),
        ("Webpublication API", check_api_access),
        ("Claude Desktop Config", check_claude_config),
    ]

    results = [check_item(name, check_func) for name, check_func in checks]

    passed = sum(results)
    total = len(results)

    print(f"\n{BLUE}{'='*60}{RESET}")

    if passed == total:
        print(f"{GREEN}  All checks passed! ({passed}/{total}){RESET}")
        print(f"{BLUE}{'='*60}{RESET}\n")
        return 0

    print(f"{YELLOW}  Passed: {passed}/{total}{RESET}")
    print(f"{BLUE}{'='*60}{RESET}\n")

    if not results[0]:
        print("Fix: pip install -e .\n")
    elif not results[1]:
        print("Fix: set API_URL, DRIVE_URL, CLIENT_ID and WP_TOKEN (environment or .env)\n")
    elif not results[4]:
        print("Fix: python -m webpub_mcp setup\n")
    else:
        print("Some checks failed. Review errors above.\n")

    return 1


if __name__ == "__main__":
    sys.exit(main())
