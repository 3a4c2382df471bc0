#!/usr/bin/env python3
"""
Automated MCP Server Setup for Claude Desktop

Registers the Webpublication MCP server in the Claude Desktop config,
passing the Webpublication credentials from the environment or .env.

Usage:
    python -m webpub_mcp setup
"""

import json
import os
import shutil
import sys
from pathlib import Path
from typing import Dict, Optional

from webpub_mcp import __version__
from webpub_mcp.config import SERVER_NAME, WebPublicationConfig, load_config
from webpub_mcp.exceptions import ConfigurationError

# Colors for terminal output
GREEN = '\033[92m'
YELLOW = '\033[93m'
RED = '\033[91m'
BLUE = '\033[94m'
RESET = '\033[0m'

SERVER_KEY = "webpublication"
PASSTHROUGH_ENV = ("MCP_LOG_LEVEL",)


def print_success(msg: str):
    print(f"{GREEN}✓{RESET} {msg}")


def print_error(msg: str):
    print(f"{RED}✗{RESET} {msg}")


def print_info(msg: str):
    print(f"{BLUE}ℹ{RESET} {msg}")


def get_claude_config_path(home: Optional[Path] = None) -> Optional[Path]:
    """Get the Claude Desktop config file path"""
    home = home or Path.home()

    # macOS
    mac_path = home / "Library/Application Support/Claude/claude_desktop_config.json"
    if mac_path.parent.exists():
        return mac_path

    # Linux
    linux_path = home / ".config/Claude/claude_desktop_config.json"
    if linux_path.parent.exists():
        return linux_path

    # Windows
    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if appdata:
            win_path = Path(appdata) / "Claude/claude_desktop_config.json"
            if win_path.parent.exists():
                return win_path

    return None


def collect_env(config: WebPublicationConfig, environ: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Variables for the Claude Desktop entry.

    Values come from the loaded config, so settings kept in .env are
    written out the same as exported ones. The log level is read by the
    entry point itself and is copied only when set in the environment.
    """
    environ = os.environ if environ is None else environ
    env = {
        "API_URL": config.API_URL,
        "DRIVE_URL": config.DRIVE_URL,
        "CLIENT_ID": config.CLIENT_ID,
        "WP_TOKEN": config.WP_TOKEN,
        "MCP_HTTP_TIMEOUT": str(config.HTTP_TIMEOUT),
    }
    if config.DRIVE_TOKEN:
        env["DRIVE_TOKEN"] = config.DRIVE_TOKEN
    for name in PASSTHROUGH_ENV:
        if environ.get(name):
            env[name] = environ[name]
    return env


def create_mcp_config(env: Dict[str, str]) -> dict:
    """Create the MCP server entry for Claude Desktop"""
    # Same interpreter that has the dependencies installed
    return {
        "command": sys.executable or "python3",
        "args": ["-m", "webpub_mcp"],
        "env": dict(env)
    }


def backup_config(config_path: Path) -> Optional[Path]:
    """Backup existing config file"""
    if not config_path.exists():
        return None

    backup_path = config_path.with_suffix(".json.backup")
    shutil.copy2(config_path, backup_path)
    return backup_path


def update_claude_config(config_path: Path, mcp_config: dict) -> bool:
    """Add or replace the webpublication entry under mcpServers"""
    try:
        if config_path.exists():
            with open(config_path, 'r') as f:
                config = json.load(f)
        else:
            config = {}

        config.setdefault("mcpServers", {})[SERVER_KEY] = mcp_config

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)

        return True

    except (OSError, json.JSONDecodeError) as e:
        print_error(f"Failed to update config: {e}")
        return False


def main() -> int:
    """Main setup function"""
    print(f"\n{BLUE}{'='*60}{RESET}")
    print(f"{BLUE}  {SERVER_NAME} v{__version__} Setup for Claude Desktop{RESET}")
    print(f"{BLUE}{'='*60}{RESET}\n")

    print_info("Reading Webpublication credentials from the environment and .env...")
    try:
        config = load_config()
    except ConfigurationError as e:
        print_error(e.message)
        print_info("Set API_URL, DRIVE_URL, CLIENT_ID and WP_TOKEN and run setup again")
        return 1
    env = collect_env(config)
    print_success(f"Found {len(env)} variables")

    print_info("Locating Claude Desktop config...")
    config_path = get_claude_config_path()
    if not config_path:
        print_error("Claude Desktop config directory not found")
        print_info("Please install Claude Desktop first")
        return 1
    print_success(f"Config: {config_path}")

    backup_path = backup_config(config_path)
    if backup_path:
        print_success(f"Backup saved: {backup_path}")

    mcp_config = create_mcp_config(env)
    if not update_claude_config(config_path, mcp_config):
        return 1
    print_success("Config updated successfully!")

    print("\nNext steps:\n")
    print(f"  1. {BLUE}Restart Claude Desktop{RESET} (completely quit and relaunch)")
    print(f"  2. Try: {YELLOW}\"Show my recent publications\"{RESET}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
