"""
Webpublication MCP Server

Binds the tool dispatcher to the low-level MCP server and runs it over
stdio. Framing, handshake and discovery are handled by the MCP SDK; this
module only converts between dispatcher envelopes and MCP content.

Usage:
    python -m webpub_mcp
"""

import json
import logging
from typing import Any, Dict, List, Union

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import ImageContent, TextContent, Tool

from webpub_mcp.config import WebPublicationConfig
from webpub_mcp.registry import ToolDispatcher, ToolResponse
from webpub_mcp.services.http_client import WebPublicationClient

logger = logging.getLogger(__name__)

ToolContent = List[Union[TextContent, ImageContent]]


class ToolCallFailed(Exception):
    """Raised inside the call_tool handler so the SDK reports isError=True"""

    def __init__(self, response: ToolResponse):
        self.response = response
        super().__init__(json.dumps(response.error, indent=2))


def render_content(response: ToolResponse, returns_image: bool = False) -> ToolContent:
    """Convert a successful envelope into MCP content blocks"""
    if returns_image:
        image: Dict[str, Any] = response.content
        return [ImageContent(type="image", data=image["data"], mimeType=image["mimeType"])]

    return [TextContent(
        type="text",
        text=json.dumps(response.content, indent=2, ensure_ascii=False)
    )]


def build_server(dispatcher: ToolDispatcher, config: WebPublicationConfig) -> Server:
    """Create the MCP server with list_tools/call_tool bound to the dispatcher"""
    app = Server(
        config.SERVER_NAME,
        version=config.VERSION,
        instructions=config.INSTRUCTIONS
    )

    @app.list_tools()
    async def list_tools() -> List[Tool]:
        """
        List all available MCP tools.
        Called by the client when it first connects.
        """
        return [tool.to_mcp_tool() for tool in dispatcher.list_tools()]

    # Arguments are validated and coerced by the dispatcher only
    @app.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> ToolContent:
        """Execute an MCP tool."""
        response = await dispatcher.call_tool(name, arguments)
        if response.is_error:
            raise ToolCallFailed(response)
        return render_content(response, dispatcher.get_tool(name).returns_image)

    logger.info(f"Initialized {config.SERVER_NAME} v{config.VERSION} with {len(dispatcher.list_tools())} tools")
    return app


async def run_stdio(config: WebPublicationConfig) -> None:
    """Serve the tools over stdio until the client disconnects"""
    async with WebPublicationClient(config) as client:
        app = build_server(ToolDispatcher(client), config)
        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                app.create_initialization_options()
            )
    logger.info("Server shutdown complete")
