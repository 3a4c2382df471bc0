"""
Webpublication MCP Server

Model Context Protocol server for the Webpublication platform.
Exposes recent resources, resource details, publication settings,
wishlist toggling and cover images as tools for Claude Desktop and
other MCP clients.
"""

__version__ = "1.0.0"
__author__ = "Webpublication Team"
