"""
MCP Server Services

Service layer for the MCP server providing authenticated access
to the Webpublication API.
"""

from .http_client import ApiEndpoint, WebPublicationClient

__all__ = ["ApiEndpoint", "WebPublicationClient"]
