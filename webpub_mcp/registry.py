"""
Tool Registry & Dispatcher

Declares the fixed tool catalog and routes each invocation to its adapter.
Arguments are validated against the tool's input model before dispatch, so
malformed calls never reach the network.

Lifecycle of one call:
    Received -> Rejected                       (unknown tool, invalid arguments)
    Received -> Validated -> Dispatched -> Succeeded | Failed
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type
import logging

from mcp.types import Tool
from pydantic import BaseModel, Field, ValidationError

from webpub_mcp.exceptions import (
    InvalidArgumentsError,
    UnknownToolError,
    WebPublicationError,
)
from webpub_mcp.services.http_client import WebPublicationClient
from webpub_mcp.tools import publications, resources

logger = logging.getLogger(__name__)


# ==================== INPUT MODELS ====================

class NoArguments(BaseModel):
    """Tool takes no arguments"""


class ResourceArguments(BaseModel):
    resource_gid: int = Field(
        ...,
        description="globalId of the publication (e.g. 2473843)"
    )


class ToggleWishlistArguments(BaseModel):
    publication_gid: int = Field(
        ...,
        description="globalId of the publication (e.g. 2473843)"
    )
    wishlist_enabled: bool = Field(
        ...,
        description="true to enable the wishlist, false to disable it"
    )


class CoverImageArguments(BaseModel):
    rel_url: str = Field(
        ...,
        min_length=1,
        description="coverImage.relUrl from get_publication_settings"
    )


# ==================== TOOL DEFINITIONS ====================

@dataclass(frozen=True)
class ToolDefinition:
    """A named tool: description, typed input model and adapter"""

    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Callable[..., Awaitable[Any]]
    returns_image: bool = False

    @property
    def input_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema()

    def validate(self, arguments: Any) -> BaseModel:
        try:
            return self.input_model.model_validate(arguments)
        except ValidationError as e:
            error = e.errors()[0]
            loc = error.get("loc") or ()
            field_name = ".".join(str(part) for part in loc) or None
            raise InvalidArgumentsError(self.name, field_name, error["msg"].lower()) from e

    def to_mcp_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema
        )


TOOLS: Dict[str, ToolDefinition] = {
    tool.name: tool
    for tool in (
        ToolDefinition(
            name="get_recent_resources",
            description=(
                "Get the 20 most recent publications from the Webpublication API. "
                "Use their globalId as the resource_gid parameter for get_resource or "
                "get_publication_settings to get more info about the publication. "
                "The name of the publication is its label. "
                "When a publication is found by name/label, always mention its globalId "
                "in your first sentence."
            ),
            input_model=NoArguments,
            handler=resources.get_recent_resources,
        ),
        ToolDefinition(
            name="get_resource",
            description=(
                "Get a resource/publication from the Webpublication API. "
                "Provide the globalId from get_recent_resources, if not supplied by the user, "
                "as the resource_gid parameter (e.g., 2473843) to fetch detailed resource "
                "information. Month fields are zero-based."
            ),
            input_model=ResourceArguments,
            handler=resources.get_resource,
        ),
        ToolDefinition(
            name="get_publication_settings",
            description=(
                "Get the publication settings from the Webpublication API. "
                "Provide the globalId from get_recent_resources, if not supplied by the user, "
                "as the resource_gid parameter (e.g., 2473843). The settings include "
                "wishlistEnabled and coverImage.relUrl."
            ),
            input_model=ResourceArguments,
            handler=publications.get_publication_settings,
        ),
        ToolDefinition(
            name="toggle_wishlist",
            description=(
                "Toggle wishlist status for a publication. "
                "Provide the globalId from get_recent_resources, if not supplied by the user, "
                "as the publication_gid parameter (e.g., 2473843), and specify whether to enable "
                "or disable the wishlist using wishlist_enabled (true/false). The current wishlist "
                "status can be obtained from get_publication_settings -> wishlistEnabled."
            ),
            input_model=ToggleWishlistArguments,
            handler=publications.toggle_wishlist,
        ),
        ToolDefinition(
            name="get_cover_image",
            description=(
                "Get the cover image of the publication. "
                "Provide the relUrl from get_publication_settings in the response field "
                "coverImage.relUrl as the rel_url parameter."
            ),
            input_model=CoverImageArguments,
            handler=publications.get_cover_image,
            returns_image=True,
        ),
    )
}


# ==================== DISPATCHER ====================

@dataclass
class ToolResponse:
    """Tool-call response envelope: either content or a structured error"""

    tool: str
    content: Any = None
    error: Optional[Dict[str, Any]] = field(default=None)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        if self.is_error:
            return {"tool": self.tool, "isError": True, "error": self.error}
        return {"tool": self.tool, "isError": False, "content": self.content}


class ToolDispatcher:
    """
    Routes tool invocations to adapters.

    Holds no per-call state, so concurrent invocations are independent.
    """

    def __init__(self, client: WebPublicationClient, tools: Optional[Dict[str, ToolDefinition]] = None):
        self.client = client
        self.tools = tools if tools is not None else TOOLS

    def list_tools(self) -> List[ToolDefinition]:
        return list(self.tools.values())

    def get_tool(self, name: str) -> ToolDefinition:
        try:
            return self.tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        """
        Validate arguments and invoke the named tool.

        Expected failures (unknown tool, invalid arguments, HTTP and encoding
        errors) come back as an error envelope. Anything else is a bug and
        propagates.
        """
        logger.info(f"MCP tool called: {name} with args: {arguments}")

        try:
            tool = self.get_tool(name)
            validated = tool.validate(arguments if arguments is not None else {})
            content = await tool.handler(self.client, **validated.model_dump())
        except WebPublicationError as e:
            logger.warning(f"Tool {name} failed ({e.kind}): {e.message}")
            return ToolResponse(tool=name, error=e.to_dict())
        except Exception as e:
            logger.error(f"Error executing tool {name}: {e}", exc_info=True)
            raise

        return ToolResponse(tool=name, content=content)
