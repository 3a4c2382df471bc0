"""
MCP Server Configuration

Manages configuration for the Webpublication MCP server: API and drive
base URLs, the client identifier, the session token sent as a cookie,
and transport settings.

Credentials use their bare environment names (API_URL, DRIVE_URL,
CLIENT_ID, WP_TOKEN, DRIVE_TOKEN); server settings use the MCP_ prefix.
"""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings
from typing import Optional

from webpub_mcp import __version__
from webpub_mcp.exceptions import ConfigurationError

SERVER_NAME = "webpub-mcp"


class WebPublicationConfig(BaseSettings):
    """MCP Server Configuration"""

    # Server Information
    SERVER_NAME: str = SERVER_NAME
    VERSION: str = __version__
    INSTRUCTIONS: str = """A Webpublication API service that provides access to workspace management, \
generation, customization, and other Webpublication platform features.

IMPORTANT WORKFLOW:
- If resource_gid is not provided for get_resource or get_publication_settings, you MUST first call \
get_recent_resources to retrieve the globalId of the desired publication.
- When the user provides a publication name, it corresponds to the 'label' field in the \
get_recent_resources response. Match the user-provided name to the label field.
- Use the globalId from get_recent_resources as the resource_gid parameter for both get_resource \
and get_publication_settings.
- When a publication is found by name/label, always mention its globalId in your first sentence.
- Month fields in resources are zero-based: add 1 before showing them to the user.
- The cover image of a publication is retrieved by get_cover_image; its rel_url parameter comes \
from get_publication_settings as coverImage.relUrl."""

    # Webpublication API credentials (loaded once, read-only)
    API_URL: str = Field(..., validation_alias="API_URL")
    DRIVE_URL: str = Field(..., validation_alias="DRIVE_URL")
    CLIENT_ID: str = Field(..., validation_alias="CLIENT_ID")
    WP_TOKEN: str = Field(..., validation_alias="WP_TOKEN")
    DRIVE_TOKEN: Optional[str] = Field(default=None, validation_alias="DRIVE_TOKEN")

    # HTTP Settings
    HTTP_TIMEOUT: float = Field(default=30.0, gt=0)  # seconds, single attempt

    # Query Configuration
    RECENT_RESOURCES_LIMIT: int = Field(default=20, ge=1, le=100)

    @field_validator("API_URL", "DRIVE_URL", "CLIENT_ID", "WP_TOKEN")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("DRIVE_TOKEN")
    @classmethod
    def _blank_as_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    class Config:
        env_prefix = "MCP_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
        frozen = True


def load_config(**overrides) -> WebPublicationConfig:
    """
    Build the process configuration from the environment (and .env).

    Raises:
        ConfigurationError: If a required credential or URL is missing or empty
    """
    try:
        return WebPublicationConfig(**overrides)
    except ValidationError as e:
        problems = []
        for error in e.errors():
            name = ".".join(str(part) for part in error["loc"]) or "config"
            problems.append(f"{name} ({error['msg']})")
        raise ConfigurationError(
            "Invalid or missing configuration: " + ", ".join(problems)
        ) from e
