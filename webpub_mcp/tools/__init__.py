"""
MCP Tools for Webpublication

One adapter per remote capability: recent resources, resource details,
publication settings, wishlist flag and cover image.
"""

from .resources import (
    get_recent_resources,
    get_resource
)
from .publications import (
    get_publication_settings,
    toggle_wishlist,
    get_cover_image
)

__all__ = [
    "get_recent_resources",
    "get_resource",
    "get_publication_settings",
    "toggle_wishlist",
    "get_cover_image"
]
