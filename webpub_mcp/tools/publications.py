"""
Publication Tools for MCP Server

Tools for reading and updating publication settings and
fetching a publication's cover image.
"""

from typing import Any, Dict
import base64
import binascii
import logging

from webpub_mcp.exceptions import EncodingError
from webpub_mcp.services.http_client import ApiEndpoint, WebPublicationClient

logger = logging.getLogger(__name__)

_IMAGE_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


def guess_image_type(rel_url: str) -> str:
    """MIME type from the file extension, image/jpeg when unknown"""
    path = rel_url.split("?", 1)[0].lower()
    for extension, mime_type in _IMAGE_TYPES.items():
        if path.endswith(extension):
            return mime_type
    return "image/jpeg"


async def get_publication_settings(client: WebPublicationClient, resource_gid: int) -> Any:
    """
    Get the settings of a publication.

    The record includes wishlistEnabled (bool) and coverImage.relUrl (str)
    and is returned unmodified.
    """
    logger.info(f"Getting publication settings with GID: {resource_gid}")
    return await client.get_json(
        ApiEndpoint.GENERATION,
        "getPublicationSettings",
        {"publicationGId": resource_gid},
    )


async def toggle_wishlist(
    client: WebPublicationClient,
    publication_gid: int,
    wishlist_enabled: bool
) -> Any:
    """
    Set the wishlist flag of a publication.

    The requested value is written as-is, so repeating a call with the
    same flag leaves the publication in the same state.

    Returns:
        Updated settings record from the API
    """
    logger.info(
        f"Toggling wishlist for publication GID: {publication_gid}, "
        f"wishlist_enabled: {wishlist_enabled}"
    )
    body = {
        "clientId": client.config.CLIENT_ID,
        "globalId": publication_gid,
        "wishlistEnabled": wishlist_enabled,
    }
    return await client.put_json(
        ApiEndpoint.GENERATION,
        "updatePublicationSettings",
        body,
    )


def encode_image(data: bytes) -> str:
    """Standard base64 encoding of image bytes"""
    try:
        return base64.b64encode(data).decode("ascii")
    except (TypeError, binascii.Error, UnicodeDecodeError) as e:
        raise EncodingError(f"Failed to encode cover image: {e}") from e


async def get_cover_image(client: WebPublicationClient, rel_url: str) -> Dict[str, str]:
    """
    Fetch a cover image from the drive.

    Args:
        rel_url: coverImage.relUrl from get_publication_settings

    Returns:
        {"data": <base64>, "mimeType": "image/png", "relUrl": rel_url}
    """
    logger.info(f"Getting image with relUrl: {rel_url}")
    image_bytes = await client.get_bytes(rel_url)
    return {
        "data": encode_image(image_bytes),
        "mimeType": guess_image_type(rel_url),
        "relUrl": rel_url,
    }
