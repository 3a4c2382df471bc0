"""
Resource Tools for MCP Server

Tools for listing recent resources and retrieving a single resource.
"""

from typing import Any, Dict, List
import logging

from webpub_mcp.exceptions import MalformedResponseError
from webpub_mcp.services.http_client import ApiEndpoint, WebPublicationClient

logger = logging.getLogger(__name__)

# Keys under which the remote API may wrap a resource listing
_LISTING_KEYS = ("resources", "items", "content", "results", "data")


def _listing_entries(payload: Any) -> List[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in _LISTING_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    raise MalformedResponseError(
        f"Unexpected recent resources payload: {type(payload).__name__}"
    )


def _is_present(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


async def get_recent_resources(client: WebPublicationClient) -> Dict[str, Any]:
    """
    Get the most recent publications, most-recent-first.

    Returns:
        {
            "resources": [{"globalId": 2473843, "label": "Spring catalogue"}, ...],
            "total": 1
        }

        At most RECENT_RESOURCES_LIMIT (20) entries. Entries without a
        globalId or label are skipped.
    """
    limit = client.config.RECENT_RESOURCES_LIMIT
    payload = await client.get_json(
        ApiEndpoint.WORKSPACE_MANAGER,
        "getRecentResources",
        {
            "include": "PUBLICATION",
            "itemsPerPage": limit,
            "pageNum": 0,
        },
    )

    resources = []
    for entry in _listing_entries(payload):
        if not isinstance(entry, dict):
            continue
        global_id = entry.get("globalId")
        label = entry.get("label")
        if not (_is_present(global_id) and _is_present(label)):
            logger.debug(f"Skipping recent resource without globalId/label: {entry}")
            continue
        resources.append({"globalId": global_id, "label": label})
        if len(resources) == limit:
            break

    return {"resources": resources, "total": len(resources)}


async def get_resource(client: WebPublicationClient, resource_gid: int) -> Any:
    """
    Get a resource/publication by its globalId.

    The record is returned exactly as the API sends it. Month fields are
    zero-based and are not adjusted here.
    """
    logger.info(f"Getting resource with GID: {resource_gid}")
    return await client.get_json(
        ApiEndpoint.WORKSPACE_MANAGER,
        "getResource",
        {"resourceGId": resource_gid},
    )
