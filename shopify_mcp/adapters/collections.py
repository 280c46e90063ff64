"""Collection operations for MCP adapters"""

from typing import Any, Dict

from .utils import validate_params
from ..data_models.tool_inputs import GetCollectionsInput
from ..formatters.product import format_collections
from ..shopify_client import ShopifyClient
from ..utils.decorators import tool_adapter


@tool_adapter("get-collections", "Failed to retrieve collections")
async def get_collections(client: ShopifyClient, **params) -> Dict[str, Any]:
    """MCP adapter for listing collections, optionally filtered by name"""
    request = validate_params(GetCollectionsInput, params)
    collections = await client.load_collections(
        limit=request.limit,
        query=f"title:{request.name}" if request.name else None,
    )
    return {
        "collections": format_collections(collections["collections"]),
        "pageInfo": collections["pageInfo"],
    }
