"""Order operations for MCP adapters"""

from typing import Any, Dict

from .utils import validate_params
from ..data_models.tool_inputs import (
    CompleteDraftOrderInput,
    CreateDraftOrderInput,
    GetOrderInput,
    GetOrdersInput,
)
from ..formatters.order import format_order
from ..shopify_client import ShopifyClient
from ..utils.decorators import tool_adapter
from ..utils.idempotency import resolve_idempotency_key
from ..utils.logger import get_logger

logger = get_logger(__name__)


@tool_adapter("get-orders", "Failed to retrieve orders")
async def get_orders(client: ShopifyClient, **params) -> Dict[str, Any]:
    """MCP adapter for listing orders"""
    request = validate_params(GetOrdersInput, params)
    orders = await client.load_orders(
        first=request.first,
        after=request.after,
        query=request.query,
        sort_key=request.sort_key,
        reverse=request.reverse,
    )
    return {
        "orders": [format_order(order) for order in orders["orders"]],
        "pageInfo": orders["pageInfo"],
    }


@tool_adapter("get-order", "Failed to retrieve order {orderId}")
async def get_order(client: ShopifyClient, **params) -> Dict[str, Any]:
    """MCP adapter for a single order"""
    request = validate_params(GetOrderInput, params)
    order = await client.load_order(request.order_id)
    return {"order": format_order(order)}


@tool_adapter("create-draft-order", "Failed to create draft order")
async def create_draft_order(client: ShopifyClient, **params) -> Dict[str, Any]:
    """MCP adapter for draft order creation

    The shipping address doubles as billing address. Callers retrying a
    failed call should pass the same idempotencyKey.
    """
    request = validate_params(CreateDraftOrderInput, params)
    idempotency_key = resolve_idempotency_key(request.idempotency_key, "draft-order")
    shipping_address = request.shipping_address.to_wire()

    draft_order = await client.create_draft_order(
        {
            "lineItems": [item.to_wire() for item in request.line_items],
            "email": request.email,
            "shippingAddress": shipping_address,
            "billingAddress": shipping_address,
            "tags": "",
            "note": request.note or "",
        },
        idempotency_key,
    )

    return {
        "draftOrderId": draft_order["draftOrderId"],
        "draftOrderName": draft_order["draftOrderName"],
    }


@tool_adapter("complete-draft-order", "Failed to complete draft order {draftOrderId}")
async def complete_draft_order(client: ShopifyClient, **params) -> Dict[str, Any]:
    """MCP adapter for completing a draft order"""
    request = validate_params(CompleteDraftOrderInput, params)
    completed = await client.complete_draft_order(request.draft_order_id, request.variant_id)
    return {
        "draftOrderId": completed["draftOrderId"],
        "draftOrderName": completed["draftOrderName"],
        "orderId": completed["orderId"],
    }
