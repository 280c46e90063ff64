"""
Order formatter

Flattens Admin API order nodes into the shape returned by order tools.
"""

from typing import Any, Dict

from .connections import connection_nodes, money


def format_line_item(node: Dict[str, Any]) -> Dict[str, Any]:
    variant = node.get("variant") or {}
    return {
        "id": node.get("id"),
        "title": node.get("title"),
        "quantity": node.get("quantity"),
        "sku": node.get("sku"),
        "originalTotal": money(node.get("originalTotalSet")),
        "variant": {
            "id": variant.get("id"),
            "title": variant.get("title"),
            "price": variant.get("price"),
        } if variant else None,
    }


def format_order(order: Dict[str, Any]) -> Dict[str, Any]:
    """
    Format an order node for tool output

    Args:
        order: Order node from the Admin API

    Returns:
        Order with money sets flattened and line items unwrapped
    """
    customer = order.get("customer")
    return {
        "id": order.get("id"),
        "name": order.get("name"),
        "createdAt": order.get("createdAt"),
        "processedAt": order.get("processedAt"),
        "financialStatus": order.get("displayFinancialStatus"),
        "fulfillmentStatus": order.get("displayFulfillmentStatus"),
        "email": order.get("email"),
        "phone": order.get("phone"),
        "note": order.get("note"),
        "tags": order.get("tags") or [],
        "totalPrice": money(order.get("totalPriceSet")),
        "subtotalPrice": money(order.get("subtotalPriceSet")),
        "totalShippingPrice": money(order.get("totalShippingPriceSet")),
        "totalTax": money(order.get("totalTaxSet")),
        "customer": {
            "id": customer.get("id"),
            "firstName": customer.get("firstName"),
            "lastName": customer.get("lastName"),
            "email": customer.get("email"),
        } if customer else None,
        "shippingAddress": order.get("shippingAddress"),
        "lineItems": [format_line_item(node) for node in connection_nodes(order.get("lineItems"))],
    }
