"""Formatters for tool envelopes and Shopify resources"""

from .response_formatter import format_success, handle_error, to_call_tool_result
from .order import format_order
from .product import (
    format_product,
    format_product_details,
    format_product_summary,
    format_collections
)

__all__ = [
    "format_success",
    "handle_error",
    "to_call_tool_result",
    "format_order",
    "format_product",
    "format_product_details",
    "format_product_summary",
    "format_collections"
]
