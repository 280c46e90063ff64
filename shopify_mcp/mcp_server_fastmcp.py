#!/usr/bin/env python3
"""
Shopify Commerce MCP Server - FastMCP Implementation

Exposes Shopify Admin API operations as MCP tools using the official
MCP SDK. Every tool is a thin adapter: validate the input, call the
Shopify client, and return a uniform envelope.

Tools:
- Orders: get-orders, get-order, create-draft-order, complete-draft-order
- Products: get-product-details, get-product-inventory, search-products,
  create-product, update-product, bulk-update-products
- Collections: get-collections

Envelopes:
- success: JSON text of the result, structured copy under "data"
- error: displayable message, isError=true, structured detail under "error"
"""

import json
from typing import Annotated, Any, Dict, List, Optional

from pydantic import Field
from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, ToolAnnotations

from .adapters import collections as collection_adapters
from .adapters import orders as order_adapters
from .adapters import products as product_adapters
from .config import config
from .data_models.tool_inputs import (
    LineItem,
    OrderSortKey,
    PriceRange,
    ProductStatus,
    ProductUpdate,
    ShippingAddress,
    VariantInput,
)
from .formatters.response_formatter import handle_error, to_call_tool_result
from .shopify_client import ShopifyClient
from .utils import (
    get_logger,
    init_mcp_operations_logger,
    render_default_message,
    setup_mcp_logging,
)

logger = get_logger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, openWorldHint=True)
MUTATING = ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True)

# Initialize FastMCP server with official SDK
mcp = FastMCP(config.server.name)

# ============================================================================
# SHARED CLIENT
# ============================================================================

_shopify_client: Optional[ShopifyClient] = None


def get_shopify_client() -> ShopifyClient:
    """Shared Shopify client built once from the process configuration"""
    global _shopify_client
    if _shopify_client is None:
        _shopify_client = ShopifyClient(config.shopify)
    return _shopify_client


def set_shopify_client(client: Optional[ShopifyClient]):
    """Replace the shared client (None resets it)"""
    global _shopify_client
    _shopify_client = client


async def run_tool(adapter_func, **params) -> CallToolResult:
    """Resolve the client, run the adapter and convert its envelope"""
    try:
        client = get_shopify_client()
    except ValueError as e:
        logger.error(f"[{adapter_func.tool_name}] Shopify client unavailable: {e}")
        envelope = handle_error(render_default_message(adapter_func.default_message, params), e)
        return to_call_tool_result(envelope)

    envelope = await adapter_func(client, **params)
    return to_call_tool_result(envelope)

# ============================================================================
# ORDER OPERATIONS - FastMCP Tools
# ============================================================================

@mcp.tool(name="get-orders", description="Get orders with advanced filtering and sorting",
          annotations=READ_ONLY)
async def get_orders(
    first: Annotated[Optional[int], Field(description="Limit of orders to return")] = None,
    after: Annotated[Optional[str], Field(description="Next page cursor")] = None,
    query: Annotated[Optional[str], Field(description="Filter orders using query syntax")] = None,
    sortKey: Annotated[Optional[OrderSortKey], Field(description="Field to sort by")] = None,
    reverse: Annotated[Optional[bool], Field(description="Reverse sort order")] = None,
):
    return await run_tool(order_adapters.get_orders, first=first, after=after, query=query,
                          sortKey=sortKey, reverse=reverse)


@mcp.tool(name="get-order", description="Get a single order by ID", annotations=READ_ONLY)
async def get_order(
    orderId: Annotated[str, Field(description="ID of the order to retrieve")],
):
    return await run_tool(order_adapters.get_order, orderId=orderId)


@mcp.tool(name="create-draft-order", description="Create a draft order", annotations=MUTATING)
async def create_draft_order(
    lineItems: Annotated[List[LineItem], Field(description="Array of items with variantId and quantity")],
    email: Annotated[str, Field(description="Customer email")],
    shippingAddress: Annotated[ShippingAddress, Field(description="Shipping address details")],
    note: Annotated[Optional[str], Field(description="Optional note for the order")] = None,
    idempotencyKey: Annotated[Optional[str], Field(
        description="Reuse the same key when retrying so only one draft order is created")] = None,
):
    return await run_tool(order_adapters.create_draft_order, lineItems=lineItems, email=email,
                          shippingAddress=shippingAddress, note=note, idempotencyKey=idempotencyKey)


@mcp.tool(name="complete-draft-order", description="Complete a draft order", annotations=MUTATING)
async def complete_draft_order(
    draftOrderId: Annotated[str, Field(description="ID of the draft order to complete")],
    variantId: Annotated[str, Field(description="ID of the variant in the draft order")],
):
    return await run_tool(order_adapters.complete_draft_order, draftOrderId=draftOrderId,
                          variantId=variantId)

# ============================================================================
# PRODUCT OPERATIONS - FastMCP Tools
# ============================================================================

@mcp.tool(name="get-product-details",
          description="Get full details of a product including variants and images",
          annotations=READ_ONLY)
async def get_product_details(
    productId: Annotated[str, Field(description="ID of the product to retrieve")],
):
    return await run_tool(product_adapters.get_product_details, productId=productId)


@mcp.tool(name="get-product-inventory", description="Get inventory status of a product variant",
          annotations=READ_ONLY)
async def get_product_inventory(
    variantId: Annotated[str, Field(description="ID of the variant to check")],
):
    return await run_tool(product_adapters.get_product_inventory, variantId=variantId)


@mcp.tool(name="search-products", description="Search products by various attributes",
          annotations=READ_ONLY)
async def search_products(
    title: Annotated[Optional[str], Field(description="Product title to search for")] = None,
    priceRange: Annotated[Optional[PriceRange], Field(description="Price range to filter by")] = None,
    collection: Annotated[Optional[str], Field(description="Collection ID to filter by")] = None,
):
    return await run_tool(product_adapters.search_products, title=title, priceRange=priceRange,
                          collection=collection)


@mcp.tool(name="create-product", description="Create a new product", annotations=MUTATING)
async def create_product(
    title: Annotated[str, Field(description="Product title")],
    description: Annotated[str, Field(description="Product description")],
    variants: Annotated[List[VariantInput], Field(description="Product variants")],
    vendor: Annotated[Optional[str], Field(description="Product vendor")] = None,
    productType: Annotated[Optional[str], Field(description="Product type")] = None,
    tags: Annotated[Optional[List[str]], Field(description="Product tags")] = None,
):
    return await run_tool(product_adapters.create_product, title=title, description=description,
                          variants=variants, vendor=vendor, productType=productType, tags=tags)


@mcp.tool(name="update-product", description="Update an existing product", annotations=MUTATING)
async def update_product(
    productId: Annotated[str, Field(description="ID of the product to update")],
    title: Annotated[Optional[str], Field(description="New product title")] = None,
    description: Annotated[Optional[str], Field(description="New product description")] = None,
    status: Annotated[Optional[ProductStatus], Field(description="Product status")] = None,
    vendor: Annotated[Optional[str], Field(description="New vendor name")] = None,
    productType: Annotated[Optional[str], Field(description="New product type")] = None,
    tags: Annotated[Optional[List[str]], Field(description="New product tags")] = None,
):
    return await run_tool(product_adapters.update_product, productId=productId, title=title,
                          description=description, status=status, vendor=vendor,
                          productType=productType, tags=tags)


@mcp.tool(name="bulk-update-products", description="Update multiple products at once",
          annotations=MUTATING)
async def bulk_update_products(
    updates: Annotated[List[ProductUpdate], Field(description="Array of product updates")],
):
    return await run_tool(product_adapters.bulk_update_products, updates=updates)

# ============================================================================
# COLLECTION OPERATIONS - FastMCP Tools
# ============================================================================

@mcp.tool(name="get-collections", description="Get collections with optional filtering",
          annotations=READ_ONLY)
async def get_collections(
    limit: Annotated[Optional[int], Field(description="Maximum number of collections to return")] = 10,
    name: Annotated[Optional[str], Field(description="Filter collections by name")] = None,
):
    return await run_tool(collection_adapters.get_collections, limit=limit, name=name)

# ============================================================================
# MAIN SERVER RUNNER
# ============================================================================

def server_summary() -> Dict[str, Any]:
    """Identity and redacted configuration logged at startup"""
    return {
        "name": config.server.name,
        "version": config.server.version,
        "config": config.to_dict(),
    }


def main():
    """Main entry point with logging and configuration checks"""
    setup_mcp_logging(level=config.logging.level, log_file=config.logging.file,
                      fmt=config.logging.format)
    init_mcp_operations_logger(config.logging.operations_debug_level,
                               config.logging.operations_max_size)

    if not config.validate():
        raise ValueError("Invalid configuration. Please check your .env file.")

    summary = server_summary()
    logger.info("=" * 60)
    logger.info("Shopify Commerce MCP Server - FastMCP Implementation")
    logger.info("=" * 60)
    logger.info(f"Server Name: {summary['name']}")
    logger.info(f"Server Version: {summary['version']}")
    logger.info(f"Shop: {config.shopify.shop_domain} (Admin API {config.shopify.api_version})")
    logger.info(f"Configuration: {json.dumps(summary['config'])}")
    logger.info("Tools: 11 (Orders: 4, Products: 6, Collections: 1)")
    logger.info("STDIO transport ready for MCP client connection")

    try:
        # Run the FastMCP server (handles its own event loop)
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error(f"MCP Server failed: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
