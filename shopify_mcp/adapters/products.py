"""Product operations for MCP adapters"""

from typing import Any, Dict, List

from .utils import validate_params
from ..data_models.tool_inputs import (
    BulkUpdateProductsInput,
    CreateProductInput,
    GetProductDetailsInput,
    GetProductInventoryInput,
    SearchProductsInput,
    UpdateProductInput,
)
from ..formatters.product import format_product
from ..services.product_service import ProductService
from ..shopify_client import ShopifyClient
from ..utils.decorators import tool_adapter


@tool_adapter("get-product-details", "Failed to retrieve product {productId}")
async def get_product_details(client: ShopifyClient, **params) -> Dict[str, Any]:
    request = validate_params(GetProductDetailsInput, params)
    return await ProductService(client).get_product_full_details(request.product_id)


@tool_adapter("get-product-inventory", "Failed to get inventory status for variant {variantId}")
async def get_product_inventory(client: ShopifyClient, **params) -> Dict[str, Any]:
    request = validate_params(GetProductInventoryInput, params)
    return await ProductService(client).get_product_inventory_status(request.variant_id)


@tool_adapter("search-products", "Failed to search products")
async def search_products(client: ShopifyClient, **params) -> List[Dict[str, Any]]:
    """MCP adapter for product search (price range > collection > title)"""
    request = validate_params(SearchProductsInput, params)
    return await ProductService(client).search_products_by_attributes(
        title=request.title,
        price_range=request.price_range,
        collection=request.collection,
    )


@tool_adapter("create-product", "Failed to create product")
async def create_product(client: ShopifyClient, **params) -> Dict[str, Any]:
    request = validate_params(CreateProductInput, params)
    product = await client.create_product(request.to_wire())
    return format_product(product)


@tool_adapter("update-product", "Failed to update product {productId}")
async def update_product(client: ShopifyClient, **params) -> Dict[str, Any]:
    request = validate_params(UpdateProductInput, params)
    product = await client.update_product(request.product_id, request.changes())
    return format_product(product)


@tool_adapter("bulk-update-products", "Failed to bulk update products")
async def bulk_update_products(client: ShopifyClient, **params) -> List[Dict[str, Any]]:
    """MCP adapter for bulk updates; item failures are reported, not raised"""
    request = validate_params(BulkUpdateProductsInput, params)
    return await ProductService(client).bulk_update_products(request.updates)
