"""
Product formatter for MCP content

Handles reshaping of Shopify product, variant and collection nodes
into the structures returned by product tools.
"""

from typing import Any, Dict, List

from .connections import connection_nodes


def format_variant(variant: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": variant.get("id"),
        "title": variant.get("title"),
        "sku": variant.get("sku"),
        "price": variant.get("price"),
        "compareAtPrice": variant.get("compareAtPrice"),
        "availableForSale": variant.get("availableForSale", False),
        "inventoryPolicy": variant.get("inventoryPolicy"),
        "inventoryQuantity": variant.get("inventoryQuantity"),
    }


def format_image(image: Dict[str, Any]) -> Dict[str, Any]:
    """Image as {src, alt}; alt omitted when empty"""
    formatted = {"src": image.get("url") or image.get("src")}
    alt = image.get("altText") or image.get("alt")
    if alt:
        formatted["alt"] = alt
    return formatted


def format_product_details(product: Dict[str, Any]) -> Dict[str, Any]:
    """
    Format a product node with its variants and images

    Args:
        product: Product node from the Admin API

    Returns:
        {id, title, description, variants, images}
    """
    return {
        "id": product.get("id"),
        "title": product.get("title"),
        "description": product.get("description"),
        "variants": [format_variant(v) for v in connection_nodes(product.get("variants"))],
        "images": [format_image(i) for i in connection_nodes(product.get("images"))],
    }


def format_product(product: Dict[str, Any]) -> Dict[str, Any]:
    """Full product shape returned by create/update tools"""
    details = format_product_details(product)
    details.update({
        "handle": product.get("handle"),
        "status": product.get("status"),
        "vendor": product.get("vendor"),
        "productType": product.get("productType"),
        "tags": product.get("tags") or [],
        "createdAt": product.get("createdAt"),
        "updatedAt": product.get("updatedAt"),
    })
    return details


def format_product_summary(product: Dict[str, Any]) -> Dict[str, Any]:
    """Search result row priced from the first variant"""
    variants = connection_nodes(product.get("variants"))
    first_variant = variants[0] if variants else {}
    return {
        "id": product.get("id"),
        "title": product.get("title"),
        "price": first_variant.get("price") or "0",
        "availableForSale": bool(first_variant.get("availableForSale", False)),
    }


def format_collection(collection: Dict[str, Any]) -> Dict[str, Any]:
    products_count = collection.get("productsCount")
    if isinstance(products_count, dict):
        products_count = products_count.get("count")
    return {
        "id": collection.get("id"),
        "title": collection.get("title"),
        "handle": collection.get("handle"),
        "description": collection.get("description"),
        "updatedAt": collection.get("updatedAt"),
        "productsCount": products_count,
    }


def format_collections(collections: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [format_collection(c) for c in collections]
