"""
Product Service

Product operations composed from one or more Shopify client calls:
1. DETAILS - product with variants and images
2. INVENTORY - availability and inventory policy of a variant
3. SEARCH - exclusive filter precedence: price range > collection > title
4. BULK UPDATE - sequential updates with per-item status
"""

from typing import Any, Dict, List, Optional

from ..data_models.tool_inputs import PriceRange, ProductUpdate
from ..formatters.product import format_product_details, format_product_summary
from ..protocol.errors import ShopifyClientError
from ..shopify_client import ShopifyClient
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ProductService:
    """Service for product lookups, search and bulk changes"""

    def __init__(self, client: ShopifyClient):
        """
        Initialize product service

        Args:
            client: Shared Shopify client
        """
        self.client = client

    async def get_product_full_details(self, product_id: str) -> Dict[str, Any]:
        product = await self.client.load_product(product_id)
        return {"product": format_product_details(product)}

    async def get_product_inventory_status(self, variant_id: str) -> Dict[str, Any]:
        variant = await self.client.load_variant(variant_id)
        return {
            "isAvailable": bool(variant.get("availableForSale", False)),
            "inventoryPolicy": variant.get("inventoryPolicy"),
        }

    async def search_products_by_attributes(
        self,
        title: Optional[str] = None,
        price_range: Optional[PriceRange] = None,
        collection: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Search products by one attribute

        Only the highest-precedence filter given is applied; the others
        are ignored. With no filter every product is listed.
        """
        if price_range is not None:
            logger.info(f"[Search] Price range {price_range.min}-{price_range.max}")
            response = await self.client.search_products_by_price_range(
                min_price=price_range.min,
                max_price=price_range.max
            )
        elif collection:
            logger.info(f"[Search] Collection {collection}")
            response = await self.client.load_products_by_collection_id(collection)
        else:
            logger.info(f"[Search] Title {title!r}")
            response = await self.client.load_products(search_title=title or None)

        return [format_product_summary(p) for p in response.get("products", [])]

    async def bulk_update_products(self, updates: List[ProductUpdate]) -> List[Dict[str, Any]]:
        """
        Apply updates one by one

        A failing item is reported and the batch continues.
        """
        results = []
        for update in updates:
            try:
                await self.client.update_product(update.product_id, update.changes())
                results.append({"id": update.product_id, "success": True})
            except ShopifyClientError as e:
                logger.warning(f"[BulkUpdate] {update.product_id} failed: {e.code} {e.message}")
                results.append({"id": update.product_id, "success": False, "error": e.message})
            except Exception as e:
                logger.error(f"[BulkUpdate] {update.product_id} failed unexpectedly: {e}", exc_info=True)
                results.append({"id": update.product_id, "success": False, "error": str(e) or type(e).__name__})

        succeeded = sum(1 for r in results if r["success"])
        logger.info(f"[BulkUpdate] {succeeded}/{len(results)} products updated")
        return results
