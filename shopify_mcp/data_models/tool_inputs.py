"""
Tool Input Schemas
==================

One pydantic model per tool. Field names are snake_case in Python and
camelCase on the wire (the names calling agents send), so models accept
either spelling. Every adapter validates its parameters through these
models before the Shopify client is called.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


OrderSortKey = Literal[
    "PROCESSED_AT",
    "TOTAL_PRICE",
    "ID",
    "CREATED_AT",
    "UPDATED_AT",
    "ORDER_NUMBER",
]

ProductStatus = Literal["ACTIVE", "ARCHIVED", "DRAFT"]


class ToolInput(BaseModel):
    """Base for tool inputs: camelCase aliases, unknown keys ignored"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict:
        """Dump set fields using wire (camelCase) names"""
        return self.model_dump(by_alias=True, exclude_none=True)


# ========== Orders ==========

class GetOrdersInput(ToolInput):
    first: Optional[int] = Field(None, gt=0, le=250, description="Limit of orders to return")
    after: Optional[str] = Field(None, description="Next page cursor")
    query: Optional[str] = Field(None, description="Filter orders using query syntax")
    sort_key: Optional[OrderSortKey] = Field(None, description="Field to sort by")
    reverse: Optional[bool] = Field(None, description="Reverse sort order")


class GetOrderInput(ToolInput):
    order_id: str = Field(..., min_length=1, description="ID of the order to retrieve")


class LineItem(ToolInput):
    variant_id: str = Field(..., min_length=1, description="ID of the variant")
    quantity: int = Field(..., gt=0, description="Quantity of the variant")


class ShippingAddress(ToolInput):
    address1: str = Field(..., description="Address line 1")
    address2: Optional[str] = Field(None, description="Address line 2")
    country_code: str = Field(..., description="Country code (e.g., US, CA)")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    zip: str = Field(..., description="ZIP/Postal code")
    city: str = Field(..., description="City")
    country: str = Field(..., description="Country name")
    province: Optional[str] = Field(None, description="Province/State name")
    province_code: Optional[str] = Field(None, description="Province/State code")
    phone: Optional[str] = Field(None, description="Phone number")


class CreateDraftOrderInput(ToolInput):
    line_items: List[LineItem] = Field(..., min_length=1, description="Array of items with variantId and quantity")
    email: str = Field(..., min_length=3, description="Customer email")
    shipping_address: ShippingAddress = Field(..., description="Shipping address details")
    note: Optional[str] = Field(None, description="Optional note for the order")
    idempotency_key: Optional[str] = Field(
        None, description="Token reused on retries so the draft order is created once"
    )


class CompleteDraftOrderInput(ToolInput):
    draft_order_id: str = Field(..., min_length=1, description="ID of the draft order to complete")
    variant_id: str = Field(..., min_length=1, description="ID of the variant in the draft order")


# ========== Products ==========

class GetProductDetailsInput(ToolInput):
    product_id: str = Field(..., min_length=1, description="ID of the product to retrieve")


class GetProductInventoryInput(ToolInput):
    variant_id: str = Field(..., min_length=1, description="ID of the variant to check")


class PriceRange(ToolInput):
    min: float = Field(..., ge=0, description="Minimum price")
    max: float = Field(..., ge=0, description="Maximum price")

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.min > self.max:
            raise ValueError("priceRange.min must not exceed priceRange.max")
        return self


class SearchProductsInput(ToolInput):
    title: Optional[str] = Field(None, description="Product title to search for")
    price_range: Optional[PriceRange] = Field(None, description="Price range to filter by")
    collection: Optional[str] = Field(None, description="Collection ID to filter by")


class VariantInput(ToolInput):
    title: str = Field(..., description="Variant title")
    price: float = Field(..., ge=0, description="Variant price")
    sku: Optional[str] = Field(None, description="Variant SKU")
    inventory: int = Field(..., ge=0, description="Initial inventory quantity")
    requires_shipping: Optional[bool] = Field(None, description="Whether shipping is required")
    taxable: Optional[bool] = Field(None, description="Whether the variant is taxable")


class CreateProductInput(ToolInput):
    title: str = Field(..., min_length=1, description="Product title")
    description: str = Field(..., description="Product description")
    vendor: Optional[str] = Field(None, description="Product vendor")
    product_type: Optional[str] = Field(None, description="Product type")
    tags: Optional[List[str]] = Field(None, description="Product tags")
    variants: List[VariantInput] = Field(..., min_length=1, description="Product variants")


class ProductUpdate(ToolInput):
    """Fields shared by update-product and each bulk-update-products item"""
    product_id: str = Field(..., min_length=1, description="ID of the product to update")
    title: Optional[str] = Field(None, description="New product title")
    description: Optional[str] = Field(None, description="New product description")
    status: Optional[ProductStatus] = Field(None, description="Product status")
    vendor: Optional[str] = Field(None, description="New vendor name")
    product_type: Optional[str] = Field(None, description="New product type")
    tags: Optional[List[str]] = Field(None, description="New product tags")

    def changes(self) -> dict:
        """Set fields other than the product id, in wire names"""
        data = self.to_wire()
        data.pop("productId", None)
        return data


class UpdateProductInput(ProductUpdate):
    pass


class BulkUpdateProductsInput(ToolInput):
    updates: List[ProductUpdate] = Field(..., description="Array of product updates")


# ========== Collections ==========

class GetCollectionsInput(ToolInput):
    limit: int = Field(10, gt=0, le=250, description="Maximum number of collections to return")
    name: Optional[str] = Field(None, description="Filter collections by name")
