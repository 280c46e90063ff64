"""
Shopify Admin GraphQL Client

Async client for the Shopify Admin API used by every MCP tool.
The client keeps no per-call state, so one instance is shared across
concurrent tool invocations. Failures are raised as ShopifyClientError
subclasses carrying machine-readable codes.
"""

import json
import shlex
from typing import Any, Dict, List, Optional

import httpx

from .config import ShopifyConfig
from .protocol.errors import (
    ShopifyAuthenticationError,
    ShopifyCollectionNotFoundError,
    ShopifyDraftOrderNotFoundError,
    ShopifyInputError,
    ShopifyOrderNotFoundError,
    ShopifyProductNotFoundError,
    ShopifyRequestError,
    ShopifyUserError,
    ShopifyVariantNotFoundError,
)
from .utils.logger import get_logger

logger = get_logger(__name__)


# ================================
# GRAPHQL FRAGMENTS & DOCUMENTS
# ================================

MONEY = "shopMoney { amount currencyCode }"

ORDER_FIELDS = f"""
  id
  name
  createdAt
  processedAt
  displayFinancialStatus
  displayFulfillmentStatus
  email
  phone
  note
  tags
  totalPriceSet {{ {MONEY} }}
  subtotalPriceSet {{ {MONEY} }}
  totalShippingPriceSet {{ {MONEY} }}
  totalTaxSet {{ {MONEY} }}
  customer {{ id firstName lastName email }}
  shippingAddress {{
    address1 address2 city province provinceCode zip country countryCodeV2 phone firstName lastName
  }}
  lineItems(first: 50) {{
    nodes {{
      id
      title
      quantity
      sku
      originalTotalSet {{ {MONEY} }}
      variant {{ id title price }}
    }}
  }}
"""

VARIANT_FIELDS = """
  id
  title
  sku
  price
  compareAtPrice
  availableForSale
  inventoryPolicy
  inventoryQuantity
"""

PRODUCT_FIELDS = f"""
  id
  title
  description
  handle
  status
  vendor
  productType
  tags
  createdAt
  updatedAt
  images(first: 10) {{ nodes {{ url altText }} }}
  variants(first: 50) {{ nodes {{ {VARIANT_FIELDS} }} }}
"""

PAGE_INFO = "pageInfo { hasNextPage endCursor }"

LOAD_ORDERS_QUERY = f"""
query loadOrders($first: Int!, $after: String, $query: String, $sortKey: OrderSortKeys, $reverse: Boolean) {{
  orders(first: $first, after: $after, query: $query, sortKey: $sortKey, reverse: $reverse) {{
    nodes {{ {ORDER_FIELDS} }}
    {PAGE_INFO}
  }}
}}
"""

LOAD_ORDER_QUERY = f"""
query loadOrder($id: ID!) {{
  order(id: $id) {{ {ORDER_FIELDS} }}
}}
"""

CREATE_DRAFT_ORDER_MUTATION = """
mutation draftOrderCreate($input: DraftOrderInput!) {
  draftOrderCreate(input: $input) {
    draftOrder { id name }
    userErrors { field message }
  }
}
"""

LOAD_DRAFT_ORDER_QUERY = """
query loadDraftOrder($id: ID!) {
  draftOrder(id: $id) {
    id
    name
    status
    lineItems(first: 100) { nodes { variant { id } } }
  }
}
"""

COMPLETE_DRAFT_ORDER_MUTATION = """
mutation draftOrderComplete($id: ID!) {
  draftOrderComplete(id: $id) {
    draftOrder { id name order { id } }
    userErrors { field message }
  }
}
"""

LOAD_PRODUCTS_QUERY = f"""
query loadProducts($first: Int!, $after: String, $query: String) {{
  products(first: $first, after: $after, query: $query) {{
    nodes {{ {PRODUCT_FIELDS} }}
    {PAGE_INFO}
  }}
}}
"""

LOAD_PRODUCT_QUERY = f"""
query loadProduct($id: ID!) {{
  product(id: $id) {{ {PRODUCT_FIELDS} }}
}}
"""

LOAD_VARIANT_QUERY = f"""
query loadVariant($id: ID!) {{
  productVariant(id: $id) {{
    {VARIANT_FIELDS}
    product {{ id title }}
  }}
}}
"""

LOAD_COLLECTION_PRODUCTS_QUERY = f"""
query loadCollectionProducts($id: ID!, $first: Int!) {{
  collection(id: $id) {{
    id
    title
    products(first: $first) {{
      nodes {{ {PRODUCT_FIELDS} }}
      {PAGE_INFO}
    }}
  }}
}}
"""

LOAD_COLLECTIONS_QUERY = f"""
query loadCollections($first: Int!, $query: String) {{
  collections(first: $first, query: $query) {{
    nodes {{
      id
      title
      handle
      description
      updatedAt
      productsCount {{ count }}
    }}
    {PAGE_INFO}
  }}
}}
"""

LOAD_LOCATION_QUERY = """
query primaryLocation {
  locations(first: 1) { nodes { id } }
}
"""

CREATE_PRODUCT_MUTATION = """
mutation productCreate($product: ProductCreateInput!) {
  productCreate(product: $product) {
    product { id }
    userErrors { field message }
  }
}
"""

CREATE_VARIANTS_MUTATION = """
mutation productVariantsBulkCreate($productId: ID!, $variants: [ProductVariantsBulkInput!]!) {
  productVariantsBulkCreate(productId: $productId, variants: $variants, strategy: REMOVE_STANDALONE_VARIANT) {
    productVariants { id }
    userErrors { field message code }
  }
}
"""

UPDATE_PRODUCT_MUTATION = f"""
mutation productUpdate($product: ProductUpdateInput!) {{
  productUpdate(product: $product) {{
    product {{ {PRODUCT_FIELDS} }}
    userErrors {{ field message }}
  }}
}}
"""

# Wire names of update fields mapped onto ProductUpdateInput
PRODUCT_UPDATE_FIELDS = {
    "title": "title",
    "description": "descriptionHtml",
    "status": "status",
    "vendor": "vendor",
    "productType": "productType",
    "tags": "tags",
}


def _quote_search_term(term: str) -> str:
    """Strip characters that would break out of a search expression"""
    return term.replace('"', "").replace("\\", "").strip()


class ShopifyClient:
    """Client for the Shopify Admin GraphQL API"""

    def __init__(self, shopify_config: ShopifyConfig,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the Shopify client

        Args:
            shopify_config: Credentials, domain, API version and timeout
            transport: Optional httpx transport (used by tests)
        """
        if not shopify_config.access_token:
            raise ValueError("SHOPIFY_ACCESS_TOKEN is required")
        if not shopify_config.shop_domain:
            raise ValueError("MYSHOPIFY_DOMAIN is required")

        self.config = shopify_config
        self.url = shopify_config.graphql_url
        self.timeout = httpx.Timeout(shopify_config.timeout)
        self.limits = httpx.Limits(max_keepalive_connections=5, max_connections=10)
        self.debug_curl = shopify_config.debug_curl
        self._transport = transport

        logger.info(f"ShopifyClient initialized for {shopify_config.shop_domain} "
                    f"(API {shopify_config.api_version})")

    def _generate_curl_command(self, headers: Dict, body: Dict) -> str:
        """Generate curl command for debugging, token masked"""
        curl_parts = ['curl', '-X', 'POST']
        for key, value in headers.items():
            if key.lower() == 'x-shopify-access-token':
                value = '***'
            curl_parts.extend(['-H', shlex.quote(f'{key}: {value}')])
        curl_parts.extend(['-d', shlex.quote(json.dumps(body, separators=(',', ':')))])
        curl_parts.append(shlex.quote(self.url))
        return ' '.join(curl_parts)

    async def _execute(
        self,
        operation: str,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """Run a GraphQL document and return its data object"""
        body = {"query": query, "variables": variables or {}}
        request_headers = dict(self.config.default_headers)
        if headers:
            request_headers.update(headers)

        if self.debug_curl:
            logger.info(f"CURL: {self._generate_curl_command(request_headers, body)}")
        logger.debug(f"[REQUEST] {operation} variables={json.dumps(variables or {}, default=str)}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, limits=self.limits,
                                         transport=self._transport) as client:
                response = await client.post(self.url, json=body, headers=request_headers)
        except httpx.HTTPError as e:
            logger.error(f"Network/connection error for {operation}: {e}")
            raise ShopifyRequestError(
                f"Network error calling Shopify ({operation}): {e}",
                "NETWORK_ERROR",
                {"operation": operation},
                inner_error=e
            ) from e

        logger.debug(f"{operation} -> {response.status_code}")

        if response.status_code in (401, 403):
            raise ShopifyAuthenticationError(
                f"HTTP {response.status_code} for {operation}",
                {"operation": operation, "status": response.status_code}
            )
        if response.status_code >= 400:
            logger.error(f"HTTP {response.status_code} for {operation}: {response.text[:500]}")
            raise ShopifyRequestError(
                f"Shopify returned HTTP {response.status_code} for {operation}",
                f"HTTP_{response.status_code}",
                {"operation": operation, "status": response.status_code, "body": response.text[:2000]}
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ShopifyRequestError(
                f"Invalid JSON in Shopify response for {operation}",
                "INVALID_RESPONSE",
                {"operation": operation, "body": response.text[:2000]},
                inner_error=e
            ) from e

        if not isinstance(payload, dict):
            raise ShopifyRequestError(
                f"Unexpected Shopify response shape for {operation}",
                "INVALID_RESPONSE",
                {"operation": operation, "body": response.text[:2000]}
            )

        errors = payload.get("errors")
        if errors:
            first = errors[0] if isinstance(errors, list) and errors else {}
            code = "GRAPHQL_ERROR"
            message = str(errors)
            if isinstance(first, dict):
                code = (first.get("extensions") or {}).get("code") or code
                message = first.get("message") or message
            elif isinstance(errors, str):
                message = errors
            logger.error(f"GraphQL errors for {operation}: {errors}")
            raise ShopifyRequestError(
                f"Shopify GraphQL error ({operation}): {message}",
                code,
                {"operation": operation, "errors": errors}
            )

        data = payload.get("data")
        if data is None:
            raise ShopifyRequestError(
                f"Shopify response for {operation} contained no data",
                "INVALID_RESPONSE",
                {"operation": operation}
            )
        return data

    @staticmethod
    def _check_user_errors(operation: str, result: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if result is None:
            raise ShopifyRequestError(f"{operation} returned no result", "INVALID_RESPONSE",
                                      {"operation": operation})
        user_errors = result.get("userErrors") or []
        if user_errors:
            raise ShopifyUserError(operation, user_errors)
        return result

    # ================================
    # ORDERS
    # ================================

    async def load_orders(
        self,
        first: Optional[int] = None,
        after: Optional[str] = None,
        query: Optional[str] = None,
        sort_key: Optional[str] = None,
        reverse: Optional[bool] = None
    ) -> Dict[str, Any]:
        """Load a page of orders"""
        data = await self._execute("loadOrders", LOAD_ORDERS_QUERY, {
            "first": first or 10,
            "after": after,
            "query": query,
            "sortKey": sort_key,
            "reverse": reverse,
        })
        orders = data["orders"]
        return {"orders": orders["nodes"], "pageInfo": orders["pageInfo"]}

    async def load_order(self, order_id: str) -> Dict[str, Any]:
        """Load a single order by ID"""
        data = await self._execute("loadOrder", LOAD_ORDER_QUERY, {"id": order_id})
        if not data.get("order"):
            raise ShopifyOrderNotFoundError(order_id)
        return data["order"]

    @staticmethod
    def _mailing_address(address: Dict[str, Any]) -> Dict[str, Any]:
        """Shape a tool address into MailingAddressInput"""
        fields = ("address1", "address2", "city", "countryCode", "provinceCode",
                  "firstName", "lastName", "zip", "phone")
        return {key: address[key] for key in fields if address.get(key) is not None}

    async def create_draft_order(self, payload: Dict[str, Any], idempotency_key: str) -> Dict[str, Any]:
        """
        Create a draft order

        Args:
            payload: lineItems, email, shippingAddress, billingAddress, tags, note
            idempotency_key: Caller-generated token; retries must reuse it

        Returns:
            draftOrderId and draftOrderName
        """
        if not idempotency_key:
            raise ShopifyInputError("An idempotency key is required to create a draft order",
                                    "IDEMPOTENCY_KEY_REQUIRED")

        draft_input = {
            "lineItems": [
                {"variantId": item["variantId"], "quantity": item["quantity"]}
                for item in payload.get("lineItems", [])
            ],
            "email": payload.get("email"),
            "note": payload.get("note", ""),
        }
        tags = payload.get("tags")
        if tags:
            draft_input["tags"] = tags if isinstance(tags, list) else [t.strip() for t in tags.split(",") if t.strip()]
        if payload.get("shippingAddress"):
            draft_input["shippingAddress"] = self._mailing_address(payload["shippingAddress"])
        if payload.get("billingAddress"):
            draft_input["billingAddress"] = self._mailing_address(payload["billingAddress"])

        logger.info(f"[DraftOrder] Creating draft order with {len(draft_input['lineItems'])} "
                    f"line items (idempotency key {idempotency_key})")
        data = await self._execute(
            "draftOrderCreate",
            CREATE_DRAFT_ORDER_MUTATION,
            {"input": draft_input},
            headers={"Idempotency-Key": idempotency_key}
        )
        result = self._check_user_errors("draftOrderCreate", data.get("draftOrderCreate"))
        draft_order = result.get("draftOrder") or {}
        return {
            "draftOrderId": draft_order.get("id"),
            "draftOrderName": draft_order.get("name"),
        }

    async def complete_draft_order(self, draft_order_id: str, variant_id: str) -> Dict[str, Any]:
        """
        Complete a draft order, turning it into an order

        The draft must exist and contain the given variant.
        """
        data = await self._execute("loadDraftOrder", LOAD_DRAFT_ORDER_QUERY, {"id": draft_order_id})
        draft_order = data.get("draftOrder")
        if not draft_order:
            raise ShopifyDraftOrderNotFoundError(draft_order_id)

        variant_ids = {
            (node.get("variant") or {}).get("id")
            for node in draft_order.get("lineItems", {}).get("nodes", [])
        }
        if variant_id not in variant_ids:
            raise ShopifyInputError(
                f"Variant {variant_id} is not part of draft order {draft_order_id}",
                "VARIANT_NOT_IN_DRAFT_ORDER",
                {"draftOrderId": draft_order_id, "variantId": variant_id}
            )

        data = await self._execute("draftOrderComplete", COMPLETE_DRAFT_ORDER_MUTATION,
                                   {"id": draft_order_id})
        result = self._check_user_errors("draftOrderComplete", data.get("draftOrderComplete"))
        completed = result.get("draftOrder") or {}
        return {
            "draftOrderId": completed.get("id", draft_order_id),
            "draftOrderName": completed.get("name", draft_order.get("name")),
            "orderId": (completed.get("order") or {}).get("id"),
        }

    # ================================
    # PRODUCTS
    # ================================

    async def load_products(
        self,
        search_title: Optional[str] = None,
        limit: int = 50,
        after: Optional[str] = None
    ) -> Dict[str, Any]:
        """Load products, optionally filtered by title"""
        query = f"title:*{_quote_search_term(search_title)}*" if search_title else None
        data = await self._execute("loadProducts", LOAD_PRODUCTS_QUERY, {
            "first": limit,
            "after": after,
            "query": query,
        })
        products = data["products"]
        return {"products": products["nodes"], "pageInfo": products["pageInfo"]}

    async def load_product(self, product_id: str) -> Dict[str, Any]:
        """Load a single product with variants and images"""
        data = await self._execute("loadProduct", LOAD_PRODUCT_QUERY, {"id": product_id})
        if not data.get("product"):
            raise ShopifyProductNotFoundError(product_id)
        return data["product"]

    async def load_variant(self, variant_id: str) -> Dict[str, Any]:
        """Load a single product variant"""
        data = await self._execute("loadVariant", LOAD_VARIANT_QUERY, {"id": variant_id})
        if not data.get("productVariant"):
            raise ShopifyVariantNotFoundError(variant_id)
        return data["productVariant"]

    async def search_products_by_price_range(
        self,
        min_price: float,
        max_price: float,
        limit: int = 50
    ) -> Dict[str, Any]:
        """Load products with a variant priced inside [min_price, max_price]"""
        query = f"price:>={min_price} AND price:<={max_price}"
        data = await self._execute("searchProductsByPriceRange", LOAD_PRODUCTS_QUERY, {
            "first": limit,
            "query": query,
        })
        products = data["products"]
        return {"products": products["nodes"], "pageInfo": products["pageInfo"]}

    async def load_products_by_collection_id(self, collection_id: str, limit: int = 50) -> Dict[str, Any]:
        """Load the products of a collection"""
        data = await self._execute("loadCollectionProducts", LOAD_COLLECTION_PRODUCTS_QUERY, {
            "id": collection_id,
            "first": limit,
        })
        collection = data.get("collection")
        if not collection:
            raise ShopifyCollectionNotFoundError(collection_id)
        products = collection["products"]
        return {"products": products["nodes"], "pageInfo": products["pageInfo"]}

    async def _primary_location_id(self) -> Optional[str]:
        data = await self._execute("primaryLocation", LOAD_LOCATION_QUERY)
        nodes = (data.get("locations") or {}).get("nodes") or []
        return nodes[0]["id"] if nodes else None

    async def create_product(self, product_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a product and its variants

        Args:
            product_data: title, description, vendor, productType, tags, variants

        Returns:
            The created product node
        """
        variants: List[Dict[str, Any]] = product_data.get("variants") or []
        product_input = {
            "title": product_data["title"],
            "descriptionHtml": product_data.get("description", ""),
        }
        for key in ("vendor", "productType", "tags"):
            if product_data.get(key) is not None:
                product_input[key] = product_data[key]
        if variants:
            product_input["productOptions"] = [{
                "name": "Title",
                "values": [{"name": v["title"]} for v in variants],
            }]

        data = await self._execute("productCreate", CREATE_PRODUCT_MUTATION, {"product": product_input})
        result = self._check_user_errors("productCreate", data.get("productCreate"))
        product_id = (result.get("product") or {}).get("id")
        if not product_id:
            raise ShopifyRequestError("productCreate returned no product", "INVALID_RESPONSE")

        if variants:
            location_id = await self._primary_location_id()
            bulk_variants = []
            for variant in variants:
                inventory_item = {"tracked": True}
                if variant.get("sku") is not None:
                    inventory_item["sku"] = variant["sku"]
                if variant.get("requiresShipping") is not None:
                    inventory_item["requiresShipping"] = variant["requiresShipping"]
                bulk_variant = {
                    "price": str(variant["price"]),
                    "optionValues": [{"optionName": "Title", "name": variant["title"]}],
                    "inventoryItem": inventory_item,
                }
                if variant.get("taxable") is not None:
                    bulk_variant["taxable"] = variant["taxable"]
                if location_id:
                    bulk_variant["inventoryQuantities"] = [{
                        "availableQuantity": variant.get("inventory", 0),
                        "locationId": location_id,
                    }]
                bulk_variants.append(bulk_variant)

            data = await self._execute("productVariantsBulkCreate", CREATE_VARIANTS_MUTATION, {
                "productId": product_id,
                "variants": bulk_variants,
            })
            self._check_user_errors("productVariantsBulkCreate", data.get("productVariantsBulkCreate"))

        logger.info(f"[Product] Created product {product_id} with {len(variants)} variants")
        return await self.load_product(product_id)

    async def update_product(self, product_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a product

        Args:
            product_id: Product to update
            update_data: title, description, status, vendor, productType, tags

        Returns:
            The updated product node
        """
        product_input: Dict[str, Any] = {"id": product_id}
        for key, graphql_key in PRODUCT_UPDATE_FIELDS.items():
            if update_data.get(key) is not None:
                product_input[graphql_key] = update_data[key]

        data = await self._execute("productUpdate", UPDATE_PRODUCT_MUTATION, {"product": product_input})
        result = self._check_user_errors("productUpdate", data.get("productUpdate"))
        if not result.get("product"):
            raise ShopifyProductNotFoundError(product_id)
        return result["product"]

    # ================================
    # COLLECTIONS
    # ================================

    async def load_collections(self, limit: int = 10, query: Optional[str] = None) -> Dict[str, Any]:
        """Load collections, optionally filtered by a search query"""
        data = await self._execute("loadCollections", LOAD_COLLECTIONS_QUERY, {
            "first": limit,
            "query": query,
        })
        collections = data["collections"]
        return {"collections": collections["nodes"], "pageInfo": collections["pageInfo"]}
