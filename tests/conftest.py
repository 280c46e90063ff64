"""Shared fixtures for the Shopify MCP test suite"""

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from shopify_mcp.config import ShopifyConfig
from shopify_mcp.shopify_client import ShopifyClient


@pytest.fixture
def shopify_config():
    return ShopifyConfig(
        access_token="shpat_test_token",
        shop_domain="test-shop.myshopify.com",
        api_version="2025-01",
        timeout=5.0,
    )


@pytest.fixture
def mock_client():
    """Shopify client double with every operation mocked"""
    return AsyncMock(spec=ShopifyClient)


class GraphQLRecorder:
    """Serves canned GraphQL responses in order and records requests"""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)

    def body(self, index: int) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_client(shopify_config):
    """Build a real ShopifyClient over a MockTransport"""
    def _make(*responses):
        recorder = GraphQLRecorder(responses)
        client = ShopifyClient(shopify_config, transport=httpx.MockTransport(recorder))
        return client, recorder
    return _make


def order_node(order_id="gid://shopify/Order/1", name="#1001"):
    return {
        "id": order_id,
        "name": name,
        "createdAt": "2025-01-01T10:00:00Z",
        "processedAt": "2025-01-01T10:00:00Z",
        "displayFinancialStatus": "PAID",
        "displayFulfillmentStatus": "UNFULFILLED",
        "email": "buyer@example.com",
        "phone": None,
        "note": None,
        "tags": ["vip"],
        "totalPriceSet": {"shopMoney": {"amount": "25.00", "currencyCode": "USD"}},
        "subtotalPriceSet": {"shopMoney": {"amount": "20.00", "currencyCode": "USD"}},
        "totalShippingPriceSet": {"shopMoney": {"amount": "5.00", "currencyCode": "USD"}},
        "totalTaxSet": {"shopMoney": {"amount": "0.00", "currencyCode": "USD"}},
        "customer": {"id": "gid://shopify/Customer/7", "firstName": "Ada",
                     "lastName": "Lovelace", "email": "buyer@example.com"},
        "shippingAddress": {"address1": "1 Main St", "city": "Ottawa", "countryCodeV2": "CA"},
        "lineItems": {"nodes": [{
            "id": "gid://shopify/LineItem/3",
            "title": "Mug",
            "quantity": 2,
            "sku": "MUG-1",
            "originalTotalSet": {"shopMoney": {"amount": "20.00", "currencyCode": "USD"}},
            "variant": {"id": "gid://shopify/ProductVariant/9", "title": "Blue", "price": "10.00"},
        }]},
    }


def product_node(product_id="gid://shopify/Product/1", title="Mug", price="10.00", available=True):
    return {
        "id": product_id,
        "title": title,
        "description": "A sturdy mug",
        "handle": "mug",
        "status": "ACTIVE",
        "vendor": "Acme",
        "productType": "Kitchen",
        "tags": ["ceramic"],
        "createdAt": "2025-01-01T10:00:00Z",
        "updatedAt": "2025-01-02T10:00:00Z",
        "images": {"nodes": [{"url": "https://cdn.example.com/mug.png", "altText": None}]},
        "variants": {"nodes": [{
            "id": "gid://shopify/ProductVariant/9",
            "title": "Blue",
            "sku": "MUG-1",
            "price": price,
            "compareAtPrice": None,
            "availableForSale": available,
            "inventoryPolicy": "DENY",
            "inventoryQuantity": 4,
        }]},
    }


PAGE_INFO = {"hasNextPage": True, "endCursor": "cursor-2"}
