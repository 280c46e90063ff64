"""
Tests for order tool adapters against a mocked Shopify client
"""

import json

import httpx
import pytest

from shopify_mcp.adapters.orders import (
    complete_draft_order,
    create_draft_order,
    get_order,
    get_orders,
)
from shopify_mcp.protocol.errors import (
    ShopifyDraftOrderNotFoundError,
    ShopifyOrderNotFoundError,
)

from conftest import PAGE_INFO, order_node


SHIPPING_ADDRESS = {
    "address1": "1 Main St",
    "countryCode": "CA",
    "firstName": "Ada",
    "lastName": "Lovelace",
    "zip": "K1A 0B1",
    "city": "Ottawa",
    "country": "Canada",
    "provinceCode": "ON",
}

LINE_ITEMS = [{"variantId": "gid://shopify/ProductVariant/9", "quantity": 2}]


class TestGetOrders:

    @pytest.mark.asyncio
    async def test_two_orders_with_page_info(self, mock_client):
        mock_client.load_orders.return_value = {
            "orders": [order_node(), order_node("gid://shopify/Order/2", "#1002")],
            "pageInfo": PAGE_INFO,
        }

        envelope = await get_orders(mock_client, first=2, sortKey="CREATED_AT", reverse=True)

        assert "isError" not in envelope
        assert len(envelope["data"]["orders"]) == 2
        assert envelope["data"]["pageInfo"] == PAGE_INFO
        mock_client.load_orders.assert_awaited_once_with(
            first=2, after=None, query=None, sort_key="CREATED_AT", reverse=True
        )

    @pytest.mark.asyncio
    async def test_orders_are_flattened(self, mock_client):
        mock_client.load_orders.return_value = {"orders": [order_node()], "pageInfo": PAGE_INFO}

        envelope = await get_orders(mock_client)
        order = envelope["data"]["orders"][0]

        assert order["totalPrice"] == {"amount": "25.00", "currencyCode": "USD"}
        assert order["financialStatus"] == "PAID"
        assert order["lineItems"][0]["variant"]["id"] == "gid://shopify/ProductVariant/9"
        assert order["customer"]["firstName"] == "Ada"

    @pytest.mark.asyncio
    async def test_invalid_sort_key_is_rejected_before_calling_shopify(self, mock_client):
        envelope = await get_orders(mock_client, sortKey="PRICE")

        assert envelope["isError"] is True
        mock_client.load_orders.assert_not_called()

    @pytest.mark.asyncio
    async def test_cursor_and_query_are_forwarded(self, mock_client):
        mock_client.load_orders.return_value = {"orders": [], "pageInfo": {"hasNextPage": False, "endCursor": None}}

        await get_orders(mock_client, after="cursor-1", query="financial_status:paid")

        kwargs = mock_client.load_orders.await_args.kwargs
        assert kwargs["after"] == "cursor-1"
        assert kwargs["query"] == "financial_status:paid"

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_normalized(self, mock_client):
        mock_client.load_orders.side_effect = RuntimeError("socket closed")

        envelope = await get_orders(mock_client)

        assert envelope["isError"] is True
        assert envelope["content"][0]["text"] == "socket closed"


class TestGetOrder:

    @pytest.mark.asyncio
    async def test_single_order(self, mock_client):
        mock_client.load_order.return_value = order_node()

        envelope = await get_order(mock_client, orderId="gid://shopify/Order/1")

        assert envelope["data"]["order"]["name"] == "#1001"

    @pytest.mark.asyncio
    async def test_missing_order(self, mock_client):
        mock_client.load_order.side_effect = ShopifyOrderNotFoundError("gid://shopify/Order/404")

        envelope = await get_order(mock_client, orderId="gid://shopify/Order/404")

        assert envelope["error"]["code"] == "ORDER_NOT_FOUND"


class TestCreateDraftOrder:

    @pytest.mark.asyncio
    async def test_creates_draft_with_billing_from_shipping(self, mock_client):
        mock_client.create_draft_order.return_value = {
            "draftOrderId": "gid://shopify/DraftOrder/5",
            "draftOrderName": "#D5",
        }

        envelope = await create_draft_order(
            mock_client,
            lineItems=LINE_ITEMS,
            email="buyer@example.com",
            shippingAddress=SHIPPING_ADDRESS,
        )

        assert envelope["data"] == {"draftOrderId": "gid://shopify/DraftOrder/5", "draftOrderName": "#D5"}
        payload, key = mock_client.create_draft_order.await_args.args
        assert payload["lineItems"] == LINE_ITEMS
        assert payload["billingAddress"] == payload["shippingAddress"]
        assert payload["shippingAddress"]["provinceCode"] == "ON"
        assert "address2" not in payload["shippingAddress"]
        assert payload["tags"] == ""
        assert payload["note"] == ""
        assert key.startswith("draft-order-")

    @pytest.mark.asyncio
    async def test_same_token_creates_one_order(self, mock_client):
        created = {}

        async def remote_create(payload, idempotency_key):
            # remote side deduplicates on the token
            if idempotency_key not in created:
                created[idempotency_key] = {
                    "draftOrderId": f"gid://shopify/DraftOrder/{len(created) + 1}",
                    "draftOrderName": f"#D{len(created) + 1}",
                }
            return created[idempotency_key]

        mock_client.create_draft_order.side_effect = remote_create
        params = dict(lineItems=LINE_ITEMS, email="buyer@example.com",
                      shippingAddress=SHIPPING_ADDRESS, idempotencyKey="retry-token-1")

        first = await create_draft_order(mock_client, **params)
        second = await create_draft_order(mock_client, **params)

        assert len(created) == 1
        assert first["data"] == second["data"]
        keys = [call.args[1] for call in mock_client.create_draft_order.await_args_list]
        assert keys == ["retry-token-1", "retry-token-1"]

    @pytest.mark.asyncio
    async def test_generated_tokens_differ_per_call(self, mock_client):
        mock_client.create_draft_order.return_value = {"draftOrderId": "x", "draftOrderName": "y"}
        params = dict(lineItems=LINE_ITEMS, email="buyer@example.com", shippingAddress=SHIPPING_ADDRESS)

        await create_draft_order(mock_client, **params)
        await create_draft_order(mock_client, **params)

        keys = [call.args[1] for call in mock_client.create_draft_order.await_args_list]
        assert keys[0] != keys[1]

    @pytest.mark.asyncio
    async def test_missing_address_field_is_rejected(self, mock_client):
        address = dict(SHIPPING_ADDRESS)
        del address["zip"]

        envelope = await create_draft_order(mock_client, lineItems=LINE_ITEMS,
                                            email="buyer@example.com", shippingAddress=address)

        assert envelope["isError"] is True
        assert envelope["content"][0]["text"]
        mock_client.create_draft_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_note_is_forwarded(self, mock_client):
        mock_client.create_draft_order.return_value = {"draftOrderId": "x", "draftOrderName": "y"}

        await create_draft_order(mock_client, lineItems=LINE_ITEMS, email="buyer@example.com",
                                 shippingAddress=SHIPPING_ADDRESS, note="Gift wrap")

        payload = mock_client.create_draft_order.await_args.args[0]
        assert payload["note"] == "Gift wrap"


class TestCompleteDraftOrder:

    @pytest.mark.asyncio
    async def test_completes_draft(self, mock_client):
        mock_client.complete_draft_order.return_value = {
            "draftOrderId": "gid://1",
            "draftOrderName": "#D1",
            "orderId": "gid://shopify/Order/77",
        }

        envelope = await complete_draft_order(mock_client, draftOrderId="gid://1", variantId="gid://v1")

        assert envelope["data"]["orderId"] == "gid://shopify/Order/77"
        mock_client.complete_draft_order.assert_awaited_once_with("gid://1", "gid://v1")

    @pytest.mark.asyncio
    async def test_draft_not_found(self, mock_client):
        mock_client.complete_draft_order.side_effect = ShopifyDraftOrderNotFoundError("gid://1")

        envelope = await complete_draft_order(mock_client, draftOrderId="gid://1", variantId="gid://v1")

        assert envelope["isError"] is True
        assert envelope["error"]["code"] == "DRAFT_ORDER_NOT_FOUND"
        json.dumps(envelope)

    @pytest.mark.asyncio
    async def test_default_message_names_the_draft(self, mock_client):
        mock_client.complete_draft_order.side_effect = Exception()

        envelope = await complete_draft_order(mock_client, draftOrderId="gid://1", variantId="gid://v1")

        assert envelope["isError"] is True
        assert envelope["content"][0]["text"] == "Failed to complete draft order gid://1"


@pytest.mark.asyncio
async def test_non_object_response_is_invalid_response(make_client):
    client, _ = make_client(httpx.Response(200, json=[1, 2]))

    envelope = await get_orders(client)

    assert envelope["isError"] is True
    assert envelope["error"]["code"] == "INVALID_RESPONSE"
