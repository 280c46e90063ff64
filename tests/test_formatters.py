"""
Tests for order, product and collection reshaping
"""

from shopify_mcp.formatters.connections import connection_nodes, money
from shopify_mcp.formatters.order import format_order
from shopify_mcp.formatters.product import format_collection, format_product_details

from conftest import order_node, product_node


def test_connection_nodes_accepts_edges():
    connection = {"edges": [{"node": {"id": "a"}}, {"node": None}, {"node": {"id": "b"}}]}

    assert connection_nodes(connection) == [{"id": "a"}, {"id": "b"}]
    assert connection_nodes(None) == []
    assert connection_nodes({"nodes": None}) == []


def test_money_flattens_shop_money():
    assert money({"shopMoney": {"amount": "1.50", "currencyCode": "EUR"}}) == \
        {"amount": "1.50", "currencyCode": "EUR"}
    assert money(None) is None


def test_order_line_items_from_edges():
    node = order_node()
    node["lineItems"] = {"edges": [{"node": node["lineItems"]["nodes"][0]}]}

    order = format_order(node)

    assert order["lineItems"][0]["originalTotal"] == {"amount": "20.00", "currencyCode": "USD"}


def test_product_images_from_edges():
    node = product_node()
    node["images"] = {"edges": [{"node": {"url": "https://cdn.example.com/a.png", "altText": "Front"}}]}

    product = format_product_details(node)

    assert product["images"] == [{"src": "https://cdn.example.com/a.png", "alt": "Front"}]


def test_collection_count_object():
    collection = format_collection({"id": "gid://shopify/Collection/1", "productsCount": {"count": 3}})

    assert collection["productsCount"] == 3
