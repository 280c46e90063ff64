"""Helpers for reading Admin API GraphQL connection and money fields"""

from typing import Any, Dict, List, Optional


def connection_nodes(connection: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Accept both nodes and edges connection styles"""
    if not connection:
        return []
    if "nodes" in connection:
        return connection["nodes"] or []
    return [edge["node"] for edge in connection.get("edges") or [] if edge.get("node")]


def money(money_set: Optional[Dict[str, Any]]) -> Optional[Dict[str, str]]:
    """Flatten a MoneyBag into {amount, currencyCode}"""
    if not money_set:
        return None
    shop_money = money_set.get("shopMoney") or {}
    return {
        "amount": shop_money.get("amount"),
        "currencyCode": shop_money.get("currencyCode"),
    }
