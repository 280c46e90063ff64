"""
Response Envelope System

Every tool returns exactly one envelope:
- success: JSON text of the result plus the structured data itself
- error: a displayable message, isError=True and structured error detail

handle_error is total: whatever was raised, it returns an envelope.
"""

import json
import traceback
from typing import Any, Dict

from mcp.types import CallToolResult, TextContent

from ..protocol.errors import ShopifyClientError


def _text_content(text: str) -> Dict[str, Any]:
    return {"type": "text", "text": text}


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


def _json_safe(value: Any) -> Any:
    """Coerce value into something json.dumps accepts"""
    try:
        return json.loads(json.dumps(value, default=str))
    except (TypeError, ValueError):
        return _safe_str(value)


def format_success(data: Any) -> Dict[str, Any]:
    """
    Format a successful tool result

    Args:
        data: The data to format

    Returns:
        Success envelope with JSON text and the original data
    """
    return {
        "content": [_text_content(json.dumps(data, default=str))],
        "data": data,
    }


def handle_error(default_message: str, error: Any) -> Dict[str, Any]:
    """
    Normalize anything raised inside a tool into an error envelope

    Args:
        default_message: Message used when the error carries no usable message
        error: The caught value

    Returns:
        Error envelope with isError=True
    """
    if isinstance(error, ShopifyClientError):
        detail = error.to_dict()
        detail["contextData"] = _json_safe(detail["contextData"])
        return {
            "content": [_text_content(error.message or default_message)],
            "isError": True,
            "error": detail,
        }

    if isinstance(error, Exception):
        try:
            stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        except Exception:
            stack = _safe_str(error)
        return {
            "content": [_text_content(_safe_str(error) or default_message)],
            "isError": True,
            "error": stack,
        }

    return {
        "content": [_text_content(default_message)],
        "isError": True,
        "error": _safe_str(error),
    }


def is_error_envelope(envelope: Dict[str, Any]) -> bool:
    return envelope.get("isError") is True


def to_call_tool_result(envelope: Dict[str, Any]) -> CallToolResult:
    """Convert an envelope into the MCP wire result"""
    content = [TextContent(type="text", text=item["text"]) for item in envelope["content"]]
    if is_error_envelope(envelope):
        return CallToolResult(
            content=content,
            isError=True,
            structuredContent={"error": _json_safe(envelope.get("error"))},
        )
    return CallToolResult(
        content=content,
        isError=False,
        structuredContent={"data": _json_safe(envelope.get("data"))},
    )
