"""Decorators shared by the tool adapters

tool_adapter is the one contract every tool goes through:
run the handler, wrap its result with format_success, and turn
anything it raises into an error envelope via handle_error.
"""

import functools
import time
from typing import Any, Callable, Dict

from ..formatters.response_formatter import format_success, handle_error
from ..protocol.errors import ShopifyClientError
from .logger import get_logger, get_mcp_operations_logger

logger = get_logger(__name__)


def render_default_message(template: str, params: Dict[str, Any]) -> str:
    """Interpolate tool inputs into a default error message"""
    try:
        return template.format(**params)
    except (KeyError, IndexError, ValueError):
        return template


def tool_adapter(tool_name: str, default_message: str = "An error occurred"):
    """
    Decorator implementing the tool adapter contract.

    The wrapped coroutine receives the remote client positionally and the
    tool parameters as keyword arguments. It returns raw data; the wrapper
    always returns exactly one envelope and never raises an Exception.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Dict[str, Any]:
            ops_logger = get_mcp_operations_logger()
            ops_logger.log_tool_request(tool_name, kwargs)
            start_time = time.time()

            try:
                result = await func(*args, **kwargs)
                envelope = format_success(result)
            except Exception as e:
                execution_time_ms = (time.time() - start_time) * 1000
                if isinstance(e, ShopifyClientError):
                    logger.error(f"[{tool_name}] {e.code}: {e.message}")
                else:
                    logger.error(f"[{tool_name}] Unexpected error: {e}", exc_info=True)
                ops_logger.log_tool_error(tool_name, e, execution_time_ms)
                envelope = handle_error(render_default_message(default_message, kwargs), e)

            execution_time_ms = (time.time() - start_time) * 1000
            ops_logger.log_tool_response(tool_name, envelope, execution_time_ms)
            return envelope

        wrapper.tool_name = tool_name
        wrapper.default_message = default_message
        return wrapper
    return decorator
