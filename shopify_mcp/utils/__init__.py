"""Utility modules for MCP Server"""

from .logger import get_logger, setup_mcp_logging, get_mcp_operations_logger, init_mcp_operations_logger
from .decorators import tool_adapter, render_default_message
from .idempotency import generate_idempotency_key, resolve_idempotency_key

__all__ = [
    "get_logger",
    "setup_mcp_logging",
    "get_mcp_operations_logger",
    "init_mcp_operations_logger",
    "tool_adapter",
    "render_default_message",
    "generate_idempotency_key",
    "resolve_idempotency_key"
]
