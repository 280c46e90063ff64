"""
Tests for adapter plumbing: the tool decorator, idempotency keys and operations logging
"""

import logging

import pytest

from shopify_mcp.utils.decorators import render_default_message, tool_adapter
from shopify_mcp.utils.idempotency import generate_idempotency_key, resolve_idempotency_key
from shopify_mcp.utils.logger import MCPOperationsLogger


class TestRenderDefaultMessage:

    def test_interpolates_inputs(self):
        assert render_default_message("Failed to retrieve product {productId}",
                                      {"productId": "gid://1"}) == "Failed to retrieve product gid://1"

    def test_missing_input_keeps_template(self):
        assert render_default_message("Failed to retrieve product {productId}", {}) == \
            "Failed to retrieve product {productId}"


class TestToolAdapter:

    @pytest.mark.asyncio
    async def test_wraps_result(self):
        @tool_adapter("echo", "Echo failed")
        async def echo(client, **params):
            return params

        envelope = await echo(None, value=1)

        assert envelope["data"] == {"value": 1}
        assert echo.tool_name == "echo"

    @pytest.mark.asyncio
    async def test_never_raises(self):
        @tool_adapter("broken", "Broken for {name}")
        async def broken(client, **params):
            raise KeyError()

        envelope = await broken(None, name="alpha")

        assert envelope["isError"] is True
        assert "KeyError" in envelope["error"]

    @pytest.mark.asyncio
    async def test_response_is_logged(self, caplog):
        @tool_adapter("quiet", "Quiet failed")
        async def quiet(client, **params):
            return []

        with caplog.at_level(logging.INFO, logger="mcp_operations"):
            await quiet(None)

        assert any('"tool":"quiet"' in record.getMessage() for record in caplog.records)


class TestIdempotencyKeys:

    def test_generated_keys_are_prefixed_and_unique(self):
        first = generate_idempotency_key("draft-order")
        second = generate_idempotency_key("draft-order")

        assert first.startswith("draft-order-")
        assert first != second

    def test_provided_key_wins(self):
        assert resolve_idempotency_key(" token-1 ", "draft-order") == "token-1"

    def test_blank_key_is_replaced(self):
        assert resolve_idempotency_key("   ", "draft-order").startswith("draft-order-")


class TestOperationsLogger:

    def test_large_payload_is_truncated(self):
        ops_logger = MCPOperationsLogger(debug_level="FULL", max_log_size=20)

        truncated = ops_logger._truncate_data({"text": "x" * 100})

        assert truncated["_truncated"] is True
        assert truncated["_data"].endswith("...[TRUNCATED]")

    def test_raw_level_keeps_payload(self):
        ops_logger = MCPOperationsLogger(debug_level="RAW", max_log_size=20)
        payload = {"text": "x" * 100}

        assert ops_logger._truncate_data(payload) is payload

    def test_basic_level_skips_requests(self, caplog):
        ops_logger = MCPOperationsLogger(debug_level="BASIC")

        with caplog.at_level(logging.INFO, logger="mcp_operations"):
            ops_logger.log_tool_request("get-orders", {"first": 1})

        assert caplog.records == []


class TestLoggingFromConfig:

    def test_operations_logger_uses_logging_config(self, monkeypatch):
        from shopify_mcp.config import config
        from shopify_mcp.utils import logger as logger_module

        monkeypatch.setattr(logger_module, "_mcp_operations_logger", None)
        monkeypatch.setattr(config.logging, "operations_debug_level", "FULL")
        monkeypatch.setattr(config.logging, "operations_max_size", 123)

        ops_logger = logger_module.get_mcp_operations_logger()

        assert ops_logger.debug_level == "FULL"
        assert ops_logger.max_log_size == 123
        assert logger_module.get_mcp_operations_logger() is ops_logger

    def test_setup_uses_given_level(self, monkeypatch):
        from shopify_mcp.utils.logger import setup_mcp_logging

        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            setup_mcp_logging(level="WARNING")
            assert root.level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
