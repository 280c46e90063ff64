"""Logging utilities for MCP Server"""

import logging
import sys
import json
import os
from datetime import datetime, timezone
from typing import Optional, Dict, Any


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger instance

    Args:
        name: Logger name (usually __name__)
        level: Optional log level override

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Set level if provided
    if level:
        log_level = getattr(logging, level.upper(), logging.INFO)
        logger.setLevel(log_level)

    return logger


def setup_mcp_logging(level: str = "INFO", debug: bool = False, log_file: Optional[str] = None,
                      fmt: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'):
    """
    Setup logging appropriate for MCP server

    MCP servers should only output JSON-RPC messages to stdout,
    so we redirect all logging to stderr.

    Args:
        level: Log level name (from LoggingConfig.level)
        debug: Enable debug logging
        log_file: Optional file to mirror log records into
        fmt: Log record format
    """
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    # Override with debug flag if provided
    if debug:
        log_level = logging.DEBUG

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(fmt, datefmt='%Y-%m-%d %H:%M:%S')

    # Create stderr handler (so logs don't interfere with JSON-RPC on stdout)
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(log_level)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)

    # File handler if specified
    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"Could not create log file {log_file}: {e}")

    # Suppress noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root_logger


class MCPOperationsLogger:
    """Structured JSON logging for MCP tool operations"""

    def __init__(self, debug_level: str = "BASIC", max_log_size: int = 5000):
        self.debug_level = (debug_level or "BASIC").upper()
        self.max_log_size = max_log_size
        self.logger = logging.getLogger('mcp_operations')

    def _truncate_data(self, data: Any) -> Any:
        """Truncate large data structures for logging"""
        if self.debug_level == 'RAW':
            return data

        json_str = json.dumps(data, default=str)
        if len(json_str) <= self.max_log_size:
            return data

        # Truncate and add indicator
        truncated_str = json_str[:self.max_log_size] + '...[TRUNCATED]'
        return {"_truncated": True, "_size": len(json_str), "_data": truncated_str}

    @staticmethod
    def _timestamp() -> str:
        return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    def log_tool_request(self, tool_name: str, request_data: Dict[str, Any]):
        """Log MCP tool request"""
        if self.debug_level == 'BASIC':
            return

        log_entry = {
            "timestamp": self._timestamp(),
            "event_type": "mcp_request",
            "tool": tool_name,
            "request": self._truncate_data(request_data)
        }

        self.logger.info(f"[REQUEST] {json.dumps(log_entry, separators=(',', ':'), default=str)}")

    def log_tool_response(self, tool_name: str, envelope: Dict[str, Any], execution_time_ms: float):
        """Log MCP tool response with execution metrics"""
        status = "error" if envelope.get("isError") else "success"
        if self.debug_level in ('FULL', 'RAW'):
            response = self._truncate_data(envelope)
        else:
            text = envelope.get("content", [{}])[0].get("text", "")
            response = {"isError": bool(envelope.get("isError")), "text": text[:200]}

        log_entry = {
            "timestamp": self._timestamp(),
            "event_type": "mcp_response",
            "tool": tool_name,
            "execution_time_ms": round(execution_time_ms, 2),
            "status": status,
            "response": response
        }

        line = f"[RESPONSE] {json.dumps(log_entry, separators=(',', ':'), default=str)}"
        if status == "error":
            self.logger.warning(line)
        else:
            self.logger.info(line)

    def log_tool_error(self, tool_name: str, error: Any, execution_time_ms: float):
        """Log MCP tool error"""
        log_entry = {
            "timestamp": self._timestamp(),
            "event_type": "mcp_error",
            "tool": tool_name,
            "execution_time_ms": round(execution_time_ms, 2),
            "status": "error",
            "error": {
                "type": type(error).__name__,
                "code": getattr(error, "code", None),
                "message": str(error)[:500]
            }
        }

        self.logger.error(f"[ERROR] {json.dumps(log_entry, separators=(',', ':'), default=str)}")


# Global instance
_mcp_operations_logger = None

def init_mcp_operations_logger(debug_level: str, max_log_size: int) -> MCPOperationsLogger:
    """Replace the global MCP operations logger"""
    global _mcp_operations_logger
    _mcp_operations_logger = MCPOperationsLogger(debug_level, max_log_size)
    return _mcp_operations_logger


def get_mcp_operations_logger() -> MCPOperationsLogger:
    """Get global MCP operations logger instance, built from the logging config on first use"""
    if _mcp_operations_logger is None:
        from ..config import config
        return init_mcp_operations_logger(config.logging.operations_debug_level,
                                          config.logging.operations_max_size)
    return _mcp_operations_logger
