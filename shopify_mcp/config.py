"""Configuration management for Shopify MCP Server"""

import os
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Note: Logging handlers are installed by utils.logger.setup_mcp_logging
# MCP servers must keep stdout clean for JSON-RPC communication

DEFAULT_API_VERSION = "2025-01"


@dataclass
class ShopifyConfig:
    """Shopify Admin API configuration"""
    access_token: Optional[str]
    shop_domain: Optional[str]
    api_version: str = DEFAULT_API_VERSION
    timeout: float = 30.0
    debug_curl: bool = False

    @property
    def graphql_url(self) -> str:
        """Admin GraphQL endpoint for the configured shop"""
        domain = (self.shop_domain or "").replace("https://", "").replace("http://", "").rstrip("/")
        return f"https://{domain}/admin/api/{self.api_version}/graphql.json"

    @property
    def default_headers(self) -> Dict[str, str]:
        """Default headers for API requests"""
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "X-Shopify-Access-Token": self.access_token or ""
        }


@dataclass
class ServerConfig:
    """MCP server identity"""
    name: str = "shopify-tools"
    version: str = "1.0.0"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    operations_debug_level: str = "BASIC"
    operations_max_size: int = 5000


class Config:
    """Main configuration class"""

    def __init__(self):
        # Shopify Configuration
        self.shopify = ShopifyConfig(
            access_token=os.getenv("SHOPIFY_ACCESS_TOKEN"),
            shop_domain=os.getenv("MYSHOPIFY_DOMAIN"),
            api_version=os.getenv("SHOPIFY_API_VERSION", DEFAULT_API_VERSION),
            timeout=float(os.getenv("SHOPIFY_TIMEOUT", "30")),
            debug_curl=os.getenv("DEBUG_CURL_LOGGING", "false").lower() == "true"
        )

        # Server Configuration
        self.server = ServerConfig(
            name=os.getenv("MCP_SERVER_NAME", "shopify-tools")
        )

        # Logging Configuration
        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            file=os.getenv("LOG_FILE") or None,
            operations_debug_level=os.getenv("MCP_DEBUG_LEVEL", "BASIC").upper(),
            operations_max_size=int(os.getenv("MCP_LOG_MAX_SIZE", "5000"))
        )

    def validate(self) -> bool:
        """Validate configuration"""
        errors = []

        if not self.shopify.access_token:
            errors.append("SHOPIFY_ACCESS_TOKEN is required")
        if not self.shopify.shop_domain:
            errors.append("MYSHOPIFY_DOMAIN is required")
        if self.shopify.timeout <= 0:
            errors.append("SHOPIFY_TIMEOUT must be positive")

        if errors:
            for error in errors:
                logging.error(f"Configuration error: {error}")
            return False

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary (token masked)"""
        token = self.shopify.access_token
        return {
            "shopify": {
                "shop_domain": self.shopify.shop_domain,
                "access_token": (token[:6] + "...") if token else None,
                "api_version": self.shopify.api_version,
                "timeout": self.shopify.timeout,
                "debug_curl": self.shopify.debug_curl
            },
            "server": {
                "name": self.server.name,
                "version": self.server.version
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
                "operations_debug_level": self.logging.operations_debug_level
            }
        }


# Global configuration instance
config = Config()
