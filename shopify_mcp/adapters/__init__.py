"""MCP Adapter Modules

This package contains modularized MCP adapters organized by functionality:
- utils: Shared parameter validation
- orders: Orders and draft orders
- products: Product details, inventory, search and changes
- collections: Collection listing

Every adapter takes the Shopify client positionally and tool parameters
as keyword arguments, and returns a success or error envelope.
"""
