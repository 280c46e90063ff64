"""
Protocol Package - Shopify Error Taxonomy

This package contains:
- The base domain error carrying code, context data and inner error
- Authentication, request, user-error and input failures
- Not-found errors per resource type
"""

from .errors import (
    ShopifyClientError,
    ShopifyAuthenticationError,
    ShopifyRequestError,
    ShopifyUserError,
    ShopifyInputError,
    ShopifyNotFoundError,
    ShopifyOrderNotFoundError,
    ShopifyDraftOrderNotFoundError,
    ShopifyProductNotFoundError,
    ShopifyVariantNotFoundError,
    ShopifyCollectionNotFoundError
)

__all__ = [
    'ShopifyClientError',
    'ShopifyAuthenticationError',
    'ShopifyRequestError',
    'ShopifyUserError',
    'ShopifyInputError',
    'ShopifyNotFoundError',
    'ShopifyOrderNotFoundError',
    'ShopifyDraftOrderNotFoundError',
    'ShopifyProductNotFoundError',
    'ShopifyVariantNotFoundError',
    'ShopifyCollectionNotFoundError'
]
