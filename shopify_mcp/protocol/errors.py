"""
Shopify Domain Error Handling

Defines the structured errors raised by the Shopify client.
Every error carries a machine-readable code so tool adapters can
report failures to programmatic consumers without parsing messages.
"""

from typing import Optional, Any, Dict


class ShopifyClientError(Exception):
    """Base class for all errors originating from the Shopify Admin API"""

    def __init__(
        self,
        message: str,
        code: str = "SHOPIFY_CLIENT_ERROR",
        context_data: Optional[Dict[str, Any]] = None,
        inner_error: Optional[BaseException] = None
    ):
        """
        Initialize Shopify client error

        Args:
            message: Human-readable error message
            code: Machine-readable error code
            context_data: Optional data describing the failed request
            inner_error: Optional underlying exception
        """
        self.code = code
        self.message = message
        self.context_data = context_data
        self.inner_error = inner_error
        super().__init__(message)

    def describe_inner_error(self) -> Optional[Dict[str, str]]:
        """JSON-friendly description of the wrapped error"""
        if self.inner_error is None:
            return None
        return {
            "type": type(self.inner_error).__name__,
            "message": str(self.inner_error)
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to the structured envelope detail"""
        return {
            "code": self.code,
            "contextData": self.context_data,
            "innerError": self.describe_inner_error()
        }


class ShopifyAuthenticationError(ShopifyClientError):
    """The access token was rejected"""

    def __init__(self, message: str = "Unauthorized", context_data: Optional[Dict] = None):
        super().__init__(
            f"Shopify authentication failed: {message}",
            "UNAUTHORIZED",
            context_data
        )


class ShopifyRequestError(ShopifyClientError):
    """The request could not be completed (transport, HTTP or GraphQL level)"""

    def __init__(
        self,
        message: str,
        code: str = "GRAPHQL_ERROR",
        context_data: Optional[Dict] = None,
        inner_error: Optional[BaseException] = None
    ):
        super().__init__(message, code, context_data, inner_error)


class ShopifyUserError(ShopifyClientError):
    """A mutation returned userErrors"""

    def __init__(self, operation: str, user_errors: list):
        first = user_errors[0] if user_errors else {}
        messages = "; ".join(e.get("message", "") for e in user_errors if isinstance(e, dict))
        super().__init__(
            f"{operation} failed: {messages or 'unknown user error'}",
            first.get("code") or "USER_ERROR",
            {"operation": operation, "userErrors": user_errors}
        )


class ShopifyInputError(ShopifyClientError):
    """The caller's input cannot be applied"""

    def __init__(self, message: str, code: str = "INVALID_INPUT", context_data: Optional[Dict] = None):
        super().__init__(message, code, context_data)


class ShopifyNotFoundError(ShopifyClientError):
    """Requested resource doesn't exist"""

    resource = "Resource"
    error_code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource_id: str, data: Optional[Dict] = None):
        self.resource_id = resource_id
        super().__init__(
            f"{self.resource} not found: {resource_id}",
            self.error_code,
            data or {"id": resource_id}
        )


class ShopifyOrderNotFoundError(ShopifyNotFoundError):
    resource = "Order"
    error_code = "ORDER_NOT_FOUND"


class ShopifyDraftOrderNotFoundError(ShopifyNotFoundError):
    resource = "Draft order"
    error_code = "DRAFT_ORDER_NOT_FOUND"


class ShopifyProductNotFoundError(ShopifyNotFoundError):
    resource = "Product"
    error_code = "PRODUCT_NOT_FOUND"


class ShopifyVariantNotFoundError(ShopifyNotFoundError):
    resource = "Variant"
    error_code = "VARIANT_NOT_FOUND"


class ShopifyCollectionNotFoundError(ShopifyNotFoundError):
    resource = "Collection"
    error_code = "COLLECTION_NOT_FOUND"
