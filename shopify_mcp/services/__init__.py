"""Services for business logic with proper separation of concerns"""

from .product_service import ProductService

__all__ = [
    'ProductService'
]
