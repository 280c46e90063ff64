"""Idempotency token helpers for mutating Shopify calls"""

import uuid
from typing import Optional


def generate_idempotency_key(prefix: str) -> str:
    """Generate a unique idempotency key, e.g. draft-order-3f2a..."""
    return f"{prefix}-{uuid.uuid4().hex}"


def resolve_idempotency_key(provided: Optional[str], prefix: str) -> str:
    """Use the caller's key when given so retries stay deduplicated"""
    if provided and provided.strip():
        return provided.strip()
    return generate_idempotency_key(prefix)
