# app/dependencies.py
"""Centralized dependencies for FastAPI application."""

from .database import get_table
from .models.product import DynamoProductStore


def get_store() -> DynamoProductStore:
    """Product store dependency.

    Wraps the cached table handle; tests swap it out through
    ``app.dependency_overrides[get_store]``.
    Usage: store: DynamoProductStore = Depends(get_store)
    """
    return DynamoProductStore(get_table())
