"""Store service helpers."""

from .service import create_store, get_store, list_stores, update_store

__all__ = ["list_stores", "get_store", "create_store", "update_store"]
