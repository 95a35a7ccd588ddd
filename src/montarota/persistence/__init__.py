"""Datastore access layer."""

from .datastore import Datastore
from .gateway import Filter, Query, SupabaseTable, TableGateway

__all__ = ["Datastore", "Filter", "Query", "SupabaseTable", "TableGateway"]
