"""Store registry."""

from __future__ import annotations

import logging
from typing import Any

from ...config import settings
from ...errors import NotFoundError, ValidationError
from ...persistence.datastore import Datastore
from ...persistence.gateway import Query, eq

logger = logging.getLogger(__name__)


def list_stores(datastore: Datastore) -> list[dict]:
    return datastore.stores.select(Query(filters=[eq("status", "active")], order_by="name"))


def get_store(datastore: Datastore, store_id: Any) -> dict:
    store = datastore.stores.get(store_id)
    if store is None:
        raise NotFoundError("Store not found")
    return store


def create_store(datastore: Datastore, payload: dict) -> dict:
    name = (payload.get("name") or "").strip()
    if not name:
        raise ValidationError("Name is required")

    record = {key: value for key, value in payload.items() if value is not None}
    record["name"] = name
    record.setdefault("platform_fee", settings.platform_fee)
    record.setdefault("status", "active")
    store = datastore.stores.insert(record)
    logger.info(f"Created store {store['id']}")
    return store


def update_store(datastore: Datastore, store_id: Any, changes: dict) -> dict:
    if not changes:
        raise ValidationError("No fields to update")
    rows = datastore.stores.update([eq("id", store_id)], changes)
    if not rows:
        raise NotFoundError("Store not found")
    return rows[0]
