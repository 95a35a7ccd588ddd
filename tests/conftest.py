import operator
import uuid
from datetime import datetime, timezone
from typing import Any, Sequence

import pytest
from fastapi.testclient import TestClient

from montarota.main import create_app
from montarota.models.domain import Identity
from montarota.persistence.datastore import Datastore
from montarota.persistence.gateway import Filter, Query
from montarota.services.auth import create_access_token

_COMPARATORS = {
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
}


def _matches(row: dict, item: Filter) -> bool:
    value = row.get(item.column)
    if item.op == "eq":
        return value == item.value
    if item.op == "neq":
        return value != item.value
    if item.op == "in":
        return value in item.value
    if item.op == "is_null":
        return value is None
    if value is None:
        return False
    return _COMPARATORS[item.op](value, item.value)


class MemoryTable:
    """In-memory TableGateway used in place of a Supabase table."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.rows: list[dict] = []

    def _find(self, filters: Sequence[Filter]) -> list[dict]:
        return [row for row in self.rows if all(_matches(row, item) for item in filters)]

    def select(self, query: Query | None = None) -> list[dict]:
        query = query or Query()
        rows = self._find(query.filters)
        if query.order_by:
            rows = sorted(
                rows,
                key=lambda row: (row.get(query.order_by) is None, row.get(query.order_by)),
                reverse=query.descending,
            )
        if query.limit is not None:
            rows = rows[: query.limit]
        if query.columns == "*":
            return [dict(row) for row in rows]
        columns = [column.strip() for column in query.columns.split(",")]
        return [{column: row.get(column) for column in columns} for row in rows]

    def get(self, record_id: Any) -> dict | None:
        for row in self.rows:
            if row["id"] == record_id:
                return dict(row)
        return None

    def insert(self, values: dict) -> dict:
        row = {"id": str(uuid.uuid4()), "created_at": datetime.now(timezone.utc).isoformat(), **values}
        self.rows.append(row)
        return dict(row)

    def update(self, filters: Sequence[Filter], values: dict) -> list[dict]:
        matched = self._find(filters)
        for row in matched:
            row.update(values)
        return [dict(row) for row in matched]

    def delete(self, filters: Sequence[Filter]) -> list[dict]:
        matched = self._find(filters)
        self.rows = [row for row in self.rows if row not in matched]
        return [dict(row) for row in matched]


@pytest.fixture
def datastore() -> Datastore:
    return Datastore.build(MemoryTable)


@pytest.fixture
def api_client(datastore: Datastore) -> TestClient:
    return TestClient(create_app(datastore), raise_server_exceptions=False)


@pytest.fixture
def store(datastore: Datastore) -> dict:
    return datastore.stores.insert(
        {"name": "Pizzaria Central", "address": "Av. Paulista, 1000", "platform_fee": 4.5, "status": "active"}
    )


@pytest.fixture
def courier(datastore: Datastore) -> dict:
    return datastore.couriers.insert(
        {
            "name": "Joao",
            "phone": "11999990000",
            "status": "available",
            "total_deliveries": 0,
            "balance": 0.0,
            "rating_average": 4.8,
        }
    )


@pytest.fixture
def make_headers():
    def _make(role: str = "admin", store_id: Any = None, courier_id: Any = None) -> dict:
        identity = Identity(
            id=str(uuid.uuid4()),
            email=f"{role}@example.com",
            role=role,
            store_id=store_id,
            courier_id=courier_id,
        )
        return {"Authorization": f"Bearer {create_access_token(identity)}"}

    return _make


@pytest.fixture
def admin_headers(make_headers) -> dict:
    return make_headers("admin")
