"""Generic table access over the managed datastore.

Business code only talks to :class:`TableGateway`; :class:`SupabaseTable`
translates the calls into Supabase/PostgREST query builders.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

from postgrest.exceptions import APIError

from ..errors import UpstreamError

logger = logging.getLogger(__name__)

FILTER_OPERATORS = ("eq", "neq", "in", "gt", "gte", "lt", "lte", "is_null")


@dataclass(frozen=True, slots=True)
class Filter:
    column: str
    op: str
    value: Any = None

    def __post_init__(self) -> None:
        if self.op not in FILTER_OPERATORS:
            raise ValueError(f"Unsupported filter operator '{self.op}'")


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)


def neq(column: str, value: Any) -> Filter:
    return Filter(column, "neq", value)


def in_(column: str, values: Sequence[Any]) -> Filter:
    return Filter(column, "in", list(values))


def gt(column: str, value: Any) -> Filter:
    return Filter(column, "gt", value)


def gte(column: str, value: Any) -> Filter:
    return Filter(column, "gte", value)


def lt(column: str, value: Any) -> Filter:
    return Filter(column, "lt", value)


def lte(column: str, value: Any) -> Filter:
    return Filter(column, "lte", value)


def is_null(column: str) -> Filter:
    return Filter(column, "is_null")


@dataclass(slots=True)
class Query:
    """Select description: filters, projection, ordering and limit."""

    filters: list[Filter] = field(default_factory=list)
    columns: str = "*"
    order_by: str | None = None
    descending: bool = False
    limit: int | None = None


class TableGateway(Protocol):
    name: str

    def select(self, query: Query | None = None) -> list[dict]:
        ...

    def get(self, record_id: Any) -> dict | None:
        ...

    def insert(self, values: dict) -> dict:
        ...

    def update(self, filters: Sequence[Filter], values: dict) -> list[dict]:
        ...

    def delete(self, filters: Sequence[Filter]) -> list[dict]:
        ...


def _apply_filters(builder: Any, filters: Sequence[Filter]) -> Any:
    for item in filters:
        if item.op == "in":
            builder = builder.in_(item.column, item.value)
        elif item.op == "is_null":
            builder = builder.is_(item.column, "null")
        else:
            builder = getattr(builder, item.op)(item.column, item.value)
    return builder


class SupabaseTable:
    """TableGateway backed by a Supabase client table."""

    def __init__(self, client: Any, name: str) -> None:
        self.client = client
        self.name = name

    def _execute(self, builder: Any, action: str) -> list[dict]:
        try:
            response = builder.execute()
        except APIError as exc:
            message = exc.message or str(exc)
            logger.warning(f"Supabase {action} on '{self.name}' failed: {message}")
            raise UpstreamError(message) from exc
        return list(response.data or [])

    def select(self, query: Query | None = None) -> list[dict]:
        query = query or Query()
        builder = _apply_filters(self.client.table(self.name).select(query.columns), query.filters)
        if query.order_by:
            builder = builder.order(query.order_by, desc=query.descending)
        if query.limit is not None:
            builder = builder.limit(query.limit)
        return self._execute(builder, "select")

    def get(self, record_id: Any) -> dict | None:
        rows = self.select(Query(filters=[eq("id", record_id)], limit=1))
        return rows[0] if rows else None

    def insert(self, values: dict) -> dict:
        rows = self._execute(self.client.table(self.name).insert(values), "insert")
        if not rows:
            raise UpstreamError(f"Insert into '{self.name}' returned no record")
        return rows[0]

    def update(self, filters: Sequence[Filter], values: dict) -> list[dict]:
        builder = _apply_filters(self.client.table(self.name).update(values), filters)
        return self._execute(builder, "update")

    def delete(self, filters: Sequence[Filter]) -> list[dict]:
        builder = _apply_filters(self.client.table(self.name).delete(), filters)
        return self._execute(builder, "delete")
