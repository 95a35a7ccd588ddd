"""Per-collection gateways bundled for injection into the API layer."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable

from .gateway import SupabaseTable, TableGateway


@dataclass(slots=True)
class Datastore:
    users: TableGateway
    stores: TableGateway
    couriers: TableGateway
    orders: TableGateway
    routes: TableGateway
    payments: TableGateway
    ocr_slips: TableGateway
    gps_pings: TableGateway

    @classmethod
    def build(cls, table_factory: Callable[[str], TableGateway]) -> "Datastore":
        """Create one gateway per collection; the table name equals the attribute name."""
        return cls(**{item.name: table_factory(item.name) for item in fields(cls)})

    @classmethod
    def from_supabase(cls, client: Any) -> "Datastore":
        return cls.build(lambda name: SupabaseTable(client, name))
