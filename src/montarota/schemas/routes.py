"""Route assembly schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .common import RecordId, RequestModel


class AssembleRouteRequest(RequestModel):
    courier_id: RecordId
    order_ids: List[RecordId] = Field(..., description="Orders in the sequence they should be visited.")
    origin_address: Optional[str] = Field(
        default=None, description="Departure address; defaults to the first order's store address."
    )


class RouteStopModel(BaseModel):
    sequence: int
    id: RecordId
    customer: Optional[str] = None
    address: str
    confirmation_code: Optional[str] = None


class AssembleRouteResponse(BaseModel):
    route: dict
    google_maps_link: str
    waze_link: str
    message: str
    orders: List[RouteStopModel]
