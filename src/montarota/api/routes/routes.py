"""Route assembly endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...models.domain import RouteStatus
from ...persistence.datastore import Datastore
from ...schemas.routes import AssembleRouteRequest, AssembleRouteResponse
from ...services import routing as routing_service
from ..dependencies import get_current_user, get_datastore

router = APIRouter(prefix="/routes", tags=["routes"], dependencies=[Depends(get_current_user)])


@router.post("/assemble", response_model=AssembleRouteResponse, status_code=status.HTTP_201_CREATED)
def assemble(payload: AssembleRouteRequest, datastore: Datastore = Depends(get_datastore)) -> AssembleRouteResponse:
    result = routing_service.assemble_route(
        datastore,
        payload.courier_id,
        payload.order_ids,
        payload.origin_address,
    )
    return AssembleRouteResponse(**result)


@router.get("", status_code=status.HTTP_200_OK)
def list_routes(
    route_status: Optional[RouteStatus] = Query(default=None, alias="status"),
    courier_id: Optional[str] = Query(default=None),
    datastore: Datastore = Depends(get_datastore),
) -> list[dict]:
    return routing_service.list_routes(
        datastore,
        status=route_status.value if route_status else None,
        courier_id=courier_id,
    )


@router.patch("/{route_id}/start", status_code=status.HTTP_200_OK)
def start(route_id: str, datastore: Datastore = Depends(get_datastore)) -> dict:
    return routing_service.start_route(datastore, route_id)


@router.patch("/{route_id}/complete", status_code=status.HTTP_200_OK)
def complete(route_id: str, datastore: Datastore = Depends(get_datastore)) -> dict:
    return routing_service.complete_route(datastore, route_id)
