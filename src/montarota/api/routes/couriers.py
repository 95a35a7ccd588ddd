"""Courier registry and GPS endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...models.domain import CourierStatus, Identity
from ...persistence.datastore import Datastore
from ...schemas.couriers import CourierCreate, CourierStatusUpdate, GpsUpdate
from ...services import couriers as courier_service
from ..dependencies import get_current_user, get_datastore, gps_identity

router = APIRouter(prefix="/couriers", tags=["couriers"])


@router.get("", status_code=status.HTTP_200_OK, dependencies=[Depends(get_current_user)])
def list_couriers(
    courier_status: Optional[CourierStatus] = Query(default=None, alias="status", description="Optional status filter"),
    datastore: Datastore = Depends(get_datastore),
) -> list[dict]:
    return courier_service.list_couriers(datastore, courier_status.value if courier_status else None)


@router.get("/available", status_code=status.HTTP_200_OK, dependencies=[Depends(get_current_user)])
def list_available(datastore: Datastore = Depends(get_datastore)) -> list[dict]:
    return courier_service.list_available(datastore)


@router.get("/{courier_id}", status_code=status.HTTP_200_OK, dependencies=[Depends(get_current_user)])
def get_courier(courier_id: str, datastore: Datastore = Depends(get_datastore)) -> dict:
    return courier_service.get_courier(datastore, courier_id)


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(get_current_user)])
def create_courier(payload: CourierCreate, datastore: Datastore = Depends(get_datastore)) -> dict:
    return courier_service.create_courier(datastore, payload.model_dump())


@router.patch("/{courier_id}/gps", status_code=status.HTTP_200_OK)
def update_gps(
    courier_id: str,
    payload: GpsUpdate,
    datastore: Datastore = Depends(get_datastore),
    identity: Optional[Identity] = Depends(gps_identity),
) -> dict:
    return courier_service.record_position(
        datastore,
        courier_id,
        payload.lat,
        payload.lng,
        speed_kmh=payload.speed_kmh,
        accuracy_m=payload.accuracy_m,
    )


@router.patch("/{courier_id}/status", status_code=status.HTTP_200_OK, dependencies=[Depends(get_current_user)])
def update_status(
    courier_id: str,
    payload: CourierStatusUpdate,
    datastore: Datastore = Depends(get_datastore),
) -> dict:
    return courier_service.set_status(datastore, courier_id, payload.status.value)
