"""Courier position history endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...persistence.datastore import Datastore
from ...services.couriers import courier_track
from ..dependencies import get_current_user, get_datastore

router = APIRouter(prefix="/tracking", tags=["tracking"], dependencies=[Depends(get_current_user)])


@router.get("/courier/{courier_id}", status_code=status.HTTP_200_OK)
def get_courier_track(courier_id: str, datastore: Datastore = Depends(get_datastore)) -> list[dict]:
    return courier_track(datastore, courier_id)
