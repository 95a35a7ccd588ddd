"""Store registry endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...persistence.datastore import Datastore
from ...schemas.stores import StoreCreate, StoreUpdate
from ...services import stores as store_service
from ..dependencies import get_current_user, get_datastore

router = APIRouter(prefix="/stores", tags=["stores"], dependencies=[Depends(get_current_user)])


@router.get("", status_code=status.HTTP_200_OK)
def list_stores(datastore: Datastore = Depends(get_datastore)) -> list[dict]:
    return store_service.list_stores(datastore)


@router.get("/{store_id}", status_code=status.HTTP_200_OK)
def get_store(store_id: str, datastore: Datastore = Depends(get_datastore)) -> dict:
    return store_service.get_store(datastore, store_id)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_store(payload: StoreCreate, datastore: Datastore = Depends(get_datastore)) -> dict:
    return store_service.create_store(datastore, payload.model_dump())


@router.put("/{store_id}", status_code=status.HTTP_200_OK)
def update_store(store_id: str, payload: StoreUpdate, datastore: Datastore = Depends(get_datastore)) -> dict:
    return store_service.update_store(datastore, store_id, payload.model_dump(exclude_unset=True))
