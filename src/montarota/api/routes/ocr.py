"""Receipt-slip ingestion endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...models.domain import Identity
from ...persistence.datastore import Datastore
from ...schemas.ocr import OcrIngestRequest
from ...services.ocr import ingest
from ..dependencies import get_current_user, get_datastore

router = APIRouter(prefix="/ocr", tags=["ocr"])


@router.post("/ingest", status_code=status.HTTP_201_CREATED)
def ingest_slip(
    payload: OcrIngestRequest,
    identity: Identity = Depends(get_current_user),
    datastore: Datastore = Depends(get_datastore),
) -> dict:
    store_id = payload.store_id if payload.store_id is not None else identity.store_id
    return ingest(datastore, store_id=store_id, photo_ref=payload.photo_ref, raw_text=payload.raw_text)
