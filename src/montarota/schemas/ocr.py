"""Receipt-slip ingestion schemas."""

from __future__ import annotations

from typing import Optional

from .common import RecordId, RequestModel


class OcrIngestRequest(RequestModel):
    photo_ref: Optional[str] = None
    store_id: Optional[RecordId] = None
    raw_text: Optional[str] = None
