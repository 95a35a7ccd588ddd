"""Settlement schemas."""

from __future__ import annotations

from datetime import date
from typing import Optional

from .common import RecordId, RequestModel


class WeeklySettlementRequest(RequestModel):
    store_id: RecordId
    period_start: date
    period_end: date


class MarkPaidRequest(RequestModel):
    payment_method: Optional[str] = None
    receipt_url: Optional[str] = None
