"""Settlement endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...models.domain import PaymentStatus
from ...persistence.datastore import Datastore
from ...schemas.payments import MarkPaidRequest, WeeklySettlementRequest
from ...services import settlements
from ..dependencies import get_current_user, get_datastore

router = APIRouter(prefix="/payments", tags=["payments"], dependencies=[Depends(get_current_user)])


@router.get("", status_code=status.HTTP_200_OK)
def list_payments(
    store_id: Optional[str] = Query(default=None),
    courier_id: Optional[str] = Query(default=None),
    payment_status: Optional[PaymentStatus] = Query(default=None, alias="status"),
    datastore: Datastore = Depends(get_datastore),
) -> list[dict]:
    return settlements.list_payments(
        datastore,
        store_id=store_id,
        courier_id=courier_id,
        status=payment_status.value if payment_status else None,
    )


@router.post("/generate-weekly", status_code=status.HTTP_201_CREATED)
def generate_weekly(payload: WeeklySettlementRequest, datastore: Datastore = Depends(get_datastore)) -> dict:
    return settlements.generate_weekly(datastore, payload.store_id, payload.period_start, payload.period_end)


@router.patch("/{payment_id}/pay", status_code=status.HTTP_200_OK)
def mark_paid(payment_id: str, payload: MarkPaidRequest, datastore: Datastore = Depends(get_datastore)) -> dict:
    return settlements.mark_paid(datastore, payment_id, payload.payment_method, payload.receipt_url)
