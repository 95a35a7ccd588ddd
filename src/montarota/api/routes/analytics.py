"""Store analytics endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...persistence.datastore import Datastore
from ...schemas.analytics import AnalyticsSummaryResponse
from ...services.analytics import summarize
from ..dependencies import get_current_user, get_datastore

router = APIRouter(prefix="/analytics", tags=["analytics"], dependencies=[Depends(get_current_user)])


@router.get("/summary/{store_id}", response_model=AnalyticsSummaryResponse, status_code=status.HTTP_200_OK)
def get_summary(store_id: str, datastore: Datastore = Depends(get_datastore)) -> AnalyticsSummaryResponse:
    return AnalyticsSummaryResponse.model_validate(summarize(datastore, store_id))
