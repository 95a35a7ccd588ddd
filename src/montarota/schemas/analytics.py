"""Store analytics schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel


class WindowSummaryModel(BaseModel):
    total_orders: int
    fee_revenue: float


class NeighborhoodCountModel(BaseModel):
    neighborhood: str
    total: int


class AnalyticsSummaryResponse(BaseModel):
    today: WindowSummaryModel
    month: WindowSummaryModel
    top_neighborhoods: List[NeighborhoodCountModel]
    suggestion: str
