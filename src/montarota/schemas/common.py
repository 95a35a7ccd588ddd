"""Shared schema building blocks."""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict

# Supabase tables may use integer or uuid primary keys.
RecordId = Union[int, str]


class RequestModel(BaseModel):
    """Request payloads reject fields they do not declare."""

    model_config = ConfigDict(extra="forbid")
