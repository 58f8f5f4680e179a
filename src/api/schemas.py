"""Pydantic schemas for API contracts."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class RegionOut(BaseModel):
    index: int
    id: str
    label: str | None = None
    color: str | None = None
    start: float
    end: float


class SplitResponse(BaseModel):
    sample_rate: int
    channel_count: int
    duration: float
    regions: List[RegionOut] = Field(default_factory=list)


class AnalyzeResponse(BaseModel):
    task: str
    text: str
    ok: bool = True


class HealthResponse(BaseModel):
    ok: bool
    analysis: str
    timestamp: datetime
