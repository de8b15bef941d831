"""Pydantic request/response bodies for the HTTP surface."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from linewait.domain.estimate import WaitEstimate
from linewait.domain.report import Report


class EstimateRequest(BaseModel):
    """A report snapshot to estimate over."""

    reports: list[Report] = Field(default_factory=list)
    now: Optional[datetime] = Field(None, description="Evaluation instant; defaults to server UTC now")


class RawRowsRequest(BaseModel):
    """Backend rows in any shape the adapter registry understands."""

    rows: list[dict[str, Any]] = Field(default_factory=list)
    now: Optional[datetime] = None


class VenueEstimates(BaseModel):
    """One estimate per venue found in the snapshot."""

    venues: dict[str, WaitEstimate] = Field(default_factory=dict)
    count: int = 0
    rejected: int = Field(0, description="Rows skipped because no adapter could translate them")
