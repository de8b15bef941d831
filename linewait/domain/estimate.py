"""Estimate models — the ephemeral output of the wait-time estimator.

Nothing here is persisted.  A WaitEstimate is recomputed on every call from
an immutable report snapshot and a caller-supplied ``now``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from linewait.domain.enums import ExclusionReason, LineCategory


class WaitEstimate(BaseModel):
    """Aggregated wait time for one venue at one instant."""

    minutes: int = Field(..., ge=0, description="Weighted-average estimated wait")
    category: LineCategory = Field(..., description="Bucket matching ``minutes``")
    report_count: int = Field(0, ge=0, description="Reports that contributed weight")
    confidence: float = Field(
        0.0, ge=0.0, le=1.0,
        description="How much to trust the estimate (0 = no data, 1 = plenty of fresh, reliable reports)",
    )

    model_config = {"frozen": True}

    @classmethod
    def zero_state(cls) -> WaitEstimate:
        """The defined result for empty or fully-excluded input."""
        return cls(minutes=0, category=LineCategory.NO_LINE)


class ReportContribution(BaseModel):
    """How a single report fed into the aggregate."""

    report_id: str
    age_hours: float = Field(..., ge=0.0)
    time_weight: float
    vote_weight: float
    weight: float
    effective_minutes: int
    substituted_default: bool = Field(
        ..., description="True when minutes came from the category default table",
    )

    model_config = {"frozen": True}


class ReportExclusion(BaseModel):
    """A report that was left out, and why."""

    report_id: str
    reason: ExclusionReason

    model_config = {"frozen": True}


class EstimateBreakdown(BaseModel):
    """Estimate plus the per-report trail that produced it."""

    estimate: WaitEstimate
    evaluated_at: datetime
    contributions: list[ReportContribution] = Field(default_factory=list)
    exclusions: list[ReportExclusion] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def excluded_ids(self) -> set[str]:
        return {e.report_id for e in self.exclusions}
