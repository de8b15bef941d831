"""REST endpoints for wait-time estimation.

Paths:
    POST /api/estimate            → WaitEstimate
    POST /api/estimate/explain    → EstimateBreakdown
    POST /api/estimates/by-venue  → VenueEstimates
    POST /api/estimates/raw       → VenueEstimates (rows go through adapters)

The handlers hold no state.  ``now`` is read from the clock only here,
at the boundary, when the caller does not supply one.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter

from linewait.adapters.registry import AdapterRegistry
from linewait.core.estimator import WaitTimeEstimator
from linewait.core.venues import estimate_by_venue
from linewait.domain.estimate import EstimateBreakdown, WaitEstimate
from linewait.foundation.clock import as_utc, utc_now
from linewait.models.requests import EstimateRequest, RawRowsRequest, VenueEstimates


def _resolve_now(now: Optional[datetime]) -> datetime:
    return as_utc(now) if now is not None else utc_now()


def create_estimate_router(
    estimator: WaitTimeEstimator,
    registry: AdapterRegistry,
) -> APIRouter:
    """Factory that wires the estimate endpoints to an estimator and adapter registry."""

    router = APIRouter(prefix="/api", tags=["estimates"])

    @router.post("/estimate", response_model=WaitEstimate)
    async def estimate_wait(body: EstimateRequest) -> WaitEstimate:
        """Estimate over a single venue's reports."""
        return estimator.estimate(body.reports, _resolve_now(body.now))

    @router.post("/estimate/explain", response_model=EstimateBreakdown)
    async def explain_wait(body: EstimateRequest) -> EstimateBreakdown:
        """Estimate plus per-report contributions and exclusions."""
        return estimator.explain(body.reports, _resolve_now(body.now))

    @router.post("/estimates/by-venue", response_model=VenueEstimates)
    async def estimate_venues(body: EstimateRequest) -> VenueEstimates:
        """Group a mixed snapshot by venue and estimate each one."""
        venues = estimate_by_venue(body.reports, _resolve_now(body.now), estimator)
        return VenueEstimates(venues=venues, count=len(venues))

    @router.post("/estimates/raw", response_model=VenueEstimates)
    async def estimate_raw_rows(body: RawRowsRequest) -> VenueEstimates:
        """Normalise backend rows through the adapters, then estimate per venue."""
        batch = registry.normalise(body.rows)
        venues = estimate_by_venue(batch.reports, _resolve_now(body.now), estimator)
        return VenueEstimates(venues=venues, count=len(venues), rejected=batch.rejected)

    return router
