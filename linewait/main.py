"""linewait — wait-line estimation service.

This is the application entry point.  It wires the WaitTimeEstimator,
AdapterRegistry, and HTTP endpoints together.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from linewait.adapters.registry import default_registry
from linewait.api.estimate import create_estimate_router
from linewait.config import settings
from linewait.core.estimator import WaitTimeEstimator

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── Estimator ────────────────────────────────────────────────────────────────

estimator = WaitTimeEstimator(settings.estimator_config())

# ── Adapter Registry ────────────────────────────────────────────────────────

registry = default_registry()

# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Wait-line estimation from user reports",
    version="0.1.0",
    debug=settings.debug,
)

app.include_router(create_estimate_router(estimator, registry))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    config = estimator.config
    return {
        "status": "ok",
        "max_report_age_minutes": int(config.max_report_age.total_seconds() // 60),
        "decay_base": config.decay_base,
        "vote_impact_factor": config.vote_impact_factor,
        "max_report_minutes": config.max_report_minutes,
        "adapters": registry.health(),
    }
