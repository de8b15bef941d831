"""Per-venue batch estimation over a mixed report snapshot."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Iterable

from linewait.core.estimator import WaitTimeEstimator
from linewait.domain.estimate import WaitEstimate
from linewait.domain.report import CategoryReport, TimedReport


def group_by_venue(
    reports: Iterable[TimedReport | CategoryReport],
) -> dict[str, list[TimedReport | CategoryReport]]:
    """Split a snapshot into one list per venue, preserving input order within each."""
    grouped: dict[str, list[TimedReport | CategoryReport]] = defaultdict(list)
    for report in reports:
        grouped[report.venue_id].append(report)
    return dict(grouped)


def estimate_by_venue(
    reports: Iterable[TimedReport | CategoryReport],
    now: datetime,
    estimator: WaitTimeEstimator | None = None,
) -> dict[str, WaitEstimate]:
    """Estimate every venue present in *reports* independently.

    A venue whose reports are all excluded still appears, with the
    zero-state estimate.
    """
    estimator = estimator or WaitTimeEstimator()
    return {
        venue_id: estimator.estimate(venue_reports, now)
        for venue_id, venue_reports in sorted(group_by_venue(reports).items())
    }
