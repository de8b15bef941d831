"""WaitTimeEstimator — deterministic wait-time estimation from line reports.

Design principles:
    1. Pure function: accepts a report snapshot and ``now``, returns a WaitEstimate.
    2. No side effects, no state mutation, no I/O, no clock reads.
    3. One canonical set of constants, exposed by name below.
    4. Bad rows are excluded, never raised.

Weight formula (per surviving report):
    weight = submitter_reliability * time_weight * vote_weight

    Where:
    - time_weight = DECAY_BASE ** age_hours
    - vote_ratio  = upvotes / (upvotes + downvotes), or 0.5 with no votes
    - vote_weight = 1 + (vote_ratio - 0.5) * VOTE_IMPACT_FACTOR

Aggregate:
    minutes  = round_half_up(sum(weight * effective_minutes) / sum(weight))
    category = category_for_minutes(minutes)

Exclusions, in the order they are checked:
    - EXPIRED:          age > MAX_REPORT_AGE
    - INVALID_MINUTES:  TimedReport.minutes outside [0, MAX_REPORT_MINUTES]
    - ZERO_WEIGHT:      the computed weight is exactly 0

Confidence:
    confidence = min(
        report_count / CONFIDENCE_SATURATION_REPORTS,
        min(mean_reliability, 1.0),
        1 - mean_age / MAX_REPORT_AGE,
    )
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional

from linewait.domain.categories import category_for_minutes, default_minutes_for
from linewait.domain.enums import ExclusionReason
from linewait.domain.estimate import (
    EstimateBreakdown,
    ReportContribution,
    ReportExclusion,
    WaitEstimate,
)
from linewait.domain.report import CategoryReport, TimedReport
from linewait.foundation.clock import as_utc

logger = logging.getLogger(__name__)

# ── Canonical constants ──────────────────────────────────────────────────────

MAX_REPORT_AGE = timedelta(hours=2)
DECAY_BASE = 0.8
VOTE_IMPACT_FACTOR = 0.2
NEUTRAL_VOTE_RATIO = 0.5
MAX_REPORT_MINUTES = 999
CONFIDENCE_SATURATION_REPORTS = 5

_HOUR_SECONDS = 3600.0


def round_half_up(value: float) -> int:
    """Round to the nearest int, halves away from zero for non-negative input."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class EstimatorConfig:
    """Tunable constants for the estimator.  Defaults are the canonical values."""

    max_report_age: timedelta = MAX_REPORT_AGE
    decay_base: float = DECAY_BASE
    vote_impact_factor: float = VOTE_IMPACT_FACTOR
    max_report_minutes: int = MAX_REPORT_MINUTES
    confidence_saturation_reports: int = CONFIDENCE_SATURATION_REPORTS

    def __post_init__(self) -> None:
        if self.max_report_age <= timedelta(0):
            raise ValueError("max_report_age must be positive")
        if not 0.0 < self.decay_base < 1.0:
            raise ValueError(f"decay_base must be in (0, 1), got {self.decay_base}")
        # Above 2 a fully downvoted report would get a negative weight.
        if not 0.0 <= self.vote_impact_factor <= 2.0:
            raise ValueError(f"vote_impact_factor must be in [0, 2], got {self.vote_impact_factor}")
        if self.max_report_minutes < 0:
            raise ValueError("max_report_minutes must be >= 0")
        if self.confidence_saturation_reports < 1:
            raise ValueError("confidence_saturation_reports must be >= 1")


class WaitTimeEstimator:
    """Stateless wait-time estimation over a report snapshot.

    The caller filters reports to one venue and injects ``now``; the
    estimator holds nothing between calls and may be shared freely.
    """

    def __init__(self, config: EstimatorConfig | None = None) -> None:
        self._config = config or EstimatorConfig()

    @property
    def config(self) -> EstimatorConfig:
        return self._config

    # ── Public API ───────────────────────────────────────────────────────

    def estimate(
        self,
        reports: Iterable[TimedReport | CategoryReport],
        now: datetime,
    ) -> WaitEstimate:
        """Produce one WaitEstimate for the given reports at ``now``."""
        return self.explain(reports, now).estimate

    def explain(
        self,
        reports: Iterable[TimedReport | CategoryReport],
        now: datetime,
    ) -> EstimateBreakdown:
        """Like estimate(), but also return per-report contributions and exclusions."""
        now = as_utc(now)
        contributions: list[ReportContribution] = []
        exclusions: list[ReportExclusion] = []
        reliabilities: list[float] = []

        for report in reports:
            age = now - report.timestamp
            reason = self._exclusion_reason(report, age)
            if reason is None:
                contribution = self._contribution(report, age)
                if contribution.weight > 0.0:
                    contributions.append(contribution)
                    reliabilities.append(report.submitter_reliability)
                    continue
                reason = ExclusionReason.ZERO_WEIGHT

            logger.debug(
                "Excluded report %s for venue %s: %s",
                report.report_id,
                report.venue_id,
                reason.value,
            )
            exclusions.append(ReportExclusion(report_id=report.report_id, reason=reason))

        return EstimateBreakdown(
            estimate=self._aggregate(contributions, reliabilities),
            evaluated_at=now,
            contributions=contributions,
            exclusions=exclusions,
        )

    # ── Weights ──────────────────────────────────────────────────────────

    def time_weight(self, age_hours: float) -> float:
        """Exponential age decay; ages below zero count as fresh."""
        return self._config.decay_base ** max(age_hours, 0.0)

    def vote_weight(self, upvotes: int, downvotes: int) -> float:
        """Vote-ratio adjustment, bounded to 1 ± vote_impact_factor / 2."""
        total = upvotes + downvotes
        ratio = upvotes / total if total > 0 else NEUTRAL_VOTE_RATIO
        return 1.0 + (ratio - NEUTRAL_VOTE_RATIO) * self._config.vote_impact_factor

    @staticmethod
    def effective_minutes(report: TimedReport | CategoryReport) -> tuple[int, bool]:
        """Return (minutes, substituted_default) for a report."""
        if isinstance(report, TimedReport):
            return report.minutes, False
        return default_minutes_for(report.category), True

    def report_weight(self, report: TimedReport | CategoryReport, now: datetime) -> float:
        """Weight of a single report at ``now``, or 0.0 if it would be excluded."""
        age = as_utc(now) - report.timestamp
        if self._exclusion_reason(report, age) is not None:
            return 0.0
        return self._contribution(report, age).weight

    # ── Internals ────────────────────────────────────────────────────────

    def _exclusion_reason(
        self,
        report: TimedReport | CategoryReport,
        age: timedelta,
    ) -> Optional[ExclusionReason]:
        if age > self._config.max_report_age:
            return ExclusionReason.EXPIRED
        if isinstance(report, TimedReport) and not (
            0 <= report.minutes <= self._config.max_report_minutes
        ):
            return ExclusionReason.INVALID_MINUTES
        return None

    def _contribution(
        self,
        report: TimedReport | CategoryReport,
        age: timedelta,
    ) -> ReportContribution:
        age_hours = max(age.total_seconds(), 0.0) / _HOUR_SECONDS
        time_w = self.time_weight(age_hours)
        vote_w = self.vote_weight(report.upvotes, report.downvotes)
        minutes, substituted = self.effective_minutes(report)
        return ReportContribution(
            report_id=report.report_id,
            age_hours=age_hours,
            time_weight=time_w,
            vote_weight=vote_w,
            weight=report.submitter_reliability * time_w * vote_w,
            effective_minutes=minutes,
            substituted_default=substituted,
        )

    def _aggregate(
        self,
        contributions: list[ReportContribution],
        reliabilities: list[float],
    ) -> WaitEstimate:
        if not contributions:
            return WaitEstimate.zero_state()

        # Scale reliabilities by the largest one so huge multipliers cannot
        # overflow; the weighted mean is unchanged by a common factor.
        scale = max(reliabilities)
        weights = [
            (r / scale) * c.time_weight * c.vote_weight
            for c, r in zip(contributions, reliabilities)
        ]
        total_weight = sum(weights)
        if total_weight <= 0.0:
            return WaitEstimate.zero_state()

        weighted_sum = sum(w * c.effective_minutes for w, c in zip(weights, contributions))
        minutes = max(round_half_up(weighted_sum / total_weight), 0)

        return WaitEstimate(
            minutes=minutes,
            category=category_for_minutes(minutes),
            report_count=len(contributions),
            confidence=round(self._confidence(contributions, reliabilities), 4),
        )

    def _confidence(
        self,
        contributions: list[ReportContribution],
        reliabilities: list[float],
    ) -> float:
        count = len(contributions)
        max_age_hours = self._config.max_report_age.total_seconds() / _HOUR_SECONDS

        volume_c = count / self._config.confidence_saturation_reports
        reliability_c = min(sum(reliabilities) / count, 1.0)
        mean_age = sum(c.age_hours for c in contributions) / count
        freshness_c = 1.0 - mean_age / max_age_hours

        return max(0.0, min(volume_c, reliability_c, freshness_c, 1.0))


_DEFAULT_ESTIMATOR = WaitTimeEstimator()


def estimate(
    reports: Iterable[TimedReport | CategoryReport],
    now: datetime,
    config: EstimatorConfig | None = None,
) -> WaitEstimate:
    """Estimate the current wait from *reports* at *now* with canonical (or given) constants."""
    estimator = WaitTimeEstimator(config) if config is not None else _DEFAULT_ESTIMATOR
    return estimator.estimate(reports, now)
