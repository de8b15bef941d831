"""Adapter registry — turns a batch of backend rows into canonical Reports.

A snapshot fetched from the backend may mix row shapes (RPC results and
raw ``line_time_posts`` selects).  Each row is routed to the first
registered adapter whose can_handle() matches.  Rows that match nothing
or fail to translate are recorded as rejections and skipped, so one bad
row never costs the venue its estimate.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from linewait.adapters.base import ReportAdapter
from linewait.adapters.line_posts import LinePostAdapter
from linewait.adapters.recent_reports import RecentReportAdapter
from linewait.domain.report import CategoryReport, TimedReport

logger = logging.getLogger(__name__)


class UnadaptableRowError(ValueError):
    """A row that no adapter matched, or that its adapter could not translate.

    ``source`` is the matching adapter's name, or None when nothing matched.
    """

    def __init__(self, reason: str, source: Optional[str] = None) -> None:
        self.source = source
        self.reason = reason
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{reason}")


@dataclass(frozen=True)
class RowRejection:
    """Position and cause of a skipped row within its batch."""

    index: int
    source: Optional[str]
    reason: str


@dataclass
class NormalisedRows:
    """Reports recovered from a batch, plus what was skipped."""

    reports: list[TimedReport | CategoryReport] = field(default_factory=list)
    rejections: list[RowRejection] = field(default_factory=list)

    @property
    def rejected(self) -> int:
        return len(self.rejections)


class AdapterRegistry:
    """Ordered adapters with per-source accept/reject counts.

    Usage:
        registry = AdapterRegistry([RecentReportAdapter(), LinePostAdapter()])
        batch = registry.normalise(rows)
        estimate_by_venue(batch.reports, now)
    """

    def __init__(self, adapters: Iterable[ReportAdapter] = ()) -> None:
        self._adapters: list[ReportAdapter] = []
        self._accepted: Counter[str] = Counter()
        self._rejected: Counter[str] = Counter()
        self._unmatched = 0
        for adapter in adapters:
            self.register(adapter)

    def register(self, adapter: ReportAdapter) -> None:
        self._adapters.append(adapter)
        logger.info("Registered report adapter: %s", adapter.source_name)

    def adapt(self, raw: dict[str, Any]) -> TimedReport | CategoryReport:
        """Translate one row.

        Raises:
            UnadaptableRowError: If no adapter matches or the match fails.
        """
        adapter = next((a for a in self._adapters if a.can_handle(raw)), None)
        if adapter is None:
            self._unmatched += 1
            raise UnadaptableRowError(f"unrecognised row shape, keys={sorted(raw.keys())}")

        try:
            report = adapter.adapt(raw)
        except ValueError as exc:
            self._rejected[adapter.source_name] += 1
            raise UnadaptableRowError(str(exc), source=adapter.source_name) from exc

        self._accepted[adapter.source_name] += 1
        return report

    def normalise(self, rows: Iterable[dict[str, Any]]) -> NormalisedRows:
        """Adapt every row in a batch, skipping and recording the ones that fail."""
        batch = NormalisedRows()
        for index, raw in enumerate(rows):
            try:
                batch.reports.append(self.adapt(raw))
            except UnadaptableRowError as exc:
                logger.warning("Skipping row %d: %s", index, exc)
                batch.rejections.append(RowRejection(index=index, source=exc.source, reason=exc.reason))
        if batch.rejections:
            logger.info(
                "Normalised %d row(s), skipped %d",
                len(batch.reports),
                batch.rejected,
            )
        return batch

    def health(self) -> dict:
        """Per-source counts for the health endpoint."""
        return {
            "sources": {
                a.source_name: {
                    "accepted": self._accepted[a.source_name],
                    "rejected": self._rejected[a.source_name],
                }
                for a in self._adapters
            },
            "unmatched": self._unmatched,
        }


def default_registry() -> AdapterRegistry:
    """Registry with every known backend row shape, RPC rows first."""
    return AdapterRegistry([RecentReportAdapter(), LinePostAdapter()])
