"""RecentReportAdapter — rows returned by the ``get_recent_line_reports`` RPC.

Expected raw format:
{
    "report_id": "5d1c…",
    "bar_id": "b7e2…",
    "bar_name": "The Tipsy Crow",
    "wait_minutes": 12,
    "created_at": "2026-10-17T23:40:00+00:00",
    "reporter_name": "sam",
    "reporter_status": "trusted",
    "report_reliability_score": 1.3,
    "upvotes": 4,
    "downvotes": 1
}
"""

from __future__ import annotations

from typing import Any

from linewait.adapters.base import ReportAdapter
from linewait.domain.report import TimedReport


class RecentReportAdapter(ReportAdapter):
    """Maps recent-report RPC rows to TimedReports."""

    @property
    def source_name(self) -> str:
        return "recent_line_reports"

    def can_handle(self, raw: dict[str, Any]) -> bool:
        return "report_id" in raw and "wait_minutes" in raw

    def adapt(self, raw: dict[str, Any]) -> TimedReport:
        report_id = raw.get("report_id")
        if not report_id:
            raise ValueError("recent_line_reports row missing 'report_id'")

        bar_id = raw.get("bar_id")
        if not bar_id:
            raise ValueError("recent_line_reports row missing 'bar_id'")

        wait_minutes = raw.get("wait_minutes")
        if wait_minutes is None:
            raise ValueError("recent_line_reports row missing 'wait_minutes'")

        created_at = raw.get("created_at")
        if not created_at:
            raise ValueError("recent_line_reports row missing 'created_at'")

        reliability = raw.get("report_reliability_score")

        return TimedReport.model_validate({
            "report_id": str(report_id),
            "venue_id": str(bar_id),
            "timestamp": created_at,
            "minutes": wait_minutes,
            "upvotes": raw.get("upvotes") or 0,
            "downvotes": raw.get("downvotes") or 0,
            "submitter_reliability": 1.0 if reliability is None else reliability,
            "reporter_name": raw.get("reporter_name"),
            "reporter_status": raw.get("reporter_status") or "regular",
        })
