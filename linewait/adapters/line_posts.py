"""LinePostAdapter — rows selected from the ``line_time_posts`` table.

Expected raw format:
{
    "id": "9a4f…",
    "bar_id": "b7e2…",
    "user_name": "alex",
    "line": "Medium Line",
    "minutes": 8,
    "timestamp": "2026-10-17T23:55:00Z",
    "weight": 1.0
}

``line`` may be a legacy label such as "Short Line (< 5 mins)".  Older
clients stored 0 minutes for category-only posts, so a 0 next to any
label other than "No Line" means "no numeric estimate".
"""

from __future__ import annotations

from typing import Any

from linewait.adapters.base import ReportAdapter
from linewait.domain.categories import parse_category_label
from linewait.domain.enums import LineCategory
from linewait.domain.report import CategoryReport, TimedReport


class LinePostAdapter(ReportAdapter):
    """Maps line_time_posts rows to Timed or Category reports."""

    @property
    def source_name(self) -> str:
        return "line_time_posts"

    def can_handle(self, raw: dict[str, Any]) -> bool:
        return "line" in raw and "bar_id" in raw and "timestamp" in raw

    def adapt(self, raw: dict[str, Any]) -> TimedReport | CategoryReport:
        post_id = raw.get("id")
        if not post_id:
            raise ValueError("line_time_posts row missing 'id'")

        label = raw.get("line")
        if not label:
            raise ValueError("line_time_posts row missing 'line'")
        category = parse_category_label(label)

        bar_id = raw.get("bar_id")
        if not bar_id:
            raise ValueError("line_time_posts row missing 'bar_id'")

        weight = raw.get("weight")
        fields = {
            "report_id": str(post_id),
            "venue_id": str(bar_id),
            "timestamp": raw["timestamp"],
            "category": category,
            "upvotes": raw.get("upvotes") or 0,
            "downvotes": raw.get("downvotes") or 0,
            "submitter_reliability": 1.0 if weight is None else weight,
            "reporter_name": raw.get("user_name"),
        }

        minutes = raw.get("minutes")
        if minutes is None or (minutes == 0 and category != LineCategory.NO_LINE):
            return CategoryReport.model_validate(fields)
        return TimedReport.model_validate({**fields, "minutes": minutes})
