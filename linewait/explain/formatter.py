"""Plain-text phrasing for reports and estimates.

Deterministic string building only; the presentation layer decides how
to style the result.
"""

from __future__ import annotations

from datetime import datetime

from linewait.domain.enums import LineCategory, ReporterStatus
from linewait.domain.estimate import WaitEstimate
from linewait.domain.report import CategoryReport, TimedReport
from linewait.foundation.clock import as_utc

STATUS_EMOJI: dict[ReporterStatus, str] = {
    ReporterStatus.REGULAR: "👤",
    ReporterStatus.TRUSTED: "⭐",
    ReporterStatus.EXPERT: "👑",
}

_ANONYMOUS = "Someone"


def _plural(count: int, unit: str) -> str:
    return f"1 {unit} ago" if count == 1 else f"{count} {unit}s ago"


def format_time_ago(timestamp: datetime, now: datetime) -> str:
    """Describe how long before *now* the *timestamp* was ("5 minutes ago")."""
    diff_minutes = int((as_utc(now) - as_utc(timestamp)).total_seconds() // 60)
    if diff_minutes < 1:
        return "just now"
    if diff_minutes < 60:
        return _plural(diff_minutes, "minute")

    diff_hours = diff_minutes // 60
    if diff_hours < 24:
        return _plural(diff_hours, "hour")

    return _plural(diff_hours // 24, "day")


def format_report_line(report: TimedReport | CategoryReport, now: datetime) -> str:
    """One-line summary of a report, e.g. "⭐ sam reported 12 minutes 5 minutes ago"."""
    emoji = STATUS_EMOJI[report.reporter_status]
    name = report.reporter_name or _ANONYMOUS
    ago = format_time_ago(report.timestamp, now)
    if isinstance(report, TimedReport):
        return f"{emoji} {name} reported {report.minutes} minutes {ago}"
    return f"{emoji} {name} reported {report.category.value} {ago}"


def format_estimate(estimate: WaitEstimate) -> str:
    """Badge text for an estimate: "No Line" or "Medium Line · ~10 min"."""
    if estimate.category == LineCategory.NO_LINE:
        return estimate.category.value
    return f"{estimate.category.value} · ~{estimate.minutes} min"
