"""Tests for the canonical Report variants."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from linewait.domain.enums import LineCategory, ReporterStatus
from linewait.domain.report import CategoryReport, TimedReport, parse_report, parse_reports

_BASE = datetime(2026, 1, 1, 22, 0, 0, tzinfo=timezone.utc)


def _valid_report(**overrides) -> dict:
    """Return a valid timed-report dict, with optional overrides."""
    base = {
        "report_id": str(uuid4()),
        "venue_id": "bar-1",
        "timestamp": _BASE.isoformat(),
        "minutes": 10,
        "upvotes": 0,
        "downvotes": 0,
    }
    base.update(overrides)
    return base


def _category_report(category: str, **overrides) -> dict:
    """Return a valid category-only report dict."""
    raw = _valid_report(**overrides)
    raw.pop("minutes", None)
    raw["category"] = category
    return raw


class TestReportParsing:
    def test_minutes_selects_timed_variant(self) -> None:
        report = parse_report(_valid_report())
        assert isinstance(report, TimedReport)
        assert report.minutes == 10
        assert report.kind == "minutes"

    def test_missing_minutes_selects_category_variant(self) -> None:
        report = parse_report(_category_report("Long Line"))
        assert isinstance(report, CategoryReport)
        assert report.category == LineCategory.LONG

    def test_null_minutes_selects_category_variant(self) -> None:
        report = parse_report(_valid_report(minutes=None, category="Short Line"))
        assert isinstance(report, CategoryReport)

    def test_explicit_kind_wins(self) -> None:
        report = parse_report(_valid_report(kind="category", category="No Line"))
        assert isinstance(report, CategoryReport)

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(Exception):
            parse_report(_valid_report(kind="guess"))

    def test_category_only_requires_category(self) -> None:
        with pytest.raises(Exception):
            parse_report(_valid_report(minutes=None))

    def test_legacy_category_label_accepted(self) -> None:
        report = parse_report(_category_report("Very Long Line (30+ mins)"))
        assert report.category == LineCategory.VERY_LONG

    def test_unknown_category_label_rejected(self) -> None:
        with pytest.raises(Exception):
            parse_report(_category_report("Around the block"))

    def test_timed_report_may_carry_category(self) -> None:
        report = parse_report(_valid_report(category="medium line"))
        assert isinstance(report, TimedReport)
        assert report.category == LineCategory.MEDIUM

    def test_negative_minutes_survive_parsing(self) -> None:
        """Out-of-range minutes are the estimator's concern, not the model's."""
        report = parse_report(_valid_report(minutes=-5))
        assert report.minutes == -5

    def test_non_numeric_minutes_rejected(self) -> None:
        with pytest.raises(Exception):
            parse_report(_valid_report(minutes="a while"))

    def test_parse_reports_batch(self) -> None:
        reports = parse_reports([_valid_report(), _category_report("Short Line")])
        assert [type(r) for r in reports] == [TimedReport, CategoryReport]


class TestReportFields:
    def test_defaults(self) -> None:
        report = parse_report(_valid_report())
        assert report.submitter_reliability == 1.0
        assert report.reporter_status == ReporterStatus.REGULAR
        assert report.reporter_name is None
        assert report.total_votes == 0

    def test_naive_timestamp_gets_utc(self) -> None:
        report = parse_report(_valid_report(timestamp="2026-01-01T22:00:00"))
        assert report.timestamp == _BASE

    def test_offset_timestamp_normalised_to_utc(self) -> None:
        report = parse_report(_valid_report(timestamp="2026-01-01T17:00:00-05:00"))
        assert report.timestamp == _BASE
        assert report.timestamp.utcoffset() == timedelta(0)

    def test_negative_votes_rejected(self) -> None:
        with pytest.raises(Exception):
            parse_report(_valid_report(upvotes=-1))

    def test_negative_reliability_rejected(self) -> None:
        with pytest.raises(Exception):
            parse_report(_valid_report(submitter_reliability=-0.5))

    def test_nan_reliability_rejected(self) -> None:
        with pytest.raises(Exception):
            parse_report(_valid_report(submitter_reliability=float("nan")))

    def test_empty_venue_rejected(self) -> None:
        with pytest.raises(Exception):
            parse_report(_valid_report(venue_id=""))

    def test_report_is_immutable(self) -> None:
        report = parse_report(_valid_report())
        with pytest.raises(Exception):
            report.upvotes = 5
