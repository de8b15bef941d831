"""Tests for the HTTP surface."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from linewait.main import app

from tests.test_report import _category_report, _valid_report

_NOW = datetime(2026, 1, 1, 23, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _at(age: timedelta) -> str:
    return (_NOW - age).isoformat()


class TestEstimateEndpoint:
    def test_empty_snapshot(self, client: TestClient) -> None:
        resp = client.post("/api/estimate", json={"reports": [], "now": _NOW.isoformat()})
        assert resp.status_code == 200
        body = resp.json()
        assert body["minutes"] == 0
        assert body["category"] == "No Line"

    def test_single_report(self, client: TestClient) -> None:
        payload = {
            "reports": [_valid_report(minutes=10, timestamp=_at(timedelta(0)))],
            "now": _NOW.isoformat(),
        }
        body = client.post("/api/estimate", json=payload).json()
        assert body["minutes"] == 10
        assert body["category"] == "Medium Line"
        assert body["report_count"] == 1

    def test_category_only_report(self, client: TestClient) -> None:
        payload = {
            "reports": [_category_report("Long Line", timestamp=_at(timedelta(minutes=5)))],
            "now": _NOW.isoformat(),
        }
        assert client.post("/api/estimate", json=payload).json()["minutes"] == 20

    def test_now_defaults_to_clock(self, client: TestClient) -> None:
        payload = {"reports": [_valid_report(minutes=30, timestamp=_at(timedelta(hours=3)))]}
        with patch("linewait.api.estimate.utc_now", return_value=_NOW):
            body = client.post("/api/estimate", json=payload).json()
        assert body["minutes"] == 0

    def test_bad_shape_is_422(self, client: TestClient) -> None:
        payload = {"reports": [_valid_report(upvotes=-3)], "now": _NOW.isoformat()}
        assert client.post("/api/estimate", json=payload).status_code == 422


class TestExplainEndpoint:
    def test_breakdown(self, client: TestClient) -> None:
        payload = {
            "reports": [
                _valid_report(report_id="ok", minutes=10, timestamp=_at(timedelta(0))),
                _valid_report(report_id="neg", minutes=-5, timestamp=_at(timedelta(0))),
                _valid_report(report_id="old", minutes=40, timestamp=_at(timedelta(hours=4))),
            ],
            "now": _NOW.isoformat(),
        }
        body = client.post("/api/estimate/explain", json=payload).json()
        assert body["estimate"]["minutes"] == 10
        assert [c["report_id"] for c in body["contributions"]] == ["ok"]
        reasons = {e["report_id"]: e["reason"] for e in body["exclusions"]}
        assert reasons == {"neg": "invalid_minutes", "old": "expired"}


class TestVenueEndpoints:
    def test_by_venue(self, client: TestClient) -> None:
        payload = {
            "reports": [
                _valid_report(venue_id="a", minutes=10, timestamp=_at(timedelta(0))),
                _valid_report(venue_id="b", minutes=40, timestamp=_at(timedelta(0))),
            ],
            "now": _NOW.isoformat(),
        }
        body = client.post("/api/estimates/by-venue", json=payload).json()
        assert body["count"] == 2
        assert body["venues"]["a"]["category"] == "Medium Line"
        assert body["venues"]["b"]["category"] == "Very Long Line"

    def test_raw_rows(self, client: TestClient) -> None:
        rows = [
            {
                "report_id": "r-1",
                "bar_id": "bar-1",
                "wait_minutes": 6,
                "created_at": _at(timedelta(minutes=10)),
                "upvotes": 0,
                "downvotes": 0,
            },
            {
                "id": "p-1",
                "bar_id": "bar-2",
                "line": "Very Long Line (30+ mins)",
                "minutes": None,
                "timestamp": _at(timedelta(minutes=20)),
            },
            {"mystery": True},
            {"id": "p-9", "bar_id": "bar-3", "line": 5, "timestamp": _at(timedelta(0))},
        ]
        resp = client.post("/api/estimates/raw", json={"rows": rows, "now": _NOW.isoformat()})
        body = resp.json()
        assert resp.status_code == 200
        assert body["rejected"] == 2
        assert "bar-3" not in body["venues"]
        assert body["venues"]["bar-1"]["minutes"] == 6
        assert body["venues"]["bar-2"]["minutes"] == 35


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert body["max_report_age_minutes"] == 120
        assert body["decay_base"] == 0.8
        assert set(body["adapters"]["sources"]) == {"recent_line_reports", "line_time_posts"}
