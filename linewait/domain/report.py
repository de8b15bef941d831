"""Canonical Report model — the contract between the report source and the estimator.

A Report is one user's observation of a venue's line at a moment in time.
It comes in two shapes, modelled as a tagged union rather than a single
model with an optional ``minutes``:

    TimedReport     kind="minutes"   — carries a numeric estimate
    CategoryReport  kind="category"  — carries only a bucket label

The estimator resolves a CategoryReport to minutes through the canonical
default table; that substitution is an explicit branch, not a fallback.

Reports are immutable snapshots.  Vote counts are accumulated elsewhere
and only ever read here.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Iterable, Literal, Optional, Union

from pydantic import BaseModel, Discriminator, Field, Tag, TypeAdapter, field_validator

from linewait.domain.categories import parse_category_label
from linewait.domain.enums import LineCategory, ReportKind, ReporterStatus
from linewait.foundation.clock import as_utc


def _coerce_category(value: Any) -> Any:
    # Accept canonical and legacy labels; leave anything else to pydantic.
    if isinstance(value, str) and not isinstance(value, LineCategory):
        return parse_category_label(value)
    return value


# ── Shared fields ────────────────────────────────────────────────────────────

class _ReportBase(BaseModel):
    report_id: str = Field(..., min_length=1, max_length=256, description="Opaque unique report id")
    venue_id: str = Field(..., min_length=1, max_length=256, description="Venue the report concerns")
    timestamp: datetime = Field(..., description="Submission instant (normalised to UTC)")
    upvotes: int = Field(0, ge=0)
    downvotes: int = Field(0, ge=0)
    submitter_reliability: float = Field(
        1.0,
        ge=0.0,
        allow_inf_nan=False,
        description="Trust multiplier for the submitter (1.0 = neutral)",
    )
    reporter_name: Optional[str] = Field(None, max_length=128)
    reporter_status: ReporterStatus = ReporterStatus.REGULAR

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def timestamp_to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @property
    def total_votes(self) -> int:
        return self.upvotes + self.downvotes


# ── Variants ─────────────────────────────────────────────────────────────────

class TimedReport(_ReportBase):
    """A report with a numeric wait estimate.

    ``minutes`` is deliberately not range-checked here: out-of-range values
    are excluded by the estimator so one bad row never rejects a snapshot.
    """

    kind: Literal["minutes"] = ReportKind.MINUTES.value
    minutes: int = Field(..., description="Reported wait in minutes")
    category: Optional[LineCategory] = Field(None, description="Bucket the reporter picked, if any")

    @field_validator("category", mode="before")
    @classmethod
    def category_label(cls, v: Any) -> Any:
        return _coerce_category(v)


class CategoryReport(_ReportBase):
    """A report that only names a line-length bucket."""

    kind: Literal["category"] = ReportKind.CATEGORY.value
    category: LineCategory

    @field_validator("category", mode="before")
    @classmethod
    def category_label(cls, v: Any) -> Any:
        return _coerce_category(v)


def _report_kind(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        kind = value.get("kind")
        if kind is not None:
            return kind.value if isinstance(kind, ReportKind) else kind
        if value.get("minutes") is not None:
            return ReportKind.MINUTES.value
        return ReportKind.CATEGORY.value
    return getattr(value, "kind", None)


Report = Annotated[
    Union[
        Annotated[TimedReport, Tag(ReportKind.MINUTES.value)],
        Annotated[CategoryReport, Tag(ReportKind.CATEGORY.value)],
    ],
    Discriminator(_report_kind),
]

_REPORT_ADAPTER: TypeAdapter[Report] = TypeAdapter(Report)
_REPORT_LIST_ADAPTER: TypeAdapter[list[Report]] = TypeAdapter(list[Report])


def parse_report(raw: Any) -> TimedReport | CategoryReport:
    """Validate one raw mapping into the matching Report variant.

    Raises:
        pydantic.ValidationError: If the mapping is not a well-shaped report.
    """
    return _REPORT_ADAPTER.validate_python(raw)


def parse_reports(rows: Iterable[Any]) -> list[TimedReport | CategoryReport]:
    """Validate a batch of raw mappings.  Fails on the first bad shape."""
    return _REPORT_LIST_ADAPTER.validate_python(list(rows))
