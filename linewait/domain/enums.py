"""Controlled enumerations for the linewait domain.

Every categorical field in the domain MUST reference an enum defined here.
Free-form strings are not acceptable for classification fields.
"""

from __future__ import annotations

from enum import Enum


class LineCategory(str, Enum):
    """Ordered line-length buckets, shortest first."""

    NO_LINE = "No Line"
    SHORT = "Short Line"
    MEDIUM = "Medium Line"
    LONG = "Long Line"
    VERY_LONG = "Very Long Line"


class ReporterStatus(str, Enum):
    """Per-venue standing of the person who submitted a report."""

    REGULAR = "regular"
    TRUSTED = "trusted"
    EXPERT = "expert"


class ReportKind(str, Enum):
    """Discriminator for the two report variants."""

    MINUTES = "minutes"
    CATEGORY = "category"


class ExclusionReason(str, Enum):
    """Why a report did not contribute to an estimate."""

    EXPIRED = "expired"
    INVALID_MINUTES = "invalid_minutes"
    ZERO_WEIGHT = "zero_weight"
