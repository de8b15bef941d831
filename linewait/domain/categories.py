"""Canonical category tables.

This module is the single source of truth for how minutes map to a
``LineCategory`` and which representative minute value a category-only
report stands for.  Nothing else in the codebase may hard-code a boundary.

Threshold table (inclusive, non-overlapping, no gaps over ints >= 0):

    No Line          0
    Short Line       1 – 4
    Medium Line      5 – 15
    Long Line       16 – 30
    Very Long Line  31 +
"""

from __future__ import annotations

from typing import NamedTuple

from linewait.domain.enums import LineCategory


class CategoryBand(NamedTuple):
    category: LineCategory
    min_minutes: int
    max_minutes: int | None  # None = unbounded


CATEGORY_BANDS: tuple[CategoryBand, ...] = (
    CategoryBand(LineCategory.NO_LINE, 0, 0),
    CategoryBand(LineCategory.SHORT, 1, 4),
    CategoryBand(LineCategory.MEDIUM, 5, 15),
    CategoryBand(LineCategory.LONG, 16, 30),
    CategoryBand(LineCategory.VERY_LONG, 31, None),
)

# Each default must fall inside its own band (Very Long is 35, not 30).
DEFAULT_CATEGORY_MINUTES: dict[LineCategory, int] = {
    LineCategory.NO_LINE: 0,
    LineCategory.SHORT: 4,
    LineCategory.MEDIUM: 10,
    LineCategory.LONG: 20,
    LineCategory.VERY_LONG: 35,
}

# Labels written by older app builds, mapped to the canonical category.
_LEGACY_LABELS: dict[str, LineCategory] = {
    "short line (< 5 mins)": LineCategory.SHORT,
    "medium line (5-15 mins)": LineCategory.MEDIUM,
    "long line (15-30 mins)": LineCategory.LONG,
    "very long line (30+ mins)": LineCategory.VERY_LONG,
    "short": LineCategory.SHORT,
    "medium": LineCategory.MEDIUM,
    "long": LineCategory.LONG,
    "very long": LineCategory.VERY_LONG,
}


def category_for_minutes(minutes: int) -> LineCategory:
    """Map a non-negative minute value to its category.

    Raises:
        ValueError: If *minutes* is negative.
    """
    if minutes < 0:
        raise ValueError(f"minutes must be >= 0, got {minutes}")
    for band in CATEGORY_BANDS:
        if band.max_minutes is None or minutes <= band.max_minutes:
            return band.category
    # Unreachable: the last band is unbounded.
    return LineCategory.VERY_LONG


def default_minutes_for(category: LineCategory) -> int:
    """Representative minute value for a category-only report."""
    return DEFAULT_CATEGORY_MINUTES[category]


def minutes_match_category(minutes: int, category: LineCategory) -> bool:
    """True if *minutes* falls within *category*'s band."""
    if minutes < 0:
        return False
    return category_for_minutes(minutes) == category


def parse_category_label(label: str) -> LineCategory:
    """Resolve a canonical or legacy label to a ``LineCategory``.

    Raises:
        ValueError: If the label is not recognised.
    """
    if not isinstance(label, str):
        raise ValueError(f"line category label must be a string, got {type(label).__name__}")
    key = label.strip().lower()
    for category in LineCategory:
        if category.value.lower() == key:
            return category
    legacy = _LEGACY_LABELS.get(key)
    if legacy is None:
        raise ValueError(f"unknown line category label: {label!r}")
    return legacy
