"""Timezone-aware clock utilities.

All timestamps in linewait MUST be UTC-aware.  This module is the single
source of "now" so the HTTP boundary can be patched in tests; the
estimator itself never reads the clock and always receives ``now``.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalise *value* to an aware UTC datetime.

    Naive datetimes are assumed to already be UTC (the backend stores
    ``timestamptz`` but some rows arrive without an offset).
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
