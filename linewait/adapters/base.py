"""Abstract base for report adapters.

Report adapters normalise raw rows from the backend (RPC results, table
selects) into the canonical Report variants.

Architectural rules:
    1. Adapters must NOT mutate the incoming row dict.
    2. adapt() must return a fully valid Report or raise ValueError.
    3. No weighting or estimation logic lives inside an adapter — only field mapping.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from linewait.domain.report import CategoryReport, TimedReport


class ReportAdapter(ABC):
    """Base class for converting raw backend rows into canonical Reports."""

    @abstractmethod
    def can_handle(self, raw: dict[str, Any]) -> bool:
        """Return True if this adapter knows how to translate *raw*.

        Must be a fast, non-destructive check (e.g. key presence).
        """
        ...

    @abstractmethod
    def adapt(self, raw: dict[str, Any]) -> TimedReport | CategoryReport:
        """Translate a raw row into a validated Report.

        Raises:
            ValueError: If the row cannot be normalised.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Human-readable name of the row shape this adapter handles."""
        ...
