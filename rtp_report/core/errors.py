"""Domain errors raised by the aggregation engine."""

from __future__ import annotations


class ReportEngineError(Exception):
    """Base class for errors surfaced by the productivity engine."""


class InvalidDate(ReportEngineError):
    """Impossible (day, month, year) combination."""

    def __init__(self, message: str, *, day: int | None = None, month: int | None = None, year: int | None = None) -> None:
        super().__init__(message)
        self.day = day
        self.month = month
        self.year = year


class StoreUnavailable(ReportEngineError):
    """The backing store could not answer a batch query."""
