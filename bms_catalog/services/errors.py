"""
BMS Catalog - Chart Errors

Every failure while reading a single chart surfaces as a ``ChartError``
subclass carrying the offending path and the underlying cause.  None of them
are retried; a failed chart never yields a partial record.
"""

from __future__ import annotations


class ChartError(Exception):
    """Base class for failures while loading one chart file."""

    reason = "chart error"

    def __init__(self, path: str, cause: BaseException | str):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"{self.reason}: {self.path}: {cause}")


class ChartOpenError(ChartError):
    """The chart file could not be opened."""

    reason = "cannot open chart"


class ChartReadError(ChartError):
    """The chart file was opened but reading its content failed."""

    reason = "cannot read chart"


class ChartDecodeError(ChartError):
    """A line of a BMS text chart is not valid in the configured encoding."""

    reason = "cannot decode chart"


class ChartFormatError(ChartError):
    """A BMSON document is not well-formed JSON or has the wrong shape."""

    reason = "malformed chart"
