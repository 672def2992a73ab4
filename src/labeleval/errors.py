"""Typed failures for labeleval.

A metric whose denominator is zero is *undefined*, which is different
from a legitimate score of 0.0. These exceptions make that difference
explicit to callers.
"""

from __future__ import annotations


class UndefinedMetricError(ValueError):
    """A metric cannot be computed for the given data."""

    def __init__(self, metric: str, message: str) -> None:
        super().__init__(f"{metric} is undefined: {message}")
        self.metric = metric


class EmptyInputError(UndefinedMetricError):
    """No labeled pairs were supplied."""

    def __init__(self, metric: str) -> None:
        super().__init__(metric, "no labeled pairs")


class DegenerateLabelSetError(UndefinedMetricError):
    """Every label relevant to the metric is in the ignore set."""


class DatasetFormatError(ValueError):
    """A pair dataset file could not be parsed."""
