"""Accuracy and macro-averaged precision, recall and F1.

Two independent filters apply the ignore set:

- averaging: ignored labels contribute no per-label term to macro
  precision/recall, but their pairs stay in every other label's counts;
- accuracy: pairs whose *gold* label is ignored leave both the numerator
  and the denominator.

Per-label rates with a zero denominator are 0.0. Macro F1 is the harmonic
mean of macro precision and macro recall, not the mean of per-label F1.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Iterable
from dataclasses import dataclass

from labeleval.confusion import ConfusionCounts, aggregate_pairs
from labeleval.errors import (
    DegenerateLabelSetError,
    EmptyInputError,
    UndefinedMetricError,
)
from labeleval.pairs import LabeledPair

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LabelScore:
    """Per-label counts and rates. ``ignored`` labels are not averaged."""

    label: str
    true_positive: int
    predicted_total: int
    gold_total: int
    precision: float
    recall: float
    ignored: bool = False


def _rate(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def _label_precision(counts: ConfusionCounts, label: str) -> float:
    return _rate(counts.true_positive(label), counts.predicted_total(label))


def _label_recall(counts: ConfusionCounts, label: str) -> float:
    return _rate(counts.true_positive(label), counts.gold_total(label))


def _ignore_set(ignore_labels: Iterable[str]) -> frozenset[str]:
    """Normalise ignore labels; a bare string is rejected, not split."""
    if isinstance(ignore_labels, str):
        raise TypeError(
            "ignore_labels must be a collection of labels, "
            f"not a str: {ignore_labels!r}"
        )
    return frozenset(ignore_labels)


def _require_pairs(counts: ConfusionCounts, metric: str) -> None:
    if counts.total == 0:
        logger.debug("%s undefined: empty input", metric)
        raise EmptyInputError(metric)


def averaging_labels(
    counts: ConfusionCounts,
    ignore_labels: Collection[str] = (),
) -> tuple[str, ...]:
    """Observed labels minus the ignore set, sorted."""
    ignore = _ignore_set(ignore_labels)
    return tuple(label for label in counts.labels if label not in ignore)


def accuracy_score(
    counts: ConfusionCounts,
    ignore_labels: Collection[str] = (),
) -> float:
    """Share of correct pairs among pairs whose gold label is not ignored.

    Raises:
        EmptyInputError: If there are no pairs.
        DegenerateLabelSetError: If every gold label is ignored.
    """
    ignore = _ignore_set(ignore_labels)
    _require_pairs(counts, "accuracy")

    correct = 0
    considered = 0
    for label in counts.labels:
        if label in ignore:
            continue
        correct += counts.true_positive(label)
        considered += counts.gold_total(label)

    if considered == 0:
        logger.debug("accuracy undefined: every gold label is ignored")
        raise DegenerateLabelSetError("accuracy", "every gold label is ignored")
    return correct / considered


def _macro_average(
    counts: ConfusionCounts,
    ignore_labels: Collection[str],
    metric: str,
    per_label: Callable[[str], float],
) -> float:
    _require_pairs(counts, metric)
    labels = averaging_labels(counts, ignore_labels)
    if not labels:
        logger.debug("%s undefined: no labels left after ignoring", metric)
        raise DegenerateLabelSetError(metric, "no labels left after ignoring")
    return sum(per_label(label) for label in labels) / len(labels)


def precision_score(
    counts: ConfusionCounts,
    ignore_labels: Collection[str] = (),
) -> float:
    """Macro-averaged precision over the non-ignored labels."""
    return _macro_average(
        counts,
        ignore_labels,
        "precision",
        lambda label: _label_precision(counts, label),
    )


def recall_score(
    counts: ConfusionCounts,
    ignore_labels: Collection[str] = (),
) -> float:
    """Macro-averaged recall over the non-ignored labels."""
    return _macro_average(
        counts,
        ignore_labels,
        "recall",
        lambda label: _label_recall(counts, label),
    )


def harmonic_mean(precision: float, recall: float) -> float:
    """Return ``2PR / (P + R)``; undefined when ``P + R == 0``."""
    if precision + recall == 0:
        raise UndefinedMetricError("f1", "precision and recall are both zero")
    return 2 * precision * recall / (precision + recall)


def f1_score(
    counts: ConfusionCounts,
    ignore_labels: Collection[str] = (),
) -> float:
    """Harmonic mean of macro precision and macro recall."""
    _require_pairs(counts, "f1")
    try:
        precision = precision_score(counts, ignore_labels)
        recall = recall_score(counts, ignore_labels)
    except DegenerateLabelSetError as e:
        raise DegenerateLabelSetError("f1", "no labels left after ignoring") from e
    return harmonic_mean(precision, recall)


def label_scores(
    counts: ConfusionCounts,
    ignore_labels: Collection[str] = (),
) -> tuple[LabelScore, ...]:
    """Per-label breakdown for every observed label, ignored ones flagged."""
    ignore = _ignore_set(ignore_labels)
    return tuple(
        LabelScore(
            label=label,
            true_positive=counts.true_positive(label),
            predicted_total=counts.predicted_total(label),
            gold_total=counts.gold_total(label),
            precision=_label_precision(counts, label),
            recall=_label_recall(counts, label),
            ignored=label in ignore,
        )
        for label in counts.labels
    )


class EvaluationResult:
    """Classification scores for one collection of labeled pairs.

    Pairs are aggregated once, at construction. Scores are computed on
    first access and then reused, so every accessor reflects the same
    snapshot of the data. Undefined scores raise an
    :class:`~labeleval.errors.UndefinedMetricError` subclass on each call.

    Example::

        result = EvaluationResult(pairs, ignore_labels=["O"])
        result.f1()
    """

    __slots__ = ("_counts", "_ignore", "_scores")

    def __init__(
        self,
        pairs: Iterable[LabeledPair | tuple[str, str]],
        ignore_labels: Iterable[str] = (),
    ) -> None:
        self._ignore = _ignore_set(ignore_labels)
        self._counts = aggregate_pairs(pairs)
        self._scores: dict[str, float] = {}

    @classmethod
    def from_counts(
        cls,
        counts: ConfusionCounts,
        ignore_labels: Iterable[str] = (),
    ) -> EvaluationResult:
        """Build a result from already aggregated counts."""
        result = cls((), ignore_labels)
        result._counts = counts
        return result

    @property
    def counts(self) -> ConfusionCounts:
        return self._counts

    @property
    def ignore_labels(self) -> frozenset[str]:
        return self._ignore

    def _score(
        self,
        name: str,
        compute: Callable[[ConfusionCounts, Collection[str]], float],
    ) -> float:
        if name not in self._scores:
            self._scores[name] = compute(self._counts, self._ignore)
        return self._scores[name]

    def accuracy(self) -> float:
        return self._score("accuracy", accuracy_score)

    def precision(self) -> float:
        return self._score("precision", precision_score)

    def recall(self) -> float:
        return self._score("recall", recall_score)

    def f1(self) -> float:
        return self._score("f1", f1_score)

    def number_of_labels(self) -> int:
        """Distinct observed labels minus ignored ones."""
        return len(averaging_labels(self._counts, self._ignore))

    def per_label(self) -> tuple[LabelScore, ...]:
        return label_scores(self._counts, self._ignore)

    def __repr__(self) -> str:
        return (
            f"EvaluationResult(total={self._counts.total}, "
            f"labels={self.number_of_labels()}, "
            f"ignore={sorted(self._ignore)})"
        )
