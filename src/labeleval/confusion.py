"""Confusion counts aggregated from labeled pairs.

Every pair is counted, whatever the ignore set says: the ignore set only
decides which labels are averaged later (see ``labeleval.metrics``).
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from labeleval.pairs import LabeledPair, as_pair

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConfusionCounts:
    """Per-label counts over a full pair collection. Immutable.

    Invariant: ``sum(gold_totals) == sum(predicted_totals) == total``.
    """

    true_positives: Mapping[str, int] = field(default_factory=dict)
    predicted_totals: Mapping[str, int] = field(default_factory=dict)
    gold_totals: Mapping[str, int] = field(default_factory=dict)
    cells: Mapping[tuple[str, str], int] = field(default_factory=dict)
    total: int = 0

    @property
    def labels(self) -> tuple[str, ...]:
        """Every label seen as gold or predicted, sorted."""
        return tuple(sorted(set(self.gold_totals) | set(self.predicted_totals)))

    @property
    def correct(self) -> int:
        """Number of pairs where gold == predicted."""
        return sum(self.true_positives.values())

    def true_positive(self, label: str) -> int:
        return self.true_positives.get(label, 0)

    def predicted_total(self, label: str) -> int:
        return self.predicted_totals.get(label, 0)

    def gold_total(self, label: str) -> int:
        return self.gold_totals.get(label, 0)

    def pair_count(self, gold: str, predicted: str) -> int:
        """Confusion matrix cell: pairs with this gold and predicted label."""
        return self.cells.get((gold, predicted), 0)


def aggregate_pairs(
    pairs: Iterable[LabeledPair | tuple[str, str]],
) -> ConfusionCounts:
    """Fold pairs into ConfusionCounts in a single pass.

    ``pairs`` may be a one-shot iterator; it is consumed exactly once.
    Plain ``(gold, predicted)`` tuples are accepted as well.
    """
    true_positives: Counter[str] = Counter()
    predicted_totals: Counter[str] = Counter()
    gold_totals: Counter[str] = Counter()
    cells: Counter[tuple[str, str]] = Counter()
    total = 0

    for item in pairs:
        pair = as_pair(item)
        gold_totals[pair.gold] += 1
        predicted_totals[pair.predicted] += 1
        cells[(pair.gold, pair.predicted)] += 1
        if pair.is_correct:
            true_positives[pair.gold] += 1
        total += 1

    counts = ConfusionCounts(
        true_positives=MappingProxyType(dict(true_positives)),
        predicted_totals=MappingProxyType(dict(predicted_totals)),
        gold_totals=MappingProxyType(dict(gold_totals)),
        cells=MappingProxyType(dict(cells)),
        total=total,
    )
    logger.debug(
        "Aggregated %d pairs over %d labels (%d correct)",
        total,
        len(counts.labels),
        counts.correct,
    )
    return counts
