"""Multi-class classification scoring: accuracy and macro P/R/F1."""

from __future__ import annotations

from labeleval.confusion import ConfusionCounts, aggregate_pairs
from labeleval.errors import (
    DatasetFormatError,
    DegenerateLabelSetError,
    EmptyInputError,
    UndefinedMetricError,
)
from labeleval.metrics import (
    EvaluationResult,
    LabelScore,
    accuracy_score,
    averaging_labels,
    f1_score,
    label_scores,
    precision_score,
    recall_score,
)
from labeleval.pairs import LabeledPair, PairDataset, load_pairs

__all__ = [
    "ConfusionCounts",
    "DatasetFormatError",
    "DegenerateLabelSetError",
    "EmptyInputError",
    "EvaluationResult",
    "LabelScore",
    "LabeledPair",
    "PairDataset",
    "UndefinedMetricError",
    "accuracy_score",
    "aggregate_pairs",
    "averaging_labels",
    "f1_score",
    "label_scores",
    "load_pairs",
    "precision_score",
    "recall_score",
]
