"""Evaluation report generation.

Produces Rich table output and JSON reports for evaluation results.
Undefined metrics show as "undefined" in tables and ``null`` in JSON.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import asdict
from pathlib import Path

from rich.console import Console
from rich.table import Table

from labeleval.errors import UndefinedMetricError
from labeleval.metrics import EvaluationResult

_UNDEFINED = "undefined"


def _safe(metric: Callable[[], float]) -> float | None:
    """Return the metric value, or None when it is undefined."""
    try:
        return metric()
    except UndefinedMetricError:
        return None


def collect_scores(result: EvaluationResult) -> dict[str, float | None]:
    """Return the four scores by name, None for undefined ones."""
    return {
        "accuracy": _safe(result.accuracy),
        "precision": _safe(result.precision),
        "recall": _safe(result.recall),
        "f1": _safe(result.f1),
    }


def _fmt(value: float | None, digits: int) -> str:
    return _UNDEFINED if value is None else f"{value:.{digits}f}"


def print_eval_report(
    result: EvaluationResult,
    *,
    title: str = "Evaluation Report",
    digits: int = 4,
    per_label: bool = True,
    console: Console | None = None,
) -> None:
    """Print evaluation metrics as a Rich table."""
    console = console or Console()
    scores = collect_scores(result)

    table = Table(title=title, show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")

    table.add_row("Accuracy", _fmt(scores["accuracy"], digits))
    table.add_row("Precision (macro)", _fmt(scores["precision"], digits))
    table.add_row("Recall (macro)", _fmt(scores["recall"], digits))
    table.add_row("F1 (macro)", _fmt(scores["f1"], digits))
    table.add_row("Pairs", str(result.counts.total))
    table.add_row("Labels averaged", str(result.number_of_labels()))
    if result.ignore_labels:
        table.add_row("Ignored", ", ".join(sorted(result.ignore_labels)))

    console.print(table)

    # Per-label breakdown
    breakdown = result.per_label()
    if per_label and breakdown:
        detail = Table(title="Per-Label Results", show_header=True)
        detail.add_column("Label", style="cyan")
        detail.add_column("TP", justify="right")
        detail.add_column("Predicted", justify="right")
        detail.add_column("Gold", justify="right")
        detail.add_column("Precision", justify="right", style="green")
        detail.add_column("Recall", justify="right", style="green")

        for score in breakdown:
            label = f"{score.label} [dim](ignored)[/dim]" if score.ignored else score.label
            detail.add_row(
                label,
                str(score.true_positive),
                str(score.predicted_total),
                str(score.gold_total),
                f"{score.precision:.{digits}f}",
                f"{score.recall:.{digits}f}",
            )

        console.print(detail)


def print_comparison_report(
    result_a: EvaluationResult,
    result_b: EvaluationResult,
    *,
    label_a: str = "a",
    label_b: str = "b",
    digits: int = 4,
    console: Console | None = None,
) -> None:
    """Print side-by-side comparison of two evaluation runs."""
    console = console or Console()
    scores_a = collect_scores(result_a)
    scores_b = collect_scores(result_b)

    table = Table(
        title=f"Comparison: {label_a} vs {label_b}",
        show_header=True,
    )
    table.add_column("Metric", style="cyan")
    table.add_column(label_a, justify="right")
    table.add_column(label_b, justify="right")
    table.add_column("Delta", justify="right", style="yellow")

    for name in ("accuracy", "precision", "recall", "f1"):
        val_a = scores_a[name]
        val_b = scores_b[name]
        if val_a is None or val_b is None:
            delta_str = _UNDEFINED
        else:
            delta_str = f"{val_b - val_a:+.{digits}f}"
        table.add_row(name, _fmt(val_a, digits), _fmt(val_b, digits), delta_str)

    table.add_row(
        "pairs",
        str(result_a.counts.total),
        str(result_b.counts.total),
        f"{result_b.counts.total - result_a.counts.total:+d}",
    )

    console.print(table)


def write_eval_json(
    result: EvaluationResult,
    output_path: Path,
    *,
    encoding: str = "utf-8",
) -> None:
    """Write evaluation results to a JSON file."""
    data = {
        "metrics": collect_scores(result),
        "number_of_labels": result.number_of_labels(),
        "total": result.counts.total,
        "ignore_labels": sorted(result.ignore_labels),
        "labels": [asdict(score) for score in result.per_label()],
    }
    output_path.write_text(
        json.dumps(data, ensure_ascii=False, indent=2),
        encoding=encoding,
    )
