"""CLI entry point for labeleval.

Provides two subcommands:
  - score: Compute accuracy and macro P/R/F1 for a pair dataset
  - compare: Compare the scores of two pair datasets side by side
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from labeleval.config import AppConfig, load_config
from labeleval.errors import DatasetFormatError
from labeleval.metrics import EvaluationResult
from labeleval.pairs import PairDataset, load_pairs
from labeleval.report import (
    print_comparison_report,
    print_eval_report,
    write_eval_json,
)

app = typer.Typer(
    name="labeleval",
    help="Score multi-class predictions with accuracy and macro-averaged P/R/F1.",
    no_args_is_help=True,
)

console = Console()

_LOG_FMT = "%(name)s %(levelname)s: %(message)s"


def _parse_csv_option(value: str | None) -> list[str] | None:
    """Parse a comma-separated CLI option into a list, or None."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=_LOG_FMT)


def _load_config_or_exit(config_path: str | None) -> AppConfig:
    try:
        return load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e


def _load_dataset_or_exit(path: str) -> PairDataset:
    try:
        return load_pairs(Path(path))
    except (FileNotFoundError, DatasetFormatError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e


def _evaluate(
    dataset: PairDataset,
    config: AppConfig,
    extra_ignore: list[str] | None,
) -> EvaluationResult:
    """Combine config, dataset and CLI ignore labels and evaluate."""
    ignore = {*config.ignore_labels, *dataset.ignore_labels, *(extra_ignore or [])}
    return EvaluationResult(dataset.pairs, ignore_labels=ignore)


@app.command()
def score(
    dataset: str = typer.Argument(
        ..., help="Pair dataset (YAML or TSV)"
    ),
    ignore: str | None = typer.Option(
        None, "--ignore", help="Labels to leave out of averaging (comma-separated)"
    ),
    output: str | None = typer.Option(
        None, "-o", "--output", help="JSON report output path"
    ),
    config_path: str | None = typer.Option(
        None, "--config", help="Path to config YAML file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Enable debug logging"
    ),
) -> None:
    """Score a pair dataset."""
    _setup_logging(verbose)

    config = _load_config_or_exit(config_path)
    ds = _load_dataset_or_exit(dataset)
    result = _evaluate(ds, config, _parse_csv_option(ignore))

    print_eval_report(
        result,
        title=f"Evaluation: {ds.name}",
        digits=config.report_digits,
        per_label=config.report_per_label,
        console=console,
    )

    if output is not None:
        out_path = Path(output)
        write_eval_json(result, out_path, encoding=config.output_encoding)
        console.print(f"\n[green]Report saved:[/green] {out_path}")


@app.command()
def compare(
    dataset_a: str = typer.Argument(..., help="Baseline pair dataset"),
    dataset_b: str = typer.Argument(..., help="Candidate pair dataset"),
    ignore: str | None = typer.Option(
        None, "--ignore", help="Labels to leave out of averaging (comma-separated)"
    ),
    label_a: str | None = typer.Option(
        None, "--label-a", help="Column title for the baseline"
    ),
    label_b: str | None = typer.Option(
        None, "--label-b", help="Column title for the candidate"
    ),
    config_path: str | None = typer.Option(
        None, "--config", help="Path to config YAML file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Enable debug logging"
    ),
) -> None:
    """Compare the scores of two pair datasets."""
    _setup_logging(verbose)

    config = _load_config_or_exit(config_path)
    ds_a = _load_dataset_or_exit(dataset_a)
    ds_b = _load_dataset_or_exit(dataset_b)
    extra_ignore = _parse_csv_option(ignore)

    print_comparison_report(
        _evaluate(ds_a, config, extra_ignore),
        _evaluate(ds_b, config, extra_ignore),
        label_a=label_a or ds_a.name,
        label_b=label_b or ds_b.name,
        digits=config.report_digits,
        console=console,
    )
