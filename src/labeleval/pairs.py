"""Labeled pair collection and dataset loading.

A pair dataset is either a YAML file::

    name: ner-dev
    ignore_labels: [O]
    pairs:
      - [PER, PER]
      - {gold: ORG, predicted: LOC}

or a TSV file with one ``gold<TAB>predicted`` pair per line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from labeleval.errors import DatasetFormatError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}
_TSV_SUFFIXES = {".tsv", ".txt"}


@dataclass(frozen=True, slots=True)
class LabeledPair:
    """A gold label and the label a model predicted for it. Immutable."""

    gold: str
    predicted: str

    @property
    def is_correct(self) -> bool:
        return self.gold == self.predicted


@dataclass(frozen=True, slots=True)
class PairDataset:
    """Pairs loaded from a file, with the file's own ignore labels."""

    name: str
    pairs: tuple[LabeledPair, ...]
    ignore_labels: tuple[str, ...] = ()


def as_pair(item: LabeledPair | tuple[str, str]) -> LabeledPair:
    """Coerce a ``(gold, predicted)`` tuple into a LabeledPair."""
    if isinstance(item, LabeledPair):
        return item
    gold, predicted = item
    return LabeledPair(gold=gold, predicted=predicted)


def _clean_label(value: Any, *, where: str) -> str:
    if value is None:
        raise DatasetFormatError(f"Missing label at {where}")
    # YAML reads unquoted yes/no/on/off and numbers as non-strings
    if not isinstance(value, str):
        raise DatasetFormatError(
            f"Label at {where} is not a string ({value!r}); quote it in the YAML file"
        )
    label = value.strip()
    if not label:
        raise DatasetFormatError(f"Empty label at {where}")
    return label


def _parse_yaml_pair(data: Any, index: int) -> LabeledPair:
    """Parse one YAML pair entry, either a list or a mapping."""
    where = f"pairs[{index}]"
    if isinstance(data, dict):
        if "gold" not in data or "predicted" not in data:
            raise DatasetFormatError(
                f"{where} must have 'gold' and 'predicted' keys"
            )
        gold, predicted = data["gold"], data["predicted"]
    elif isinstance(data, list | tuple) and len(data) == 2:
        gold, predicted = data
    else:
        raise DatasetFormatError(
            f"{where} must be a [gold, predicted] list or a mapping"
        )
    return LabeledPair(
        gold=_clean_label(gold, where=where),
        predicted=_clean_label(predicted, where=where),
    )


def _load_yaml(path: Path) -> PairDataset:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise DatasetFormatError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict) or not isinstance(raw.get("pairs"), list):
        raise DatasetFormatError(f"{path} must be a mapping with a 'pairs' list")

    pairs = tuple(_parse_yaml_pair(p, i) for i, p in enumerate(raw["pairs"]))
    ignore = tuple(
        _clean_label(label, where="ignore_labels")
        for label in raw.get("ignore_labels") or ()
    )
    return PairDataset(
        name=str(raw.get("name", path.stem)),
        pairs=pairs,
        ignore_labels=ignore,
    )


def _load_tsv(path: Path) -> PairDataset:
    pairs: list[LabeledPair] = []
    text = path.read_text(encoding="utf-8")
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        fields = line.rstrip("\r\n").split("\t")
        if len(fields) != 2:
            raise DatasetFormatError(
                f"{path}:{lineno}: expected 2 tab-separated fields, "
                f"got {len(fields)}"
            )
        where = f"{path.name}:{lineno}"
        pairs.append(
            LabeledPair(
                gold=_clean_label(fields[0], where=where),
                predicted=_clean_label(fields[1], where=where),
            )
        )
    return PairDataset(name=path.stem, pairs=tuple(pairs))


def load_pairs(path: Path) -> PairDataset:
    """Load a pair dataset from a YAML or TSV file.

    Raises:
        FileNotFoundError: If the file does not exist.
        DatasetFormatError: If the suffix is unsupported or a row is malformed.
    """
    if not path.exists():
        msg = f"Dataset file not found: {path}"
        raise FileNotFoundError(msg)

    suffix = path.suffix.lower()
    if suffix in _YAML_SUFFIXES:
        dataset = _load_yaml(path)
    elif suffix in _TSV_SUFFIXES:
        dataset = _load_tsv(path)
    else:
        raise DatasetFormatError(f"Unsupported dataset type: {path.suffix}")

    logger.info("Loaded %d pairs from %s", len(dataset.pairs), path)
    return dataset
