"""Shared test fixtures for labeleval tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from labeleval.pairs import LabeledPair

# (gold, predicted) in the order a tagger emitted them
_NER_PAIRS = [
    ("PER", "PER"), ("PER", "ORG"), ("ORG", "PER"), ("ORG", "LOC"),
    ("PER", "LOC"), ("LOC", "ORG"), ("LOC", "LOC"), ("ORG", "LOC"),
    ("PER", "ORG"), ("ORG", "ORG"), ("LOC", "LOC"), ("ORG", "LOC"),
    ("PER", "ORG"), ("ORG", "ORG"), ("LOC", "PER"), ("ORG", "ORG"),
    ("PER", "PER"), ("ORG", "ORG"),
]


@pytest.fixture
def ner_pairs() -> list[LabeledPair]:
    """18 NER token pairs over PER/ORG/LOC, 8 of them correct."""
    return [LabeledPair(gold=g, predicted=p) for g, p in _NER_PAIRS]


@pytest.fixture
def ner_pairs_with_missing(ner_pairs: list[LabeledPair]) -> list[LabeledPair]:
    """NER pairs plus a never-predicted (PART) and a never-gold (PUNC) label."""
    return [
        *ner_pairs,
        LabeledPair(gold="PART", predicted="ORG"),
        LabeledPair(gold="PER", predicted="PUNC"),
    ]


@pytest.fixture
def ner_yaml(tmp_path: Path) -> Path:
    """The NER pairs as a YAML dataset file."""
    path = tmp_path / "ner.yaml"
    data = {"name": "ner-dev", "pairs": [list(p) for p in _NER_PAIRS]}
    path.write_text(yaml.dump(data), encoding="utf-8")
    return path


@pytest.fixture
def ner_tsv(tmp_path: Path) -> Path:
    """The NER pairs as a TSV dataset file."""
    path = tmp_path / "ner.tsv"
    lines = ["# gold\tpredicted"] + [f"{g}\t{p}" for g, p in _NER_PAIRS]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
