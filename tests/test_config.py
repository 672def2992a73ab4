"""Tests for labeleval.config.

Tests cover:
- AppConfig defaults and validation
- YAML loading
- Environment variable overrides
- Immutability
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from labeleval.config import AppConfig, _flatten_sections, load_config

# ============================================================
# AppConfig Model Tests
# ============================================================


class TestAppConfig:
    """Test AppConfig Pydantic model."""

    def test_default_values(self) -> None:
        config = AppConfig()
        assert config.ignore_labels == []
        assert config.report_digits == 4
        assert config.report_per_label is True
        assert config.output_encoding == "utf-8"

    def test_custom_values(self) -> None:
        config = AppConfig(ignore_labels=["O"], report_digits=2)
        assert config.ignore_labels == ["O"]
        assert config.report_digits == 2

    def test_frozen_immutability(self) -> None:
        config = AppConfig()
        with pytest.raises(ValidationError):
            config.report_digits = 1  # type: ignore[misc]

    def test_invalid_digits_negative(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(report_digits=-1)


# ============================================================
# load_config Tests
# ============================================================


class TestLoadConfig:
    """Test config loading from YAML and env vars."""

    def test_load_default_config(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = load_config(config_path=None)
        assert config == AppConfig()

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        yaml_content = """
ignore_labels: [O, MISC]
report:
  digits: 2
  per_label: false
"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml_content, encoding="utf-8")

        with patch.dict(os.environ, {}, clear=True):
            config = load_config(config_path=str(config_file))
        assert config.ignore_labels == ["O", "MISC"]
        assert config.report_digits == 2
        assert config.report_per_label is False

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(config_path=str(tmp_path / "nope.yaml"))

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("report: [unclosed\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(config_path=str(config_file))

    def test_empty_yaml_gives_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("", encoding="utf-8")
        with patch.dict(os.environ, {}, clear=True):
            assert load_config(config_path=str(config_file)) == AppConfig()

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- O\n- MISC\n", encoding="utf-8")
        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(config_path=str(config_file))

    def test_flatten_sections(self) -> None:
        flat = _flatten_sections({"report": {"digits": 2, "per_label": False}, "x": 1})
        assert flat == {"report_digits": 2, "report_per_label": False, "x": 1}

    def test_env_overrides_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("ignore_labels: [O]\nreport:\n  digits: 2\n")

        env = {"LABELEVAL_IGNORE_LABELS": "PER, ORG", "LABELEVAL_REPORT_DIGITS": "6"}
        with patch.dict(os.environ, env, clear=True):
            config = load_config(config_path=str(config_file))
        assert config.ignore_labels == ["PER", "ORG"]
        assert config.report_digits == 6

    def test_env_empty_ignore_list(self) -> None:
        with patch.dict(os.environ, {"LABELEVAL_IGNORE_LABELS": ""}, clear=True):
            assert load_config().ignore_labels == []
