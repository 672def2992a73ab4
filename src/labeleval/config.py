"""Configuration management for labeleval.

Loads config from YAML file with environment variable overrides.
Priority: env vars > YAML > defaults.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


# Mapping of env var names to (config field, converter)
_ENV_OVERRIDES: dict[str, tuple[str, Callable[[str], Any]]] = {
    "LABELEVAL_IGNORE_LABELS": ("ignore_labels", _split_csv),
    "LABELEVAL_REPORT_DIGITS": ("report_digits", int),
}


class AppConfig(BaseModel, frozen=True):
    """Application configuration. Immutable."""

    # Averaging
    ignore_labels: list[str] = Field(default_factory=list)

    # Report
    report_digits: int = Field(default=4, ge=0)
    report_per_label: bool = True

    # Output
    output_encoding: str = "utf-8"


def _flatten_sections(section: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Map ``report: {digits: 2}`` onto the ``report_digits`` field."""
    fields: dict[str, Any] = {}
    for key, value in section.items():
        name = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, dict):
            fields |= _flatten_sections(value, name)
        else:
            fields[name] = value
    return fields


def _env_overrides() -> dict[str, Any]:
    """Config fields set through ``LABELEVAL_*`` environment variables."""
    return {
        field_name: converter(os.environ[env_var])
        for env_var, (field_name, converter) in _ENV_OVERRIDES.items()
        if env_var in os.environ
    }


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return _flatten_sections(parsed)


def load_config(config_path: str | None = None) -> AppConfig:
    """Build the AppConfig: defaults, then the YAML file, then env vars.

    Raises:
        FileNotFoundError: If config_path is given but doesn't exist.
        ValueError: If the file is not a YAML mapping.
    """
    fields: dict[str, Any] = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        fields = _read_yaml(path)

    return AppConfig(**(fields | _env_overrides()))
