"""Options loading utilities for the analysis pipeline."""

from __future__ import annotations

from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from core.config.models import AnalysisOptions

_FORMAT_ALIASES = {
    "txt": "text",
    "plain": "text",
}


def load_options(path: Path | None = None) -> AnalysisOptions:
    """Load and validate analysis options from YAML."""

    options_path = path or Path(__file__).with_name("options.yaml")

    try:
        raw = yaml.safe_load(options_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValueError(f"Options file not found: {options_path}") from exc
    except OSError as exc:
        raise ValueError(f"Options file could not be read: {options_path}") from exc
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in options file: {options_path}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Options file must contain a mapping: {options_path}")

    normalized = _normalize_output_format(raw)

    try:
        return AnalysisOptions.model_validate(normalized)
    except ValidationError as exc:
        raise ValueError(f"Invalid options schema: {options_path}") from exc


def _normalize_output_format(raw: dict[object, object]) -> dict[object, object]:
    normalized = dict(raw)
    value = normalized.get("output_format")
    if isinstance(value, str):
        lowered = value.lower().strip()
        normalized["output_format"] = _FORMAT_ALIASES.get(lowered, lowered)
    return normalized
