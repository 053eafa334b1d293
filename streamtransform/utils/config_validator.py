"""Configuration loading and validation for the transform stage.

Reads the stage YAML file, applies environment overrides and validates the
result with the Pydantic schemas in :mod:`streamtransform.utils.config_schemas`.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict

import yaml
from pydantic import ValidationError

from streamtransform.utils.config_schemas import StageConfigSchema


DEFAULT_CONFIG_PATH = Path("config/transform.yaml")
EXPRESSION_ENV_VAR = "TRANSFORMER_EXPRESSION"


@dataclass
class ValidationResult:
    """Serializable validation outcome."""

    path: str
    passed: bool
    details: Dict | None = None
    error: str | None = None

    def to_dict(self) -> Dict:
        payload = {
            "path": self.path,
            "passed": self.passed,
        }
        if self.details:
            payload["details"] = self.details
        if self.error:
            payload["error"] = self.error
        return payload


def _load_yaml(path: Path) -> Dict:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping at root: {path}")
    return data


def _apply_env_overrides(raw: Dict) -> Dict:
    expression = os.environ.get(EXPRESSION_ENV_VAR)
    if expression:
        transformer = dict(raw.get("transformer") or {})
        transformer["expression"] = expression
        raw = {**raw, "transformer": transformer}
    return raw


def load_stage_config(path: str | Path | None = None) -> StageConfigSchema:
    """Load and validate the stage configuration.

    ``path`` of ``None`` validates an empty configuration, so only defaults
    and environment overrides apply.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        pydantic.ValidationError: If the configuration is invalid.
    """

    raw = _load_yaml(Path(path)) if path is not None else {}
    return StageConfigSchema(**_apply_env_overrides(raw))


def validate_config(
    path: str | Path = DEFAULT_CONFIG_PATH,
    output_dir: str | Path | None = None,
) -> Dict:
    """Validate the configuration at ``path`` and summarise the outcome.

    When ``output_dir`` is given the summary is also written there as
    ``summary.json``.
    """

    try:
        cfg = load_stage_config(path)
        result = ValidationResult(
            path=str(path),
            passed=True,
            details={
                "expression": cfg.transformer.expression,
                "default_content_type": cfg.binding.default_content_type,
                "charset": cfg.binding.charset,
            },
        )
    except (FileNotFoundError, ValueError, ValidationError, yaml.YAMLError) as exc:
        result = ValidationResult(path=str(path), passed=False, error=str(exc))

    summary = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "all_passed": result.passed,
        "results": {"stage_config": result.to_dict()},
    }
    if output_dir is not None:
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        with (out / "summary.json").open("w", encoding="utf-8") as f:
            json.dump(summary, f, indent=2)
    return summary
