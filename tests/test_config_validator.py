import json

import pytest
import yaml
from pydantic import ValidationError

from streamtransform.utils.config_validator import load_stage_config, validate_config


@pytest.fixture(autouse=True)
def _clear_expression_env(monkeypatch):
    monkeypatch.delenv("TRANSFORMER_EXPRESSION", raising=False)


def _write(path, data):
    path.write_text(yaml.safe_dump(data))
    return path


def test_defaults_without_file():
    cfg = load_stage_config(None)
    assert cfg.transformer.expression is None
    assert cfg.binding.default_content_type == "application/json"
    assert cfg.binding.charset == "utf-8"
    assert cfg.stage.buffer_size == 1000
    assert cfg.metrics.enabled is False


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_stage_config(path).transformer.expression is None


def test_loads_sections(tmp_path):
    path = _write(
        tmp_path / "transform.yaml",
        {
            "transformer": {"expression": "payload.upper()"},
            "binding": {"default_content_type": "text/plain", "charset": "latin-1"},
            "logging": {"level": "debug"},
        },
    )
    cfg = load_stage_config(path)
    assert cfg.transformer.expression == "payload.upper()"
    assert cfg.binding.default_content_type == "text/plain"
    assert cfg.binding.charset == "latin-1"
    assert cfg.logging.level == "DEBUG"


def test_environment_overrides_expression(tmp_path, monkeypatch):
    path = _write(tmp_path / "transform.yaml", {"transformer": {"expression": "payload"}})
    monkeypatch.setenv("TRANSFORMER_EXPRESSION", "payload.lower()")
    assert load_stage_config(path).transformer.expression == "payload.lower()"


def test_invalid_expression_is_a_config_error(tmp_path):
    path = _write(tmp_path / "transform.yaml", {"transformer": {"expression": "payload.upper("}})
    with pytest.raises(ValidationError):
        load_stage_config(path)


def test_unknown_charset_rejected(tmp_path):
    path = _write(tmp_path / "transform.yaml", {"binding": {"charset": "no-such-codec"}})
    with pytest.raises(ValidationError):
        load_stage_config(path)


def test_non_mapping_root_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        load_stage_config(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_stage_config(tmp_path / "nope.yaml")


def test_validate_config_summary_written(tmp_path):
    path = _write(tmp_path / "transform.yaml", {"transformer": {"expression": "payload"}})
    out_dir = tmp_path / "reports"
    summary = validate_config(path, output_dir=out_dir)
    assert summary["all_passed"] is True
    details = summary["results"]["stage_config"]["details"]
    assert details["expression"] == "payload"
    written = json.loads((out_dir / "summary.json").read_text())
    assert written["all_passed"] is True


def test_validate_config_reports_failures(tmp_path):
    summary = validate_config(tmp_path / "missing.yaml")
    assert summary["all_passed"] is False
    assert "not found" in summary["results"]["stage_config"]["error"]


def test_validated_config_carries_compiled_expression(tmp_path):
    path = _write(tmp_path / "transform.yaml", {"transformer": {"expression": "payload.upper()"}})
    evaluator = load_stage_config(path).transformer.evaluator
    assert evaluator.source == "payload.upper()"
    assert load_stage_config(None).transformer.evaluator.source is None
