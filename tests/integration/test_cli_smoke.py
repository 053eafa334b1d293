import json

import yaml
from typer.testing import CliRunner


def test_cli_transform_upper():
    from streamtransform.cli import app

    runner = CliRunner()
    result = runner.invoke(
        app, ["transform", "-p", "hello", "-t", "text/plain", "-e", "payload.upper()"]
    )
    assert result.exit_code == 0
    assert "HELLO" in result.stdout


def test_cli_transform_octet_stream_payload_stays_binary():
    from streamtransform.cli import app

    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "transform",
            "-p",
            "hello",
            "-t",
            "application/octet-stream",
            "-e",
            "payload.decode() + '!'",
        ],
    )
    assert result.exit_code == 0
    assert "hello!" in result.stdout


def test_cli_transform_reads_stdin_and_headers():
    from streamtransform.cli import app

    runner = CliRunner()
    result = runner.invoke(
        app,
        ["transform", "-H", "region=eu", "-e", "headers['region'] + '-' + payload"],
        input="piped",
    )
    assert result.exit_code == 0
    assert "eu-piped" in result.stdout


def test_cli_transform_renders_structured_results_as_json():
    from streamtransform.cli import app

    runner = CliRunner()
    result = runner.invoke(
        app, ["transform", "-p", '{"foo":"bar"}', "-e", "{'length': 3, 'ok': True}"]
    )
    assert result.exit_code == 0
    assert '{"length": 3, "ok": true}' in result.stdout


def test_cli_transform_failure_exits_nonzero():
    from streamtransform.cli import app

    runner = CliRunner()
    result = runner.invoke(app, ["transform", "-p", "x", "-e", "payload + 1"])
    assert result.exit_code == 1


def test_cli_transform_rejects_malformed_header():
    from streamtransform.cli import app

    runner = CliRunner()
    result = runner.invoke(app, ["transform", "-p", "x", "-H", "novalue"])
    assert result.exit_code != 0


def test_cli_transform_uses_config_file(tmp_path, monkeypatch):
    from streamtransform.cli import app

    monkeypatch.delenv("TRANSFORMER_EXPRESSION", raising=False)
    cfg_path = tmp_path / "transform.yaml"
    cfg_path.write_text(yaml.safe_dump({"transformer": {"expression": "payload.swapcase()"}}))
    runner = CliRunner()
    result = runner.invoke(app, ["transform", "-p", "AbC", "-c", str(cfg_path)])
    assert result.exit_code == 0
    assert "aBc" in result.stdout


def test_cli_stream_processes_json_lines(tmp_path):
    from streamtransform.cli import app

    lines = [
        {"payload": "one", "headers": {"contentType": "text/plain"}},
        {"payload": "two"},
    ]
    input_path = tmp_path / "messages.jsonl"
    input_path.write_text("\n".join(json.dumps(line) for line in lines) + "\n")
    runner = CliRunner()
    result = runner.invoke(app, ["stream", "-i", str(input_path), "-e", "payload.upper()"])
    assert result.exit_code == 0
    assert "ONE" in result.stdout
    assert "TWO" in result.stdout


def test_cli_validate_config(tmp_path):
    from streamtransform.cli import app

    cfg_path = tmp_path / "transform.yaml"
    cfg_path.write_text(yaml.safe_dump({"transformer": {"expression": "payload"}}))
    runner = CliRunner()
    ok = runner.invoke(app, ["validate-config", "-c", str(cfg_path)])
    assert ok.exit_code == 0
    assert '"all_passed": true' in ok.stdout

    bad = runner.invoke(app, ["validate-config", "-c", str(tmp_path / "missing.yaml")])
    assert bad.exit_code == 1


def test_cli_rejects_malformed_expression_option():
    from streamtransform.cli import app

    runner = CliRunner()
    for command in ("transform", "stream"):
        result = runner.invoke(app, [command, "-e", "payload +"], input="")
        assert result.exit_code == 2
        assert not isinstance(result.exception, RuntimeError)
