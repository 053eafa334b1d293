"""Typer-based command line interface for the transform stage.

Commands:
    - ``transform``: run one payload through the stage
    - ``stream``: run JSON-lines messages through the stage
    - ``validate-config``: check a stage configuration file
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import typer

from .expressions import ExpressionError
from .streaming import CONTENT_TYPE, Message, TransformStage
from .utils.config_validator import DEFAULT_CONFIG_PATH, validate_config


app = typer.Typer(add_completion=False, help="streamtransform command line interface")


def _parse_headers(pairs: List[str]) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Header must look like key=value: {pair!r}")
        headers[key] = value
    return headers


def _render(result: Any) -> Any:
    if isinstance(result, (str, bytes, bytearray)):
        return bytes(result) if isinstance(result, bytearray) else result
    return json.dumps(result, default=str)


def _build_stage(config: Optional[str], expression: Optional[str]) -> TransformStage:
    try:
        return TransformStage.from_config(config, expression=expression)
    except (FileNotFoundError, ValueError, ExpressionError) as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=2)


@app.command("transform")
def cmd_transform(
    payload: Optional[str] = typer.Option(
        None, "-p", "--payload", help="Payload text, sent as UTF-8 bytes"
    ),
    file: Optional[Path] = typer.Option(
        None, "-f", "--file", help="Read the payload bytes from a file"
    ),
    content_type: Optional[str] = typer.Option(
        None, "-t", "--content-type", help="Content type header of the message"
    ),
    header: Optional[List[str]] = typer.Option(
        None, "-H", "--header", help="Extra header as key=value, repeatable"
    ),
    expression: Optional[str] = typer.Option(
        None, "-e", "--expression", help="Expression overriding the config file"
    ),
    config: Optional[str] = typer.Option(
        None, "-c", "--config", help="Path to stage config file"
    ),
):
    """Transform a single payload and print the result.

    Without --payload or --file the payload is read from stdin.
    """

    if payload is not None:
        raw = payload.encode("utf-8")
    elif file is not None:
        raw = file.read_bytes()
    else:
        raw = sys.stdin.buffer.read()
    headers = _parse_headers(header or [])
    if content_type is not None:
        headers[CONTENT_TYPE] = content_type

    stage = _build_stage(config, expression)
    try:
        result = stage.processor.transform(Message(payload=raw, headers=headers))
    except ExpressionError as exc:
        typer.echo(f"Transform failed: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(_render(result))


def _read_messages(lines: Iterator[str]) -> Iterator[Message]:
    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"Line {line_no} is not valid JSON: {exc}")
        if not isinstance(record, dict) or "payload" not in record:
            raise typer.BadParameter(f"Line {line_no} must be an object with a payload")
        payload = record["payload"]
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        yield Message(payload=payload, headers=record.get("headers") or {})


@app.command("stream")
def cmd_stream(
    input_file: Optional[Path] = typer.Option(
        None, "-i", "--input", help="JSON-lines file of messages (default: stdin)"
    ),
    expression: Optional[str] = typer.Option(
        None, "-e", "--expression", help="Expression overriding the config file"
    ),
    config: Optional[str] = typer.Option(
        None, "-c", "--config", help="Path to stage config file"
    ),
):
    """Run JSON-lines messages through the stage, printing one result per line.

    Each line looks like {"payload": "...", "headers": {...}}; string payloads
    are delivered to the stage as UTF-8 bytes.
    """

    stage = _build_stage(config, expression)
    stage.subscribe(lambda message: typer.echo(_render(message.payload)))
    try:
        if input_file is not None:
            with input_file.open("r", encoding="utf-8") as f:
                asyncio.run(stage.run(_read_messages(iter(f))))
        else:
            asyncio.run(stage.run(_read_messages(iter(sys.stdin))))
    except ExpressionError as exc:
        typer.echo(f"Transform failed: {exc}", err=True)
        raise typer.Exit(code=1)


@app.command("validate-config")
def cmd_validate_config(
    config: str = typer.Option(
        str(DEFAULT_CONFIG_PATH), "-c", "--config", help="Path to stage config file"
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", help="Directory to write the validation summary"
    ),
):
    """Validate a stage configuration file and print a JSON summary."""

    summary = validate_config(config, output_dir=output_dir)
    typer.echo(json.dumps(summary, indent=2))
    if not summary.get("all_passed", False):
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
