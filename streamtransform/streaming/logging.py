"""Lightweight, structured logging for the transform stage.

Logs are rendered as JSON by ``structlog`` and written to stderr so that
command line output on stdout only carries transform results. The exported
``logger`` exposes ``debug/info/warning/error``.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _stderr_logger_factory(*args) -> structlog.PrintLogger:
    # resolved per call so redirected streams (pytest, CliRunner) are honoured
    return structlog.PrintLogger(sys.stderr)


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog for JSON formatted logs at ``level``."""

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.contextvars.merge_contextvars,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=_stderr_logger_factory,
    )


configure_logging()
logger = structlog.get_logger()
