"""Exceptions raised by expression compilation and evaluation."""

from __future__ import annotations


class ExpressionError(RuntimeError):
    """Base exception for expression related errors."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class ExpressionSyntaxError(ExpressionError):
    """Raised when an expression cannot be compiled."""


class ExpressionEvaluationError(ExpressionError):
    """Raised when a compiled expression fails against a message."""
