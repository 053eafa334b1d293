"""Pluggable expression evaluation for the transform stage."""

from .base import EvaluationContext, Evaluator, IdentityExpression
from .errors import (
    ExpressionError,
    ExpressionEvaluationError,
    ExpressionSyntaxError,
)
from .functions import json_path, xpath
from .simple import SimpleExpression, compile_expression

__all__ = [
    "EvaluationContext",
    "Evaluator",
    "ExpressionError",
    "ExpressionEvaluationError",
    "ExpressionSyntaxError",
    "IdentityExpression",
    "SimpleExpression",
    "compile_expression",
    "json_path",
    "xpath",
]
