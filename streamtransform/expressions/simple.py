"""Expression engine backed by :mod:`simpleeval`.

Expressions use Python syntax restricted to what ``simpleeval`` allows:
attribute access and method calls on values, subscripts, literals,
arithmetic and comparisons, plus a small set of whitelisted functions.

Example
-------
>>> expr = SimpleExpression("payload.upper()")
>>> expr.evaluate(EvaluationContext(payload="hello"))
'HELLO'
"""

from __future__ import annotations

import ast
from typing import Any, Callable, Dict, Mapping, Optional

from simpleeval import DEFAULT_FUNCTIONS as SIMPLEEVAL_FUNCTIONS
from simpleeval import EvalWithCompoundTypes

from .base import EvaluationContext, Evaluator, IdentityExpression
from .errors import ExpressionEvaluationError, ExpressionSyntaxError
from .functions import DEFAULT_FUNCTIONS


class SimpleExpression:
    """Precompiled expression evaluated once per message.

    The parsed tree is built in the constructor and never changes; each call
    to :meth:`evaluate` uses a fresh evaluator so instances can be shared
    between threads.
    """

    def __init__(
        self,
        source: str,
        functions: Optional[Mapping[str, Callable[..., Any]]] = None,
    ) -> None:
        self.source = source
        self._functions: Dict[str, Callable[..., Any]] = {
            **SIMPLEEVAL_FUNCTIONS,
            **DEFAULT_FUNCTIONS,
            **(functions or {}),
        }
        try:
            body = ast.parse(source).body
        except SyntaxError as exc:
            raise ExpressionSyntaxError(
                f"Invalid expression {source!r}: {exc}", source=source
            ) from exc
        if len(body) != 1 or not isinstance(body[0], ast.Expr):
            raise ExpressionSyntaxError(
                f"Invalid expression {source!r}: expected exactly one expression",
                source=source,
            )
        self._parsed = body[0]

    def evaluate(self, context: EvaluationContext) -> Any:
        evaluator = EvalWithCompoundTypes(
            names=context.names(), functions=self._functions
        )
        try:
            return evaluator.eval(self.source, previously_parsed=self._parsed)
        except Exception as exc:
            raise ExpressionEvaluationError(
                f"Failed to evaluate {self.source!r}: {type(exc).__name__}: {exc}",
                source=self.source,
            ) from exc

    def __repr__(self) -> str:
        return f"SimpleExpression({self.source!r})"


def compile_expression(
    source: Optional[str],
    functions: Optional[Mapping[str, Callable[..., Any]]] = None,
) -> Evaluator:
    """Compile ``source`` into an :class:`Evaluator`.

    ``None`` or blank source compiles to :class:`IdentityExpression`.

    Raises:
        ExpressionSyntaxError: If ``source`` is not a valid expression.
    """

    if source is None or not source.strip():
        return IdentityExpression()
    return SimpleExpression(source.strip(), functions=functions)
