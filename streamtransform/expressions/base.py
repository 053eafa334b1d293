"""Evaluator interface shared by expression engines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Mapping, Protocol, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover
    from streamtransform.streaming.message import Message


@dataclass(frozen=True)
class EvaluationContext:
    """Values an expression can see while being evaluated."""

    payload: Any
    headers: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_message(cls, message: Message) -> "EvaluationContext":
        return cls(payload=message.payload, headers=message.headers)

    def names(self) -> Dict[str, Any]:
        """Variables exposed to the expression."""

        return {"payload": self.payload, "headers": self.headers}


@runtime_checkable
class Evaluator(Protocol):
    """Interface for any compiled expression.

    Implementations must be safe to call from several threads at once.
    """

    source: str | None

    def evaluate(self, context: EvaluationContext) -> Any:
        """Evaluate against ``context`` and return the result.

        Raises:
            ExpressionEvaluationError: If evaluation fails.
        """
        ...


@dataclass(frozen=True)
class IdentityExpression:
    """Expression returning the payload unchanged."""

    source: str | None = None

    def evaluate(self, context: EvaluationContext) -> Any:
        return context.payload
