"""streamtransform
=================

Single message-transformation stage for streaming pipelines. Each inbound
message has its binary payload decoded when the content type looks textual,
then a configured expression is evaluated against the payload and headers
and its result becomes the outbound payload.

Public API:
    - ``Message`` and the ``CONTENT_TYPE`` header key
    - ``TransformProcessor`` for per-message transformation
    - ``TransformStage`` for running a stream of messages
    - ``compile_expression`` and the ``Evaluator`` interface

Quick Start:
    ```python
    from streamtransform import Message, TransformProcessor, compile_expression

    processor = TransformProcessor(expression=compile_expression("payload.upper()"))
    processor.transform(Message(b"hello", {"contentType": "text/plain"}))  # 'HELLO'
    ```
"""

from .streaming import (
    CONTENT_TYPE,
    DEFAULT_CONTENT_TYPE,
    Message,
    TransformProcessor,
    TransformStage,
)
from .expressions import (
    EvaluationContext,
    Evaluator,
    ExpressionError,
    ExpressionEvaluationError,
    ExpressionSyntaxError,
    IdentityExpression,
    SimpleExpression,
    compile_expression,
)
from .utils import load_stage_config, validate_config

__all__ = [
    "CONTENT_TYPE",
    "DEFAULT_CONTENT_TYPE",
    "EvaluationContext",
    "Evaluator",
    "ExpressionError",
    "ExpressionEvaluationError",
    "ExpressionSyntaxError",
    "IdentityExpression",
    "Message",
    "SimpleExpression",
    "TransformProcessor",
    "TransformStage",
    "compile_expression",
    "load_stage_config",
    "validate_config",
]
