"""Content-type aware message transformation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from streamtransform.expressions import (
    EvaluationContext,
    Evaluator,
    IdentityExpression,
)
from ..logging import logger
from ..message import DEFAULT_CONTENT_TYPE, Message
from .content_type import is_binary, is_textual, resolve_content_type


@dataclass(frozen=True)
class TransformProcessor:
    """Evaluate an expression against each inbound message.

    Binary payloads whose content type looks textual are decoded to ``str``
    before evaluation; everything else reaches the expression untouched.

    Parameters
    ----------
    expression:
        Compiled expression. Defaults to passing the payload through.
    default_content_type:
        Content type assumed when a message carries no content-type header.
    charset:
        Codec used to decode textual binary payloads.
    """

    expression: Evaluator = field(default_factory=IdentityExpression)
    default_content_type: str = DEFAULT_CONTENT_TYPE
    charset: str = "utf-8"

    def coerce(self, message: Message) -> Message:
        """Return ``message`` with a textual binary payload decoded.

        The input message is never modified; a decoded payload produces a new
        message carrying the original headers.
        """

        if not is_binary(message.payload):
            return message
        content_type = resolve_content_type(message, self.default_content_type)
        if not is_textual(content_type):
            return message
        text = bytes(message.payload).decode(self.charset, errors="replace")
        logger.debug(
            "payload_decoded", content_type=content_type, size_bytes=len(message.payload)
        )
        return message.with_payload(text)

    def transform(self, message: Message) -> Any:
        """Return the expression result for ``message``.

        Raises:
            ExpressionEvaluationError: If the expression fails.
        """

        coerced = self.coerce(message)
        return self.expression.evaluate(EvaluationContext.from_message(coerced))

    def process(self, message: Message) -> Message:
        """Transform ``message`` into an outbound message with the same headers."""

        return Message(payload=self.transform(message), headers=message.headers)
