"""Content-type rules deciding whether a binary payload is text."""

from __future__ import annotations

from typing import Any, Tuple

from ..message import CONTENT_TYPE, DEFAULT_CONTENT_TYPE, Message

TEXTUAL_MARKERS: Tuple[str, ...] = ("text", "json", "x-spring-tuple")
"""Substrings marking a content type as textual.

Matching is a plain substring test, so unrelated types that happen to
contain a marker (``application/vnd.context+xml``) are treated as text too.
"""

BINARY_TYPES = (bytes, bytearray)


def is_binary(payload: Any) -> bool:
    """Return ``True`` for raw byte payloads."""

    return isinstance(payload, BINARY_TYPES)


def resolve_content_type(
    message: Message, default: str = DEFAULT_CONTENT_TYPE
) -> str:
    """Return the declared content type of ``message`` or ``default``."""

    declared = message.headers.get(CONTENT_TYPE)
    if declared is None:
        return default
    return str(declared)


def is_textual(content_type: str) -> bool:
    """Return ``True`` when ``content_type`` names a textual payload."""

    return any(marker in content_type for marker in TEXTUAL_MARKERS)
