"""Immutable message envelope flowing through the transform stage."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

CONTENT_TYPE = "contentType"
"""Header key carrying the declared content type of the payload."""

DEFAULT_CONTENT_TYPE = "application/json"
"""Content type assumed by the binding layer when no header is present."""


@dataclass(frozen=True)
class Message:
    """A payload together with its read-only headers.

    Parameters
    ----------
    payload:
        Raw ``bytes`` as delivered by a binder, or an already decoded value.
    headers:
        Mapping of header names to values. It is copied on construction so
        later changes to the caller's mapping are not observed.
    """

    payload: Any
    headers: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def content_type(self) -> Any:
        """Declared content type header, or ``None`` when absent."""

        return self.headers.get(CONTENT_TYPE)

    def with_payload(self, payload: Any) -> "Message":
        """Return a new message carrying ``payload`` and the same headers."""

        return replace(self, payload=payload)
