"""Message processing utilities."""

from .content_type import TEXTUAL_MARKERS, is_textual, resolve_content_type
from .transform_processor import TransformProcessor

__all__ = [
    "TEXTUAL_MARKERS",
    "TransformProcessor",
    "is_textual",
    "resolve_content_type",
]
