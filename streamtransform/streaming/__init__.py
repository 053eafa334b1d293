"""Streaming infrastructure package."""

from .message import CONTENT_TYPE, DEFAULT_CONTENT_TYPE, Message
from .processors import TransformProcessor
from .stage import TransformStage
from .stream_buffer import StreamBuffer

__all__ = [
    "CONTENT_TYPE",
    "DEFAULT_CONTENT_TYPE",
    "Message",
    "StreamBuffer",
    "TransformProcessor",
    "TransformStage",
]
