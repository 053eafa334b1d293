"""In-process transform stage runner.

Example
-------
>>> from streamtransform.streaming import Message, TransformStage
>>> stage = TransformStage.from_config("config/transform.yaml")
>>> stage.subscribe(lambda m: print(m.payload))
>>> # asyncio.run(stage.run([Message(b"hello", {"contentType": "text/plain"})]))
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, AsyncIterable, Callable, Iterable, List, Optional, Union

from prometheus_client import start_http_server

from streamtransform.expressions import compile_expression
from streamtransform.utils import config_validator
from .logging import configure_logging, logger
from .message import Message
from .monitoring import Metrics
from .processors import TransformProcessor
from .stream_buffer import StreamBuffer

Callback = Callable[[Message], Any]
Inbound = Union[AsyncIterable[Message], Iterable[Message]]


@dataclass
class TransformStage:
    """Feed inbound messages through a :class:`TransformProcessor`.

    Outbound messages go to a bounded buffer and to every subscribed
    callback. A full buffer drops the outbound message; callbacks still see it.
    """

    processor: TransformProcessor = field(default_factory=TransformProcessor)
    buffer_size: int = 1000
    buffer: StreamBuffer = field(init=False)
    metrics: Metrics = field(default_factory=Metrics)
    _callbacks: List[Callback] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.buffer = StreamBuffer(self.buffer_size)

    @classmethod
    def from_config(
        cls,
        config_path: Optional[Union[str, Path]] = None,
        expression: Optional[str] = None,
    ) -> "TransformStage":
        """Build a stage from a YAML configuration file.

        ``expression`` overrides ``transformer.expression`` from the file.
        """

        cfg = config_validator.load_stage_config(config_path)
        configure_logging(cfg.logging.level)
        if expression is not None:
            source, evaluator = expression, compile_expression(expression)
        else:
            source, evaluator = cfg.transformer.expression, cfg.transformer.evaluator
        processor = TransformProcessor(
            expression=evaluator,
            default_content_type=cfg.binding.default_content_type,
            charset=cfg.binding.charset,
        )
        if cfg.metrics.enabled:
            try:
                start_http_server(cfg.metrics.port, addr=cfg.metrics.host)
            except OSError:
                logger.warning("metrics_exporter_start_failed", port=cfg.metrics.port)
        logger.info(
            "stage_configured",
            expression=source,
            default_content_type=cfg.binding.default_content_type,
        )
        return cls(processor=processor, buffer_size=cfg.stage.buffer_size)

    def subscribe(self, callback: Callback) -> None:
        """Register ``callback`` for every outbound message."""

        self._callbacks.append(callback)

    async def dispatch(self, message: Message) -> Message:
        """Transform one message and deliver the result.

        Raises:
            ExpressionEvaluationError: If the transform fails. The failure is
                counted and logged before being re-raised.
        """

        start = time.perf_counter()
        try:
            outbound = self.processor.process(message)
        except Exception as exc:
            self.metrics.record_failure()
            logger.error("transform_failed", error=str(exc))
            raise
        self.metrics.record_success(time.perf_counter() - start)
        if not self.buffer.offer(outbound):
            logger.warning("buffer_full_dropped", buffer_size=self.buffer_size)
        for cb in self._callbacks:
            try:
                res = cb(outbound)
                if asyncio.iscoroutine(res):
                    await res
            except Exception as exc:  # keep streaming robust to callback errors
                self.metrics.record_callback_error()
                logger.error("callback_error", error=str(exc))
        return outbound

    async def run(self, inbound: Inbound) -> int:
        """Dispatch every message of ``inbound`` in order.

        Returns the number of messages processed.
        """

        count = 0
        if hasattr(inbound, "__aiter__"):
            async for message in inbound:
                await self.dispatch(message)
                count += 1
        else:
            for message in inbound:
                await self.dispatch(message)
                count += 1
        logger.debug("stream_completed", messages=count)
        return count
