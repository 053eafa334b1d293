"""Pydantic configuration schemas.

Defines validation models for the transform stage configuration file.

Key Components:
    - :class:`TransformerSection`
    - :class:`BindingSection`
    - :class:`StageConfigSchema`
"""

import codecs
from typing import Literal, Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

from streamtransform.expressions import (
    Evaluator,
    ExpressionSyntaxError,
    compile_expression,
)
from streamtransform.streaming.message import DEFAULT_CONTENT_TYPE


class TransformerSection(BaseModel):
    """Expression applied to every message; ``None`` passes payloads through."""

    expression: Optional[str] = None
    _evaluator: Optional[Evaluator] = PrivateAttr(default=None)

    @model_validator(mode="after")
    def compile_evaluator(self) -> "TransformerSection":
        try:
            self._evaluator = compile_expression(self.expression)
        except ExpressionSyntaxError as exc:
            raise ValueError(f"transformer.expression is invalid: {exc}") from exc
        return self

    @property
    def evaluator(self) -> Evaluator:
        """Expression compiled during validation."""

        return self._evaluator


class BindingSection(BaseModel):
    default_content_type: str = DEFAULT_CONTENT_TYPE
    charset: str = "utf-8"

    @field_validator("charset")
    @classmethod
    def validate_charset(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"binding.charset '{value}' is not a known codec.") from exc
        return value


class StageSection(BaseModel):
    buffer_size: int = Field(default=1000, ge=0)


class LoggingSection(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value


class MetricsSection(BaseModel):
    enabled: bool = False
    host: str = "0.0.0.0"
    port: int = Field(default=9000, ge=1, le=65535)


class StageConfigSchema(BaseModel):
    transformer: TransformerSection = Field(default_factory=TransformerSection)
    binding: BindingSection = Field(default_factory=BindingSection)
    stage: StageSection = Field(default_factory=StageSection)
    logging: LoggingSection = Field(default_factory=LoggingSection)
    metrics: MetricsSection = Field(default_factory=MetricsSection)
