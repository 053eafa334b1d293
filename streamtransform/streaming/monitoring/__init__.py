"""Monitoring helpers for the transform stage."""

from .metrics import Metrics

__all__ = ["Metrics"]
