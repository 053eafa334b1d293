"""Configuration utilities.

Public API:
    - :func:`load_stage_config`
    - :func:`validate_config`
"""

from .config_validator import load_stage_config, validate_config

__all__ = ["load_stage_config", "validate_config"]
