"""Config module exports."""

from unitnorm.config.loader import load_config
from unitnorm.config.models import (
    LoggingConfig,
    LogOutputConfig,
    ParserConfig,
    UnitNormConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "LogOutputConfig",
    "ParserConfig",
    "UnitNormConfig",
]
