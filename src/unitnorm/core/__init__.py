"""Core module exports."""

from unitnorm.core.errors import (
    ConfigError,
    CoverageError,
    CoverageParseError,
    EmptyCoverageError,
    EmptyReportError,
    ErrorCode,
    MalformedReportError,
    ReportError,
    UnitNormError,
)
from unitnorm.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "CoverageError",
    "CoverageParseError",
    "EmptyCoverageError",
    "EmptyReportError",
    "ErrorCode",
    "MalformedReportError",
    "ReportError",
    "UnitNormError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
]
