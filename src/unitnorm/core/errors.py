"""unitnorm error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 70xx: Test report input
- 71xx: Coverage input
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

_RERUN_HINT = (
    "it probably means that the test runner failed to run tests. "
    "Try running the generated runner command yourself, you might get the answer."
)


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Report (70xx)
    REPORT_EMPTY = 7001
    REPORT_MALFORMED = 7002

    # Coverage (71xx)
    COVERAGE_EMPTY = 7101
    COVERAGE_PARSE_ERROR = 7102


@dataclass(frozen=True)
class UnitNormError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'REPORT_EMPTY')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ReportError(UnitNormError):
    """Errors decoding the runner's JSON event stream."""


class EmptyReportError(ReportError):
    """The report buffer held no events at all.

    Retryable: an empty report means the runner crashed before logging.
    """

    @classmethod
    def create(cls, source: str | None = None) -> "EmptyReportError":
        return cls(
            code=ErrorCode.REPORT_EMPTY,
            message=f"JSON report is empty, {_RERUN_HINT}",
            retryable=True,
            details={"source": source} if source else {},
        )


class MalformedReportError(ReportError):
    """The report did not decode even after boundary repair."""

    @classmethod
    def create(cls, reason: str, source: str | None = None) -> "MalformedReportError":
        details: dict[str, Any] = {"reason": reason}
        if source:
            details["source"] = source
        return cls(
            code=ErrorCode.REPORT_MALFORMED,
            message=f"JSON report could not be decoded: {reason}",
            details=details,
        )


class CoverageError(UnitNormError):
    """Errors reading the Clover coverage document."""


class EmptyCoverageError(CoverageError):
    """The coverage buffer was empty."""

    @classmethod
    def create(cls, source: str | None = None) -> "EmptyCoverageError":
        return cls(
            code=ErrorCode.COVERAGE_EMPTY,
            message=f"Clover coverage XML report is empty, {_RERUN_HINT}",
            retryable=True,
            details={"source": source} if source else {},
        )


class CoverageParseError(CoverageError):
    """Invalid XML, or coverage data inconsistent with the source files."""

    @classmethod
    def invalid_xml(cls, reason: str) -> "CoverageParseError":
        return cls(
            code=ErrorCode.COVERAGE_PARSE_ERROR,
            message=f"Invalid Clover XML: {reason}",
            details={"reason": reason},
        )

    @classmethod
    def invalid_attribute(cls, path: str, attribute: str, value: str | None) -> "CoverageParseError":
        return cls(
            code=ErrorCode.COVERAGE_PARSE_ERROR,
            message=f"Invalid '{attribute}' attribute {value!r} in coverage for {path}",
            details={"path": path, "attribute": attribute, "value": value},
        )

    @classmethod
    def line_out_of_range(cls, path: str, line: int, line_count: int) -> "CoverageParseError":
        return cls(
            code=ErrorCode.COVERAGE_PARSE_ERROR,
            message=(
                f"Coverage reports line {line} for {path}, "
                f"but the file only has {line_count} lines (stale report?)"
            ),
            details={"path": path, "line": line, "line_count": line_count},
        )


class ConfigError(UnitNormError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

