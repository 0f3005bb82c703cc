"""unitnorm - normalize test runner event logs and Clover coverage into test results."""

from unitnorm.core.errors import (
    CoverageParseError,
    EmptyCoverageError,
    EmptyReportError,
    MalformedReportError,
    UnitNormError,
)
from unitnorm.coverage import CoverageMap, synthesize
from unitnorm.pipeline import NormalizationOutcome, normalize, normalize_files, try_normalize
from unitnorm.report import ErrorMatch, NameStrategy, ParseOptions, TestEvent, decode
from unitnorm.results import ResultStatus, RunSummary, TestResult, assemble

__version__ = "0.1.0"

__all__ = [
    "CoverageMap",
    "CoverageParseError",
    "EmptyCoverageError",
    "EmptyReportError",
    "ErrorMatch",
    "MalformedReportError",
    "NameStrategy",
    "NormalizationOutcome",
    "ParseOptions",
    "ResultStatus",
    "RunSummary",
    "TestEvent",
    "TestResult",
    "UnitNormError",
    "assemble",
    "decode",
    "normalize",
    "normalize_files",
    "synthesize",
    "try_normalize",
]
