"""Result assembly."""

from unitnorm.results.assembler import assemble, classify, diagnostic, display_name
from unitnorm.results.models import ResultStatus, RunSummary, TestResult

__all__ = [
    "ResultStatus",
    "RunSummary",
    "TestResult",
    "assemble",
    "classify",
    "diagnostic",
    "display_name",
]
