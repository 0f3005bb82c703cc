"""Normalized test results."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from unitnorm.coverage.models import CoverageMap


class ResultStatus(Enum):
    """Final status of one test."""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    BROKEN = "broken"


@dataclass(frozen=True, slots=True)
class TestResult:
    """Result of one test, as handed to the orchestrator.

    ``coverage`` covers the whole runner invocation, not just this test,
    and is the same object for every result of that invocation.
    """

    __test__ = False

    name: str
    status: ResultStatus
    duration_seconds: float
    coverage: CoverageMap
    diagnostic: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "duration_seconds": self.duration_seconds,
            "coverage": self.coverage.to_dict(),
            "diagnostic": self.diagnostic,
        }


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Aggregate counts over the results of one run."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    broken: int = 0
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.failed == 0 and self.broken == 0

    @classmethod
    def of(cls, results: Iterable[TestResult]) -> RunSummary:
        results = list(results)
        return cls(
            total=len(results),
            passed=sum(1 for r in results if r.status is ResultStatus.PASS),
            failed=sum(1 for r in results if r.status is ResultStatus.FAIL),
            skipped=sum(1 for r in results if r.status is ResultStatus.SKIP),
            broken=sum(1 for r in results if r.status is ResultStatus.BROKEN),
            duration_seconds=sum(r.duration_seconds for r in results),
        )
