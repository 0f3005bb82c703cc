"""Decode → synthesize → assemble for one finished runner invocation.

Each call works only on its own buffers and holds no state between calls,
so callers may normalize many invocations concurrently.
"""

from __future__ import annotations

from collections.abc import Container
from dataclasses import dataclass, field
from pathlib import Path

from unitnorm.core.errors import UnitNormError
from unitnorm.core.logging import clear_run_id, get_logger, get_run_id, set_run_id
from unitnorm.coverage.clover import LineCounter, synthesize
from unitnorm.coverage.lines import count_file_lines
from unitnorm.coverage.models import CoverageMap
from unitnorm.report.decoder import decode
from unitnorm.report.models import ParseOptions
from unitnorm.results.assembler import assemble
from unitnorm.results.models import RunSummary, TestResult

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class NormalizationOutcome:
    """Either the results of a run, or the error that made it unusable."""

    results: list[TestResult] = field(default_factory=list)
    error: UnitNormError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def retryable(self) -> bool:
        """True when re-running the test runner may produce usable output."""
        return self.error is not None and self.error.retryable

    @property
    def summary(self) -> RunSummary:
        return RunSummary.of(self.results)


def normalize(
    report: bytes | str,
    coverage: bytes | str | None,
    *,
    files_of_interest: Container[str],
    project_root: str,
    line_counter: LineCounter = count_file_lines,
    options: ParseOptions | None = None,
) -> list[TestResult]:
    """Normalize one runner invocation into TestResults.

    Args:
        report: Raw JSON event log.
        coverage: Raw Clover XML, or None when coverage is disabled.
        files_of_interest: Source path -> test identifier mapping (or any
            container of source paths) selecting the files to cover.
        project_root: Prefix stripped from coverage keys.
        line_counter: Physical line count of a source file.
        options: Runner compatibility knobs.

    Raises:
        EmptyReportError, MalformedReportError: Unusable event log.
        EmptyCoverageError, CoverageParseError: Unusable coverage report.
    """
    owns_run_id = get_run_id() is None
    if owns_run_id:
        set_run_id()
    try:
        events = decode(report, options=options)
        if coverage is None:
            coverage_map = CoverageMap.empty()
        else:
            coverage_map = synthesize(coverage, files_of_interest, project_root, line_counter)
        results = assemble(events, coverage_map, options)
        summary = RunSummary.of(results)
        logger.info(
            "run_normalized",
            total=summary.total,
            passed=summary.passed,
            failed=summary.failed,
            skipped=summary.skipped,
            broken=summary.broken,
            covered_files=len(coverage_map),
        )
        return results
    finally:
        if owns_run_id:
            clear_run_id()


def normalize_files(
    report_path: Path,
    coverage_path: Path | None,
    *,
    files_of_interest: Container[str],
    project_root: str,
    line_counter: LineCounter = count_file_lines,
    options: ParseOptions | None = None,
) -> list[TestResult]:
    """Like normalize(), reading the report and coverage from disk.

    A missing file counts as empty: the runner never got to write it.
    """
    return normalize(
        _read(report_path),
        _read(coverage_path) if coverage_path is not None else None,
        files_of_interest=files_of_interest,
        project_root=project_root,
        line_counter=line_counter,
        options=options,
    )


def try_normalize(
    report: bytes | str,
    coverage: bytes | str | None,
    *,
    files_of_interest: Container[str],
    project_root: str,
    line_counter: LineCounter = count_file_lines,
    options: ParseOptions | None = None,
) -> NormalizationOutcome:
    """normalize() returning a NormalizationOutcome instead of raising."""
    try:
        results = normalize(
            report,
            coverage,
            files_of_interest=files_of_interest,
            project_root=project_root,
            line_counter=line_counter,
            options=options,
        )
    except UnitNormError as e:
        logger.warning("run_unusable", error=e.error_name, retryable=e.retryable)
        return NormalizationOutcome(error=e)
    return NormalizationOutcome(results=results)


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return b""
