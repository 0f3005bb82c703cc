"""Assemble decoded events and coverage into normalized results.

The runner reports three different situations on its "error" channel:
skipped tests, incomplete tests, and real errors. Skip markers in the
message tell them apart.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from unitnorm.core.logging import get_logger
from unitnorm.coverage.models import CoverageMap
from unitnorm.report.models import (
    ErrorMatch,
    EventKind,
    EventOutcome,
    NameStrategy,
    ParseOptions,
    TestEvent,
)
from unitnorm.results.models import ResultStatus, TestResult

logger = get_logger(__name__)

_DATA_SET_SUFFIX = re.compile(r" \(.*\)$", re.DOTALL)


def display_name(event: TestEvent, strategy: NameStrategy = NameStrategy.PARENTHESIS) -> str:
    """Derive a test's display name from its reported identifier."""
    identifier = event.test_identifier
    if strategy is NameStrategy.SUITE_PREFIX:
        prefix = f"{event.suite_identifier}::"
        if event.suite_identifier and identifier.startswith(prefix):
            return identifier[len(prefix) :]
        return identifier
    return _DATA_SET_SUFFIX.sub("", identifier)


def is_skip(message: str, options: ParseOptions) -> bool:
    if options.error_match is ErrorMatch.EXACT:
        return message in options.skip_markers
    return any(marker in message for marker in options.skip_markers)


def classify(event: TestEvent, options: ParseOptions | None = None) -> ResultStatus:
    options = options or ParseOptions()
    if event.outcome is EventOutcome.FAIL:
        return ResultStatus.FAIL
    if event.outcome is EventOutcome.ERROR:
        return ResultStatus.SKIP if is_skip(event.message, options) else ResultStatus.BROKEN
    return ResultStatus.PASS


def diagnostic(event: TestEvent, status: ResultStatus) -> str:
    """User-facing detail text: message, then one ``file:line`` per frame."""
    if status is ResultStatus.PASS:
        return ""
    if status is ResultStatus.SKIP:
        return event.message

    text = event.message + "\n" if status is ResultStatus.FAIL else event.message
    return text + "".join(f"\n{frame}" for frame in event.trace)


def assemble(
    events: Iterable[TestEvent],
    coverage: CoverageMap,
    options: ParseOptions | None = None,
) -> list[TestResult]:
    """One TestResult per test event, in event order.

    Every result references ``coverage`` itself; it is never copied.
    """
    options = options or ParseOptions()
    results: list[TestResult] = []

    for event in events:
        if event.event_kind is not EventKind.TEST:
            continue
        status = classify(event, options)
        results.append(
            TestResult(
                name=display_name(event, options.name_strategy),
                status=status,
                duration_seconds=event.duration_seconds,
                coverage=coverage,
                diagnostic=diagnostic(event, status),
            )
        )

    logger.debug("results_assembled", results=len(results))
    return results
