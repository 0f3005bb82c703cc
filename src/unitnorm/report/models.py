"""Report models - decoded runner events and parsing options."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EventKind(Enum):
    """Kind of record in the runner's event stream."""

    TEST = "test"
    SUITE = "suite"
    OTHER = "other"


class EventOutcome(Enum):
    """Raw outcome as reported by the runner, before skip detection."""

    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"


class NameStrategy(Enum):
    """How a display name is derived from the reported test identifier.

    - parenthesis: drop a trailing " (...)" data set suffix
    - suite_prefix: drop a leading "<suite>::" prefix
    """

    PARENTHESIS = "parenthesis"
    SUITE_PREFIX = "suite_prefix"


class ErrorMatch(Enum):
    """How skip markers are matched against an error message.

    Runner versions that decorate the marker (e.g. trailing punctuation)
    only classify correctly with substring matching.
    """

    SUBSTRING = "substring"
    EXACT = "exact"


DEFAULT_SKIP_MARKERS: tuple[str, ...] = ("Skipped Test", "Incomplete Test")


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """Compatibility knobs for runner output quirks."""

    name_strategy: NameStrategy = NameStrategy.PARENTHESIS
    error_match: ErrorMatch = ErrorMatch.SUBSTRING
    skip_markers: tuple[str, ...] = DEFAULT_SKIP_MARKERS
    pass_status: str = "pass"


@dataclass(frozen=True, slots=True)
class TraceFrame:
    """One stack frame attached to a failing test."""

    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True, slots=True)
class TestEvent:
    """One decoded unit of the runner's event stream."""

    __test__ = False

    event_kind: EventKind
    test_identifier: str
    outcome: EventOutcome = EventOutcome.PASS
    suite_identifier: str | None = None
    message: str = ""
    trace: tuple[TraceFrame, ...] = field(default_factory=tuple)
    duration_seconds: float = 0.0
