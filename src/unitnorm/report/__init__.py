"""Runner event log decoding."""

from unitnorm.report.decoder import decode, repair
from unitnorm.report.models import (
    DEFAULT_SKIP_MARKERS,
    ErrorMatch,
    EventKind,
    EventOutcome,
    NameStrategy,
    ParseOptions,
    TestEvent,
    TraceFrame,
)

__all__ = [
    "DEFAULT_SKIP_MARKERS",
    "ErrorMatch",
    "EventKind",
    "EventOutcome",
    "NameStrategy",
    "ParseOptions",
    "TestEvent",
    "TraceFrame",
    "decode",
    "repair",
]
