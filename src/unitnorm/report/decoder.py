"""Decoder for the runner's JSON event log.

The runner logs one JSON object per event, back to back, with neither
separating commas nor an enclosing array:

    {"event":"suiteStart",...}{"event":"test",...}{"event":"test",...}

Pretty-printed logs put whitespace and newlines between the objects.
The buffer is repaired by inserting a comma at each object boundary
(a closing brace followed by an opening brace and a quoted key) and
wrapping the result in brackets, then parsed as a single JSON array.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

from unitnorm.core.errors import EmptyReportError, MalformedReportError
from unitnorm.core.logging import get_logger
from unitnorm.report.models import (
    EventKind,
    EventOutcome,
    ParseOptions,
    TestEvent,
    TraceFrame,
)

logger = get_logger(__name__)

# String literals are matched first so braces inside them are never touched.
_OBJECT_BOUNDARY = re.compile(r'("(?:[^"\\]|\\.)*")|\}(?=\s*\{\s*")', re.DOTALL)

_EVENT_KINDS = {
    "test": EventKind.TEST,
    "suite": EventKind.SUITE,
    "suiteStart": EventKind.SUITE,
}


def repair(text: str) -> str:
    """Turn concatenated JSON objects into a JSON array literal."""
    return "[" + _OBJECT_BOUNDARY.sub(lambda m: m.group(1) or "},", text) + "]"


def decode(raw: bytes | str, *, options: ParseOptions | None = None) -> list[TestEvent]:
    """Decode a raw event log into the ordered list of test events.

    Args:
        raw: Log contents as emitted by the runner.
        options: Parsing knobs; defaults to ParseOptions().

    Returns:
        TestEvent per ``"event": "test"`` record, in log order.

    Raises:
        EmptyReportError: If the log is empty or whitespace only.
        MalformedReportError: If the log is not valid JSON after repair.
    """
    options = options or ParseOptions()

    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedReportError.create(f"not UTF-8: {e}") from e
    else:
        text = raw.removeprefix("\ufeff")

    if not text.strip():
        raise EmptyReportError.create()

    try:
        records = json.loads(repair(text))
    except json.JSONDecodeError as e:
        raise MalformedReportError.create(str(e)) from e

    events: list[TestEvent] = []
    skipped = 0
    for record in records:
        if not isinstance(record, dict):
            skipped += 1
            continue
        event = record.get("event")
        kind = _EVENT_KINDS.get(event, EventKind.OTHER) if isinstance(event, str) else EventKind.OTHER
        if kind is not EventKind.TEST:
            skipped += 1
            continue
        events.append(_to_event(record, options))

    logger.debug("report_decoded", records=len(records), tests=len(events), skipped=skipped)
    return events


def _to_event(record: dict[str, Any], options: ParseOptions) -> TestEvent:
    outcome = _outcome(record.get("status"), options)
    suite = record.get("suite")

    trace: tuple[TraceFrame, ...] = ()
    if outcome is not EventOutcome.PASS:
        trace = _trace(record.get("trace"))

    return TestEvent(
        event_kind=EventKind.TEST,
        test_identifier=str(record.get("test", "")),
        outcome=outcome,
        suite_identifier=str(suite) if suite is not None else None,
        message=_text(record.get("message")),
        trace=trace,
        duration_seconds=_duration(record.get("time")),
    )


def _outcome(status: Any, options: ParseOptions) -> EventOutcome:
    if status is None or status == options.pass_status:
        return EventOutcome.PASS
    if status == "fail":
        return EventOutcome.FAIL
    if status == "error":
        return EventOutcome.ERROR
    logger.debug("unknown_status_defaulted", status=status)
    return EventOutcome.PASS


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _trace(frames: Any) -> tuple[TraceFrame, ...]:
    if not isinstance(frames, list):
        return ()
    result = []
    for frame in frames:
        if not isinstance(frame, dict):
            continue
        try:
            line = int(frame.get("line") or 0)
        except (TypeError, ValueError):
            line = 0
        result.append(TraceFrame(file=_text(frame.get("file")), line=line))
    return tuple(result)


def _duration(value: Any) -> float:
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(seconds) or seconds < 0:
        return 0.0
    return seconds
