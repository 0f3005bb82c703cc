"""Tests for the runner event log decoder."""

import json

import pytest

from unitnorm.core.errors import EmptyReportError, ErrorCode, MalformedReportError
from unitnorm.report import (
    EventKind,
    EventOutcome,
    ParseOptions,
    TraceFrame,
    decode,
    repair,
)


def _concat(*records: dict, sep: str = "") -> str:
    return sep.join(json.dumps(r) for r in records)


def _test(name: str, **fields: object) -> dict:
    return {"event": "test", "suite": "FooTest", "test": name, "time": 0.01, **fields}


# =============================================================================
# Boundary repair
# =============================================================================


class TestRepair:
    """Tests for repair()."""

    def test_inserts_comma_between_adjacent_objects(self) -> None:
        assert repair('{"a":1}{"b":2}') == '[{"a":1},{"b":2}]'

    def test_preserves_whitespace_across_boundary(self) -> None:
        assert repair('{"a":1}\n{\n  "b":2}') == '[{"a":1},\n{\n  "b":2}]'

    def test_single_object_is_wrapped(self) -> None:
        assert repair('{"a":1}') == '[{"a":1}]'

    def test_nested_closing_braces(self) -> None:
        repaired = repair('{"a":{"x":1}}{"b":2}')
        assert json.loads(repaired) == [{"a": {"x": 1}}, {"b": 2}]

    def test_braces_inside_string_values_untouched(self) -> None:
        text = r'{"m":"expected }{\"k\" here"}{"b":2}'
        assert repair(text) == r'[{"m":"expected }{\"k\" here"},{"b":2}]'


# =============================================================================
# Failure modes
# =============================================================================


class TestDecodeErrors:
    """Tests for fatal decode conditions."""

    @pytest.mark.parametrize("raw", ["", "   ", "\n\t \n", b"", b"  \n"])
    def test_empty_report(self, raw: str | bytes) -> None:
        with pytest.raises(EmptyReportError) as exc_info:
            decode(raw)
        assert exc_info.value.code == ErrorCode.REPORT_EMPTY
        assert exc_info.value.retryable is True
        assert "runner" in exc_info.value.message

    @pytest.mark.parametrize("raw", ["{not json", '{"event":"test"', "}{", "[1,"])
    def test_malformed_report(self, raw: str) -> None:
        with pytest.raises(MalformedReportError) as exc_info:
            decode(raw)
        assert exc_info.value.code == ErrorCode.REPORT_MALFORMED
        assert exc_info.value.retryable is False

    def test_invalid_utf8_is_malformed(self) -> None:
        with pytest.raises(MalformedReportError):
            decode(b'{"event":"test","test":"\xff"}')


# =============================================================================
# Event retention and ordering
# =============================================================================


class TestDecodeEvents:
    """Tests for retained events."""

    def test_n_concatenated_tests_yield_n_events(self) -> None:
        records = [_test(f"FooTest::test{i}") for i in range(5)]

        events = decode(_concat(*records))

        assert [e.test_identifier for e in events] == [f"FooTest::test{i}" for i in range(5)]
        assert all(e.event_kind is EventKind.TEST for e in events)

    def test_pretty_printed_stream(self) -> None:
        raw = "\n".join(json.dumps(r, indent=4) for r in [_test("FooTest::a"), _test("FooTest::b")])

        events = decode(raw)

        assert [e.test_identifier for e in events] == ["FooTest::a", "FooTest::b"]

    def test_non_test_events_do_not_change_count_or_order(self) -> None:
        raw = _concat(
            {"event": "suiteStart", "suite": "FooTest", "tests": 2},
            _test("FooTest::a"),
            {"event": "testStart", "suite": "FooTest", "test": "FooTest::b"},
            _test("FooTest::b"),
            {"event": "somethingNew"},
        )

        events = decode(raw)

        assert [e.test_identifier for e in events] == ["FooTest::a", "FooTest::b"]

    def test_stream_without_tests_is_empty_list(self) -> None:
        assert decode('{"event":"suiteStart","suite":"FooTest","tests":0}') == []

    def test_bytes_input(self) -> None:
        events = decode(_concat(_test("FooTest::a")).encode("utf-8"))
        assert len(events) == 1

    def test_bom_prefixed_bytes(self) -> None:
        raw = b"\xef\xbb\xbf" + _concat(_test("FooTest::a")).encode("utf-8")
        (event,) = decode(raw)
        assert event.test_identifier == "FooTest::a"

    def test_bom_prefixed_text(self) -> None:
        (event,) = decode("\ufeff" + _concat(_test("FooTest::a")))
        assert event.test_identifier == "FooTest::a"

    def test_message_with_braces_survives_verbatim(self) -> None:
        message = 'expected }{ and a } {"b" in output'
        record = _test("FooTest::a", status="fail", message=message)

        (event,) = decode(_concat(record, _test("FooTest::b")))

        assert event.message == message


# =============================================================================
# Outcome and field mapping
# =============================================================================


class TestDecodeFields:
    """Tests for per-event field mapping."""

    def test_absent_status_is_pass(self) -> None:
        (event,) = decode(_concat(_test("FooTest::a")))
        assert event.outcome is EventOutcome.PASS
        assert event.trace == ()

    def test_pass_status(self) -> None:
        (event,) = decode(_concat(_test("FooTest::a", status="pass", message="")))
        assert event.outcome is EventOutcome.PASS

    def test_custom_pass_status(self) -> None:
        (event,) = decode(
            _concat(_test("FooTest::a", status="ok")),
            options=ParseOptions(pass_status="ok"),
        )
        assert event.outcome is EventOutcome.PASS

    def test_fail_keeps_message_and_trace(self) -> None:
        record = _test(
            "FooTest::a",
            status="fail",
            message="boom",
            trace=[{"file": "/p/FooTest.php", "line": 12}, {"file": "/p/Foo.php", "line": 3}],
        )

        (event,) = decode(_concat(record))

        assert event.outcome is EventOutcome.FAIL
        assert event.message == "boom"
        assert event.trace == (TraceFrame("/p/FooTest.php", 12), TraceFrame("/p/Foo.php", 3))
        assert event.suite_identifier == "FooTest"
        assert event.duration_seconds == 0.01

    def test_error_keeps_message_and_trace(self) -> None:
        record = _test("FooTest::a", status="error", message="Skipped Test", trace=[])

        (event,) = decode(_concat(record))

        assert event.outcome is EventOutcome.ERROR
        assert event.message == "Skipped Test"

    def test_unknown_status_defaults_to_pass(self) -> None:
        (event,) = decode(_concat(_test("FooTest::a", status="risky", message="x")))
        assert event.outcome is EventOutcome.PASS

    def test_malformed_trace_entries_are_skipped(self) -> None:
        record = _test(
            "FooTest::a",
            status="fail",
            message="boom",
            trace=["junk", {"file": "/p/A.php"}, {"file": "/p/B.php", "line": "7"}],
        )

        (event,) = decode(_concat(record))

        assert event.trace == (TraceFrame("/p/A.php", 0), TraceFrame("/p/B.php", 7))

    @pytest.mark.parametrize(("time", "expected"), [(None, 0.0), ("abc", 0.0), (-1, 0.0), (2.5, 2.5)])
    def test_duration_normalization(self, time: object, expected: float) -> None:
        record = _test("FooTest::a")
        record["time"] = time

        (event,) = decode(_concat(record))

        assert event.duration_seconds == expected

    def test_missing_suite(self) -> None:
        (event,) = decode('{"event":"test","test":"a","time":0}')
        assert event.suite_identifier is None
