"""
End-to-end tests for the HavePatterns matcher: parse, scan, reduce,
and the failure report an assertion framework renders.
"""

import io
import json
from unittest.mock import MagicMock, patch

import pytest

from linepatterns import have_patterns, match_lines, reducer
from linepatterns.errors import (
    InputTypeError,
    LineTooLongError,
    PatternCompileError,
    SourceUnavailableError,
)
from linepatterns.matcher import HavePatternsMatcher, append_missing_strings, format_object


def stream(*lines):
    return io.BytesIO("".join(f"{line}\n" for line in lines).encode())


# ============================================================
# VERDICTS
# ============================================================

class TestMatchLines:

    def test_substring_present(self):
        assert match_lines(["Foo"], stream("abc", "xFoox", "z")).ok is True

    def test_negated_absent(self):
        assert match_lines(["!Bar"], stream("abc", "def")).ok is True

    def test_negated_violated(self):
        verdict = match_lines(["!Bar"], stream("aBarb"))
        assert verdict.ok is False
        assert verdict.missing == ["!Bar"]

    def test_regex(self):
        assert match_lines(["/^[0-9]+$/"], stream("abc", "12345")).ok is True
        verdict = match_lines(["!/^[0-9]+$/"], stream("abc", "12345"))
        assert verdict.ok is False
        assert verdict.missing == ["!/^[0-9]+$/"]

    def test_empty_pattern_on_empty_stream(self):
        assert match_lines([""], io.BytesIO(b"")).ok is True

    def test_mixed_requirements(self):
        verdict = match_lines(
            ["Listening on", "!/panic|fatal/", "ready", "/port=\\d+/"],
            stream("boot", "Listening on :8080 port=8080", "fatal: disk full"),
        )
        assert verdict.ok is False
        assert verdict.missing == ["!/panic|fatal/", "ready"]

    def test_text_stream(self):
        assert match_lines(["two"], io.StringIO("one\ntwo\n")).ok is True

    def test_list_of_lines(self):
        assert match_lines(["two"], ["one", "two"]).ok is True


# ============================================================
# SHORT-CIRCUITS
# ============================================================

class TestShortCircuits:

    def test_empty_patterns_never_touch_source(self):
        source = MagicMock()
        assert match_lines([], source).ok is True
        source.readline.assert_not_called()
        source.close.assert_not_called()

    def test_empty_patterns_accept_any_source(self):
        assert match_lines([], 42).ok is True

    def test_stops_before_failing_read(self):
        source = MagicMock()
        source.readline.side_effect = [b"Foo\n", b"x\n", OSError("disk gone")]
        assert match_lines(["Foo"], source).ok is True
        assert source.readline.call_count == 1
        source.close.assert_called_once_with()


# ============================================================
# ERRORS
# ============================================================

class TestErrors:

    def test_malformed_regex_before_reading(self):
        source = MagicMock()
        with pytest.raises(PatternCompileError):
            match_lines(["ok", "/[/"], source)
        source.readline.assert_not_called()

    def test_input_type_before_reading(self):
        source = MagicMock()
        with pytest.raises(InputTypeError):
            match_lines(["ok", 1], source)
        source.readline.assert_not_called()

    def test_unreadable_source(self):
        with pytest.raises(SourceUnavailableError):
            match_lines(["Foo"], 42)

    def test_read_error_closes_and_propagates(self):
        source = MagicMock()
        source.readline.side_effect = [b"a\n", OSError("disk gone")]
        with pytest.raises(OSError, match="disk gone"):
            match_lines(["Foo"], source)
        source.close.assert_called_once_with()

    def test_non_positive_line_size_rejected(self):
        with pytest.raises(ValueError):
            match_lines(["!ERROR"], io.BytesIO(b"ERROR\n"), max_line_size=-2)

    def test_line_too_long(self):
        fh = io.BytesIO(b"x" * 64 + b"\n")
        with pytest.raises(LineTooLongError):
            match_lines(["Foo"], fh, max_line_size=16)
        assert fh.closed

    def test_source_closed_after_success(self):
        fh = stream("Foo")
        match_lines(["Foo"], fh)
        assert fh.closed


# ============================================================
# MATCHER AND REPORTING
# ============================================================

class TestHavePatternsMatcher:

    def test_match_records_missing(self):
        matcher = have_patterns(["Foo", "Bar", "!Baz"])
        assert matcher.match(stream("Foo", "Baz")) is False
        assert matcher.missing_elements == ["Bar", "!Baz"]

    def test_match_clears_missing(self):
        matcher = have_patterns(["Foo"])
        matcher.match(stream("nope"))
        assert matcher.match(stream("Foo")) is True
        assert matcher.missing_elements == []

    def test_strategy_forwarded_to_reducer(self):
        """Same-text patterns always resolve alike, so strategy only shows up in the reduce call."""
        matcher = HavePatternsMatcher(["!Bar", "!Bar"], strategy="membership")
        with patch("linepatterns.matcher.reduce", wraps=reducer.reduce) as reduce_spy:
            assert matcher.match(stream("Bar")) is False
        assert reduce_spy.call_args.kwargs["strategy"] == "membership"

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValueError):
            HavePatternsMatcher(["Foo"], strategy="fuzzy").match(stream("nope"))

    def test_error_clears_previous_missing(self):
        matcher = have_patterns(["Foo"])
        assert matcher.match(stream("nope")) is False
        assert matcher.missing_elements == ["Foo"]
        with pytest.raises(SourceUnavailableError):
            matcher.match(42)
        assert matcher.missing_elements == []
        assert "missing elements" not in matcher.failure_message(42)
        assert matcher.failure_result(42).missing_elements == []

    def test_failure_result(self):
        fh = stream("Foo")
        matcher = have_patterns(["Foo", "Bar"])
        matcher.match(fh)
        result = matcher.failure_result(fh)
        assert result.actual == "object: BytesIO"
        assert result.message == "to contain patterns"
        assert result.expected == ["Foo", "Bar"]
        assert result.missing_elements == ["Bar"]

    def test_negated_failure_result(self):
        matcher = have_patterns(["Foo"])
        result = matcher.negated_failure_result(io.BytesIO())
        assert result.message == "not to contain patterns"
        assert result.missing_elements is None

    def test_failure_message_lists_missing(self):
        fh = stream("Foo")
        matcher = have_patterns(["Foo", "Bar"])
        matcher.match(fh)
        message = matcher.failure_message(fh)
        assert message.startswith("Expected\n    <BytesIO>\nto contain elements\n")
        assert "the missing elements were" in message
        assert message.endswith("[\n        'Bar',\n    ]")

    def test_failure_message_without_missing(self):
        matcher = have_patterns(["Foo"])
        message = matcher.failure_message(io.BytesIO())
        assert "missing elements" not in message

    def test_negated_failure_message(self):
        matcher = have_patterns(["Foo"])
        message = matcher.negated_failure_message("the text")
        assert "not to contain elements" in message
        assert "'Foo'" in message


class TestSerialization:

    def test_to_json(self):
        matcher = have_patterns(["Foo", "!/Bar/"])
        assert json.loads(matcher.to_json()) == {"have-patterns": ["Foo", "!/Bar/"]}

    def test_to_json_rejects_non_strings(self):
        with pytest.raises(InputTypeError):
            have_patterns(["Foo", 3]).to_json()

    def test_str(self):
        assert str(have_patterns(["a"])) == 'HavePatterns({"have-patterns":["a"]})'


class TestFormatting:

    def test_empty_list(self):
        assert format_object([], 1) == "    []"

    def test_append_nothing(self):
        assert append_missing_strings("msg", []) == "msg"
