"""
HavePatterns Matcher — Assertion Entry Point

Ties the pieces together for an assertion framework:

  raw strings → parse_patterns → Scanner over LineReader → reduce → Verdict

The matcher answers "does this text contain all these patterns?",
remembers which requested patterns were missing, and renders the
failure report the framework displays.

Usage:
    from linepatterns import have_patterns
    matcher = have_patterns(["Listening on :8080", "!/panic|fatal/"])
    with open("service.log", "rb") as fh:
        if not matcher.match(fh):
            print(matcher.failure_message(fh))
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from linepatterns.engine import Scanner
from linepatterns.errors import InputTypeError
from linepatterns.patterns import parse_patterns, validate_raw_patterns
from linepatterns.reducer import Verdict, reduce
from linepatterns.schemas.patterns import HavePatternsRequest, MatcherResult
from linepatterns.source import LineReader

logger = logging.getLogger(__name__)


def match_lines(
    raw_patterns,
    source: object,
    max_line_size: Optional[int] = None,
    encoding: Optional[str] = None,
    strategy: Optional[str] = None,
) -> Verdict:
    """
    Check a text source against raw pattern strings in one pass.

    The source is never touched when there are no patterns. Otherwise
    it is closed before this returns or raises.

    Raises:
        InputTypeError: raw_patterns is not a list of strings.
        PatternCompileError: a /regex/ pattern is invalid.
        SourceUnavailableError: source is not readable line by line.
        LineTooLongError: a line exceeded max_line_size.
        OSError: the source failed while being read.
    """
    requested = validate_raw_patterns(raw_patterns)
    patterns = parse_patterns(requested)
    if not patterns:
        return Verdict(ok=True)

    lines = LineReader(source, max_line_size=max_line_size, encoding=encoding)
    scanner = Scanner(patterns)
    satisfied = scanner.run(lines)
    verdict = reduce(requested, satisfied, strategy=strategy)

    if not verdict.ok:
        logger.info(
            "Patterns not satisfied",
            extra={
                "patterns_count": len(requested),
                "satisfied_count": len(satisfied),
                "missing_count": len(verdict.missing),
                "lines_scanned": scanner.lines_scanned,
            },
        )
    return verdict


class HavePatternsMatcher:
    """Succeeds if the text read from `actual` satisfies every pattern."""

    def __init__(
        self,
        elements,
        max_line_size: Optional[int] = None,
        encoding: Optional[str] = None,
        strategy: Optional[str] = None,
    ):
        self.elements = elements
        self.max_line_size = max_line_size
        self.encoding = encoding
        self.strategy = strategy
        self.missing_elements: list[str] = []

    def match(self, actual: object) -> bool:
        self.missing_elements = []
        verdict = match_lines(
            self.elements,
            actual,
            max_line_size=self.max_line_size,
            encoding=self.encoding,
            strategy=self.strategy,
        )
        self.missing_elements = list(verdict.missing)
        return verdict.ok

    # --- Reporting ---

    def failure_result(self, actual: object) -> MatcherResult:
        return MatcherResult(
            actual=f"object: {type(actual).__name__}",
            message="to contain patterns",
            expected=self._expected(),
            missing_elements=self.missing_elements,
        )

    def negated_failure_result(self, actual: object) -> MatcherResult:
        return MatcherResult(
            actual=f"object: {type(actual).__name__}",
            message="not to contain patterns",
            expected=self._expected(),
        )

    def failure_message(self, actual: object) -> str:
        message = format_message(f"<{type(actual).__name__}>", "to contain elements", self.elements)
        return append_missing_strings(message, self.missing_elements)

    def negated_failure_message(self, actual: object) -> str:
        return format_message(repr(actual), "not to contain elements", self.elements)

    def _expected(self) -> list[str]:
        return [str(e) for e in self.elements] if isinstance(self.elements, (list, tuple)) else [str(self.elements)]

    # --- Serialization ---

    def to_request(self) -> HavePatternsRequest:
        try:
            return HavePatternsRequest.model_validate({"have-patterns": self.elements})
        except ValidationError as e:
            raise InputTypeError(
                f"patterns must be a list of strings: {e.errors()[0]['msg']}",
                self.elements,
            ) from e

    def to_json(self) -> str:
        """{"have-patterns": [...]} projection for diagnostics."""
        return self.to_request().model_dump_json(by_alias=True)

    def __str__(self) -> str:
        return f"HavePatterns({self.to_json()})"


def have_patterns(elements, **kwargs) -> HavePatternsMatcher:
    """Build a matcher for the given raw pattern strings."""
    return HavePatternsMatcher(elements, **kwargs)


# ============================================================
# MESSAGE FORMATTING
# ============================================================

_INDENT = "    "


def format_object(value: object, indentation: int = 0) -> str:
    """Render a value on its own indented line(s) for a failure message."""
    pad = _INDENT * indentation
    if isinstance(value, (list, tuple)):
        if not value:
            return f"{pad}[]"
        items = ",\n".join(f"{pad}{_INDENT}{item!r}" for item in value)
        return f"{pad}[\n{items},\n{pad}]"
    return f"{pad}{value!r}" if not isinstance(value, str) else f"{pad}{value}"


def format_message(actual: str, message: str, expected: object) -> str:
    return f"Expected\n{_INDENT}{actual}\n{message}\n{format_object(expected, 1)}"


def append_missing_strings(message: str, missing_elements: list[str]) -> str:
    if not missing_elements:
        return message
    return f"{message}\nthe missing elements were\n{format_object(missing_elements, 1)}"
