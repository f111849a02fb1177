"""
Patterns — Matching Rules and the Pattern Parser

A pattern is one requested line rule. Two kinds exist:

  - substring:  "Foo"       any line containing Foo
  - regex:      "/^Fo+$/"   any line the expression searches successfully

Either kind may be negated with a leading "!" ("!Foo", "!/^Fo+$/"),
which turns the presence requirement into an absence requirement.
The raw string is kept verbatim as original_text for reporting.

Usage:
    from linepatterns.patterns import parse_patterns
    patterns = parse_patterns(["Foo", "!/^ERROR/"])
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Sequence

from linepatterns.errors import InputTypeError, PatternCompileError

logger = logging.getLogger(__name__)

# Characters stripped greedily from the front of a substring pattern
_SUBSTRING_PREFIX = "\\/!"


# ============================================================
# PATTERN VARIANTS
# ============================================================

class Pattern(ABC):
    """Capability shared by every pattern kind. Immutable once built."""

    __slots__ = ("_original_text", "_inverse")

    def __init__(self, original_text: str):
        self._original_text = original_text
        self._inverse = original_text.startswith("!")

    @property
    def original_text(self) -> str:
        return self._original_text

    @property
    def inverse(self) -> bool:
        return self._inverse

    @property
    @abstractmethod
    def match_body(self) -> str:
        """The cleaned matching payload, without markers or delimiters."""
        ...

    @abstractmethod
    def match(self, line: str) -> bool:
        """True if the line satisfies the pattern body (ignores inversion)."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._original_text!r})"


class SubstringPattern(Pattern):
    """Plain substring containment."""

    __slots__ = ("_body",)

    def __init__(self, original_text: str):
        super().__init__(original_text)
        self._body = original_text.lstrip(_SUBSTRING_PREFIX)

    @property
    def match_body(self) -> str:
        return self._body

    def match(self, line: str) -> bool:
        return self._body in line


class RegexPattern(Pattern):
    """
    Regular expression searched anywhere in the line.

    Exactly one leading "/" (or "\\") and one trailing "/" are removed
    after the optional "!" before compiling.

    Raises:
        PatternCompileError: the remaining body is not a valid expression.
    """

    __slots__ = ("_regex",)

    def __init__(self, original_text: str):
        super().__init__(original_text)
        body = original_text[1:] if self.inverse else original_text
        if body[:1] in ("/", "\\"):
            body = body[1:]
        if body.endswith("/"):
            body = body[:-1]
        try:
            self._regex = re.compile(body)
        except re.error as e:
            logger.warning(
                "Invalid regex pattern",
                extra={"pattern": original_text, "error": str(e)},
            )
            raise PatternCompileError(original_text, str(e)) from e

    @property
    def match_body(self) -> str:
        return self._regex.pattern

    def match(self, line: str) -> bool:
        return self._regex.search(line) is not None


# ============================================================
# PARSER
# ============================================================

def is_regex_syntax(raw: str) -> bool:
    """True for "/.../" and "!/.../" specifications."""
    return raw.startswith(("/", "!/")) and raw.endswith("/")


def validate_raw_patterns(raw_patterns: object) -> list[str]:
    """
    Check the requested pattern list before anything is parsed or read.

    Raises:
        InputTypeError: the list itself is not a list/tuple, or one of
            its elements is not a string.
    """
    if isinstance(raw_patterns, (str, bytes)) or not isinstance(raw_patterns, (list, tuple)):
        raise InputTypeError(
            f"patterns must be a list of strings, got {type(raw_patterns).__name__}",
            raw_patterns,
        )
    for value in raw_patterns:
        if not isinstance(value, str):
            raise InputTypeError(
                f"patterns must be strings, got {type(value).__name__}: {value!r}",
                value,
            )
    return list(raw_patterns)


def parse_pattern(raw: str) -> Pattern:
    """Build the single pattern described by one raw string."""
    if is_regex_syntax(raw):
        return RegexPattern(raw)
    return SubstringPattern(raw)


def parse_patterns(raw_patterns: Sequence[str]) -> list[Pattern]:
    """
    Convert raw strings into patterns, preserving order and duplicates.

    The whole parse fails on the first invalid regex; no partial
    pattern set is returned.

    Raises:
        InputTypeError: see validate_raw_patterns.
        PatternCompileError: a /regex/ body did not compile.
    """
    return [parse_pattern(raw) for raw in validate_raw_patterns(raw_patterns)]
