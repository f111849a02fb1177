"""
linepatterns — Streaming Multi-Pattern Line Matcher

Checks that a line-oriented text stream satisfies a list of pattern
requirements in a single pass, stopping as soon as every pattern is
resolved.

Pattern syntax:
  - "Foo"         some line contains Foo
  - "!Foo"        no line contains Foo
  - "/^Fo+$/"     some line matches the regular expression
  - "!/^Fo+$/"    no line matches the regular expression

Public API:
  - have_patterns:       Build a HavePatternsMatcher for an assertion framework
  - match_lines:         One-shot parse + scan + reduce, returns a Verdict
  - parse_patterns:      Raw strings to Pattern objects
  - scan / Scanner:      Single-pass satisfaction engine
  - reduce / Verdict:    Requested vs. satisfied comparison
  - LineReader:          Bounded line source over readers and iterables

Usage:
    from linepatterns import match_lines
    verdict = match_lines(["ready", "!ERROR"], open("app.log", "rb"))
    verdict.ok, verdict.missing
"""

__version__ = "1.0.0"

from linepatterns.errors import (
    LinePatternsError,
    InputTypeError,
    PatternCompileError,
    SourceUnavailableError,
    LineTooLongError,
    ReadError,
)
from linepatterns.patterns import (
    Pattern,
    SubstringPattern,
    RegexPattern,
    parse_pattern,
    parse_patterns,
)
from linepatterns.source import LineReader
from linepatterns.engine import Resolution, ScanState, Scanner, scan
from linepatterns.reducer import Verdict, reduce
from linepatterns.matcher import HavePatternsMatcher, have_patterns, match_lines

__all__ = [
    "LinePatternsError",
    "InputTypeError",
    "PatternCompileError",
    "SourceUnavailableError",
    "LineTooLongError",
    "ReadError",
    "Pattern",
    "SubstringPattern",
    "RegexPattern",
    "parse_pattern",
    "parse_patterns",
    "LineReader",
    "Resolution",
    "ScanState",
    "Scanner",
    "scan",
    "Verdict",
    "reduce",
    "HavePatternsMatcher",
    "have_patterns",
    "match_lines",
]
