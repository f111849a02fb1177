"""
Scan Engine — Single-Pass Satisfaction

Walks a line source once and resolves every pattern:

  - a plain pattern is satisfied the first time a line matches it
  - a negated pattern is violated the first time a line matches it,
    and satisfied only if the stream ends without any match
  - an empty pattern is satisfied even by an empty stream

The scan stops reading as soon as no pattern is pending. Once a
pattern leaves the pending set its resolution is final.
"""

from __future__ import annotations

import enum
import logging
from typing import Optional, Sequence

from linepatterns.patterns import Pattern
from linepatterns.source import LineReader

logger = logging.getLogger(__name__)


class Resolution(enum.Enum):
    """Where a pattern stands within one scan."""
    PENDING = "pending"
    SATISFIED_PRESENT = "satisfied_present"    # required and seen
    SATISFIED_ABSENT = "satisfied_absent"      # forbidden and never seen
    VIOLATED = "violated"                      # forbidden but seen

    @property
    def satisfied(self) -> bool:
        return self in (Resolution.SATISFIED_PRESENT, Resolution.SATISFIED_ABSENT)


class ScanState:
    """
    The pending/satisfied partition for one scan.

    Resolutions are indexed by position in the pattern set, so duplicate
    patterns resolve independently.
    """

    def __init__(self, patterns: Sequence[Pattern]):
        self.patterns = list(patterns)
        self.resolutions = [Resolution.PENDING] * len(self.patterns)
        self.pending: list[int] = list(range(len(self.patterns)))
        self.satisfied: list[int] = []

    def resolve(self, index: int, resolution: Resolution) -> None:
        """Move one pending pattern to its final resolution."""
        if self.resolutions[index] is not Resolution.PENDING:
            raise ValueError(f"pattern {index} already resolved as {self.resolutions[index].value}")
        if resolution is Resolution.PENDING:
            raise ValueError("cannot resolve a pattern back to pending")
        self.resolutions[index] = resolution
        if resolution.satisfied:
            self.satisfied.append(index)

    def feed(self, line: str) -> None:
        """Test every pending pattern against one line."""
        still_pending = []
        for index in self.pending:
            pattern = self.patterns[index]
            if pattern.match(line):
                # Seen, but a negated pattern wanted it absent
                if pattern.inverse:
                    self.resolve(index, Resolution.VIOLATED)
                else:
                    self.resolve(index, Resolution.SATISFIED_PRESENT)
                continue
            still_pending.append(index)
        self.pending = still_pending

    def finish(self) -> None:
        """End-of-stream pass over whatever is still pending."""
        for index in self.pending:
            pattern = self.patterns[index]
            if pattern.inverse:
                self.resolve(index, Resolution.SATISFIED_ABSENT)
            elif pattern.match_body == "":
                self.resolve(index, Resolution.SATISFIED_PRESENT)
        self.pending = [i for i in self.pending if self.resolutions[i] is Resolution.PENDING]

    @property
    def done(self) -> bool:
        return not self.pending

    def satisfied_patterns(self) -> list[Pattern]:
        return [self.patterns[i] for i in self.satisfied]


class Scanner:
    """
    Runs one scan and keeps its state around for inspection.

    Usage:
        scanner = Scanner(patterns)
        satisfied = scanner.run(fh)
        scanner.resolutions  # per-pattern outcome
    """

    def __init__(self, patterns: Sequence[Pattern], max_line_size: Optional[int] = None):
        self.state = ScanState(patterns)
        self.max_line_size = max_line_size
        self.lines_scanned = 0
        self.short_circuited = False

    @property
    def resolutions(self) -> list[Resolution]:
        return list(self.state.resolutions)

    def run(self, lines: object) -> list[Pattern]:
        """
        Consume lines until every pattern is resolved or the source ends.

        Anything other than a LineReader is wrapped in one bounded by
        max_line_size (configured default when None).

        The source is closed on every exit path once reading starts.
        Errors raised while producing lines propagate unchanged.
        """
        state = self.state
        if state.done:
            return []

        if not isinstance(lines, LineReader):
            lines = LineReader(lines, max_line_size=self.max_line_size)

        logger.debug("Scan started", extra={"patterns_count": len(state.patterns)})
        try:
            for line in lines:
                self.lines_scanned += 1
                state.feed(line)
                if state.done:
                    self.short_circuited = True
                    break
            else:
                state.finish()
        finally:
            lines.close()

        logger.debug(
            "Scan finished",
            extra={
                "patterns_count": len(state.patterns),
                "satisfied_count": len(state.satisfied),
                "lines_scanned": self.lines_scanned,
                "short_circuit": self.short_circuited,
            },
        )
        return state.satisfied_patterns()


def scan(
    patterns: Sequence[Pattern],
    lines: object,
    max_line_size: Optional[int] = None,
) -> list[Pattern]:
    """
    Return the patterns whose requirement the line stream satisfies.

    An empty pattern set returns immediately without touching lines.
    """
    return Scanner(patterns, max_line_size=max_line_size).run(lines)
