"""
Result Reducer — Verdict and Missing Patterns

Compares what was requested against what the scan satisfied and
reports the requested strings left unsatisfied, by their original text.

Two strategies for computing the missing list:

  - paired:      each satisfied pattern accounts for exactly one
                 requested entry with the same text
  - membership:  a requested entry is dropped if any satisfied pattern
                 has the same text (duplicates collapse together)

Patterns with the same text always resolve the same way within one
scan, so the two strategies only differ when reduce() is handed a
satisfied list that did not come from a single scan of the request.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

from linepatterns.config import settings
from linepatterns.patterns import Pattern

STRATEGIES = ("paired", "membership")


@dataclass(frozen=True)
class Verdict:
    """Outcome of one match operation."""
    ok: bool
    missing: list[str] = field(default_factory=list)


def subtract_paired(requested: Sequence[str], found: Sequence[str]) -> list[str]:
    """Multiset difference, keeping request order."""
    available = Counter(found)
    missing = []
    for text in requested:
        if available[text] > 0:
            available[text] -= 1
            continue
        missing.append(text)
    return missing


def subtract_membership(requested: Sequence[str], found: Sequence[str]) -> list[str]:
    """Set difference, keeping request order and duplicates."""
    seen = set(found)
    return [text for text in requested if text not in seen]


def reduce(
    requested: Sequence[str],
    satisfied: Sequence[Pattern],
    strategy: Optional[str] = None,
) -> Verdict:
    """
    Build the verdict for a scan.

    ok is a count comparison: every requested pattern must have a
    satisfied counterpart.
    """
    strategy = strategy or settings.REDUCE_STRATEGY
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown reduce strategy: {strategy}")

    if len(requested) == len(satisfied):
        return Verdict(ok=True)

    found = [p.original_text for p in satisfied]
    if strategy == "paired":
        missing = subtract_paired(requested, found)
    else:
        missing = subtract_membership(requested, found)
    return Verdict(ok=False, missing=missing)
