"""Match resolver — collapses candidates from every detector into one
sorted, non-overlapping span list.

Candidates are ordered by start offset; ties keep emission order, which is
the detector order EMAIL → PHONE → IBAN → CREDIT_CARD → ADDRESS → PASSWORD.
The sweep is first-match-wins: an accepted span suppresses every later
candidate that overlaps it, whatever its type.
"""

from __future__ import annotations
from typing import Iterable

from .types import Match


def resolve(candidates: Iterable[Match]) -> list[Match]:
    """Return the sorted, pairwise non-overlapping subset of candidates."""
    # sorted() is stable, so equal starts stay in emission order
    ordered = sorted(candidates, key=lambda m: m.start)

    resolved: list[Match] = []
    last_end = -1
    for m in ordered:
        if m.end <= m.start:
            continue
        if m.start >= last_end:
            resolved.append(m)
            last_end = m.end
    return resolved
