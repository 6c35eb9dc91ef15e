"""Anonymizer — replace resolved spans with their type's placeholder."""

from __future__ import annotations
from typing import Iterable

from .types import Match


def anonymize(original: str, resolved_matches: Iterable[Match]) -> str:
    """Substitute each span of original with its placeholder.

    Spans are applied right-to-left so earlier offsets stay valid.  The
    matches must be resolver output for this same string; overlapping or
    out-of-range spans give an undefined result.
    """
    result = original
    for m in sorted(resolved_matches, key=lambda m: m.start, reverse=True):
        result = result[:m.start] + m.type.placeholder + result[m.end:]
    return result
