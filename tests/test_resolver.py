"""Tests for the match resolver."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from promptfence.types import DataType, Match
from promptfence.resolver import resolve
from promptfence.patterns import scan


def _m(t, start, end):
    return Match(type=t, start=start, end=end, text="x" * (end - start))


E, P, W = DataType.EMAIL, DataType.PHONE, DataType.PASSWORD


def test_empty():
    assert resolve([]) == []


def test_single():
    m = _m(E, 3, 9)
    assert resolve([m]) == [m]


def test_disjoint_are_sorted():
    a, b = _m(E, 10, 15), _m(P, 0, 5)
    assert resolve([a, b]) == [b, a]


def test_adjacent_both_kept():
    a, b = _m(E, 0, 5), _m(P, 5, 10)
    assert resolve([a, b]) == [a, b]


def test_earlier_start_wins():
    a, b = _m(P, 0, 10), _m(E, 5, 15)
    assert resolve([b, a]) == [a]


def test_earlier_start_wins_even_if_shorter():
    a, b = _m(W, 0, 3), _m(E, 1, 20)
    assert resolve([a, b]) == [a]


def test_nested_dropped():
    outer, inner = _m(P, 0, 10), _m(E, 2, 4)
    assert resolve([inner, outer]) == [outer]


def test_tie_keeps_emission_order():
    first, second = _m(E, 0, 5), _m(P, 0, 8)
    assert resolve([first, second]) == [first]
    assert resolve([second, first]) == [second]


def test_degenerate_spans_skipped():
    good = _m(E, 4, 8)
    assert resolve([Match(P, 2, 2, ""), good]) == [good]


def test_password_heuristic_beats_later_email():
    text = "password=me@example.com"
    resolved = resolve(scan(text))
    assert [m.type for m in resolved] == [DataType.PASSWORD]
    assert resolved[0].end == len(text)
