"""Detectors — one pure function per data type.

Checksum-backed types (IBAN, CREDIT_CARD) filter shape candidates through
a validator.  PHONE uses a digit-count check.  ADDRESS and PASSWORD are
heuristic pattern sets with no secondary validation and will produce false
positives.

Digit classes are ASCII-only: other scripts' digits never count.
"""

from __future__ import annotations
import re
import string
from typing import Callable

from .types import DataType, Match
from .validators import iban_checksum_valid, luhn_valid
from .resolver import resolve

Detector = Callable[[str], list[Match]]

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")

PHONE_CANDIDATE_RE = re.compile(r"\+?\d[\d\s().\-]{6,}\d", re.ASCII)
PHONE_MIN_DIGITS = 8
PHONE_MAX_DIGITS = 15

# 2 letters + 2 check digits + 2-7 groups of 4 + optional trailing partial group
IBAN_CANDIDATE_RE = re.compile(
    r"\b[A-Za-z]{2}[0-9]{2}"
    r"(?:\s?[A-Za-z0-9]{4}){2,7}"
    r"(?:\s?[A-Za-z0-9]{1,4})?\b",
    re.ASCII,
)
# Last group of a candidate, with its separator
_IBAN_TAIL_RE = re.compile(r"\s?[A-Za-z0-9]{1,4}$", re.ASCII)
_WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")

CARD_CANDIDATE_RE = re.compile(r"\b\d{4}(?:[ \-]?\d{4}){2,3}\b", re.ASCII)

_ADDRESS_PATTERNS: list[re.Pattern] = [
    # Street number + 1-3 words + street suffix
    re.compile(
        r"\b\d{1,5}\s+(?:[A-Za-z]+\.?\s+){1,3}"
        r"(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Lane|Ln|Drive|Dr"
        r"|Court|Ct|Way|Place|Pl|Terrace|Close|Crescent)\b\.?",
        re.IGNORECASE | re.ASCII,
    ),
    # US ZIP / ZIP+4
    re.compile(r"\b\d{5}(?:-\d{4})?\b", re.ASCII),
    # UK postcode
    re.compile(r"\b[A-Z]{1,2}\d[A-Z\d]?\s?\d[A-Z]{2}\b", re.ASCII),
]

_PASSWORD_PATTERNS: list[re.Pattern] = [
    # password=..., api_key: ..., token=...
    re.compile(
        r"\b(?:password|passwd|pwd|api[_\-]?key|secret|token)\s*[:=]\s*\S+",
        re.IGNORECASE,
    ),
    # Vendor secret prefixes
    re.compile(
        r"\b(?:sk|pk|rk)[_\-](?:live|test)[_\-][A-Za-z0-9]{8,}"
        r"|\bghp_[A-Za-z0-9]{20,}"
        r"|\bAKIA[0-9A-Z]{16}\b"
    ),
    # One-time codes
    re.compile(r"\b\d{6}\b", re.ASCII),
    # Long opaque tokens
    re.compile(r"\b[A-Za-z0-9]{32,}\b", re.ASCII),
]


def _usable(text: object) -> bool:
    return isinstance(text, str) and bool(text)


def _span(data_type: DataType, m: re.Match) -> Match:
    return Match(type=data_type, start=m.start(), end=m.end(), text=m.group())


def _scan_any(data_type: DataType, patterns: list[re.Pattern], text: str) -> list[Match]:
    """OR of several patterns, reduced to non-overlapping spans."""
    found = [_span(data_type, m) for p in patterns for m in p.finditer(text)]
    return resolve(found)


def detect_email(text: str) -> list[Match]:
    if not _usable(text):
        return []
    return [_span(DataType.EMAIL, m) for m in EMAIL_RE.finditer(text)]


def detect_phone(text: str) -> list[Match]:
    if not _usable(text):
        return []
    matches: list[Match] = []
    for m in PHONE_CANDIDATE_RE.finditer(text):
        digits = sum(ch in string.digits for ch in m.group())
        if PHONE_MIN_DIGITS <= digits <= PHONE_MAX_DIGITS:
            matches.append(_span(DataType.PHONE, m))
    return matches


def _iban_match(text: str, m: re.Match) -> Match | None:
    """Validate a candidate, dropping trailing groups until one passes.

    The optional partial group can swallow the following word ("... 3201
    please"), so a failed candidate is retried shorter.  A shortened span
    is only accepted where it ends on a word boundary.
    """
    candidate = m.group()
    while candidate:
        end = m.start() + len(candidate)
        at_boundary = end == len(text) or text[end] not in _WORD_CHARS
        if at_boundary and iban_checksum_valid(candidate):
            return Match(type=DataType.IBAN, start=m.start(), end=end, text=candidate)
        shorter = _IBAN_TAIL_RE.sub("", candidate, count=1)
        if shorter == candidate:
            break
        candidate = shorter
    return None


def detect_iban(text: str) -> list[Match]:
    if not _usable(text):
        return []
    matches: list[Match] = []
    for m in IBAN_CANDIDATE_RE.finditer(text):
        found = _iban_match(text, m)
        if found is not None:
            matches.append(found)
    return matches


def detect_credit_card(text: str) -> list[Match]:
    if not _usable(text):
        return []
    return [
        _span(DataType.CREDIT_CARD, m)
        for m in CARD_CANDIDATE_RE.finditer(text)
        if luhn_valid(m.group())
    ]


def detect_address(text: str) -> list[Match]:
    if not _usable(text):
        return []
    return _scan_any(DataType.ADDRESS, _ADDRESS_PATTERNS, text)


def detect_password(text: str) -> list[Match]:
    if not _usable(text):
        return []
    return _scan_any(DataType.PASSWORD, _PASSWORD_PATTERNS, text)


# Order matters: it is the tie-break order used by the resolver.
DETECTORS: tuple[tuple[DataType, Detector], ...] = (
    (DataType.EMAIL, detect_email),
    (DataType.PHONE, detect_phone),
    (DataType.IBAN, detect_iban),
    (DataType.CREDIT_CARD, detect_credit_card),
    (DataType.ADDRESS, detect_address),
    (DataType.PASSWORD, detect_password),
)


def scan(text: str) -> list[Match]:
    """Run every detector over text.  Returns raw, possibly overlapping candidates."""
    candidates: list[Match] = []
    for _, detector in DETECTORS:
        candidates.extend(detector(text))
    return candidates
