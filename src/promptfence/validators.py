"""Checksum validators for the structured identifiers.

Both functions are total: anything that is not a well-formed candidate
returns False instead of raising.
"""

from __future__ import annotations
import re

_IBAN_SHAPE = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]+$")
_WHITESPACE = re.compile(r"\s+")
_CARD_SEPARATORS = re.compile(r"[\s-]+")


def iban_checksum_valid(candidate: object) -> bool:
    """ISO 7064 mod-97 check used by IBANs.

    The country code and check digits are moved to the end, letters are
    expanded to two-digit numbers (A=10 ... Z=35) and the resulting digit
    stream must leave a remainder of 1 when divided by 97.
    """
    if not isinstance(candidate, str) or not candidate:
        return False

    iban = _WHITESPACE.sub("", candidate).upper()
    if not 15 <= len(iban) <= 34:
        return False
    if not _IBAN_SHAPE.match(iban):
        return False

    rearranged = iban[4:] + iban[:4]
    digits = "".join(
        str(ord(ch) - ord("A") + 10) if ch.isalpha() else ch
        for ch in rearranged
    )

    # Digit-wise accumulation keeps the intermediate value below 970
    remainder = 0
    for d in digits:
        remainder = (remainder * 10 + int(d)) % 97
    return remainder == 1


def luhn_valid(candidate: object) -> bool:
    """Luhn check for card numbers of 13-19 digits (spaces/dashes ignored)."""
    if not isinstance(candidate, str):
        return False

    number = _CARD_SEPARATORS.sub("", candidate)
    if not number.isascii() or not number.isdigit():
        return False
    if not 13 <= len(number) <= 19:
        return False

    total = 0
    for i, ch in enumerate(reversed(number)):
        d = int(ch)
        if i % 2 == 1:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return total % 10 == 0
