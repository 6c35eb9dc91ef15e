"""Tests for the checksum validators."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from promptfence.validators import iban_checksum_valid, luhn_valid


# ── IBAN mod-97 ──────────────────────────────────────────────────────

@pytest.mark.parametrize("iban", [
    "DE89370400440532013000",
    "DE89 3704 0044 0532 0130 00",
    "de89370400440532013000",
    "GB82WEST12345698765432",
    "FR7630006000011234567890189",
])
def test_iban_valid(iban):
    assert iban_checksum_valid(iban) is True


def test_iban_bad_checksum():
    assert iban_checksum_valid("DE89370400440532013001") is False


def test_iban_bad_check_digits():
    assert iban_checksum_valid("DE00370400440532013000") is False


@pytest.mark.parametrize("value", ["", "DE89", "D" * 40, "1234567890123456", "DE89-3704-0044-0532"])
def test_iban_rejects_malformed(value):
    assert iban_checksum_valid(value) is False


@pytest.mark.parametrize("value", [None, 12345, ["DE89370400440532013000"]])
def test_iban_non_string_is_false(value):
    assert iban_checksum_valid(value) is False


def test_iban_too_long():
    # 35 chars after stripping
    assert iban_checksum_valid("DE89" + "1" * 31) is False


# ── Luhn ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("number", [
    "4111111111111111",
    "4111 1111 1111 1111",
    "4111-1111-1111-1111",
    "4012888888881881",
    "378282246310005",
])
def test_luhn_valid(number):
    assert luhn_valid(number) is True


def test_luhn_bad_check_digit():
    assert luhn_valid("4111111111111112") is False


@pytest.mark.parametrize("value", [
    "411111111111",           # 12 digits
    "79927398713",            # valid Luhn but too short for a card
    "41111111111111111111",   # 20 digits
    "4111a11111111111",
    "",
])
def test_luhn_rejects_malformed(value):
    assert luhn_valid(value) is False


def test_luhn_non_string_is_false():
    assert luhn_valid(None) is False
    assert luhn_valid(4111111111111111) is False
