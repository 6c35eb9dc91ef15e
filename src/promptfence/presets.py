"""Preset registry — named, immutable policy templates.

A preset maps every DataType to an ActionLevel and carries UI copy that the
engine passes through untouched.  The ids below are stable: stored
configuration refers to presets by id.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

from .types import ActionLevel, DataType

DEFAULT_PRESET_ID = "personal"

A, W, B = ActionLevel.ALLOW, ActionLevel.WARN, ActionLevel.BLOCK


def make_rules(overrides: Mapping[DataType, ActionLevel] | None = None) -> Mapping[DataType, ActionLevel]:
    """Build a read-only rule map covering every DataType (ALLOW unless overridden)."""
    rules = {t: ActionLevel.ALLOW for t in DataType}
    rules.update(overrides or {})
    return MappingProxyType(rules)


@dataclass(frozen=True)
class Preset:
    id: str
    rules: Mapping[DataType, ActionLevel]
    ui_copy: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Presets built from a plain dict still get a frozen, complete rule map
        object.__setattr__(self, "rules", make_rules(self.rules))

    def action_for(self, data_type: DataType) -> ActionLevel:
        return self.rules.get(data_type, ActionLevel.ALLOW)

    def with_rules(self, overrides: Mapping[DataType, ActionLevel]) -> Preset:
        """Return a copy with per-type overrides applied.  self is untouched."""
        return replace(self, rules=make_rules({**self.rules, **overrides}))


def _copy(description: str, guidance: str, warn: str, block: str) -> Mapping[str, Any]:
    return MappingProxyType({
        "description": description,
        "guidance": guidance,
        "modal": MappingProxyType({
            "warn": MappingProxyType({"title": "Sensitive data detected", "body": warn}),
            "block": MappingProxyType({"title": "Paste blocked", "body": block}),
        }),
    })


_PRESET_LIST = [
    Preset(
        id="personal",
        rules=make_rules({
            DataType.EMAIL: W, DataType.PHONE: W, DataType.IBAN: W,
            DataType.CREDIT_CARD: W, DataType.ADDRESS: A, DataType.PASSWORD: W,
        }),
        ui_copy=_copy(
            "Everyday protection: warns before personal contact or payment "
            "details are pasted into an AI chat.",
            "Consider replacing personal details with placeholders.",
            "This text contains personal information. Paste anyway?",
            "This text contains personal information and cannot be pasted.",
        ),
    ),
    Preset(
        id="finance",
        rules=make_rules({
            DataType.EMAIL: W, DataType.PHONE: W, DataType.IBAN: B,
            DataType.CREDIT_CARD: B, DataType.ADDRESS: W, DataType.PASSWORD: B,
        }),
        ui_copy=_copy(
            "For finance teams: blocks bank accounts, card numbers and "
            "credentials; warns on contact details.",
            "Never share account or card numbers with AI tools. Anonymize first.",
            "This text contains customer contact details. Paste anyway?",
            "Bank or card details detected. Anonymize before pasting.",
        ),
    ),
    Preset(
        id="health",
        rules=make_rules({
            DataType.EMAIL: W, DataType.PHONE: W, DataType.IBAN: W,
            DataType.CREDIT_CARD: W, DataType.ADDRESS: B, DataType.PASSWORD: W,
        }),
        ui_copy=_copy(
            "For clinical settings: blocks patient addresses and warns on "
            "other identifiers.",
            "Remove patient identifiers before asking an AI assistant.",
            "This text may identify a patient. Paste anyway?",
            "Patient address detected. Anonymize before pasting.",
        ),
    ),
    Preset(
        id="workplace",
        rules=make_rules({
            DataType.EMAIL: W, DataType.PHONE: W, DataType.IBAN: B,
            DataType.CREDIT_CARD: B, DataType.ADDRESS: W, DataType.PASSWORD: B,
        }),
        ui_copy=_copy(
            "General company policy: blocks financial data and credentials, "
            "warns on personal contact details.",
            "Check your company's AI usage policy before sharing this.",
            "This text contains colleague or customer details. Paste anyway?",
            "Company policy does not allow pasting this data into AI tools.",
        ),
    ),
    Preset(
        id="developer",
        rules=make_rules({
            DataType.EMAIL: A, DataType.PHONE: A, DataType.IBAN: W,
            DataType.CREDIT_CARD: W, DataType.ADDRESS: A, DataType.PASSWORD: B,
        }),
        ui_copy=_copy(
            "For engineers: blocks secrets and API keys, stays quiet about "
            "contact details in logs and stack traces.",
            "Rotate any credential that was pasted into a third-party tool.",
            "This text contains payment data. Paste anyway?",
            "Secret or API key detected. Remove it before pasting.",
        ),
    ),
]

PRESETS: Mapping[str, Preset] = MappingProxyType({p.id: p for p in _PRESET_LIST})


def get_preset(preset_id: str | None = None) -> Preset:
    """Look up a preset by id, falling back to the default preset."""
    return PRESETS.get(preset_id or DEFAULT_PRESET_ID, PRESETS[DEFAULT_PRESET_ID])
