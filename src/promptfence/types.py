"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntEnum


class DataType(str, Enum):
    """Closed set of sensitive data categories the detectors know about."""
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    IBAN = "IBAN"
    CREDIT_CARD = "CREDIT_CARD"
    ADDRESS = "ADDRESS"
    PASSWORD = "PASSWORD"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def placeholder(self) -> str:
        return f"[{self.value}]"

    @property
    def checksum_validated(self) -> bool:
        """True when candidates must pass a checksum, not just a pattern."""
        return self in (DataType.IBAN, DataType.CREDIT_CARD)

    @classmethod
    def parse(cls, value: object) -> DataType | None:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return None


_LABELS = {
    DataType.EMAIL: "Email Address",
    DataType.PHONE: "Phone Number",
    DataType.IBAN: "Bank Account (IBAN)",
    DataType.CREDIT_CARD: "Credit Card",
    DataType.ADDRESS: "Physical Address",
    DataType.PASSWORD: "Password/API Key",
}


class ActionLevel(IntEnum):
    """Enforcement action, ordered ALLOW < WARN < BLOCK."""
    ALLOW = 0
    WARN = 1
    BLOCK = 2

    @classmethod
    def parse(cls, value: object) -> ActionLevel:
        """Map a stored action string to a level.  Anything unknown is ALLOW."""
        if isinstance(value, cls):
            return value
        return cls.__members__.get(str(value).upper(), cls.ALLOW)


@dataclass(frozen=True, slots=True)
class Match:
    """A single detected span, half-open [start, end) over the scanned text."""
    type: DataType
    start: int
    end: int
    text: str

    @property
    def validated(self) -> bool:
        return self.type.checksum_validated


@dataclass(frozen=True, slots=True)
class Decision:
    """Outcome of evaluating detected types against a policy."""
    action: ActionLevel
    triggering_types: frozenset[DataType] = field(default_factory=frozenset)

    @property
    def types(self) -> list[DataType]:
        """Triggering types in declaration order (stable for output)."""
        return [t for t in DataType if t in self.triggering_types]

    def to_dict(self) -> dict:
        return {
            "action": self.action.name,
            "types": [t.value for t in self.types],
        }
