"""Scanner — the main API.  Detect, resolve, decide, anonymize.

Usage:
    from promptfence import Scanner, PolicyConfig, get_preset

    scanner = Scanner()                      # reusable, stateless
    policy = PolicyConfig(preset=get_preset("finance"))

    result = scanner.check("Pay DE89370400440532013000", policy)
    result.decision.action                   # ActionLevel.BLOCK
    scanner.anonymize("Pay DE89370400440532013000", result.matches)
                                             # "Pay [IBAN]"
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable

from .anonymizer import anonymize
from .patterns import scan
from .policy import PolicyConfig, evaluate
from .resolver import resolve
from .types import DataType, Decision, Match

logger = logging.getLogger(__name__)


@dataclass
class ScannerConfig:
    """Configuration for the Scanner."""
    use_presidio: bool = False        # enable the NER layer
    language: str = "en"
    score_threshold: float = 0.35     # minimum confidence for Presidio
    custom_scanners: list[Callable[[str], list[Match]]] = field(default_factory=list)


@dataclass(frozen=True)
class ScanResult:
    """Resolved matches for one input plus the policy decision."""
    matches: list[Match]
    decision: Decision

    @property
    def detected_types(self) -> list[DataType]:
        found = {m.type for m in self.matches}
        return [t for t in DataType if t in found]

    def to_dict(self) -> dict:
        # Offsets only; matched text never leaves the process
        return {
            **self.decision.to_dict(),
            "detected": [t.value for t in self.detected_types],
            "matches": [
                {"type": m.type.value, "start": m.start, "end": m.end}
                for m in self.matches
            ],
        }


class Scanner:
    """Sensitive-data scanner.

    Layer 1: Built-in detectors (emails, phones, IBANs, cards, addresses, secrets)
    Layer 2: Presidio NER (optional)
    Layer 3: Custom scanners (user-provided callables)

    All candidates go through the resolver, so later layers only win where
    they start before anything found earlier.
    """

    def __init__(self, config: ScannerConfig | None = None) -> None:
        self.config = config or ScannerConfig()

    def detect(self, text: str) -> list[Match]:
        """Return the resolved, non-overlapping matches for text."""
        if not isinstance(text, str) or not text:
            return []

        # --- Layer 1: built-in detectors, fixed order ---
        candidates = scan(text)

        # --- Layer 2: Presidio NER (if enabled) ---
        if self.config.use_presidio:
            from .presidio_layer import scan_presidio
            candidates.extend(scan_presidio(
                text,
                language=self.config.language,
                score_threshold=self.config.score_threshold,
                exclude_spans=[(m.start, m.end) for m in candidates],
            ))

        # --- Layer 3: Custom scanners ---
        for scanner in self.config.custom_scanners:
            candidates.extend(scanner(text))

        return resolve(candidates)

    def check(self, text: str, policy: PolicyConfig) -> ScanResult:
        """Detect sensitive data in text and evaluate it against policy."""
        matches = self.detect(text)
        decision = evaluate({m.type for m in matches}, policy)
        logger.debug(
            "preset=%s action=%s types=%s",
            policy.preset.id,
            decision.action.name,
            ",".join(t.value for t in decision.types) or "-",
        )
        return ScanResult(matches=matches, decision=decision)

    def anonymize(self, text: str, matches: list[Match] | None = None) -> str:
        """Replace sensitive spans with placeholders.

        Pass the matches from a previous check() on the same text to avoid
        scanning twice.
        """
        if matches is None:
            matches = self.detect(text)
        return anonymize(text, matches)


_default_scanner = Scanner()


def detect(text: str) -> list[Match]:
    """Detect with the built-in detectors only."""
    return _default_scanner.detect(text)


def check(text: str, policy: PolicyConfig | None = None) -> ScanResult:
    """Check text against policy (default: the personal preset, all flags on)."""
    return _default_scanner.check(text, policy or PolicyConfig())
