"""Policy evaluation — detected types + active preset → one Decision."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable

from .presets import Preset, get_preset
from .types import ActionLevel, DataType, Decision


@dataclass(frozen=True)
class PolicyConfig:
    """The active policy.  The enable flags are global kill-switches that
    apply on top of the preset's per-type rules."""
    preset: Preset = field(default_factory=get_preset)
    enable_warn: bool = True
    enable_block: bool = True


def evaluate(resolved_types: Iterable[DataType], config: PolicyConfig) -> Decision:
    """Compute the overall action for a set of detected types.

    BLOCK wins over WARN, WARN over ALLOW.  A disabled flag removes its
    types from consideration: with enable_block off, BLOCK-ruled types are
    dropped, not downgraded to WARN.
    """
    block_types: set[DataType] = set()
    warn_types: set[DataType] = set()

    for data_type in resolved_types:
        action = config.preset.rules.get(data_type, ActionLevel.ALLOW)
        if action == ActionLevel.BLOCK:
            block_types.add(data_type)
        elif action == ActionLevel.WARN:
            warn_types.add(data_type)

    if block_types and config.enable_block:
        return Decision(ActionLevel.BLOCK, frozenset(block_types))
    if warn_types and config.enable_warn:
        return Decision(ActionLevel.WARN, frozenset(warn_types))
    return Decision(ActionLevel.ALLOW, frozenset())
