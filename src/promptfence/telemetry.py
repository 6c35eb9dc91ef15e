"""Helpers for the caller's telemetry reporter.

The engine never sends anything.  These functions only decide whether a
page is in scope and shape the event a reporter may forward: detected types
and the action, never the matched text.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Iterable

from .types import ActionLevel, Decision

# Exact hostnames where paste interception is active
DEFAULT_AI_DOMAINS: tuple[str, ...] = (
    "chat.openai.com",
    "chatgpt.com",
    "claude.ai",
    "gemini.google.com",
)


def is_ai_domain(hostname: str, ai_domains: Iterable[str] = DEFAULT_AI_DOMAINS) -> bool:
    """Exact match only; subdomains of a listed host are not in scope."""
    if not hostname or not isinstance(hostname, str):
        return False
    return hostname in set(ai_domains)


def build_event(
    decision: Decision,
    *,
    domain: str,
    preset_id: str,
    extension_version: str,
    timestamp: datetime | None = None,
) -> dict[str, Any] | None:
    """Event payload for a WARN/BLOCK decision, or None for ALLOW."""
    if decision.action == ActionLevel.ALLOW:
        return None
    ts = timestamp or datetime.now(timezone.utc)
    return {
        "timestamp": ts.isoformat(),
        "aiDomain": domain,
        "ruleId": preset_id,
        "dataTypes": [t.value for t in decision.types],
        "action": decision.action.name,
        "extensionVersion": extension_version,
    }
