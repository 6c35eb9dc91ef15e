"""YAML/dict config loader for promptfence.

Accepts either the snake_case keys below or the camelCase keys the browser
extension stores (``enableWarn``, ``enableBlock``, ``debugMode``,
``aiDomains``), flat or nested under a ``promptfence`` key.

Example YAML:

    promptfence:
      preset: finance
      rules:                 # per-type overrides on top of the preset
        ADDRESS: BLOCK
      enable_warn: true
      enable_block: true
      debug_mode: false
      ai_domains:
        - chat.openai.com
        - claude.ai
      use_presidio: false
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from .policy import PolicyConfig
from .presets import DEFAULT_PRESET_ID, PRESETS, get_preset
from .scanner import Scanner, ScannerConfig
from .telemetry import DEFAULT_AI_DOMAINS
from .types import ActionLevel, DataType

logger = logging.getLogger(__name__)

_ACTION_NAMES = set(ActionLevel.__members__)


def _pick(data: dict[str, Any], key: str, alias: str, default: Any) -> Any:
    if key in data:
        return data[key]
    return data.get(alias, default)


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML, extension storage or inline)."""
    data = data or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"config must be a mapping, got {type(data).__name__}")
    # Support nested under "promptfence" key or flat
    if "promptfence" in data:
        data = data["promptfence"] or {}
        if not isinstance(data, Mapping):
            raise ValueError(f"config key 'promptfence' must be a mapping, got {type(data).__name__}")

    return {
        "preset": data.get("preset") or DEFAULT_PRESET_ID,
        "rules": dict(data.get("rules") or {}),
        # Flags are on unless explicitly switched off
        "enable_warn": _pick(data, "enable_warn", "enableWarn", True) is not False,
        "enable_block": _pick(data, "enable_block", "enableBlock", True) is not False,
        "debug_mode": _pick(data, "debug_mode", "debugMode", False) is True,
        "ai_domains": list(_pick(data, "ai_domains", "aiDomains", DEFAULT_AI_DOMAINS)),
        "use_presidio": bool(data.get("use_presidio", False)),
        "language": data.get("language", "en"),
        "score_threshold": float(data.get("score_threshold", 0.35)),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    try:
        return load_config(data)
    except ValueError as e:
        raise ValueError(f"{path}: {e}") from e


def parse_rules(raw: dict[str, Any]) -> dict[DataType, ActionLevel]:
    """Turn stored ``{"IBAN": "BLOCK"}`` overrides into typed rules.

    Unknown types and actions are logged and skipped.
    """
    rules: dict[DataType, ActionLevel] = {}
    for key, value in raw.items():
        data_type = DataType.parse(key)
        if data_type is None:
            logger.warning("Ignoring rule for unknown data type %r", key)
            continue
        if str(value).upper() not in _ACTION_NAMES:
            logger.warning("Ignoring unknown action %r for %s", value, data_type.value)
            continue
        rules[data_type] = ActionLevel.parse(value)
    return rules


def build_policy(config: dict[str, Any]) -> PolicyConfig:
    """Build the PolicyConfig value described by a config dict."""
    cfg = load_config(config)

    preset_id = cfg["preset"]
    if preset_id not in PRESETS:
        logger.warning("Unknown preset %r, falling back to %r", preset_id, DEFAULT_PRESET_ID)
    preset = get_preset(preset_id)

    overrides = parse_rules(cfg["rules"])
    if overrides:
        preset = preset.with_rules(overrides)

    return PolicyConfig(
        preset=preset,
        enable_warn=cfg["enable_warn"],
        enable_block=cfg["enable_block"],
    )


def create_scanner(config: dict[str, Any]) -> Scanner:
    """Create a configured scanner from a config dict."""
    cfg = load_config(config)
    return Scanner(ScannerConfig(
        use_presidio=cfg["use_presidio"],
        language=cfg["language"],
        score_threshold=cfg["score_threshold"],
    ))
