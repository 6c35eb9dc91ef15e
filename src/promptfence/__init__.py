"""promptfence — sensitive-data detection and paste policy engine."""

from .types import ActionLevel, DataType, Decision, Match
from .validators import iban_checksum_valid, luhn_valid
from .patterns import DETECTORS, scan
from .resolver import resolve
from .presets import PRESETS, Preset, get_preset
from .policy import PolicyConfig, evaluate
from .anonymizer import anonymize
from .scanner import Scanner, ScannerConfig, ScanResult, check, detect
from .config import build_policy, create_scanner, load_config, load_from_yaml
from .telemetry import DEFAULT_AI_DOMAINS, build_event, is_ai_domain

__all__ = [
    "ActionLevel", "DataType", "Decision", "Match",
    "iban_checksum_valid", "luhn_valid",
    "DETECTORS", "scan", "resolve",
    "PRESETS", "Preset", "get_preset",
    "PolicyConfig", "evaluate",
    "anonymize",
    "Scanner", "ScannerConfig", "ScanResult", "check", "detect",
    "build_policy", "create_scanner", "load_config", "load_from_yaml",
    "DEFAULT_AI_DOMAINS", "build_event", "is_ai_domain",
]
__version__ = "0.1.0"
