"""CLI interface for promptfence.

Usage:
    # Check text (stdin) against a preset, print the decision as JSON
    echo 'Pay DE89370400440532013000' | promptfence --preset finance check

    # Same, with the anonymized text and a 0/1/2 exit code for ALLOW/WARN/BLOCK
    echo 'mail a@b.com' | promptfence check --anonymize --exit-code

    # Anonymize text (stdin → stdout)
    echo 'contact a@b.com now' | promptfence anonymize

    # List presets and their rules
    promptfence presets

Matched text is never printed; check reports types and offsets only.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys

from .config import build_policy, create_scanner, load_config, load_from_yaml
from .presets import PRESETS

logger = logging.getLogger(__name__)


def _load(args: argparse.Namespace) -> dict:
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    if args.preset:
        cfg["preset"] = args.preset
    if args.no_warn:
        cfg["enable_warn"] = False
    if args.no_block:
        cfg["enable_block"] = False
    if args.presidio:
        cfg["use_presidio"] = True
    if args.debug:
        cfg["debug_mode"] = True
    return cfg


def cmd_check(args: argparse.Namespace, cfg: dict) -> int:
    """Check stdin text and print the decision."""
    scanner = create_scanner(cfg)
    policy = build_policy(cfg)

    text = sys.stdin.read()
    result = scanner.check(text, policy)

    output = {"preset": policy.preset.id, **result.to_dict()}
    if args.anonymize:
        output["text"] = scanner.anonymize(text, result.matches)
    json.dump(output, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")

    return int(result.decision.action) if args.exit_code else 0


def cmd_anonymize(args: argparse.Namespace, cfg: dict) -> int:
    """Anonymize stdin text."""
    scanner = create_scanner(cfg)
    sys.stdout.write(scanner.anonymize(sys.stdin.read()))
    return 0


def cmd_presets(args: argparse.Namespace, cfg: dict) -> int:
    """Dump the preset registry as JSON."""
    out = {
        preset_id: {
            "description": preset.ui_copy.get("description", ""),
            "rules": {t.value: a.name for t, a in preset.rules.items()},
        }
        for preset_id, preset in PRESETS.items()
    }
    json.dump(out, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptfence",
        description="Detect sensitive data in pasted text and apply a policy preset",
    )
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument("--preset", default=None, help="Preset id (overrides config)")
    parser.add_argument("--no-warn", action="store_true", help="Disable WARN actions")
    parser.add_argument("--no-block", action="store_true", help="Disable BLOCK actions")
    parser.add_argument("--presidio", action="store_true", help="Enable the Presidio NER layer")
    parser.add_argument("--debug", action="store_true", help="Debug logging to stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    check = sub.add_parser("check", help="Check text (stdin) and print the decision")
    check.add_argument("--anonymize", action="store_true", help="Include anonymized text")
    check.add_argument("--exit-code", action="store_true",
                       help="Exit 0/1/2 for ALLOW/WARN/BLOCK")
    sub.add_parser("anonymize", help="Anonymize text (stdin)")
    sub.add_parser("presets", help="List presets")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = _load(args)
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=logging.DEBUG if cfg["debug_mode"] else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
        stream=sys.stderr,
    )
    logger.debug(
        "preset=%s enable_warn=%s enable_block=%s presidio=%s",
        cfg["preset"], cfg["enable_warn"], cfg["enable_block"], cfg["use_presidio"],
    )

    cmds = {
        "check": cmd_check,
        "anonymize": cmd_anonymize,
        "presets": cmd_presets,
    }
    return cmds[args.command](args, cfg)


if __name__ == "__main__":
    sys.exit(main())
