"""CLI entry point: python -m logstash_udm <command> [args]."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from logstash_udm.config import Settings, load_settings, validate_settings
from logstash_udm.parsers.pipeline import extract_grok_pattern
from logstash_udm.parsers.sections import extract_section
from logstash_udm.service import transform


def _load_settings(args: argparse.Namespace) -> Settings | None:
    if not args.patterns:
        return Settings()
    path = Path(args.patterns)
    errors = validate_settings(path)
    if errors:
        print(f"Invalid settings file {path}:")
        for err in errors:
            print(f"  - {err}")
        return None
    return load_settings(path)


def cmd_parse(args: argparse.Namespace) -> int:
    """Parse a raw log file with a filter configuration and print the result."""
    log_path = Path(args.log)
    config_path = Path(args.config)
    for path in (log_path, config_path):
        if not path.exists():
            print(f"Error: file not found: {path}")
            return 1

    settings = _load_settings(args)
    if settings is None:
        return 1

    result = transform(
        log_path.read_text(),
        config_path.read_text(),
        pipeline=settings.build_pipeline(),
        explain=args.explain,
    )
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.success else 1


def cmd_patterns(args: argparse.Namespace) -> int:
    """List the grok pattern table."""
    settings = _load_settings(args)
    if settings is None:
        return 1
    registry = settings.build_registry()
    for name in registry.names():
        if args.show:
            print(f"{name:20s} {registry.lookup(name)}")
        else:
            print(name)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Report which sections of a filter configuration are usable."""
    path = Path(args.config)
    if not path.exists():
        print(f"Error: config file not found: {path}")
        return 1

    text = path.read_text().strip()
    filter_section = extract_section(text, "filter")
    if filter_section is None:
        print("filter: missing or unbalanced")
        return 1
    print("filter: ok")

    grok_section = extract_section(filter_section, "grok")
    if grok_section is None:
        print("grok: missing or unbalanced")
        return 1
    pattern = extract_grok_pattern(grok_section)
    if pattern is None:
        print('grok: no match => { "message" => ... }')
        return 1
    print(f"grok: {pattern}")

    for keyword in ("date", "mutate"):
        found = extract_section(filter_section, keyword) is not None
        print(f"{keyword}: {'ok' if found else 'absent'}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="logstash-udm",
        description="Parse raw logs with Logstash grok filters and map them to UDM",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # parse
    parse_parser = subparsers.add_parser("parse", help="Parse a log line and map it to UDM")
    parse_parser.add_argument("log", help="Path to a file holding the raw log line")
    parse_parser.add_argument("config", help="Path to a Logstash filter configuration")
    parse_parser.add_argument("--patterns", help="Settings YAML with extra grok patterns")
    parse_parser.add_argument(
        "--no-explain", dest="explain", action="store_false",
        help="Omit the Markdown explanation",
    )
    parse_parser.set_defaults(func=cmd_parse)

    # patterns
    pat_parser = subparsers.add_parser("patterns", help="List grok patterns")
    pat_parser.add_argument("--patterns", help="Settings YAML with extra grok patterns")
    pat_parser.add_argument("--show", action="store_true", help="Print fragments too")
    pat_parser.set_defaults(func=cmd_patterns)

    # check
    check_parser = subparsers.add_parser("check", help="Check a filter configuration")
    check_parser.add_argument("config", help="Path to a Logstash filter configuration")
    check_parser.set_defaults(func=cmd_check)

    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
