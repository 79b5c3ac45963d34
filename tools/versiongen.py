#!/usr/bin/env python3
"""versiongen: CLI for pronounceable build versions.

Generate versions from build timestamps or plain integers, parse them back,
and inspect the syllable inventory.

Usage:
    python3 tools/versiongen.py <command> [args...]

Commands:
    generate [timestamp]  Version for a build timestamp (default: now)
    encode <integer>      Version for an integer
    parse <version>       Integer and build timestamp of a version
    validate <version>    Check that a version parses
    stats                 Inventory statistics
    annotate <version>    Catchiness, IPA and nickname

Environment:
    PHONVER_CONFIG        Configuration file (default: bundled config.json)
    PHONVER_SYLLABLES     Syllable inventory (default: bundled syllables.json)
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict

from phonver.annotate.catchiness import analyze_catchiness, ipa, nickname
from phonver.core.context import VersionContext
from phonver.core.errors import PhonverError
from phonver.engine.pipeline import PhoneticVersioner
from phonver.ingest.timestamps import generate_for_timestamp, parse_to_timestamp


def fail(message):
    print(f"ERROR: {message}", file=sys.stderr)
    sys.exit(1)


def print_section(title, content):
    """Print a labeled section."""
    print(f"\n--- {title} ---")
    for k, v in content.items():
        if isinstance(v, (list, dict)):
            print(f"  {k}: {json.dumps(v, ensure_ascii=False)}")
        else:
            print(f"  {k}: {v}")


def mode_of(args):
    if getattr(args, "plain", False):
        return "plain"
    if getattr(args, "hyphenated", False):
        return "hyphenated"
    return None


# ---- Commands ----

def cmd_generate(args, versioner):
    info = generate_for_timestamp(versioner, args.timestamp, args.interval,
                                  mode=mode_of(args), min_syllables=args.min)
    if args.json:
        print(json.dumps(asdict(info), indent=2))
        return
    print(info.version)
    if args.verbose:
        print_section("Build", {
            "timestamp": info.timestamp,
            "interval": f"{info.interval}s" + (" (compressed)" if info.compressed else ""),
            "normalized": info.normalized,
            "syllables": info.syllables,
        })


def cmd_encode(args, versioner):
    version = versioner.generate(args.value, mode=mode_of(args),
                                 min_syllables=args.min, max_syllables=None)
    if args.json:
        print(json.dumps({"value": args.value, "version": version}, indent=2))
        return
    print(version)


def cmd_parse(args, versioner):
    parsed = parse_to_timestamp(versioner, args.version, args.interval)
    syllables = versioner.parse_syllables(args.version)
    result = {
        "version": args.version,
        "syllables": syllables,
        "normalized": parsed.normalized,
        "timestamp": parsed.timestamp,
        "date": parsed.date.isoformat() if parsed.date else None,
    }
    if args.json:
        print(json.dumps(result, indent=2))
        return
    print(f"Syllables:  {'-'.join(syllables)}")
    print(f"Integer:    {parsed.normalized:,}")
    print(f"Timestamp:  {parsed.timestamp}")
    print(f"Date:       {parsed.date.isoformat() if parsed.date else 'out of range'}")


def cmd_validate(args, versioner):
    valid = versioner.validate(args.version)
    if args.json:
        print(json.dumps({"version": args.version, "valid": valid}))
    else:
        print(f"{args.version}: {'valid' if valid else 'INVALID'}")
    if not valid:
        sys.exit(1)


def cmd_stats(args, versioner):
    stats = versioner.context.stats()
    if args.json:
        print(json.dumps(stats, indent=2))
        return
    print(f"Inventory:   {stats['version']}")
    print(f"Syllables:   {stats['total_syllables']}")
    print(f"Bits each:   {stats['bits_per_syllable']:.2f}")
    print(f"Lengths:     {stats['min_length']}-{stats['max_length']}")
    print(f"Prefix free: {stats['prefix_free']}")
    print_section("Patterns", stats["distribution"])


def cmd_annotate(args, versioner):
    context = versioner.context
    result = analyze_catchiness(args.version, context)
    data = {
        "version": args.version,
        "score": result.score,
        "rating": result.rating,
        "features": result.features,
        "ipa": ipa(args.version),
        "nickname": nickname(args.version, context),
    }
    if args.json:
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return
    print(f"{args.version}  {data['ipa']}")
    print(f"Catchiness: {result.score}/100 ({result.rating})")
    print(f"Nickname:   {data['nickname']}")
    if result.features:
        print_section("Features", {f"{i + 1}": f for i, f in enumerate(result.features)})


# ---- CLI setup ----

def build_parser():
    parser = argparse.ArgumentParser(
        prog="phonver",
        description="Pronounceable, reversible version names",
    )
    parser.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--config", help="Configuration file")
    parser.add_argument("--syllables", help="Syllable inventory file")

    sub = parser.add_subparsers(dest="command", required=True)

    def add_mode(p):
        group = p.add_mutually_exclusive_group()
        group.add_argument("--hyphenated", action="store_true", help="Hyphen between every syllable")
        group.add_argument("--plain", action="store_true", help="No separators")
        p.add_argument("--min", type=int, default=0, help="Minimum syllables (zero padding)")

    # generate
    p_gen = sub.add_parser("generate", help="Version for a build timestamp")
    p_gen.add_argument("timestamp", type=int, nargs="?", help="Unix seconds (default: now)")
    p_gen.add_argument("--interval", type=int, help="Build interval in seconds")
    add_mode(p_gen)

    # encode
    p_enc = sub.add_parser("encode", help="Version for an integer")
    p_enc.add_argument("value", type=int, help="Non-negative integer")
    add_mode(p_enc)

    # parse
    p_parse = sub.add_parser("parse", help="Decode a version")
    p_parse.add_argument("version", help="Version string (quote it if it has spaces)")
    p_parse.add_argument("--interval", type=int, help="Build interval in seconds")

    # validate
    p_val = sub.add_parser("validate", help="Check that a version parses")
    p_val.add_argument("version", help="Version string")

    # stats
    sub.add_parser("stats", help="Inventory statistics")

    # annotate
    p_ann = sub.add_parser("annotate", help="Catchiness, IPA and nickname")
    p_ann.add_argument("version", help="Version string")

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    commands = {
        "generate": cmd_generate,
        "encode": cmd_encode,
        "parse": cmd_parse,
        "validate": cmd_validate,
        "stats": cmd_stats,
        "annotate": cmd_annotate,
    }

    try:
        if args.config or args.syllables:
            context = VersionContext.load(args.syllables, args.config)
        else:
            context = VersionContext.default()
        commands[args.command](args, PhoneticVersioner(context))
    except PhonverError as exc:
        fail(exc)


if __name__ == "__main__":
    main()
