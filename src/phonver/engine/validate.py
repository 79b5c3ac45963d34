"""Validation utilities for the version pipeline.

Verifies, over a range of integers:
1. Roundtrip (parse_to_integer(generate(x)) == x) in every mode
2. Stripping invariance (parsed syllables == mapped syllables)
3. Uniqueness (distinct integers never share a version string)
"""

import sys
import time

from .pipeline import PhoneticVersioner

MODES = ("smart", "hyphenated", "plain")


def validate_roundtrip(versioner, values, modes=MODES):
    """Roundtrip every value through every mode.

    Returns:
        dict with passed, checked (value/mode pairs) and error lines.
    """
    errors = []
    checked = 0
    seen = {mode: {} for mode in modes}

    for value in values:
        expected = versioner.encode_syllables(value)
        for mode in modes:
            checked += 1
            version = versioner.generate(value, mode=mode, max_syllables=None)

            decoded = versioner.parse_to_integer(version)
            if decoded != value:
                errors.append(f"  ROUNDTRIP: {value} -> {version!r} -> {decoded} ({mode})")

            parsed = versioner.parse_syllables(version)
            if parsed != expected:
                errors.append(f"  STRIP: {version!r} parsed as {parsed}, expected {expected}")

            other = seen[mode].setdefault(version, value)
            if other != value:
                errors.append(f"  COLLISION: {other} and {value} both -> {version!r} ({mode})")

    return {
        "passed": len(errors) == 0,
        "checked": checked,
        "errors": errors,
    }


def run_validation(start=0, count=10_000):
    """Run the roundtrip suite on [start, start + count) and print a report."""
    versioner = PhoneticVersioner()
    print(f"=== Validating versions {start:,}..{start + count - 1:,} ===\n")

    stats = versioner.context.stats()
    print(f"Inventory {stats['version']}: {stats['total_syllables']} syllables, "
          f"{stats['bits_per_syllable']:.1f} bits each, "
          f"prefix free: {stats['prefix_free']}")
    if not stats["prefix_free"]:
        print("  WARNING: greedy parsing is only guaranteed for prefix-free inventories")
    print()

    t0 = time.time()
    result = validate_roundtrip(versioner, range(start, start + count))
    elapsed = time.time() - t0

    print("--- Roundtrip ---")
    if result["passed"]:
        print(f"  PASSED: {result['checked']:,} value/mode pairs ({elapsed:.2f}s)")
    else:
        print(f"  FAILED: {len(result['errors'])} errors")
        for e in result["errors"][:10]:
            print(e)
    print()

    print(f"=== {'ALL VALIDATIONS PASSED' if result['passed'] else 'SOME VALIDATIONS FAILED'} ===")
    return result["passed"]


if __name__ == "__main__":
    start = int(sys.argv[1]) if len(sys.argv) > 1 else 0
    count = int(sys.argv[2]) if len(sys.argv) > 2 else 10_000
    success = run_validation(start, count)
    sys.exit(0 if success else 1)
