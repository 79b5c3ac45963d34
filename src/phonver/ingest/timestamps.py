"""Build timestamps to phonetic versions.

A Unix timestamp is floored to a build interval (180 s by default) and the
resulting count is what gets encoded. Decoding returns the start of the
interval; anything finer than the interval is not recoverable.

When the count would need more syllables than allowed, adaptive
compression retries with the configured coarser intervals (15 min, 1 h,
1 day by default) until it fits.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..core.codec import to_digits
from ..core.config import EncodingConfig
from ..core.errors import InvalidInput

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionInfo:
    version: str
    syllables: int
    interval: int
    normalized: int
    timestamp: int
    compressed: bool


@dataclass(frozen=True)
class ParsedVersion:
    timestamp: int
    normalized: int
    date: Optional[datetime]


def normalize(timestamp: int, interval: int) -> int:
    """Number of whole intervals since the epoch."""
    if interval <= 0:
        raise InvalidInput(f"Interval must be positive, got {interval}")
    if timestamp < 0:
        raise InvalidInput(f"Timestamp must be non-negative, got {timestamp}")
    return int(timestamp // interval)


def estimate_syllable_count(value: int, base: int) -> int:
    """Syllables needed to encode value (0 still takes one)."""
    return len(to_digits(value, base))


def find_optimal_interval(timestamp: int, encoding: EncodingConfig, base: int,
                          max_syllables: Optional[int] = None) -> int:
    """Smallest configured interval whose count fits in max_syllables.

    Falls back to the last interval tried when none fits; the caller's
    syllable limit then rejects the value.
    """
    if max_syllables is None:
        max_syllables = encoding.max_syllables
    interval = encoding.base_interval
    if not encoding.adaptive_compression or max_syllables is None:
        return interval

    count = estimate_syllable_count(normalize(timestamp, interval), base)
    if count <= max_syllables:
        return interval

    for step in encoding.compression_intervals:
        if count >= step.threshold:
            interval = step.interval
            count = estimate_syllable_count(normalize(timestamp, interval), base)
            if count <= max_syllables:
                break
    log.debug("Compressed interval for %d: %ds (%d syllables)", timestamp, interval, count)
    return interval


def current_timestamp() -> int:
    return int(datetime.now(timezone.utc).timestamp())


def generate_for_timestamp(versioner, timestamp: Optional[int] = None,
                           interval: Optional[int] = None, **overrides) -> VersionInfo:
    """Version for a build timestamp.

    Args:
        versioner: PhoneticVersioner to encode with.
        timestamp: Unix seconds; None means now (UTC).
        interval: Fixed build interval; None picks one (adaptive compression).
        **overrides: GenerateOptions fields (mode, min_syllables, ...).
    """
    if timestamp is None:
        timestamp = current_timestamp()
    encoding = versioner.context.config.encoding

    if interval is None:
        if "max_syllables" in overrides:
            max_syllables = overrides["max_syllables"]
        else:
            max_syllables = encoding.max_syllables
        interval = find_optimal_interval(timestamp, encoding, versioner.context.base,
                                         max_syllables)

    normalized = normalize(timestamp, interval)
    version = versioner.generate(normalized, **overrides)
    count = len(versioner.encode_syllables(normalized, overrides.get("min_syllables", 0)))

    return VersionInfo(
        version=version,
        syllables=count,
        interval=interval,
        normalized=normalized,
        timestamp=int(timestamp),
        compressed=interval > encoding.base_interval,
    )


def parse_to_timestamp(versioner, version: str, interval: Optional[int] = None) -> ParsedVersion:
    """Start of the build interval a version stands for."""
    if interval is None:
        interval = versioner.context.config.encoding.base_interval
    if interval <= 0:
        raise InvalidInput(f"Interval must be positive, got {interval}")

    normalized = versioner.parse_to_integer(version)
    timestamp = normalized * interval
    try:
        date = datetime.fromtimestamp(timestamp, timezone.utc)
    except (OverflowError, ValueError, OSError):
        log.debug("Timestamp %d is outside the datetime range", timestamp)
        date = None
    return ParsedVersion(timestamp=timestamp, normalized=normalized, date=date)
