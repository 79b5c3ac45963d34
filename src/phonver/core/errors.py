"""Error kinds raised by the phonetic version codec.

Every failure is a deterministic validation failure: nothing here is
transient, so callers get the offending value and decide what to do.
"""


class PhonverError(Exception):
    """Base class for all codec errors."""


class InvalidInput(PhonverError, ValueError):
    """Input rejected before encoding (negative value, bad bounds)."""


class ConfigError(PhonverError, ValueError):
    """Configuration or syllable inventory failed validation."""


class UnknownSyllable(PhonverError, ValueError):
    """A syllable is not part of the inventory used for decoding."""

    def __init__(self, syllable: str):
        self.syllable = syllable
        super().__init__(f"Unknown syllable: {syllable!r}")


class UnparseableVersion(PhonverError, ValueError):
    """No inventory syllable matches the remaining letters of a version."""

    def __init__(self, version: str, remainder: str):
        self.version = version
        self.remainder = remainder
        if remainder:
            msg = f"Cannot parse version {version!r}: unrecognized syllable at {remainder!r}"
        else:
            msg = f"Cannot parse version {version!r}: no syllable letters found"
        super().__init__(msg)


class IndexOutOfRange(PhonverError, IndexError):
    """A digit does not address a syllable in the inventory."""

    def __init__(self, digit: int, base: int):
        self.digit = digit
        self.base = base
        super().__init__(f"Digit must be 0-{base - 1}, got {digit}")
