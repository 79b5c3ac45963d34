"""Phonetic version pipeline: integer to version string and back.

    generate:          integer -> base-N digits -> interleave -> syllables -> separators
    parse_to_integer:  version -> strip -> greedy segmentation -> digits -> deinterleave -> integer

Only the digits carry information. Separators are chosen from the syllables
alone (plus the balancer history, when one is attached) and are discarded
by the parser, so every mode decodes to the same integer.
"""

import logging
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..core.codec import deinterleave, from_digits, interleave, to_digits
from ..core.context import VersionContext
from ..core.errors import InvalidInput, UnparseableVersion, UnknownSyllable
from ..reconstruction.balancer import SeparatorBalancer
from ..reconstruction.separators import SeparatorEngine
from .parser import parse_syllables

log = logging.getLogger(__name__)

Mode = Literal["smart", "hyphenated", "plain"]


class GenerateOptions(BaseModel):
    """Per-call options for generate().

    mode: "smart" places scored separators, "hyphenated" joins every
        syllable with "-", "plain" concatenates. None picks "smart" when
        separators are enabled in the configuration, else "plain".
    min_syllables: pad with leading zero digits up to this many syllables.
    max_syllables: reject values needing more syllables. Left unset, the
        configured encoding.max_syllables applies; an explicit None means
        unbounded.
    max_separators: override the configured separator round limit.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Optional[Mode] = None
    min_syllables: int = Field(default=0, ge=0)
    max_syllables: Optional[int] = Field(default=None, ge=1)
    max_separators: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _bounds(self):
        if self.max_syllables is not None and self.min_syllables > self.max_syllables:
            raise ValueError(f"min_syllables ({self.min_syllables}) exceeds "
                             f"max_syllables ({self.max_syllables})")
        return self


class PhoneticVersioner:
    """Generate and parse phonetic versions for one context."""

    def __init__(self, context: Optional[VersionContext] = None,
                 balancer: Optional[SeparatorBalancer] = None):
        self.context = context if context is not None else VersionContext.default()
        self.balancer = balancer
        self.engine = SeparatorEngine(self.context, balancer)

    @property
    def inventory(self):
        return self.context.inventory

    def _options(self, options: Optional[GenerateOptions], overrides: dict) -> GenerateOptions:
        try:
            if options is None:
                return GenerateOptions(**overrides)
            if overrides:
                return GenerateOptions.model_validate({
                    **options.model_dump(exclude_unset=True), **overrides})
            return options
        except ValidationError as exc:
            raise InvalidInput(f"Invalid generate options: {exc}") from exc

    def encode_syllables(self, value: int, min_syllables: int = 0) -> List[str]:
        """Integer to (interleaved) syllable list, without separators."""
        digits = to_digits(value, self.context.base, min_syllables)
        if self.context.config.encoding.digit_interleaving:
            digits = interleave(digits)
        return self.inventory.to_syllables(digits)

    def generate(self, value: int, options: Optional[GenerateOptions] = None,
                 **overrides) -> str:
        """Encode an integer as a version string.

        Raises:
            InvalidInput: negative value, or more syllables than allowed.
        """
        opts = self._options(options, overrides)
        config = self.context.config

        syllables = self.encode_syllables(value, opts.min_syllables)

        if "max_syllables" in opts.model_fields_set:
            max_syllables = opts.max_syllables
        else:
            max_syllables = config.encoding.max_syllables
        if max_syllables is not None and len(syllables) > max_syllables:
            raise InvalidInput(f"Value {value} needs {len(syllables)} syllables, "
                               f"maximum is {max_syllables}")

        mode = opts.mode
        if mode is None:
            mode = "smart" if config.separators.enabled else "plain"

        if mode == "plain":
            return "".join(syllables)
        if mode == "hyphenated":
            return "-".join(syllables)
        return self.engine.place(syllables, opts.max_separators)

    def parse_syllables(self, version: str) -> List[str]:
        return parse_syllables(version, self.inventory)

    def parse_to_integer(self, version: str) -> int:
        """Decode a version string (any separators, any case) to its integer.

        Raises:
            UnparseableVersion: letters that do not segment into syllables.
        """
        digits = self.inventory.to_digits(self.parse_syllables(version))
        if self.context.config.encoding.digit_interleaving:
            digits = deinterleave(digits)
        return from_digits(digits, self.context.base)

    def validate(self, version: str) -> bool:
        """True if the version parses under this inventory."""
        try:
            self.parse_to_integer(version)
        except (UnparseableVersion, UnknownSyllable) as exc:
            log.debug("Invalid version %r: %s", version, exc)
            return False
        return True


@lru_cache(maxsize=1)
def _default_versioner() -> PhoneticVersioner:
    return PhoneticVersioner()


def generate(value: int, options: Optional[GenerateOptions] = None, **overrides) -> str:
    return _default_versioner().generate(value, options, **overrides)


def parse_to_integer(version: str) -> int:
    return _default_versioner().parse_to_integer(version)


def validate(version: str) -> bool:
    return _default_versioner().validate(version)
