"""Syllable inventory: the alphabet of the base-N version system.

The position of a syllable in the inventory IS the digit value it stands
for, exactly like ALPHABET/CHAR_TO_INDEX in a base-50 token ID. The
inventory is curated outside this package; it must be prefix free for the
greedy parser to segment concatenations correctly.
"""

from __future__ import annotations

import json
import logging
import math
import os
import re
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .config import DATA_DIR
from .errors import ConfigError, IndexOutOfRange, UnknownSyllable

log = logging.getLogger(__name__)

DEFAULT_SYLLABLES_PATH = DATA_DIR / "syllables.json"
SYLLABLES_ENV = "PHONVER_SYLLABLES"

_LOWER = re.compile(r"^[a-z]+$")


class SyllableInventory:
    """Ordered, immutable set of syllables with a cached reverse lookup."""

    __slots__ = ("_syllables", "_index", "version", "min_length", "max_length")

    def __init__(self, syllables: Iterable[str], version: str = "unversioned"):
        syllables = tuple(syllables)
        if not syllables:
            raise ConfigError("Syllable inventory is empty")
        bad = [s for s in syllables if not isinstance(s, str) or not _LOWER.match(s)]
        if bad:
            raise ConfigError(f"Syllables must be lowercase a-z strings: {bad[:5]}")
        dupes = [s for s, n in Counter(syllables).items() if n > 1]
        if dupes:
            raise ConfigError(f"Duplicate syllables in inventory: {sorted(dupes)[:5]}")

        self._syllables = syllables
        self._index: Dict[str, int] = {s: i for i, s in enumerate(syllables)}
        self.version = version
        self.min_length = min(len(s) for s in syllables)
        self.max_length = max(len(s) for s in syllables)

    @property
    def syllables(self) -> tuple:
        return self._syllables

    @property
    def base(self) -> int:
        return len(self._syllables)

    def __len__(self) -> int:
        return len(self._syllables)

    def __iter__(self):
        return iter(self._syllables)

    def __contains__(self, syllable) -> bool:
        return syllable in self._index

    def __getitem__(self, digit: int) -> str:
        return self._syllables[digit]

    def __repr__(self) -> str:
        return f"SyllableInventory(base={self.base}, version={self.version!r})"

    def index_of(self, syllable: str) -> Optional[int]:
        return self._index.get(syllable)

    def to_syllables(self, digits: Sequence[int]) -> List[str]:
        """Map digit values to syllables."""
        out = []
        for d in digits:
            if not 0 <= d < self.base:
                raise IndexOutOfRange(d, self.base)
            out.append(self._syllables[d])
        return out

    def to_digits(self, syllables: Sequence[str]) -> List[int]:
        """Map syllables back to digit values (case-insensitive)."""
        out = []
        for s in syllables:
            idx = self._index.get(s.lower())
            if idx is None:
                raise UnknownSyllable(s)
            out.append(idx)
        return out

    def is_prefix_free(self) -> bool:
        """True when no syllable is a proper prefix of another."""
        ordered = sorted(self._syllables)
        return not any(b.startswith(a) for a, b in zip(ordered, ordered[1:]))

    def stats(self, pattern=None) -> dict:
        """Inventory statistics; `pattern` maps a syllable to its C/V shape."""
        if pattern is None:
            pattern = _default_pattern
        return {
            "version": self.version,
            "total_syllables": self.base,
            "bits_per_syllable": math.log2(self.base),
            "min_length": self.min_length,
            "max_length": self.max_length,
            "distribution": dict(sorted(Counter(pattern(s) for s in self._syllables).items())),
            "prefix_free": self.is_prefix_free(),
        }


def _default_pattern(syllable: str) -> str:
    return "".join("V" if c in "aeiou" else "C" for c in syllable)


def load_inventory(path: Optional[Path] = None) -> SyllableInventory:
    """Load the inventory from path, $PHONVER_SYLLABLES, or the bundled file.

    The file holds {"version": "...", "syllables": ["..", ...]}; a bare JSON
    list is accepted too.
    """
    if path is None:
        path = os.environ.get(SYLLABLES_ENV) or DEFAULT_SYLLABLES_PATH
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read syllable inventory {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Syllable inventory {path} is not valid JSON: {exc}") from exc

    if isinstance(data, list):
        inventory = SyllableInventory(data)
    elif isinstance(data, dict) and isinstance(data.get("syllables"), list):
        inventory = SyllableInventory(data["syllables"], str(data.get("version", "unversioned")))
    else:
        raise ConfigError(f"Syllable inventory {path} has no 'syllables' list")

    log.debug("Loaded %d syllables (version %s) from %s",
              inventory.base, inventory.version, path)
    return inventory
