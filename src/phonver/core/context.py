"""Immutable inventory + configuration shared by all codec components.

Built once at process start and handed explicitly to the versioner,
separator engine and parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional

from .config import VersionConfig, load_config
from .phonotactics import Phonotactics
from .syllables import SyllableInventory, load_inventory


@dataclass(frozen=True, eq=False)
class VersionContext:
    inventory: SyllableInventory
    config: VersionConfig = field(default_factory=VersionConfig)
    phonotactics: Phonotactics = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "phonotactics", Phonotactics.from_config(self.config))

    @property
    def base(self) -> int:
        return self.inventory.base

    @classmethod
    def load(cls, syllables_path: Optional[Path] = None,
             config_path: Optional[Path] = None) -> "VersionContext":
        return cls(load_inventory(syllables_path), load_config(config_path))

    @classmethod
    def default(cls) -> "VersionContext":
        """Context for the bundled (or environment-selected) data, loaded once."""
        return _default_context()

    def stats(self) -> dict:
        return self.inventory.stats(self.phonotactics.pattern)


@lru_cache(maxsize=1)
def _default_context() -> VersionContext:
    return VersionContext.load()
