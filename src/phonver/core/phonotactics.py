"""Phonotactic tables and predicates used by the boundary scorer.

Built once from the `phonotactics` and `scoring` configuration sections.
Syllables are lowercase a-z strings; every non-vowel letter counts as a
consonant.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional

from .config import VersionConfig


class ClusterDifficulty(Enum):
    CRITICAL = "critical"
    HARD = "hard"
    MODERATE = "moderate"


@dataclass(frozen=True, eq=False)
class Phonotactics:
    vowels: FrozenSet[str]
    onsets: FrozenSet[str]
    codas: FrozenSet[str]
    clusters: Dict[str, ClusterDifficulty]
    places: Dict[str, str]
    heavy_threshold: int

    @classmethod
    def from_config(cls, config: VersionConfig) -> "Phonotactics":
        tiers = config.scoring.impossible_clusters
        clusters: Dict[str, ClusterDifficulty] = {}
        # Lowest tier first so a pair listed twice keeps its hardest tier
        for difficulty, pairs in ((ClusterDifficulty.MODERATE, tiers.moderate),
                                  (ClusterDifficulty.HARD, tiers.hard),
                                  (ClusterDifficulty.CRITICAL, tiers.critical)):
            for pair in pairs:
                clusters[pair] = difficulty

        places = {}
        for place, consonants in config.scoring.place_of_articulation.items():
            for c in consonants:
                places.setdefault(c, place)

        ph = config.phonotactics
        return cls(
            vowels=frozenset(ph.vowels),
            onsets=frozenset(ph.valid_onsets),
            codas=frozenset(ph.valid_codas),
            clusters=clusters,
            places=places,
            heavy_threshold=config.scoring.heavy_syllable_threshold,
        )

    def is_vowel(self, ch: str) -> bool:
        return ch.lower() in self.vowels

    def consonant_skeleton(self, syllable: str) -> str:
        """Syllable with its vowels removed ("brak" -> "brk")."""
        return "".join(c for c in syllable if c not in self.vowels)

    def cluster_difficulty(self, c1: str, c2: str) -> Optional[ClusterDifficulty]:
        return self.clusters.get((c1 + c2).lower())

    def same_place_of_articulation(self, c1: str, c2: str) -> bool:
        place = self.places.get(c1)
        return place is not None and place == self.places.get(c2)

    def is_heavy(self, syllable: str) -> bool:
        return len(syllable) >= self.heavy_threshold

    def has_exact_rhyme(self, a: str, b: str) -> bool:
        return a[-2:] == b[-2:]

    def has_partial_rhyme(self, a: str, b: str) -> bool:
        """Same final consonant."""
        return a[-1] == b[-1] and not self.is_vowel(a[-1])

    def pattern(self, syllable: str) -> str:
        """C/V shape of a syllable, e.g. "brak" -> "CCVC"."""
        return "".join("V" if c in self.vowels else "C" for c in syllable)

    def is_well_formed(self, syllable: str) -> bool:
        """Onset and coda are listed as valid and there is one vowel nucleus."""
        shape = self.pattern(syllable)
        start = shape.find("V")
        if start < 0:
            return False
        end = shape.rfind("V") + 1
        if "C" in shape[start:end]:
            return False
        onset, coda = syllable[:start], syllable[end:]
        return (not onset or onset in self.onsets) and (not coda or coda in self.codas)
