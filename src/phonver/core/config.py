"""Typed configuration for encoding, separator scoring and balancing.

Every field carries a default, so `VersionConfig()` is a complete working
configuration. The bundled data/config.json restates those defaults and
can be replaced with PHONVER_CONFIG=/path/to/config.json.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_CONFIG_PATH = DATA_DIR / "config.json"
CONFIG_ENV = "PHONVER_CONFIG"


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class Feature(_Section):
    """One scoring feature: its weight and whether it is applied."""

    weight: float = 0.0
    enabled: bool = True

    @property
    def value(self) -> float:
        return self.weight if self.enabled else 0.0


def _f(weight: float, enabled: bool = True):
    return Field(default_factory=lambda: Feature(weight=weight, enabled=enabled))


# ---- Encoding ----

class CompressionStep(_Section):
    threshold: int = Field(ge=1)
    interval: int = Field(ge=1)


class EncodingConfig(_Section):
    base_interval: int = Field(default=180, ge=1)
    digit_interleaving: bool = True
    max_syllables: Optional[int] = Field(default=6, ge=1)
    adaptive_compression: bool = True
    compression_intervals: List[CompressionStep] = Field(default_factory=lambda: [
        CompressionStep(threshold=5, interval=900),
        CompressionStep(threshold=5, interval=3600),
        CompressionStep(threshold=5, interval=86400),
    ])


# ---- Separators ----

class Thresholds(_Section):
    first: float = Field(default=80.0, gt=0)
    second: float = Field(default=70.0, gt=0)
    third: float = Field(default=60.0, gt=0)

    @model_validator(mode="after")
    def _decreasing(self):
        if not self.first >= self.second >= self.third:
            raise ValueError("thresholds must not increase from first to third")
        return self

    def for_round(self, index: int) -> float:
        """Threshold for the 0-based placement round (rounds past 3 reuse third)."""
        return (self.first, self.second, self.third)[min(index, 2)]


class SeparatorConfig(_Section):
    enabled: bool = True
    max_separators: int = Field(default=2, ge=0)
    thresholds: Thresholds = Field(default_factory=Thresholds)


# ---- Scoring ----

class ApostropheWeights(_Section):
    vowel_hiatus: Feature = _f(80)
    elision_pattern: Feature = _f(20)
    short_left_bonus: Feature = _f(15)
    interest_bonus: Feature = _f(10)


class DotWeights(_Section):
    prefix_pattern: Feature = _f(60)
    very_short_left: Feature = _f(25)
    interest_bonus: Feature = _f(15)


class HyphenWeights(_Section):
    critical_cluster: Feature = _f(100)
    hard_cluster: Feature = _f(70)
    moderate_cluster: Feature = _f(40)
    heavy_similar_rhyme: Feature = _f(60)
    heavy_partial_rhyme: Feature = _f(40)
    heavy_and_heavy: Feature = _f(15)
    identical_consonants: Feature = _f(50)
    same_place_articulation: Feature = _f(25)
    interest_bonus: Feature = _f(10)


class SpaceWeights(_Section):
    clean_consonant_boundary: Feature = _f(50)
    heavy_and_heavy_space: Feature = _f(35)
    clean_syllables: Feature = _f(20)
    natural_word_split: Feature = _f(25)


class TildeWeights(_Section):
    creative_pattern: Feature = _f(10)
    technical_separator: Feature = _f(10)
    alternative_to_dot: Feature = _f(30)
    alternative_to_hyphen: Feature = _f(30)
    heavy_rhyme: Feature = _f(35)
    clean_boundary: Feature = _f(15)
    interest_bonus: Feature = _f(5)


class ColonWeights(_Section):
    same_consonant_pattern: Feature = _f(90)
    similar_structure: Feature = _f(10)
    rhythmic_pair: Feature = _f(5, enabled=False)
    interest_bonus: Feature = _f(5, enabled=False)


class RepetitionBonus(_Section):
    """Bonuses injected at the boundary that splits a repeated run."""

    priority: int = Field(ge=0)
    hyphen: float = 0.0
    space: float = 0.0
    dot: float = 0.0


class RepetitionWeights(_Section):
    non_consecutive_identical: RepetitionBonus = Field(
        default_factory=lambda: RepetitionBonus(priority=110, hyphen=120, space=25))
    identical_4: RepetitionBonus = Field(
        default_factory=lambda: RepetitionBonus(priority=100, hyphen=100, space=20))
    identical_3: RepetitionBonus = Field(
        default_factory=lambda: RepetitionBonus(priority=90, hyphen=100, space=20))
    identical_2: RepetitionBonus = Field(
        default_factory=lambda: RepetitionBonus(priority=80, hyphen=100, space=20))
    similar_4: RepetitionBonus = Field(
        default_factory=lambda: RepetitionBonus(priority=50, hyphen=40, space=20))
    similar_3: RepetitionBonus = Field(
        default_factory=lambda: RepetitionBonus(priority=40, hyphen=40, space=20, dot=40))

    @model_validator(mode="after")
    def _ordered(self):
        ranks = [self.non_consecutive_identical.priority, self.identical_4.priority,
                 self.identical_3.priority, self.identical_2.priority,
                 self.similar_4.priority, self.similar_3.priority]
        if ranks != sorted(ranks, reverse=True) or len(set(ranks)) != len(ranks):
            raise ValueError("repetition priorities must strictly decrease "
                             "from non_consecutive_identical to similar_3")
        return self


class ClusterTiers(_Section):
    """Consonant pairs across a boundary, by pronounceability difficulty."""

    critical: List[str] = Field(default_factory=lambda: [
        "tl", "dl", "tn", "dn", "tm", "dm", "pb", "bp", "kg", "gk",
        "td", "dt", "kp", "gb", "pk", "bk", "tk", "dk", "tg", "dg",
    ])
    hard: List[str] = Field(default_factory=lambda: [
        "kt", "pt", "gd", "bd", "kd", "gt", "pd", "bt", "tp", "db",
        "nm", "mn", "ng", "lr", "rl", "sz", "zs", "fv", "vf", "tv",
    ])
    moderate: List[str] = Field(default_factory=lambda: [
        "ns", "nz", "ls", "lz", "rs", "rz", "mp", "mb", "nt", "nd",
        "lt", "ld", "rt", "rd", "st", "sk", "sp", "ks", "ts", "ps",
    ])

    @field_validator("critical", "hard", "moderate")
    @classmethod
    def _pairs(cls, pairs: List[str]) -> List[str]:
        bad = [p for p in pairs if len(p) != 2 or not p.isalpha()]
        if bad:
            raise ValueError(f"cluster entries must be two letters, got {bad}")
        return [p.lower() for p in pairs]


class ScoringConfig(_Section):
    heavy_syllable_threshold: int = Field(default=4, ge=1)
    apostrophe: ApostropheWeights = Field(default_factory=ApostropheWeights)
    dot: DotWeights = Field(default_factory=DotWeights)
    hyphen: HyphenWeights = Field(default_factory=HyphenWeights)
    space: SpaceWeights = Field(default_factory=SpaceWeights)
    tilde: TildeWeights = Field(default_factory=TildeWeights)
    colon: ColonWeights = Field(default_factory=ColonWeights)
    repetition: RepetitionWeights = Field(default_factory=RepetitionWeights)
    impossible_clusters: ClusterTiers = Field(default_factory=ClusterTiers)
    place_of_articulation: Dict[str, List[str]] = Field(default_factory=lambda: {
        "labial": ["b", "p", "m", "f", "v", "w"],
        "alveolar": ["t", "d", "n", "s", "z", "l", "r"],
        "postalveolar": ["j", "c"],
        "velar": ["k", "g", "q", "x"],
        "glottal": ["h"],
    })


# ---- Balancing ----

class BalancingConfig(_Section):
    history_size: int = Field(default=100, ge=1)
    diversity_strength: float = Field(default=0.8, ge=0.0, le=1.0)
    targets: Dict[str, float] = Field(default_factory=lambda: {
        "space": 50, "dot": 25, "colon": 10, "tilde": 8, "hyphen": 5, "apostrophe": 2,
    })

    @field_validator("targets")
    @classmethod
    def _known_kinds(cls, targets: Dict[str, float]) -> Dict[str, float]:
        known = {"space", "dot", "colon", "tilde", "hyphen", "apostrophe"}
        unknown = set(targets) - known
        if unknown:
            raise ValueError(f"unknown separator kinds in targets: {sorted(unknown)}")
        if any(v < 0 for v in targets.values()):
            raise ValueError("target percentages must be non-negative")
        return targets


# ---- Phonotactics ----

class PhonotacticsConfig(_Section):
    vowels: str = "aeiou"
    valid_onsets: List[str] = Field(default_factory=lambda: [
        "b", "d", "f", "g", "h", "k", "l", "m", "n", "p", "r", "s", "t", "v", "z",
        "bl", "br", "dr", "fl", "fr", "gl", "gr", "kr", "pl", "pr", "sk", "sl",
        "sn", "st", "tr",
    ])
    valid_codas: List[str] = Field(default_factory=lambda: [
        "f", "k", "l", "m", "n", "r", "s", "t",
    ])


class VersionConfig(_Section):
    encoding: EncodingConfig = Field(default_factory=EncodingConfig)
    separators: SeparatorConfig = Field(default_factory=SeparatorConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    balancing: BalancingConfig = Field(default_factory=BalancingConfig)
    phonotactics: PhonotacticsConfig = Field(default_factory=PhonotacticsConfig)


def parse_config(data: dict) -> VersionConfig:
    """Validate a raw configuration mapping."""
    try:
        return VersionConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_config(path: Optional[Path] = None) -> VersionConfig:
    """Load configuration from path, $PHONVER_CONFIG, or the bundled file."""
    if path is None:
        path = os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Configuration {path} is not valid JSON: {exc}") from exc
    config = parse_config(data)
    log.debug("Loaded configuration from %s", path)
    return config
