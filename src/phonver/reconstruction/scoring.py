"""Boundary scoring for decorative separators.

Each boundary between two syllable groups gets an independent score per
separator kind, computed from the two syllables touching the boundary and
the letters of the whole left/right groups. Separators never contain a
letter, so stripping them always restores the syllable stream.

A structural rule runs first over the whole sequence: repeated or
near-repeated syllable runs ("bat-bat", "bu brik bu") get large bonuses at
the boundary that best splits the repeated unit.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence

from ..core.config import RepetitionBonus, RepetitionWeights
from ..core.context import VersionContext
from ..core.phonotactics import ClusterDifficulty


class SeparatorKind(Enum):
    SPACE = "space"
    DOT = "dot"
    COLON = "colon"
    TILDE = "tilde"
    HYPHEN = "hyphen"
    APOSTROPHE = "apostrophe"

    @property
    def mark(self) -> str:
        return SEPARATOR_MARKS[self]


SEPARATOR_MARKS = {
    SeparatorKind.SPACE: " ",
    SeparatorKind.DOT: ". ",
    SeparatorKind.COLON: ":",
    SeparatorKind.TILDE: "~",
    SeparatorKind.HYPHEN: "-",
    SeparatorKind.APOSTROPHE: "'",
}


@dataclass(frozen=True)
class RepetitionMatch:
    """Where a repeated run should be split, and with which bonuses."""
    position: int
    rule: str
    bonus: RepetitionBonus


def find_repetition(syllables: Sequence[str],
                    weights: RepetitionWeights) -> Optional[RepetitionMatch]:
    """Find the highest-priority repeated run in a syllable sequence.

    Rules, highest priority first:
      non_consecutive_identical  "bu brik bu"   split before the 2nd "bu"
      identical_4                4+ identical   split between 2nd and 3rd
      identical_3                3 identical    split after the 1st
      identical_2                2 identical    split after the 1st
      similar_4                  4+ same first letter and length, 2nd|3rd
      similar_3                  3 same first letter and length, after 1st
    """
    n = len(syllables)
    if n < 2:
        return None

    best: Optional[RepetitionMatch] = None

    def offer(position: int, rule: str):
        nonlocal best
        bonus = getattr(weights, rule)
        if best is None or bonus.priority > best.bonus.priority:
            best = RepetitionMatch(position, rule, bonus)

    for syl in dict.fromkeys(syllables):
        positions = [j for j in range(n) if syllables[j] == syl]
        for a, b in zip(positions, positions[1:]):
            if b - a > 1:
                offer(b, "non_consecutive_identical")

    for start in range(n - 1):
        run = 1
        while start + run < n and syllables[start + run] == syllables[start]:
            run += 1
        if run >= 4:
            offer(start + 2, "identical_4")
        if run >= 3:
            offer(start + 1, "identical_3")
        if run >= 2:
            offer(start + 1, "identical_2")

    for start in range(n - 2):
        first = syllables[start]
        run = 1
        while (start + run < n
               and len(syllables[start + run]) == len(first)
               and syllables[start + run][0] == first[0]):
            run += 1
        if run >= 4:
            offer(start + 2, "similar_4")
        if run >= 3:
            offer(start + 1, "similar_3")

    return best


class BoundaryScorer:
    """Scores every separator kind at one boundary."""

    def __init__(self, context: VersionContext):
        self.weights = context.config.scoring
        self.ph = context.phonotactics

    def score(self, left: Sequence[str], right: Sequence[str],
              repetition: Optional[RepetitionMatch] = None) -> Dict[SeparatorKind, float]:
        w = self.weights
        ph = self.ph

        last_syl = left[-1]
        first_syl = right[0]
        last_char = last_syl[-1]
        first_char = first_syl[0]
        left_word = "".join(left)
        right_word = "".join(right)

        last_vowel = ph.is_vowel(last_char)
        first_vowel = ph.is_vowel(first_char)
        consonant_boundary = not last_vowel and not first_vowel
        heavy_pair = ph.is_heavy(last_syl) and ph.is_heavy(first_syl)
        exact_rhyme = ph.has_exact_rhyme(last_syl, first_syl)
        partial_rhyme = ph.has_partial_rhyme(last_syl, first_syl)
        cluster = ph.cluster_difficulty(last_char, first_char) if consonant_boundary else None
        prefix_split = len(left) == 1 and len(right) >= 2 and 2 <= len(left_word) <= 5

        scores = dict.fromkeys(SeparatorKind, 0.0)

        position = len(left)
        if repetition is not None and repetition.position == position:
            bonus = repetition.bonus
            # dot stays a prefix marker even for repeated runs
            if position == 1:
                scores[SeparatorKind.DOT] += bonus.dot
            scores[SeparatorKind.HYPHEN] += bonus.hyphen
            scores[SeparatorKind.SPACE] += bonus.space

        # Apostrophe: hiatus, then elision
        a = w.apostrophe
        s = 0.0
        if last_vowel and first_vowel:
            s += a.vowel_hiatus.value
        if not last_vowel and first_vowel:
            s += a.elision_pattern.value
        if len(left_word) <= 3 and first_vowel:
            s += a.short_left_bonus.value
        if s > 0:
            s += a.interest_bonus.value
        scores[SeparatorKind.APOSTROPHE] += s

        # Dot: only directly after the first syllable
        d = w.dot
        s = 0.0
        if prefix_split:
            s += d.prefix_pattern.value
        if len(left) == 1 and len(left_word) == 2:
            s += d.very_short_left.value
        if s > 0:
            s += d.interest_bonus.value
        scores[SeparatorKind.DOT] += s

        # Hyphen
        h = w.hyphen
        s = 0.0
        if cluster is ClusterDifficulty.CRITICAL:
            s += h.critical_cluster.value
        elif cluster is ClusterDifficulty.HARD:
            s += h.hard_cluster.value
        elif cluster is ClusterDifficulty.MODERATE:
            s += h.moderate_cluster.value
        if heavy_pair:
            if exact_rhyme:
                s += h.heavy_similar_rhyme.value
            elif partial_rhyme:
                s += h.heavy_partial_rhyme.value
            s += h.heavy_and_heavy.value
        if last_char == first_char and not last_vowel:
            s += h.identical_consonants.value
        if consonant_boundary and ph.same_place_of_articulation(last_char, first_char):
            s += h.same_place_articulation.value
        if s > 0:
            s += h.interest_bonus.value
        scores[SeparatorKind.HYPHEN] += s

        # Space
        sp = w.space
        s = 0.0
        if consonant_boundary and cluster is None:
            s += sp.clean_consonant_boundary.value
        if heavy_pair and not exact_rhyme:
            s += sp.heavy_and_heavy_space.value
        if consonant_boundary:
            s += sp.clean_syllables.value
        if len(left_word) >= 4 and len(right_word) >= 4:
            s += sp.natural_word_split.value
        scores[SeparatorKind.SPACE] += s

        # Tilde: always has a small baseline
        t = w.tilde
        s = t.creative_pattern.value + t.technical_separator.value
        if prefix_split:
            s += t.alternative_to_dot.value
        if cluster in (ClusterDifficulty.MODERATE, ClusterDifficulty.HARD):
            s += t.alternative_to_hyphen.value
        if heavy_pair and (exact_rhyme or partial_rhyme):
            s += t.heavy_rhyme.value
        if consonant_boundary and cluster is None:
            s += t.clean_boundary.value
        s += t.interest_bonus.value
        scores[SeparatorKind.TILDE] += s

        # Colon: "tik:tok", needs at least two shared consonants
        c = w.colon
        s = 0.0
        last_skeleton = ph.consonant_skeleton(last_syl)
        first_skeleton = ph.consonant_skeleton(first_syl)
        if last_skeleton == first_skeleton and len(last_skeleton) >= 2:
            s += c.same_consonant_pattern.value
        if len(last_syl) == len(first_syl) and len(last_skeleton) == len(first_skeleton):
            s += c.similar_structure.value
        if len(last_syl) >= 2 and len(first_syl) >= 2:
            s += c.rhythmic_pair.value
        s += c.interest_bonus.value
        scores[SeparatorKind.COLON] += s

        return scores


def score_boundary(context: VersionContext, left: Sequence[str], right: Sequence[str],
                   syllables: Optional[Sequence[str]] = None) -> Dict[SeparatorKind, float]:
    """Score one boundary; pass the whole sequence to apply the repetition rule."""
    repetition = None
    if syllables is not None:
        repetition = find_repetition(syllables, context.config.scoring.repetition)
    return BoundaryScorer(context).score(left, right, repetition)


def best_kind(scores: Dict[SeparatorKind, float]) -> Optional[SeparatorKind]:
    """Highest scoring kind (first in SeparatorKind order on ties), None if all zero."""
    winner: Optional[SeparatorKind] = None
    for kind in SeparatorKind:
        if scores.get(kind, 0.0) > 0 and (winner is None or scores[kind] > scores[winner]):
            winner = kind
    return winner
