"""
Separator placement for syllable sequences.

Chooses up to `max_separators` boundaries to decorate, one per round,
picking the highest scoring (boundary, kind) pair each time. Separators
carry no information: the parser strips them before decoding.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..core.config import Thresholds
from ..core.context import VersionContext
from .balancer import SeparatorBalancer
from .scoring import BoundaryScorer, SeparatorKind, find_repetition

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """A separator inserted before syllable `position`."""
    position: int
    kind: SeparatorKind
    score: float


class SeparatorEngine:
    """Place decorative separators between syllables."""

    def __init__(self, context: VersionContext,
                 balancer: Optional[SeparatorBalancer] = None):
        """
        Args:
            context: Inventory + configuration to score with.
            balancer: Optional shared balancer. When attached, scores are
                multiplied by its diversity multipliers and every accepted
                placement is recorded in its history.
        """
        self.context = context
        self.scorer = BoundaryScorer(context)
        self.balancer = balancer

    def boundary_scores(self, syllables: Sequence[str]) -> Dict[int, Dict[SeparatorKind, float]]:
        """Raw scores for every internal boundary, keyed by position."""
        repetition = find_repetition(syllables, self.context.config.scoring.repetition)
        if repetition is not None:
            log.debug("Repetition %s at %d in %s", repetition.rule, repetition.position, syllables)
        return {
            i: self.scorer.score(syllables[:i], syllables[i:], repetition)
            for i in range(1, len(syllables))
        }

    def plan(
        self,
        syllables: Sequence[str],
        max_separators: Optional[int] = None,
        thresholds: Optional[Thresholds] = None,
    ) -> List[Placement]:
        """
        Decide where separators go.

        Args:
            syllables: The syllable sequence (at least two for any separator).
            max_separators: Round limit; defaults to the configured value.
            thresholds: Per-round minimum scores; defaults to configured.

        Returns:
            Accepted placements sorted by position. No two are adjacent.
        """
        cfg = self.context.config.separators
        if max_separators is None:
            max_separators = cfg.max_separators
        if thresholds is None:
            thresholds = cfg.thresholds

        syllables = list(syllables)
        if len(syllables) < 2 or max_separators <= 0:
            return []

        raw = self.boundary_scores(syllables)
        placements: List[Placement] = []

        for round_index in range(max_separators):
            multipliers = self.balancer.diversity_multipliers() if self.balancer is not None else {}
            best: Optional[Placement] = None

            for position, scores in raw.items():
                if any(abs(p.position - position) <= 1 for p in placements):
                    continue
                for kind in SeparatorKind:
                    score = scores[kind]
                    if score <= 0:
                        continue
                    score *= multipliers.get(kind, 1.0)
                    if best is None or score > best.score:
                        best = Placement(position, kind, score)

            threshold = thresholds.for_round(round_index)
            if best is None or best.score < threshold:
                break

            placements.append(best)
            if self.balancer is not None:
                self.balancer.record_usage(best.kind)
            log.debug("Round %d: %s at %d (score %.1f >= %.1f)",
                      round_index + 1, best.kind.value, best.position, best.score, threshold)

        return sorted(placements, key=lambda p: p.position)

    def place(self, syllables: Sequence[str], max_separators: Optional[int] = None,
              thresholds: Optional[Thresholds] = None) -> str:
        """Join syllables, inserting the planned separators."""
        return join_syllables(syllables, self.plan(syllables, max_separators, thresholds))


def join_syllables(syllables: Sequence[str], placements: Sequence[Placement]) -> str:
    """Concatenate syllables with each placement's mark before its position."""
    marks = {p.position: p.kind.mark for p in placements}
    out = []
    for i, syl in enumerate(syllables):
        if i in marks:
            out.append(marks[i])
        out.append(syl)
    return "".join(out)
