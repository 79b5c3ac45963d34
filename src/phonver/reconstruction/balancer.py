"""
Separator usage balancer.

Keeps a bounded history of the separator kinds actually placed and turns
the gap between observed and target usage into score multipliers, so that
over many generated versions the mix drifts toward the target distribution.

One balancer may be shared between threads; history updates and reads are
serialized with a lock. Versions generated without a balancer depend only
on their integer.
"""

import logging
import threading
from collections import Counter, deque
from typing import Dict, Mapping, Optional, Union

from ..core.config import BalancingConfig
from ..core.errors import ConfigError
from .scoring import SeparatorKind

log = logging.getLogger(__name__)

MIN_MULTIPLIER = 0.5
MAX_MULTIPLIER = 2.0

DEFAULT_TARGETS = {
    SeparatorKind.SPACE: 50.0,
    SeparatorKind.DOT: 25.0,
    SeparatorKind.COLON: 10.0,
    SeparatorKind.TILDE: 8.0,
    SeparatorKind.HYPHEN: 5.0,
    SeparatorKind.APOSTROPHE: 2.0,
}

KindLike = Union[SeparatorKind, str]


def _kind(kind: KindLike) -> SeparatorKind:
    return kind if isinstance(kind, SeparatorKind) else SeparatorKind(kind)


class SeparatorBalancer:
    """Bounded usage history plus target distribution."""

    def __init__(self, history_size: int = 100, diversity_strength: float = 0.8,
                 targets: Optional[Mapping[KindLike, float]] = None):
        if history_size < 1:
            raise ConfigError(f"history_size must be positive, got {history_size}")
        if not 0.0 <= diversity_strength <= 1.0:
            raise ConfigError(f"diversity_strength must be in [0, 1], got {diversity_strength}")

        self.history_size = history_size
        self.diversity_strength = diversity_strength
        if targets is None:
            self.targets = dict(DEFAULT_TARGETS)
        else:
            self.targets = {_kind(k): float(v) for k, v in targets.items()}
        self._history = deque(maxlen=history_size)
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: BalancingConfig) -> "SeparatorBalancer":
        return cls(config.history_size, config.diversity_strength, config.targets)

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)

    def record_usage(self, kind: KindLike):
        """Append one placement; the oldest entry drops once full."""
        kind = _kind(kind)
        with self._lock:
            self._history.append(kind)

    def current_distribution(self) -> Dict[SeparatorKind, float]:
        """Percentage of each kind in the history (all zero when empty)."""
        with self._lock:
            counts = Counter(self._history)
            total = len(self._history)
        if total == 0:
            return {kind: 0.0 for kind in SeparatorKind}
        return {kind: counts[kind] / total * 100 for kind in SeparatorKind}

    def diversity_multipliers(self) -> Dict[SeparatorKind, float]:
        """Per-kind multipliers: over-used kinds shrink, under-used kinds grow.

        An empty history counts as 0% for every kind, so each kind starts
        boosted in proportion to its target.
        """
        actual = self.current_distribution()
        multipliers = {}
        for kind, target in self.targets.items():
            m = 1.0 - (actual[kind] - target) / 100 * self.diversity_strength
            multipliers[kind] = max(MIN_MULTIPLIER, min(MAX_MULTIPLIER, m))
        return multipliers

    def adjust_scores(self, scores: Mapping[SeparatorKind, float]) -> Dict[SeparatorKind, float]:
        """Scale raw scores by the current multipliers; kinds without a target keep 1.0."""
        multipliers = self.diversity_multipliers()
        return {kind: score * multipliers.get(kind, 1.0) for kind, score in scores.items()}

    def stats(self) -> dict:
        actual = self.current_distribution()
        multipliers = self.diversity_multipliers()
        categories = {}
        for kind, target in self.targets.items():
            categories[kind.value] = {
                "target": target,
                "actual": round(actual[kind], 1),
                "diff": round(actual[kind] - target, 1),
                "multiplier": round(multipliers[kind], 3),
            }
        return {
            "history_length": len(self),
            "history_size": self.history_size,
            "diversity_strength": self.diversity_strength,
            "categories": categories,
        }

    def reset(self):
        with self._lock:
            self._history.clear()
        log.debug("Separator balancer history cleared")
