"""
Feature Attribution — Per-feature importance for a classification.

``Attributor`` is the seam where a real attribution method (SHAP, sensitivity
analysis, model-native importances) plugs in. The only implementation today is
``RandomAttributor``, which draws each importance uniformly from (-1, 1). Its
values carry no information about the scorer's decision.

Author: Exoplanet Classifier Team
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from exoclassifier.ml.classification.features import FEATURE_NAMES, FeatureVector


@dataclass(frozen=True)
class FeatureContribution:
    """Signed influence of one input feature."""
    feature: str
    value: float       # raw input value
    importance: float  # sign = direction, magnitude = strength

    def to_dict(self) -> dict:
        return {
            "feature": self.feature,
            "importance": self.importance,
            "value": self.value,
        }


class Attributor(ABC):
    """Produces one FeatureContribution per input feature."""

    @abstractmethod
    def attribute(self, vector: FeatureVector) -> List[FeatureContribution]:
        """Return contributions for all features, in FEATURE_NAMES order."""

    def explain(self, vector: FeatureVector, top_k: int = 3) -> List[FeatureContribution]:
        return rank_contributions(self.attribute(vector), top_k)


def rank_contributions(
    contributions: Sequence[FeatureContribution], top_k: int = 3
) -> List[FeatureContribution]:
    """
    Sort by descending |importance| and keep the first ``top_k``.

    Equal magnitudes keep their input order. ``top_k`` larger than the number
    of contributions returns all of them.
    """
    if top_k < 1:
        raise ValueError(f"top_k must be >= 1, got {top_k}")
    magnitudes = np.abs([c.importance for c in contributions])
    order = np.argsort(-magnitudes, kind="stable")
    return [contributions[i] for i in order[:top_k]]


class RandomAttributor(Attributor):
    """
    Placeholder attribution: independent uniform noise on (-1, 1).

    Each call builds its own numpy Generator from a child SeedSequence, so
    one instance may be shared across threads. With ``seed`` set, the
    sequence of calls is reproducible.
    """

    # Smallest float above -1.0; uniform() already excludes the upper bound
    _LOW = float(np.nextafter(-1.0, 0.0))
    _HIGH = 1.0

    def __init__(self, seed: Optional[int] = None):
        self._seed_sequence = np.random.SeedSequence(seed)
        self._lock = threading.Lock()

    def _rng(self) -> np.random.Generator:
        with self._lock:
            child = self._seed_sequence.spawn(1)[0]
        return np.random.default_rng(child)

    def attribute(self, vector: FeatureVector) -> List[FeatureContribution]:
        draws = self._rng().uniform(self._LOW, self._HIGH, size=len(FEATURE_NAMES))
        return [
            FeatureContribution(feature=name, value=value, importance=float(imp))
            for name, value, imp in zip(FEATURE_NAMES, vector.values, draws)
        ]
