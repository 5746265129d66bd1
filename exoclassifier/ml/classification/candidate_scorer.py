"""
Candidate Scoring — Heuristic surrogate for a trained KOI ensemble.

Three class weights start from a fixed base and are bumped by independent
rules over the physical features:

    habitable_window   0.5 < prad < 4 and 200 < teq < 400 K  → Confirmed     +0.20
    oversized_radius   prad > 10 Earth radii                 → False Positive +0.30
    short_period       period < 1 day                        → False Positive +0.20

Rules are additive and may all fire. The weights are then normalized into a
probability distribution and the most probable class is selected; exact ties
go to the class listed first (Confirmed, Candidate, False Positive).

Author: Exoplanet Classifier Team
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Tuple

from exoclassifier.ml.classification.features import FeatureVector
from exoclassifier.utils.logging_config import get_logger

logger = get_logger("predictions")


# -----------------------------------------------------------------------
# Class labels
# -----------------------------------------------------------------------

class ClassLabel(Enum):
    """KOI disposition. Declaration order is the tie-break order."""
    CONFIRMED = "Confirmed"
    CANDIDATE = "Candidate"
    FALSE_POSITIVE = "False Positive"


ProbabilityDistribution = Dict[ClassLabel, float]


class ScoringError(RuntimeError):
    """Scoring produced an unusable distribution."""


# -----------------------------------------------------------------------
# Rule table
# -----------------------------------------------------------------------

BASE_WEIGHTS: Dict[ClassLabel, float] = {
    ClassLabel.CONFIRMED: 0.33,
    ClassLabel.CANDIDATE: 0.33,
    ClassLabel.FALSE_POSITIVE: 0.34,
}

HABITABLE_WINDOW_BONUS = 0.20
OVERSIZED_RADIUS_BONUS = 0.30
SHORT_PERIOD_BONUS = 0.20


@dataclass(frozen=True)
class ScoringRule:
    """Adds ``bonus`` to ``target`` when ``predicate`` holds."""
    name: str
    predicate: Callable[[FeatureVector], bool]
    target: ClassLabel
    bonus: float

    def applies(self, vector: FeatureVector) -> bool:
        return bool(self.predicate(vector))


def _habitable_window(v: FeatureVector) -> bool:
    return 0.5 < v.koi_prad < 4 and 200 < v.koi_teq < 400


def _oversized_radius(v: FeatureVector) -> bool:
    return v.koi_prad > 10


def _short_period(v: FeatureVector) -> bool:
    return v.koi_period < 1


SCORING_RULES: Tuple[ScoringRule, ...] = (
    ScoringRule("habitable_window", _habitable_window,
                ClassLabel.CONFIRMED, HABITABLE_WINDOW_BONUS),
    ScoringRule("oversized_radius", _oversized_radius,
                ClassLabel.FALSE_POSITIVE, OVERSIZED_RADIUS_BONUS),
    ScoringRule("short_period", _short_period,
                ClassLabel.FALSE_POSITIVE, SHORT_PERIOD_BONUS),
)


# -----------------------------------------------------------------------
# Scorer
# -----------------------------------------------------------------------

def normalize(weights: Dict[ClassLabel, float]) -> ProbabilityDistribution:
    """Divide each weight by the total."""
    total = sum(weights.values())
    probs = {label: weights[label] / total for label in ClassLabel}
    if not all(math.isfinite(p) and 0.0 <= p <= 1.0 for p in probs.values()):
        raise ScoringError(f"Non-finite or out-of-range probabilities: {probs}")
    return probs


def select_class(probabilities: ProbabilityDistribution) -> ClassLabel:
    """Most probable class; first in declaration order on a tie."""
    # max() keeps the first maximal element
    return max(ClassLabel, key=lambda label: probabilities[label])


@dataclass(frozen=True)
class ScoreBreakdown:
    """Scorer output plus the rules that produced it."""
    label: ClassLabel
    probabilities: ProbabilityDistribution
    fired_rules: Tuple[ScoringRule, ...]


class HeuristicScorer:
    """
    Rule-table scorer for a validated FeatureVector.

    Usage::

        scorer = HeuristicScorer()
        label, probs = scorer.score(vector)
        print(label.value)                       # "Confirmed"
        print(probs[ClassLabel.FALSE_POSITIVE])  # 0.31...
    """

    def __init__(self, rules: Tuple[ScoringRule, ...] = SCORING_RULES):
        self.rules = rules

    def fired_rules(self, vector: FeatureVector) -> List[ScoringRule]:
        return [rule for rule in self.rules if rule.applies(vector)]

    @staticmethod
    def weights(fired: Iterable[ScoringRule]) -> Dict[ClassLabel, float]:
        """Unnormalized class weights after the given rules."""
        weights = dict(BASE_WEIGHTS)
        for rule in fired:
            weights[rule.target] += rule.bonus
        return weights

    def evaluate(self, vector: FeatureVector) -> ScoreBreakdown:
        """Score ``vector``, evaluating each rule exactly once."""
        fired = tuple(self.fired_rules(vector))
        probabilities = normalize(self.weights(fired))
        label = select_class(probabilities)
        logger.debug(
            f"Scored vector → {label.value} "
            f"(rules: {[r.name for r in fired] or 'none'})"
        )
        return ScoreBreakdown(label=label, probabilities=probabilities, fired_rules=fired)

    def score(self, vector: FeatureVector) -> Tuple[ClassLabel, ProbabilityDistribution]:
        breakdown = self.evaluate(vector)
        return breakdown.label, breakdown.probabilities
