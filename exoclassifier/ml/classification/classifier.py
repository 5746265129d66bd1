"""
KOI Classification Pipeline — Validate → Score → Explain.

``ClassificationBackend`` is the contract the API depends on. The heuristic
ensemble below is a stand-in; a client for a trained model only has to
implement ``predict()`` to replace it.

Author: Exoplanet Classifier Team
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Optional, Tuple

from exoclassifier.ml.classification.attribution import (
    Attributor,
    FeatureContribution,
    RandomAttributor,
)
from exoclassifier.ml.classification.candidate_scorer import (
    ClassLabel,
    HeuristicScorer,
    ProbabilityDistribution,
)
from exoclassifier.ml.classification.features import (
    FeatureValidationError,
    FeatureVector,
    validate,
)
from exoclassifier.utils.logging_config import get_logger

logger = get_logger("predictions")
validation_logger = get_logger("validation")

DEFAULT_TOP_K = 3


@dataclass(frozen=True)
class PredictionResult:
    """Outcome of classifying one feature vector."""
    predicted_class: ClassLabel
    probabilities: ProbabilityDistribution
    top_features: Tuple[FeatureContribution, ...]
    fired_rules: Tuple[str, ...] = ()

    def __post_init__(self):
        # read-only view of the distribution
        object.__setattr__(
            self, "probabilities", MappingProxyType(dict(self.probabilities))
        )

    def to_dict(self) -> Dict[str, Any]:
        """Wire format: class and probability keys use display strings."""
        return {
            "predicted_class": self.predicted_class.value,
            "probabilities": {
                label.value: self.probabilities[label] for label in ClassLabel
            },
            "top_features": [c.to_dict() for c in self.top_features],
        }


class ClassificationBackend(ABC):
    """Anything that turns a validated FeatureVector into a PredictionResult."""

    name: str = "backend"

    @abstractmethod
    def predict(self, vector: FeatureVector, top_k: int = DEFAULT_TOP_K) -> PredictionResult:
        ...


class HeuristicEnsemble(ClassificationBackend):
    """Rule-table scorer paired with an attributor."""

    name = "heuristic"

    def __init__(
        self,
        scorer: Optional[HeuristicScorer] = None,
        attributor: Optional[Attributor] = None,
    ):
        self.scorer = scorer or HeuristicScorer()
        self.attributor = attributor or RandomAttributor()

    def predict(self, vector: FeatureVector, top_k: int = DEFAULT_TOP_K) -> PredictionResult:
        breakdown = self.scorer.evaluate(vector)
        top = self.attributor.explain(vector, top_k)
        return PredictionResult(
            predicted_class=breakdown.label,
            probabilities=breakdown.probabilities,
            top_features=tuple(top),
            fired_rules=tuple(r.name for r in breakdown.fired_rules),
        )


def classify(
    raw: Any,
    backend: Optional[ClassificationBackend] = None,
    top_k: int = DEFAULT_TOP_K,
) -> PredictionResult:
    """
    Classify raw feature input.

    Validation errors propagate before the backend is touched.
    """
    try:
        vector = validate(raw)
    except FeatureValidationError as e:
        validation_logger.warning(f"Rejected input ({e.kind}): {e}")
        raise
    backend = backend or HeuristicEnsemble()
    result = backend.predict(vector, top_k)
    logger.info(
        f"Classified KOI as {result.predicted_class.value} "
        f"(p={result.probabilities[result.predicted_class]:.3f}, "
        f"rules={list(result.fired_rules)})"
    )
    return result
