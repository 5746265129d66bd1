"""
KOI Candidate Classification.

Validates a 9-feature Kepler Object of Interest description, scores it into
Confirmed / Candidate / False Positive and ranks the features that drove the
outcome.
"""

from exoclassifier.ml.classification.features import (
    FEATURE_DEFAULTS,
    FEATURE_LABELS,
    FEATURE_NAMES,
    FeatureValidationError,
    FeatureVector,
    NotNumericError,
    ShapeError,
    validate,
)
from exoclassifier.ml.classification.candidate_scorer import (
    ClassLabel,
    HeuristicScorer,
    ScoreBreakdown,
    ScoringError,
    ScoringRule,
    SCORING_RULES,
)
from exoclassifier.ml.classification.attribution import (
    Attributor,
    FeatureContribution,
    RandomAttributor,
    rank_contributions,
)
from exoclassifier.ml.classification.classifier import (
    ClassificationBackend,
    HeuristicEnsemble,
    PredictionResult,
    classify,
)

__all__ = [
    "FEATURE_DEFAULTS",
    "FEATURE_LABELS",
    "FEATURE_NAMES",
    "FeatureValidationError",
    "FeatureVector",
    "NotNumericError",
    "ShapeError",
    "validate",
    "ClassLabel",
    "HeuristicScorer",
    "ScoreBreakdown",
    "ScoringError",
    "ScoringRule",
    "SCORING_RULES",
    "Attributor",
    "FeatureContribution",
    "RandomAttributor",
    "rank_contributions",
    "ClassificationBackend",
    "HeuristicEnsemble",
    "PredictionResult",
    "classify",
]
