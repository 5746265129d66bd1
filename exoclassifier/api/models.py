"""
Pydantic request/response schemas for the exoplanet classifier API.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class ClassLabelEnum(str, Enum):
    CONFIRMED = "Confirmed"
    CANDIDATE = "Candidate"
    FALSE_POSITIVE = "False Positive"


class PredictRequest(BaseModel):
    # Left untyped so the feature validator, not pydantic, judges the values
    features: Optional[List[Any]] = None


class FeatureContributionResponse(BaseModel):
    feature: str
    importance: float
    value: float


class PredictionResponse(BaseModel):
    predicted_class: ClassLabelEnum
    probabilities: Dict[str, float]
    top_features: List[FeatureContributionResponse]


class UploadPredictionResponse(PredictionResponse):
    features: Dict[str, float]


class ErrorResponse(BaseModel):
    error: str
    kind: Optional[str] = None


class FeatureInfo(BaseModel):
    name: str
    label: str
    default: float


class FeatureListResponse(BaseModel):
    features: List[FeatureInfo]


class HealthResponse(BaseModel):
    status: str
    message: str


class LatencyStats(BaseModel):
    mean_ms: float = 0.0
    median_ms: float = 0.0
    max_ms: float = 0.0
    count: int = 0


class MetricsResponse(BaseModel):
    predictions: int
    validation_failures: int
    upload_failures: int
    internal_errors: int
    predictions_by_class: Dict[str, int]
    latency: LatencyStats
    backend: str
    uptime_seconds: float
