"""
Prediction endpoints — classify a feature vector, classify an uploaded
CSV/JSON file, and describe the expected features.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.responses import JSONResponse

from exoclassifier.api.models import (
    ErrorResponse,
    FeatureInfo,
    FeatureListResponse,
    PredictionResponse,
    PredictRequest,
    UploadPredictionResponse,
)
from exoclassifier.api.upload import UploadParseError, parse_upload
from exoclassifier.ml.classification import (
    FEATURE_DEFAULTS,
    FEATURE_LABELS,
    FEATURE_NAMES,
    FeatureValidationError,
    classify,
)
from exoclassifier.utils.metrics import timer

router = APIRouter(tags=["prediction"])
logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid features or upload"},
    500: {"model": ErrorResponse, "description": "Prediction failed"},
}


def _resolve_top_k(top_k: Optional[int]) -> int:
    from exoclassifier.api.main import app_state
    return top_k if top_k is not None else app_state["config"].classifier.top_k


def _internal_error(what: str) -> JSONResponse:
    """Log the traceback and return the opaque 500 body."""
    from exoclassifier.api.main import app_state
    logger.exception("%s failed", what)
    app_state["counters"].increment("internal_errors")
    return JSONResponse(status_code=500, content={"error": "Prediction failed"})


def _run_prediction(raw: Any, top_k: int):
    """Classify ``raw``, returning the wire dict or a 500 response."""
    from exoclassifier.api.main import app_state
    backend = app_state["backend"]
    counters = app_state["counters"]

    try:
        with timer("predict_latency_s", app_state["metrics"]):
            result = classify(raw, backend=backend, top_k=top_k)
    except FeatureValidationError:
        raise
    except Exception:
        return _internal_error("Prediction")

    counters.record_prediction(result.predicted_class.value)
    return result.to_dict()


@router.post("/predict", response_model=PredictionResponse, responses=_ERROR_RESPONSES)
def predict(
    request: PredictRequest,
    top_k: Optional[int] = Query(None, ge=1, description="Number of top features to return"),
):
    """Classify one KOI from its 9 feature values."""
    return _run_prediction(request.features, _resolve_top_k(top_k))


@router.post(
    "/predict/upload", response_model=UploadPredictionResponse, responses=_ERROR_RESPONSES
)
def predict_upload(
    file: UploadFile = File(..., description="CSV or JSON feature file"),
    top_k: Optional[int] = Query(None, ge=1, description="Number of top features to return"),
):
    """Classify one KOI read from an uploaded CSV or JSON file."""
    try:
        features = parse_upload(file.filename, file.file.read())
    except UploadParseError:
        raise
    except Exception:
        return _internal_error("Upload parsing")
    result = _run_prediction(list(features.values()), _resolve_top_k(top_k))
    if isinstance(result, JSONResponse):
        return result
    return {**result, "features": features}


@router.get("/features", response_model=FeatureListResponse)
def list_features():
    """Feature names in input order, with display labels and form defaults."""
    return FeatureListResponse(
        features=[
            FeatureInfo(name=name, label=FEATURE_LABELS[name], default=FEATURE_DEFAULTS[name])
            for name in FEATURE_NAMES
        ]
    )
