"""
FastAPI Application — Exoplanet Classifier Backend.

Serves the KOI prediction endpoints used by the classification dashboard.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from exoclassifier.api.models import HealthResponse
from exoclassifier.api.upload import UploadParseError
from exoclassifier.ml.classification import (
    ClassificationBackend,
    FeatureValidationError,
    HeuristicEnsemble,
    RandomAttributor,
)
from exoclassifier.utils.config_loader import Config
from exoclassifier.utils.metrics import PerformanceMetrics, RequestCounters

logger = logging.getLogger(__name__)

# Global app state (accessed by route modules)
app_state: dict = {}

# CORS has to be known before the app is built
config = Config().load_all()


def _heuristic_backend(classifier_config) -> ClassificationBackend:
    return HeuristicEnsemble(attributor=RandomAttributor(seed=classifier_config.random_seed))


# Backend name in classifier.yaml -> factory
BACKENDS = {
    "heuristic": _heuristic_backend,
}


def build_backend(classifier_config) -> ClassificationBackend:
    """Construct the scoring backend named in the classifier config."""
    try:
        factory = BACKENDS[classifier_config.backend]
    except KeyError:
        raise ValueError(
            f"Unknown classifier backend {classifier_config.backend!r}; "
            f"expected one of {sorted(BACKENDS)}"
        ) from None
    return factory(classifier_config)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load config and build the classifier on startup."""
    from dotenv import load_dotenv
    load_dotenv()

    t0 = time.perf_counter()
    logging.basicConfig(
        level=config.api.log_level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    from exoclassifier.utils.logging_config import LogConfig
    LogConfig.setup(log_level=config.api.log_level, enable_json=config.api.enable_json_logs)

    app_state["config"] = config
    app_state["backend"] = build_backend(config.classifier)
    app_state["counters"] = RequestCounters()
    app_state["metrics"] = PerformanceMetrics()

    logger.info(
        "Classifier ready in %.3fs — backend=%s, top_k=%d, seed=%s",
        time.perf_counter() - t0,
        app_state["backend"].name,
        config.classifier.top_k,
        config.classifier.random_seed,
    )

    yield

    app_state.clear()
    logger.info("Classifier shut down")


app = FastAPI(
    title="Exoplanet Classifier API",
    description="Classifies Kepler Objects of Interest as Confirmed, Candidate or False Positive",
    version="1.0.0",
    lifespan=lifespan,
)

if config.api.enable_cors:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials="*" not in config.api.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(FeatureValidationError)
async def feature_validation_handler(request: Request, exc: FeatureValidationError):
    counters = app_state.get("counters")
    if counters:
        counters.increment("validation_failures")
    logger.info("Rejected features on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"error": str(exc), "kind": exc.kind})


@app.exception_handler(UploadParseError)
async def upload_parse_handler(request: Request, exc: UploadParseError):
    counters = app_state.get("counters")
    if counters:
        counters.increment("upload_failures")
    logger.info("Rejected upload on %s: %s", request.url.path, exc.detail)
    return JSONResponse(status_code=400, content={"error": str(exc), "kind": "upload"})


# Register routes
from exoclassifier.api.routes.predict import router as predict_router
from exoclassifier.api.routes.metrics import router as metrics_router

app.include_router(predict_router)
app.include_router(metrics_router)


@app.get("/health", response_model=HealthResponse)
async def health():
    """Liveness check, independent of the classifier."""
    return HealthResponse(status="healthy", message="Exoplanet Classifier API is running")
