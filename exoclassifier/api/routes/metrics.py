"""
System metrics endpoint — live counters for the dashboard.
"""

from __future__ import annotations

from fastapi import APIRouter

from exoclassifier.api.models import LatencyStats, MetricsResponse

router = APIRouter(prefix="/api", tags=["metrics"])


@router.get("/metrics", response_model=MetricsResponse)
async def get_metrics():
    """Get live prediction metrics."""
    from exoclassifier.api.main import app_state

    snapshot = app_state["counters"].snapshot()
    counts = snapshot["counts"]
    stats = app_state["metrics"].get_stats("predict_latency_s")

    latency = LatencyStats()
    if stats:
        latency = LatencyStats(
            mean_ms=round(stats["mean"] * 1000, 3),
            median_ms=round(stats["median"] * 1000, 3),
            max_ms=round(stats["max"] * 1000, 3),
            count=stats["count"],
        )

    return MetricsResponse(
        predictions=counts.get("predictions", 0),
        validation_failures=counts.get("validation_failures", 0),
        upload_failures=counts.get("upload_failures", 0),
        internal_errors=counts.get("internal_errors", 0),
        predictions_by_class=snapshot["by_class"],
        latency=latency,
        backend=app_state["backend"].name,
        uptime_seconds=snapshot["uptime_seconds"],
    )
