"""
Performance metrics and request counters for the API layer.
"""

import threading
import time
from collections import Counter
from contextlib import contextmanager
from typing import Any, Dict, Optional

import numpy as np


class PerformanceMetrics:
    """Track and report performance metrics."""

    def __init__(self):
        self.metrics: Dict[str, list] = {}
        self._lock = threading.Lock()

    def record(self, metric_name: str, value: float):
        """
        Record a metric value.

        Args:
            metric_name: Name of the metric
            value: Metric value
        """
        with self._lock:
            self.metrics.setdefault(metric_name, []).append(value)

    def get_stats(self, metric_name: str) -> Dict[str, float]:
        """
        Get statistics for a metric.

        Args:
            metric_name: Name of the metric

        Returns:
            Dictionary with mean, std, min, max, median
        """
        with self._lock:
            if not self.metrics.get(metric_name):
                return {}
            values = np.array(self.metrics[metric_name])
        return {
            "mean": float(np.mean(values)),
            "std": float(np.std(values)),
            "min": float(np.min(values)),
            "max": float(np.max(values)),
            "median": float(np.median(values)),
            "count": len(values)
        }


class RequestCounters:
    """Monotonic counters for the prediction endpoints."""

    def __init__(self):
        self._lock = threading.Lock()
        self._counts: Counter = Counter()
        self._by_class: Counter = Counter()
        self.start_time = time.time()

    def increment(self, name: str, amount: int = 1):
        with self._lock:
            self._counts[name] += amount

    def record_prediction(self, predicted_class: str):
        with self._lock:
            self._counts["predictions"] += 1
            self._by_class[predicted_class] += 1

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "counts": dict(self._counts),
                "by_class": dict(self._by_class),
                "uptime_seconds": round(time.time() - self.start_time, 1),
            }


@contextmanager
def timer(metric_name: str, metrics: Optional[PerformanceMetrics] = None):
    """
    Context manager for timing code blocks.

    Args:
        metric_name: Name for the timing metric
        metrics: Optional PerformanceMetrics instance to record to

    Example:
        >>> metrics = PerformanceMetrics()
        >>> with timer("predict_latency_s", metrics):
        ...     # Your code here
        ...     pass
        >>> print(metrics.get_stats("predict_latency_s"))
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if metrics:
            metrics.record(metric_name, elapsed)
