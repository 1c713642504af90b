"""
Prometheus metrics for translation caches.
"""

import threading
from typing import Optional

from prometheus_client import Counter, Histogram, CollectorRegistry


class CacheMetrics:
    """Counters and timings shared by every cache strategy."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        kwargs = {"registry": registry} if registry is not None else {}

        self.requests = Counter(
            "translabel_cache_requests_total",
            "Translation cache lookups",
            ["strategy", "result"],
            **kwargs
        )
        self.provider_loads = Counter(
            "translabel_provider_loads_total",
            "Provider loads triggered by cache misses",
            ["strategy", "outcome"],
            **kwargs
        )
        self.provider_load_duration = Histogram(
            "translabel_provider_load_duration_seconds",
            "Provider load duration",
            ["strategy"],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
            **kwargs
        )
        self.invalidations = Counter(
            "translabel_cache_invalidations_total",
            "Explicit cache invalidations",
            ["strategy"],
            **kwargs
        )

    def record_hit(self, strategy: str) -> None:
        self.requests.labels(strategy=strategy, result="hit").inc()

    def record_miss(self, strategy: str) -> None:
        self.requests.labels(strategy=strategy, result="miss").inc()

    def record_load(self, strategy: str, duration: float, success: bool) -> None:
        outcome = "success" if success else "error"
        self.provider_loads.labels(strategy=strategy, outcome=outcome).inc()
        self.provider_load_duration.labels(strategy=strategy).observe(duration)

    def record_invalidation(self, strategy: str) -> None:
        self.invalidations.labels(strategy=strategy).inc()


_default_metrics: Optional[CacheMetrics] = None
_default_lock = threading.Lock()


def get_default_metrics() -> CacheMetrics:
    """Process-wide metrics bound to the default Prometheus registry."""
    global _default_metrics
    with _default_lock:
        if _default_metrics is None:
            _default_metrics = CacheMetrics()
        return _default_metrics
