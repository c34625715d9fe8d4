"""
Shared metrics configuration for Permix.
"""

import threading
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram


class MetricsCollector:
    """Prometheus metrics for permission evaluation."""

    def __init__(self, namespace: str = "permix", registry: Optional[CollectorRegistry] = None):
        self.namespace = namespace
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up engine metrics."""
        self._metrics["checks_total"] = Counter(
            f"{self.namespace}_checks_total",
            "Total permission checks",
            ["entity", "decision"],
            registry=self.registry
        )

        self._metrics["check_duration_seconds"] = Histogram(
            f"{self.namespace}_check_duration_seconds",
            "Permission check duration in seconds",
            registry=self.registry
        )

        self._metrics["setups_total"] = Counter(
            f"{self.namespace}_setups_total",
            "Total rule installations",
            ["status"],
            registry=self.registry
        )

        self._metrics["hydrations_total"] = Counter(
            f"{self.namespace}_hydrations_total",
            "Total state hydrations",
            registry=self.registry
        )

        self._metrics["errors_total"] = Counter(
            f"{self.namespace}_errors_total",
            "Total engine errors",
            ["error_type"],
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_check(self, entity: str, allowed: bool, duration: float):
        """Record a permission check decision."""
        self._metrics["checks_total"].labels(
            entity=entity,
            decision="allow" if allowed else "deny"
        ).inc()
        self._metrics["check_duration_seconds"].observe(duration)

    def record_setup(self, status: str):
        """Record a rule installation attempt."""
        self._metrics["setups_total"].labels(status=status).inc()

    def record_hydration(self):
        """Record a state hydration."""
        self._metrics["hydrations_total"].inc()

    def record_error(self, error_type: str):
        """Record error metrics."""
        self._metrics["errors_total"].labels(error_type=error_type).inc()

    @contextmanager
    def time_check(self, entity: str):
        """Time a check; the body sets ``result["allowed"]``."""
        start_time = time.perf_counter()
        result = {"allowed": False}
        try:
            yield result
        finally:
            self.record_check(entity, result["allowed"], time.perf_counter() - start_time)


_default_collector: Optional[MetricsCollector] = None
_default_lock = threading.Lock()


def get_metrics_collector(registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector.

    Without a registry, returns the process-wide collector registered in the
    default Prometheus registry. With one, returns a new collector bound to it.
    """
    global _default_collector

    if registry is not None:
        return MetricsCollector(registry=registry)

    with _default_lock:
        if _default_collector is None:
            _default_collector = MetricsCollector(registry=REGISTRY)
        return _default_collector
