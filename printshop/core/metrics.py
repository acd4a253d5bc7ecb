# printshop/core/metrics.py

from prometheus_client import Counter, Histogram, Info, CollectorRegistry, generate_latest
from typing import Dict, Any
import time
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)

# Create a custom registry for our metrics
registry = CollectorRegistry()

# Quote metrics
quotes_calculated = Counter(
    'quotes_calculated_total',
    'Total quote calculations',
    ['product_type', 'status'],
    registry=registry
)

quote_failures = Counter(
    'quote_failures_total',
    'Total failed quote calculations',
    ['error_code'],
    registry=registry
)

quote_duration = Histogram(
    'quote_duration_seconds',
    'Quote calculation duration',
    ['product_type'],
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
    registry=registry
)

# Configuration metrics
config_loads = Counter(
    'pricing_config_loads_total',
    'Pricing configuration loads',
    ['source', 'status'],
    registry=registry
)

# Application info
app_info = Info(
    'app_info',
    'Application information',
    registry=registry
)

app_info.info({
    'service': 'printshop-pricing',
})

class MetricsCollector:
    """Centralized metrics collection and management."""

    def __init__(self):
        self.registry = registry
        self._start_time = time.time()

    def record_quote(self, product_type: str, status: str):
        """Record a quote calculation."""
        quotes_calculated.labels(product_type=product_type, status=status).inc()

    def record_quote_failure(self, error_code: str):
        """Record a failed quote."""
        quote_failures.labels(error_code=error_code).inc()

    def record_config_load(self, source: str, status: str):
        """Record a configuration load attempt."""
        config_loads.labels(source=source, status=status).inc()

    @contextmanager
    def time_quote(self, product_type: str):
        """Context manager timing a quote calculation."""
        with quote_duration.labels(product_type=product_type).time():
            yield

    def export(self) -> bytes:
        """Render the registry in Prometheus text format."""
        return generate_latest(self.registry)

    def get_metrics_summary(self) -> Dict[str, Any]:
        """Get a summary of current metrics."""
        return {
            "uptime_seconds": time.time() - self._start_time,
            "registry_size": len(list(self.registry.collect())),
            "timestamp": time.time()
        }

# Global metrics collector instance
metrics = MetricsCollector()
