"""
Prometheus metrics for schema inference and materialization.

Metrics are recorded at the processor boundary only. The inference
core itself keeps no process-wide state.
"""

import time
from functools import wraps
from typing import Callable

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
)

from docrel.config.settings import get_settings

REGISTRY = CollectorRegistry()

# ========== Counters ==========

schema_inference_total = Counter(
    "schema_inference_total",
    "Total number of schema inference runs",
    ["status"],  # success/failure
    registry=REGISTRY,
)

tables_materialized_total = Counter(
    "tables_materialized_total",
    "Total number of tables created in the catalog",
    registry=REGISTRY,
)

# ========== Histograms ==========

schema_inference_duration_seconds = Histogram(
    "schema_inference_duration_seconds",
    "Time spent inferring or materializing a schema graph",
    ["operation"],  # parse/create
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
    registry=REGISTRY,
)


# ========== Metric Decorators ==========

def track_operation(operation: str, count_runs: bool = False):
    """
    Decorator to time a processor operation.

    Args:
        operation: Operation label (parse/create)
        count_runs: Also count the call in schema_inference_total
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            status = "success"
            try:
                return func(*args, **kwargs)
            except Exception:
                status = "failure"
                raise
            finally:
                if get_settings().metrics_enabled:
                    schema_inference_duration_seconds.labels(
                        operation=operation).observe(time.perf_counter() - start_time)
                    if count_runs:
                        schema_inference_total.labels(status=status).inc()

        return wrapper
    return decorator


def get_metrics() -> bytes:
    """Get current metrics in Prometheus text format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
