"""
Prometheus metrics for the blog search service.

Service timings come from the ``@measure_operation`` decorator on
``BaseService``; search-specific counters are incremented directly by the
services that own them.
"""

from typing import Optional, cast

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Create a custom registry to avoid conflicts with default metrics
REGISTRY = CollectorRegistry()

service_operation_duration_seconds = Histogram(
    "blog_search_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "blog_search_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "blog_search_errors_total",
    "Total number of errors",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

search_results_returned = Histogram(
    "blog_search_results_total_count",
    "Total matches reported per search",
    ["sort"],
    registry=REGISTRY,
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 1000),
)

search_history_writes_total = Counter(
    "blog_search_history_writes_total",
    "Search history write outcomes",
    ["status"],  # recorded | skipped | failed
    registry=REGISTRY,
)

suggestion_group_timeouts_total = Counter(
    "blog_search_suggestion_group_timeouts_total",
    "Suggestion lookups that exceeded their time budget",
    ["group"],  # blogs | tags | categories | authors
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Manages Prometheus metrics collection and exposure."""

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record service operation metrics from @measure_operation decorator.

        Args:
            service: Service name (e.g., 'BlogSearchService')
            operation: Operation/method name (e.g., 'search')
            duration: Operation duration in seconds
            status: Operation status ('success' or 'error')
            error_type: Type of error if status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()

        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def observe_search_total(sort: str, total: int) -> None:
        search_results_returned.labels(sort=sort).observe(total)

    @staticmethod
    def inc_history_write(status: str) -> None:
        """Increment history write counter (recorded|skipped|failed)."""
        search_history_writes_total.labels(status=status).inc()

    @staticmethod
    def inc_suggestion_timeout(group: str) -> None:
        suggestion_group_timeouts_total.labels(group=group).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """
        Generate Prometheus metrics in exposition format.

        Returns:
            Metrics data in Prometheus text format
        """
        return cast(bytes, generate_latest(REGISTRY))

    @staticmethod
    def get_content_type() -> str:
        """Get the content type for Prometheus metrics."""
        return cast(str, CONTENT_TYPE_LATEST)


# Singleton instance
prometheus_metrics = PrometheusMetrics()
