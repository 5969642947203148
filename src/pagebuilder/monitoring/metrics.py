"""
Metrics Collection
Prometheus metrics for tree editing, rendering and persistence
"""

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the builder.

    Each collector owns its registry so several builder containers can live
    in one process without duplicate-timeseries errors.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry or CollectorRegistry()

        # Tree metrics
        self.nodes_created = Counter(
            "pagebuilder_nodes_created_total",
            "Total number of component nodes created",
            ["type"],
            registry=self.registry,
        )
        self.mutations_total = Counter(
            "pagebuilder_mutations_total",
            "Structural tree mutations",
            ["operation", "outcome"],
            registry=self.registry,
        )

        # Editing metrics
        self.validation_failures = Counter(
            "pagebuilder_validation_failures_total",
            "Property values rejected by their editor kind",
            ["editor"],
            registry=self.registry,
        )

        # Render metrics
        self.renders_total = Counter(
            "pagebuilder_renders_total",
            "Total number of page renders",
            ["cache"],
            registry=self.registry,
        )
        self.render_duration = Histogram(
            "pagebuilder_render_duration_seconds",
            "Page render duration in seconds",
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
            registry=self.registry,
        )

        # Persistence metrics
        self.persistence_errors = Counter(
            "pagebuilder_persistence_errors_total",
            "Page store failures",
            ["operation"],
            registry=self.registry,
        )

    def record_node_created(self, type_name: str) -> None:
        """Record a node creation."""
        self.nodes_created.labels(type=type_name).inc()

    def record_mutation(self, operation: str, applied: bool) -> None:
        """Record a structural mutation or no-op."""
        outcome = "applied" if applied else "noop"
        self.mutations_total.labels(operation=operation, outcome=outcome).inc()

    def record_validation_failure(self, editor: str) -> None:
        """Record a rejected property value."""
        self.validation_failures.labels(editor=editor).inc()

    def record_render(self, cache: str, duration: float) -> None:
        """Record a page render (cache is 'hit', 'miss' or 'off')."""
        self.renders_total.labels(cache=cache).inc()
        self.render_duration.observe(duration)

    def record_persistence_error(self, operation: str) -> None:
        """Record a failed store operation."""
        self.persistence_errors.labels(operation=operation).inc()


# Global metrics collector instance
metrics_collector = MetricsCollector()
