"""Prometheus metrics for the document store."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all document store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Operation metrics
        self.operations_total = Counter(
            "doggo_db_operations_total",
            "Total number of engine operations",
            ["operation"],  # add, find, find_and_update, update_at, delete, ...
            registry=self._registry,
        )

        self.rows_inserted_total = Counter(
            "doggo_db_rows_inserted_total",
            "Total rows inserted",
            ["table"],
            registry=self._registry,
        )

        self.rows_updated_total = Counter(
            "doggo_db_rows_updated_total",
            "Total rows updated",
            ["table"],
            registry=self._registry,
        )

        self.rows_deleted_total = Counter(
            "doggo_db_rows_deleted_total",
            "Total rows deleted",
            ["table"],
            registry=self._registry,
        )

        self.rows_scanned_total = Counter(
            "doggo_db_rows_scanned_total",
            "Total rows evaluated by the query engine",
            registry=self._registry,
        )

        # Persistence metrics
        self.saves_total = Counter(
            "doggo_db_saves_total",
            "Total save requests",
            ["outcome"],  # written, deferred, failed
            registry=self._registry,
        )

        self.bytes_written_total = Counter(
            "doggo_db_bytes_written_total",
            "Total serialized bytes written to the storage backend",
            registry=self._registry,
        )

        self.save_latency_seconds = Histogram(
            "doggo_db_save_latency_seconds",
            "Latency of durable saves in seconds",
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        self.loads_total = Counter(
            "doggo_db_loads_total",
            "Total database loads from the storage backend",
            ["reason"],  # open, abort
            registry=self._registry,
        )

        # Transaction metrics
        self.transactions_total = Counter(
            "doggo_db_transactions_total",
            "Total number of finished transactions",
            ["status"],  # commit, abort
            registry=self._registry,
        )

        self.transactions_active = Gauge(
            "doggo_db_transactions_active",
            "Number of open transactions",
            registry=self._registry,
        )

        self.info = Info(
            "doggo_db",
            "Document store information",
            registry=self._registry,
        )


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up the Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from doggo_db import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
