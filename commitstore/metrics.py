"""
Prometheus metrics for the commit store.

Environment Variables (read by commitctl):
    COMMITSTORE_METRICS_ENABLED: Enable metrics server (true/false) - default: false
    COMMITSTORE_METRICS_PORT: HTTP port for /metrics endpoint - default: 8080

Usage:
    from commitstore.metrics import init_metrics, start_metrics_server

    init_metrics()                         # in-process registry only
    start_metrics_server(enabled=True, port=8080)

The tracking helpers are no-ops until init_metrics() has run, so library
users who never opt in pay nothing.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Generator, Optional

from prometheus_client import Counter, Histogram, start_http_server

logger = logging.getLogger(__name__)

COMMITS_APPENDED: Optional[Counter] = None
VERSION_CONFLICTS: Optional[Counter] = None
READ_DURATION: Optional[Histogram] = None

_metrics_initialized = False
_metrics_lock = threading.Lock()


def init_metrics() -> None:
    """
    Initialize Prometheus metrics (idempotent, thread-safe).
    """
    global COMMITS_APPENDED, VERSION_CONFLICTS, READ_DURATION
    global _metrics_initialized

    with _metrics_lock:
        if _metrics_initialized:
            return

        COMMITS_APPENDED = Counter(
            "commitstore_commits_appended_total",
            "Total number of commits appended",
        )

        VERSION_CONFLICTS = Counter(
            "commitstore_version_conflicts_total",
            "Total number of appends rejected by the version guard",
        )

        # labels: operation (query, scan)
        READ_DURATION = Histogram(
            "commitstore_read_duration_seconds",
            "Duration of commit reads in seconds",
            labelnames=["operation"],
            buckets=(0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0),
        )

        _metrics_initialized = True
        logger.info("Prometheus metrics initialized")


def start_metrics_server(enabled: bool, port: int) -> None:
    """
    Start Prometheus metrics HTTP server in a background thread.

    Args:
        enabled: Whether to start the server
        port: HTTP port for /metrics
    """
    if not enabled:
        logger.info("Metrics server disabled")
        return

    init_metrics()
    start_http_server(port, addr="0.0.0.0")
    logger.info(f"Metrics server started on http://0.0.0.0:{port}/metrics")


def track_append() -> None:
    if COMMITS_APPENDED is not None:
        COMMITS_APPENDED.inc()


def track_conflict() -> None:
    if VERSION_CONFLICTS is not None:
        VERSION_CONFLICTS.inc()


@contextmanager
def track_read_duration(operation: str) -> Generator[None, None, None]:
    """
    Context manager for timing a read.

    Usage:
        with track_read_duration("scan"):
            ...
    """
    if READ_DURATION is None:
        yield
        return

    with READ_DURATION.labels(operation=operation).time():
        yield
