"""
Prometheus metrics for API calls.

The executor records one sample per request: a counter labelled by HTTP
method and outcome (status code, or ``transport_error``) and a latency
histogram labelled by method.  Paths are not used as labels
because order ids would make the series unbounded.  Call
``start_metrics_server`` from a long-running process to expose them.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from prometheus_client import Counter, Histogram, start_http_server

logger = logging.getLogger(__name__)

REQUESTS = Counter(
    "rhcrypto_requests_total",
    "Authenticated API requests by method and outcome",
    labelnames=["method", "status"],
)
REQUEST_SECONDS = Histogram(
    "rhcrypto_request_seconds",
    "Latency of authenticated API requests",
    labelnames=["method"],
)


def record_request(method: str, status: str, elapsed: float) -> None:
    REQUESTS.labels(method=method, status=status).inc()
    REQUEST_SECONDS.labels(method=method).observe(elapsed)


def start_metrics_server(port: Optional[int] = None) -> int:
    """Expose metrics over HTTP on ``port`` (default ``PROMETHEUS_PORT`` or 9108)."""
    port = port or int(os.environ.get("PROMETHEUS_PORT", "9108"))
    start_http_server(port)
    logger.info("Metrics server listening on port %d", port)
    return port
