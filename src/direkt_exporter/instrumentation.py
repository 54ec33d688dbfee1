"""Exporter self-metrics, exposed on /metrics from the default registry."""

import time

from fastapi import FastAPI, Request
from prometheus_client import Counter, Histogram, Info

from . import __version__


BUILD_INFO = Info("direkt_exporter_build", "Direkt exporter build information")
BUILD_INFO.info({"version": __version__})

REQUEST_COUNT = Counter(
    "direkt_exporter_http_requests_total",
    "Total HTTP requests",
    ["endpoint", "method", "status_code"],
)

REQUEST_LATENCY = Histogram(
    "direkt_exporter_http_request_duration_seconds",
    "HTTP request latency",
    ["endpoint", "method"],
)

PROBES_TOTAL = Counter(
    "direkt_exporter_probes_total",
    "Probe requests by outcome",
    ["result"],
)


def _endpoint(request: Request) -> str:
    # Unmatched paths share one label value to keep cardinality bounded
    route = request.scope.get("route")
    return getattr(route, "path", "unmatched")


def setup_metrics(app: FastAPI) -> None:
    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        endpoint = _endpoint(request)

        REQUEST_COUNT.labels(
            endpoint=endpoint,
            method=request.method,
            status_code=response.status_code,
        ).inc()

        REQUEST_LATENCY.labels(endpoint=endpoint, method=request.method).observe(
            duration
        )

        return response
