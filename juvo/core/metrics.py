"""Prometheus metrics: HTTP traffic, booking transitions and rejected requests."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from time import perf_counter

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

UNMATCHED_PATH_LABEL = "<unmatched>"

HTTP_REQUESTS_TOTAL = Counter(
    "juvo_http_requests_total",
    "HTTP requests served, by route template and status code.",
    ["method", "path", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "juvo_http_request_duration_seconds",
    "HTTP request latency in seconds, by route template.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

BOOKING_TRANSITIONS_TOTAL = Counter(
    "juvo_booking_transitions_total",
    "Booking state transitions applied, by transition name.",
    ["transition"],
)

DOMAIN_ERRORS_TOTAL = Counter(
    "juvo_domain_errors_total",
    "Requests rejected by a domain guard, by error code.",
    ["code"],
)


def _route_template(request: Request) -> str:
    # Raw paths carry ids; only matched route templates keep label cardinality bounded.
    route = request.scope.get("route")
    template = getattr(route, "path", None)
    return str(template) if template else UNMATCHED_PATH_LABEL


async def instrument_http_request(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """HTTP middleware recording request count and latency."""
    started_at = perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed = perf_counter() - started_at
        method = request.method.upper()
        path = _route_template(request)
        HTTP_REQUESTS_TOTAL.labels(method=method, path=path, status_code=str(status_code)).inc()
        HTTP_REQUEST_DURATION_SECONDS.labels(method=method, path=path).observe(elapsed)


def record_booking_transition(transition: str) -> None:
    BOOKING_TRANSITIONS_TOTAL.labels(transition=transition).inc()


def record_domain_error(code: str) -> None:
    DOMAIN_ERRORS_TOTAL.labels(code=code).inc()


def build_metrics_response() -> Response:
    """Render the default registry in Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
