from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi import Request, Response

import juvo.main as main_module
from juvo.core.metrics import (
    build_metrics_response,
    instrument_http_request,
    record_booking_transition,
)
from juvo.shared.exceptions import InvalidStateException, app_exception_handler


def _make_request(path: str, route_path: str | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "headers": [],
        "client": ("127.0.0.1", 12345),
        "scheme": "http",
        "server": ("testserver", 80),
        "query_string": b"",
    }
    if route_path is not None:
        scope["route"] = SimpleNamespace(path=route_path)
    return Request(scope)


@pytest.mark.asyncio
async def test_http_metrics_use_route_template() -> None:
    async def _no_content(_: Request) -> Response:
        return Response(status_code=204)

    booking_id = "0b8f0a36-5d0a-4f6e-9c1e-3f8f2b4c1a77"
    request = _make_request(f"/api/v1/bookings/{booking_id}", "/api/v1/bookings/{booking_id}")
    await instrument_http_request(request, _no_content)

    payload = build_metrics_response().body.decode("utf-8")
    assert "juvo_http_requests_total" in payload
    assert 'path="/api/v1/bookings/{booking_id}"' in payload
    assert 'status_code="204"' in payload
    assert booking_id not in payload


@pytest.mark.asyncio
async def test_unmatched_paths_share_one_label() -> None:
    async def _not_found(_: Request) -> Response:
        return Response(status_code=404)

    await instrument_http_request(_make_request("/no/such/path"), _not_found)

    payload = build_metrics_response().body.decode("utf-8")
    assert 'path="<unmatched>"' in payload
    assert "/no/such/path" not in payload


@pytest.mark.asyncio
async def test_metrics_endpoint_exposes_prometheus_payload() -> None:
    response = await main_module.metrics_endpoint(_make_request("/metrics", "/metrics"))
    payload = response.body.decode("utf-8")

    assert response.status_code == 200
    assert "juvo_http_requests_total" in payload


def test_booking_transition_counter_is_exported() -> None:
    record_booking_transition("accept")

    payload = build_metrics_response().body.decode("utf-8")
    assert 'juvo_booking_transitions_total{transition="accept"}' in payload


@pytest.mark.asyncio
async def test_domain_errors_are_rendered_and_counted() -> None:
    exc = InvalidStateException("Booking was changed", code="request_already_processed")

    response = await app_exception_handler(_make_request("/api/v1/bookings"), exc)

    assert response.status_code == 409
    assert b'"code":"request_already_processed"' in response.body
    payload = build_metrics_response().body.decode("utf-8")
    assert 'juvo_domain_errors_total{code="request_already_processed"}' in payload
