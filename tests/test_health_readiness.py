from __future__ import annotations

import pytest
from fastapi import HTTPException

import juvo.main as main_module
from juvo.core.config import Settings
from juvo.core.database import Database


@pytest.mark.asyncio
async def test_readiness_check_returns_ready_when_database_is_available(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def _ready() -> bool:
        return True

    monkeypatch.setattr(main_module, "_is_database_ready", _ready)

    response = await main_module.readiness_check()

    assert response["status"] == "ready"
    assert response["database"] == "ok"
    assert "timestamp" in response


@pytest.mark.asyncio
async def test_readiness_check_returns_503_when_database_is_unavailable(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def _not_ready() -> bool:
        return False

    monkeypatch.setattr(main_module, "_is_database_ready", _not_ready)

    with pytest.raises(HTTPException) as exc:
        await main_module.readiness_check()
    assert exc.value.status_code == 503


@pytest.mark.asyncio
async def test_database_not_ready_before_init(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "db", Database())

    assert await main_module._is_database_ready() is False


@pytest.mark.asyncio
async def test_healthcheck_does_not_touch_database() -> None:
    assert await main_module.healthcheck() == {"status": "ok"}


def test_create_app_mounts_routers_under_api_prefix() -> None:
    application = main_module.create_app(Settings(_env_file=None, api_prefix="/v2"))

    paths = set(application.openapi()["paths"])
    assert "/v2/bookings" in paths
    assert "/v2/bookings/{booking_id}/confirm-payment" in paths
    assert "/v2/scheduling/my" in paths
    assert "/health" in paths
    assert "/ready" in paths
