from __future__ import annotations

import json

import pytest
from fastapi import Request

import app.main as main_module
from app.core.config import get_settings
from app.shared.exceptions import ServiceUnavailableException, app_exception_handler


def _mounted_paths() -> set[str]:
    return {getattr(route, "path", "") for route in main_module.app.routes}


def test_domain_routers_are_mounted_under_api_prefix() -> None:
    prefix = get_settings().api_prefix
    paths = _mounted_paths()

    assert f"{prefix}/sessions/bookings" in paths
    assert f"{prefix}/sessions/chat-permission/{{expert_id}}" in paths
    assert f"{prefix}/sessions/{{booking_id}}/complete" in paths
    assert f"{prefix}/sessions/expire" in paths
    assert f"{prefix}/experts/search" in paths
    assert f"{prefix}/messaging/conversations/{{conversation_id}}/messages" in paths
    assert f"{prefix}/community/waitlist" in paths
    assert {"/health", "/ready", "/metrics"} <= paths


@pytest.mark.asyncio
async def test_healthcheck_reports_service_name_without_touching_database(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def _must_not_run() -> bool:
        raise AssertionError("liveness must not check the database")

    monkeypatch.setattr(main_module, "_is_database_ready", _must_not_run)

    response = await main_module.healthcheck()

    assert response["status"] == "ok"
    assert response["service"] == get_settings().app_name


@pytest.mark.asyncio
async def test_readiness_reports_database_ok(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _ready() -> bool:
        return True

    monkeypatch.setattr(main_module, "_is_database_ready", _ready)

    response = await main_module.readiness_check()

    assert response["status"] == "ready"
    assert response["database"] == "ok"


@pytest.mark.asyncio
async def test_readiness_failure_uses_not_ready_error_body(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _not_ready() -> bool:
        return False

    monkeypatch.setattr(main_module, "_is_database_ready", _not_ready)

    with pytest.raises(ServiceUnavailableException) as exc:
        await main_module.readiness_check()

    response = await app_exception_handler(Request({"type": "http", "headers": []}), exc.value)
    assert response.status_code == 503
    assert json.loads(response.body) == {
        "error": {"code": "not_ready", "message": "Database is not ready"},
    }
