from __future__ import annotations

from contextlib import asynccontextmanager

import pytest

import app.workers.session_expiry_worker as worker_module


class FakeSessionService:
    instances: list[FakeSessionService] = []

    def __init__(self, sessions_repository, messaging_repository) -> None:
        self.sessions_repository = sessions_repository
        self.messaging_repository = messaging_repository
        FakeSessionService.instances.append(self)

    async def expire_sessions(self) -> int:
        return 3


@pytest.mark.asyncio
async def test_run_cycle_sweeps_in_one_transaction(monkeypatch: pytest.MonkeyPatch) -> None:
    opened: list[object] = []
    db_session = object()

    @asynccontextmanager
    async def _fake_scope():
        opened.append(db_session)
        yield db_session

    FakeSessionService.instances.clear()
    monkeypatch.setattr(worker_module, "session_scope", _fake_scope)
    monkeypatch.setattr(worker_module, "SessionService", FakeSessionService)

    assert await worker_module.run_cycle() == 3
    assert opened == [db_session]
    instance = FakeSessionService.instances[0]
    assert instance.sessions_repository.session is db_session
    assert instance.messaging_repository.session is db_session


@pytest.mark.asyncio
async def test_main_once_mode_runs_single_cycle(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = 0

    async def _fake_cycle() -> int:
        nonlocal calls
        calls += 1
        return 0

    monkeypatch.setenv("SESSION_EXPIRY_WORKER_MODE", "once")
    monkeypatch.setattr(worker_module, "run_cycle", _fake_cycle)

    await worker_module.main()

    assert calls == 1
