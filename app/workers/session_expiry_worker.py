"""Executable worker that auto-completes expired weekly/monthly sessions."""

from __future__ import annotations

import asyncio
import logging
import os

from app.core.database import session_scope
from app.modules.messaging.repository import MessagingRepository
from app.modules.sessions.repository import SessionsRepository
from app.modules.sessions.service import SessionService

logger = logging.getLogger(__name__)


async def run_cycle() -> int:
    """Run a single sweep in one DB transaction and return completed count."""
    async with session_scope() as session:
        service = SessionService(
            sessions_repository=SessionsRepository(session),
            messaging_repository=MessagingRepository(session),
        )
        return await service.expire_sessions()


async def main() -> None:
    """Run once (cron style) or keep polling according to worker mode."""
    logging.basicConfig(
        level=os.getenv("SESSION_EXPIRY_WORKER_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    mode = os.getenv("SESSION_EXPIRY_WORKER_MODE", "once").strip().lower()
    poll_seconds = int(os.getenv("SESSION_EXPIRY_WORKER_POLL_SECONDS", "86400"))

    if mode == "once":
        completed = await run_cycle()
        logger.info("Session expiry worker completed %s sessions", completed)
        return

    while True:
        try:
            completed = await run_cycle()
            logger.info("Session expiry worker completed %s sessions", completed)
        except Exception:
            logger.exception("Session expiry worker cycle failed")
        await asyncio.sleep(poll_seconds)


if __name__ == "__main__":
    asyncio.run(main())
