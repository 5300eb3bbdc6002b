import asyncio
import time
from collections.abc import Awaitable, Callable

import structlog

from ..exceptions import LiveSessionForbiddenException, LiveSessionNotFoundException
from ..metrics import WORKOUT_SESSIONS_ABANDONED_TOTAL, WORKOUT_SESSIONS_EXPIRED_TOTAL
from .runner import SessionRunner

logger = structlog.get_logger(__name__)


class SessionRegistry:
    """
    In-memory live sessions of this process, keyed by session id.

    Every ``add`` and ``get`` marks the session as used. Sessions left
    untouched for ``idle_timeout`` seconds are closed by ``discard_idle``,
    which the reaper task runs periodically, so a client that walks away
    without abandoning its session does not keep a ticker alive.
    """

    def __init__(
        self,
        idle_timeout: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if idle_timeout is not None and idle_timeout <= 0:
            raise ValueError("idle_timeout must be positive")
        self.idle_timeout = idle_timeout
        self._clock = clock
        self._runners: dict[str, SessionRunner] = {}
        self._last_used: dict[str, float] = {}
        self._reaper: asyncio.Task | None = None

    def __len__(self) -> int:
        return len(self._runners)

    def add(self, runner: SessionRunner) -> SessionRunner:
        self._runners[runner.id] = runner
        self._last_used[runner.id] = self._clock()
        return runner

    def get(self, session_id: str, user_id: str) -> SessionRunner:
        runner = self._runners.get(session_id)
        if runner is None:
            raise LiveSessionNotFoundException(session_id)
        if runner.user_id != user_id:
            logger.warning(
                "workout_session_access_denied",
                session_id=session_id,
                owner_id=runner.user_id,
                user_id=user_id,
            )
            raise LiveSessionForbiddenException(session_id)
        self._last_used[session_id] = self._clock()
        return runner

    async def discard(self, session_id: str) -> None:
        runner = self._runners.pop(session_id, None)
        self._last_used.pop(session_id, None)
        if runner is None:
            return
        await runner.close()
        if runner.workout_id is None:
            WORKOUT_SESSIONS_ABANDONED_TOTAL.inc()
        logger.info("workout_session_discarded", session_id=session_id, saved=runner.workout_id is not None)

    async def discard_idle(self) -> list[str]:
        """Close every session unused for longer than ``idle_timeout``."""
        if self.idle_timeout is None:
            return []
        deadline = self._clock() - self.idle_timeout
        expired = [sid for sid, used in self._last_used.items() if used <= deadline]
        for session_id in expired:
            runner = self._runners[session_id]
            logger.info(
                "workout_session_expired",
                session_id=session_id,
                user_id=runner.user_id,
                phase=runner.session.phase.value,
                completed=runner.session.completed,
            )
            WORKOUT_SESSIONS_EXPIRED_TOTAL.inc()
            await self.discard(session_id)
        return expired

    def start_reaper(
        self,
        interval: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if self.idle_timeout is None or (self._reaper is not None and not self._reaper.done()):
            return
        self._reaper = asyncio.get_running_loop().create_task(self._reap(interval, sleep))

    async def _reap(self, interval: float, sleep: Callable[[float], Awaitable[None]]) -> None:
        while True:
            await sleep(interval)
            try:
                await self.discard_idle()
            except Exception:
                logger.exception("workout_session_reap_failed")

    async def close_all(self) -> None:
        reaper, self._reaper = self._reaper, None
        if reaper is not None:
            reaper.cancel()
            await asyncio.gather(reaper, return_exceptions=True)
        for session_id in list(self._runners):
            await self.discard(session_id)
