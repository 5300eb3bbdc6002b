import asyncio
from collections.abc import Awaitable, Callable

import structlog

logger = structlog.get_logger(__name__)


class SessionTicker:
    """
    Owned repeating timer that calls ``callback`` once per ``interval``.

    At most one tick task exists at a time. ``cancel()`` releases it without
    waiting, ``aclose()`` releases it and waits until the task has finished.
    Cancelling from inside the callback is allowed: the loop notices it is
    no longer the current task and exits after the callback returns.

    Usage:
        async with SessionTicker(session.tick) as ticker:
            ...
    """

    def __init__(
        self,
        callback: Callable[[], None],
        interval: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._callback = callback
        self._interval = interval
        self._sleep = sleep
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        if task is not asyncio.current_task():
            task.cancel()

    def restart(self) -> None:
        """Drop any pending interval and begin a fresh one from now."""
        self.cancel()
        self.start()

    async def aclose(self) -> None:
        task = self._task
        self.cancel()
        if task is not None and task is not asyncio.current_task():
            await asyncio.gather(task, return_exceptions=True)

    async def __aenter__(self) -> "SessionTicker":
        self.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def _run(self) -> None:
        me = asyncio.current_task()
        while self._task is me:
            await self._sleep(self._interval)
            if self._task is not me:
                break
            try:
                self._callback()
            except Exception:
                logger.exception("session_tick_failed")
                if self._task is me:
                    self._task = None
                return
