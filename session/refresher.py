"""
Periodic balance refresh.

Every interval_s the refresher asks the RGS for the current balance so an
idle player still sees an up-to-date value. At most one refresh task exists
per coordinator: restart() cancels the running one before scheduling anew.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Awaitable, Callable

log = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL_S = 60.0


class BalanceRefresher:
    def __init__(
        self,
        fetch: Callable[[], Awaitable[Any]],
        interval_s: float = DEFAULT_REFRESH_INTERVAL_S,
        name: str = "rgs-balance-refresh",
    ) -> None:
        self._fetch = fetch
        self._interval_s = interval_s
        self._name = name
        self._task: asyncio.Task | None = None
        self._consecutive_errors = 0

    @property
    def interval_s(self) -> float:
        return self._interval_s

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def restart(self) -> None:
        """Cancel any scheduled refresh and start counting the interval from now."""
        self.stop()
        self._task = asyncio.get_running_loop().create_task(self._loop(), name=self._name)

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval_s)
            try:
                await self._fetch()
                self._consecutive_errors = 0
            except Exception as exc:
                # Nobody awaits this task; a failed refresh must not surface anywhere else
                self._consecutive_errors += 1
                if self._consecutive_errors == 1 or self._consecutive_errors % 10 == 0:
                    log.warning("Balance refresh failed (×%d): %s", self._consecutive_errors, exc)
                else:
                    log.debug("Balance refresh failed (×%d): %s", self._consecutive_errors, exc)
