from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional

from bcvcalc.models.rates import ExchangeRate
from .base import RateProvider

"""Rate refresh coordinator.

Holds the most recent ExchangeRate and exposes a `loading` flag while a fetch
is outstanding. Refresh requests arriving during a fetch join the in-flight
fetch rather than issuing a second lookup; whichever fetch completes last
owns `current`.
"""

logger = logging.getLogger("bcvcalc.rates.refresh")


class RateRefresher:
    def __init__(self, provider: RateProvider):
        self._provider = provider
        self._current: Optional[ExchangeRate] = None
        self._inflight: Optional[asyncio.Task[ExchangeRate]] = None

    @property
    def current(self) -> Optional[ExchangeRate]:
        return self._current

    @property
    def loading(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def _run(self) -> ExchangeRate:
        try:
            rate = await self._provider.fetch_rate()
            self._current = rate
            return rate
        finally:
            self._inflight = None

    async def refresh(self) -> ExchangeRate:
        task = self._inflight
        if task is None or task.done():
            task = asyncio.ensure_future(self._run())
            self._inflight = task
        else:
            logger.debug("refresh already in flight; joining it")
        # A cancelled caller must not cancel the fetch other callers wait on
        return await asyncio.shield(task)

    async def close(self) -> None:
        """Cancel a fetch still in flight; used on shutdown."""
        task = self._inflight
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
