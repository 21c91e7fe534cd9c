"""Periodic state reconciliation for the TV and the Chromecast.

Every tick queries both devices concurrently under a deadline equal to the
poll interval and keeps whatever answered in time. A query that failed or
ran out of time leaves its cached value untouched.
"""

import asyncio
import contextlib
import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional

from .cast import SessionedLink
from .exceptions import TickTimeoutError
from .remote import SimpleRemoteLink

_LOGGER = logging.getLogger(__name__)

StateListener = Callable[["CachedState"], None]

# Query name -> CachedState field
_FIELDS = {
    "power": "power_on",
    "volume": "volume",
}


@dataclass(frozen=True)
class CachedState:
    """Last observed device state. Replaced as a whole on every tick."""

    power_on: bool = False
    volume: Optional[int] = None
    updated_at: Optional[float] = None


class Reconciler:
    """Keep a ``CachedState`` in sync with both devices."""

    def __init__(
        self,
        primary: SimpleRemoteLink,
        secondary: SessionedLink,
        interval: float = 2.0,
    ):
        """Initialize the reconciler.

        Args:
            primary: TV remote link, polled for liveness
            secondary: Chromecast link, polled for volume while connected
            interval: Seconds between ticks, also the deadline of one tick
        """
        self.primary = primary
        self.secondary = secondary
        self.interval = interval
        self.last_errors: Dict[str, Exception] = {}
        self._state = CachedState()
        self._listeners: List[StateListener] = []
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> CachedState:
        """Current snapshot; safe to read at any time."""
        return self._state

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Call listener with the new state after every tick.

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def remove_listener() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove_listener

    async def async_tick(self) -> CachedState:
        """Run one reconciliation pass and return the resulting state."""
        _LOGGER.debug("Tick")
        queries = {"power": self.primary.async_check_alive()}
        if self.secondary.is_connected:
            queries["volume"] = self.secondary.async_get_volume()

        tasks = {name: asyncio.ensure_future(query) for name, query in queries.items()}
        try:
            done, pending = await asyncio.wait(tasks.values(), timeout=self.interval)
        finally:
            for task in tasks.values():
                if not task.done():
                    task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        updates = {}
        errors: Dict[str, Exception] = {}
        for name, task in tasks.items():
            if task not in done:
                errors[name] = TickTimeoutError(name, self.interval)
            elif task.exception() is not None:
                errors[name] = task.exception()
            else:
                updates[_FIELDS[name]] = task.result()

        for name, err in errors.items():
            _LOGGER.debug("Keeping cached %s: %s", name, err)

        self.last_errors = errors
        self._state = replace(self._state, updated_at=time.time(), **updates)
        self._notify()
        return self._state

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                _LOGGER.exception("Error in state listener")

    async def _async_run(self) -> None:
        while True:
            try:
                await self.async_tick()
            except Exception:
                _LOGGER.exception("Reconciler tick failed")
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Start ticking in the background on the running loop."""
        if self.running:
            return
        _LOGGER.debug("Starting reconciler (interval %.1fs)", self.interval)
        self._task = asyncio.ensure_future(self._async_run())

    async def async_stop(self) -> None:
        """Stop the background loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
