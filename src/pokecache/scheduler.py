"""Background refresh of the record store.

One timer task calls the provider on a fixed wall-clock cadence. At most one
refresh attempt runs at a time: eager callers join the attempt in flight and
timer ticks that land during an attempt are skipped, not queued.

A failed attempt is logged and otherwise ignored: the previous snapshot stays
in place and the ready flag is never cleared. Provider failures never cross
this class boundary.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta
from enum import StrEnum
from typing import TYPE_CHECKING

import structlog

from pokecache.errors import ErrorCode, FetchError
from pokecache.store import Snapshot
from pokecache.ttl import Expiry

if TYPE_CHECKING:
    from pokecache.config import RefreshSettings
    from pokecache.provider import DataProvider
    from pokecache.resolver import NameResolver
    from pokecache.store import RecordStore

log = structlog.get_logger()


class RefreshState(StrEnum):
    UNINITIALIZED = "uninitialized"
    REFRESHING = "refreshing"
    READY = "ready"


class RefreshScheduler:
    def __init__(
        self,
        provider: DataProvider,
        store: RecordStore,
        resolver: NameResolver,
        settings: RefreshSettings,
    ) -> None:
        self._provider = provider
        self._store = store
        self._resolver = resolver
        self._settings = settings
        self.expiry = Expiry(timedelta(seconds=settings.interval_seconds))
        self.last_error: Exception | None = None
        self._ready = False
        self._inflight: asyncio.Task[bool] | None = None
        self._timer: asyncio.Task[None] | None = None

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    @property
    def state(self) -> RefreshState:
        if self.in_flight:
            return RefreshState.REFRESHING
        if self._ready:
            return RefreshState.READY
        return RefreshState.UNINITIALIZED

    def start(self) -> None:
        """Kick off the first refresh and arm the timer. Must run inside an event loop."""
        if self._timer is not None:
            return
        self.trigger()
        self._timer = asyncio.create_task(self._run_timer(), name="pokecache-refresh-timer")
        log.info("refresh_scheduler_started", interval_seconds=self._settings.interval_seconds)

    def trigger(self) -> asyncio.Task[bool]:
        """Start an attempt unless one is already running; return the running attempt."""
        if not self.in_flight:
            self._inflight = asyncio.create_task(self._attempt(), name="pokecache-refresh")
        assert self._inflight is not None
        return self._inflight

    async def refresh(self) -> bool:
        """Refresh now, or wait for the attempt in flight. True if it succeeded."""
        # Shield so one impatient caller can't cancel the attempt for everyone.
        return await asyncio.shield(self.trigger())

    async def stop(self) -> None:
        tasks = [t for t in (self._timer, self._inflight) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._timer = None
        self._inflight = None

    async def _attempt(self) -> bool:
        log.info("refresh_started")
        try:
            records = await asyncio.wait_for(
                self._provider.fetch_all(), timeout=self._settings.timeout_seconds
            )
            snapshot = Snapshot.build(records)
        except TimeoutError:
            self.last_error = FetchError(
                ErrorCode.REFRESH_TIMEOUT,
                f"Provider did not respond within {self._settings.timeout_seconds}s",
            )
            log.warning(
                "refresh_failed",
                code=ErrorCode.REFRESH_TIMEOUT,
                ready=self._ready,
                exc_info=True,
            )
            return False
        except FetchError as exc:
            self.last_error = exc
            log.warning(
                "refresh_failed", code=exc.code, error=exc.message, ready=self._ready, exc_info=True
            )
            return False
        except Exception as exc:
            self.last_error = exc
            log.error("refresh_failed", error=str(exc), ready=self._ready, exc_info=True)
            return False

        self._install(snapshot)
        return True

    def _install(self, snapshot: Snapshot) -> None:
        # No await between these lines: readers see the new snapshot and an
        # empty memo together, or neither.
        self._store.install(snapshot)
        self._resolver.clear()
        self.expiry.refresh()
        self._ready = True
        self.last_error = None
        log.info("refresh_complete", count=len(snapshot))

    async def _run_timer(self) -> None:
        loop = asyncio.get_running_loop()
        interval = self._settings.interval_seconds
        next_tick = loop.time() + interval
        while True:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            if self.in_flight:
                log.info("refresh_skipped", reason="attempt_in_flight")
            else:
                self.trigger()
            next_tick += interval
            now = loop.time()
            if next_tick <= now:
                # Ticks missed while the loop was blocked collapse into the next one.
                next_tick += ((now - next_tick) // interval + 1) * interval
