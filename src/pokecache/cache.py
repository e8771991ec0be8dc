"""In-memory Pokémon lookup cache with background refresh.

``LookupCache`` is the only thing the chat layer talks to. It answers two
questions, "is any data loaded yet?" and "which Pokémon did the user mean?",
and never performs I/O on the read path. Freshness is owned entirely by the
``RefreshScheduler`` it composes.

Both "not loaded yet" and "no match" come back from ``get_by_name`` as
``None``; callers that need to tell them apart check ``is_ready()`` first.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from pokecache.config import RefreshSettings
from pokecache.resolver import NameResolver
from pokecache.scheduler import RefreshScheduler, RefreshState
from pokecache.store import RecordStore

if TYPE_CHECKING:
    from types import TracebackType

    from pokecache.models.pokemon import PokemonRecord
    from pokecache.provider import DataProvider

log = structlog.get_logger()


def _loop_is_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class LookupCache:
    """Facade over RecordStore, NameResolver and RefreshScheduler.

    Built inside a running event loop, the cache starts refreshing right away
    (the first fetch runs in the background). Built outside one, or with
    ``autostart=False``, it stays not-ready until ``start()`` is called or it
    is entered with ``async with``.
    """

    def __init__(
        self,
        provider: DataProvider,
        settings: RefreshSettings | None = None,
        *,
        autostart: bool = True,
    ) -> None:
        self.store = RecordStore()
        self.resolver = NameResolver(self.store)
        self.scheduler = RefreshScheduler(
            provider, self.store, self.resolver, settings or RefreshSettings()
        )
        if autostart and _loop_is_running():
            self.start()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def is_ready(self) -> bool:
        return self.scheduler.ready

    def is_stale(self) -> bool:
        """True when the last successful refresh is older than one interval."""
        return self.scheduler.expiry.is_expired()

    @property
    def state(self) -> RefreshState:
        return self.scheduler.state

    def get_by_name(self, text: str) -> PokemonRecord | None:
        """Return the record whose name is closest to ``text``, or None."""
        if not text:
            return None
        record_id = self.resolver.resolve(text)
        if record_id is None:
            return None
        return self.store.current().get(record_id)

    def __len__(self) -> int:
        return len(self.store.snapshot)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Begin background refreshing. Returns immediately."""
        self.scheduler.start()

    async def refresh(self) -> bool:
        """Refresh now, joining any attempt already in flight."""
        return await self.scheduler.refresh()

    async def aclose(self) -> None:
        await self.scheduler.stop()
        log.info("lookup_cache_closed")

    async def __aenter__(self) -> LookupCache:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
