"""Unit-specific fixtures (no I/O; providers are in-memory fakes)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pokecache.cache import LookupCache
from pokecache.config import RefreshSettings
from pokecache.resolver import NameResolver
from pokecache.store import RecordStore, Snapshot

if TYPE_CHECKING:
    from conftest import FakeProvider

    from pokecache.models.pokemon import PokemonRecord


@pytest.fixture()
def store(sample_records: list[PokemonRecord]) -> RecordStore:
    s = RecordStore()
    s.install(Snapshot.build(sample_records))
    return s


@pytest.fixture()
def resolver(store: RecordStore) -> NameResolver:
    return NameResolver(store)


@pytest.fixture()
async def cache(fake_provider: FakeProvider):
    """LookupCache over the fake provider. Not auto-started; tests drive refreshes."""
    c = LookupCache(
        fake_provider,
        RefreshSettings(interval_seconds=3600, timeout_seconds=1),
        autostart=False,
    )
    yield c
    await c.aclose()


@pytest.fixture()
async def loaded_cache(cache: LookupCache) -> LookupCache:
    assert await cache.refresh() is True
    return cache
