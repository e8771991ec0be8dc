"""Integration test fixtures.

Provides a fully wired AppState: real httpx client, PokeApiProvider, LookupCache
and command handler. Tests mock the GraphQL endpoint with respx.
"""

from __future__ import annotations

import httpx
import pytest

from pokecache.cache import LookupCache
from pokecache.commands import PokeCommandHandler
from pokecache.config import Settings
from pokecache.provider import PokeApiProvider
from pokecache.state import AppState

ENDPOINT = "https://graphql.pokeapi.test/v1beta"


@pytest.fixture()
async def app_state():
    """Full AppState wired the way the console runner wires it (not started)."""
    settings = Settings(
        provider={"endpoint": ENDPOINT},
        refresh={"interval_seconds": 3600, "timeout_seconds": 5},
    )
    async with httpx.AsyncClient() as client:
        provider = PokeApiProvider(client, settings.provider)
        cache = LookupCache(provider, settings.refresh, autostart=False)
        state = AppState(
            settings=settings,
            cache=cache,
            handler=PokeCommandHandler(cache, settings.commands.prefix),
        )
        yield state
        await cache.aclose()
