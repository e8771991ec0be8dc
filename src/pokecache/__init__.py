"""Background-refreshed Pokémon lookup cache with fuzzy name matching."""

from __future__ import annotations

from pokecache.cache import LookupCache
from pokecache.errors import ErrorCode, FetchError, PokeCacheError
from pokecache.models.pokemon import PokemonRecord

__version__ = "0.1.0"

__all__ = [
    "LookupCache",
    "PokemonRecord",
    "ErrorCode",
    "FetchError",
    "PokeCacheError",
]
