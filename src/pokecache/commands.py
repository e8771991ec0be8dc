"""Chat command handling for ``!poke <name>``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pokecache.cache import LookupCache
    from pokecache.models.pokemon import PokemonRecord

log = structlog.get_logger()

NOT_READY_REPLY = "The Pokédex is still loading, try again in a moment."


def format_record(record: PokemonRecord) -> str:
    """Render a record as a single chat line.

    ``#6 Charizard - Fire/Flying - Base stats: 78/84/78/109/85/100 - Abilities: Blaze/Solar Power``
    """
    types = "/".join(t.title() for t in record.types)
    base_stats = "/".join(str(s) for s in record.base_stats)
    abilities = "/".join(record.abilities)
    return (
        f"#{record.national_dex_number} {record.name} - {types} - "
        f"Base stats: {base_stats} - Abilities: {abilities}"
    )


class PokeCommandHandler:
    """Turn chat messages into replies. Returns None when nothing should be said."""

    def __init__(self, cache: LookupCache, prefix: str = "!poke") -> None:
        self._cache = cache
        self._prefix = prefix

    def parse(self, text: str) -> str | None:
        """Extract the query from a command message, or None if it isn't one."""
        head, _, rest = text.strip().partition(" ")
        if head != self._prefix:
            return None
        return rest.strip()

    def handle(self, text: str) -> str | None:
        query = self.parse(text)
        if not query:
            return None
        if not self._cache.is_ready():
            return NOT_READY_REPLY

        record = self._cache.get_by_name(query)
        if record is None:
            log.info("command_no_match", query=query)
            return None
        log.info("command_matched", query=query, record_id=record.id, name=record.name)
        return format_record(record)
