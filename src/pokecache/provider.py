"""Data sources that supply a complete set of Pokémon records.

The cache only depends on the ``DataProvider`` protocol. ``PokeApiProvider`` is
the production implementation: one GraphQL request against PokeAPI that
returns every Pokémon with its stats, types, abilities and localized names.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import httpx
import structlog
from pydantic import ValidationError

from pokecache.errors import ErrorCode, FetchError
from pokecache.models.pokeapi import AllPokemonResponse
from pokecache.models.pokemon import PokemonRecord

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pokecache.config import ProviderSettings
    from pokecache.models.pokeapi import AbilitySlot, PokemonNode

log = structlog.get_logger()

USER_AGENT = "pokecache/0.1.0"

ALL_POKEMON_QUERY = """
query AllPokemon($languageId: Int!) {
  pokemon_v2_pokemon(order_by: {id: asc}) {
    id
    pokemon_v2_pokemonstats(order_by: {stat_id: asc}) {
      base_stat
    }
    pokemon_v2_pokemontypes(order_by: {slot: asc}) {
      pokemon_v2_type {
        name
      }
    }
    pokemon_v2_pokemonabilities(order_by: {slot: asc}) {
      pokemon_v2_ability {
        name
        pokemon_v2_abilitynames(where: {language_id: {_eq: $languageId}}) {
          name
        }
      }
    }
    pokemon_v2_pokemonspecy {
      id
      pokemon_v2_pokemonspeciesnames(where: {language_id: {_eq: $languageId}}) {
        name
      }
    }
  }
}
"""


class DataProvider(Protocol):
    async def fetch_all(self) -> Sequence[PokemonRecord]:
        """Return every record. Raises ``FetchError`` on any failure."""
        ...


def build_http_client(timeout_seconds: float = 30.0) -> httpx.AsyncClient:
    """Create the shared httpx client used by the provider."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds, connect=5.0),
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    )


def _ability_name(slot: AbilitySlot) -> str:
    if slot.ability.names:
        return slot.ability.names[0].name
    return slot.ability.name.replace("-", " ").title()


def node_to_record(node: PokemonNode) -> PokemonRecord | None:
    """Normalize one GraphQL node. Returns None when it has no (non-blank) localized name."""
    if node.species is None or not node.species.names:
        return None
    name = node.species.names[0].name.strip()
    if not name:
        return None
    return PokemonRecord(
        id=node.id,
        name=name,
        national_dex_number=node.species.id,
        base_stats=tuple(s.base_stat for s in node.stats),
        types=tuple(t.type.name for t in node.types),
        abilities=tuple(_ability_name(a) for a in node.abilities),
    )


class PokeApiProvider:
    """Fetch all Pokémon from the PokeAPI GraphQL endpoint."""

    def __init__(self, client: httpx.AsyncClient, settings: ProviderSettings) -> None:
        self._client = client
        self._settings = settings

    async def fetch_all(self) -> list[PokemonRecord]:
        payload = {
            "query": ALL_POKEMON_QUERY,
            "variables": {"languageId": self._settings.language_id},
        }
        try:
            response = await self._client.post(
                self._settings.endpoint,
                json=payload,
                timeout=self._settings.request_timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise FetchError(
                ErrorCode.FETCH_FAILED,
                f"Request to {self._settings.endpoint} failed: {exc}",
            ) from exc

        if response.status_code != 200:
            raise FetchError(
                ErrorCode.FETCH_FAILED,
                f"HTTP {response.status_code} from {self._settings.endpoint}",
                recoverable=response.status_code >= 500,
            )

        try:
            parsed = AllPokemonResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise FetchError(
                ErrorCode.INVALID_RESPONSE, f"Unexpected response shape: {exc}"
            ) from exc

        if parsed.errors:
            messages = "; ".join(e.message for e in parsed.errors)
            raise FetchError(ErrorCode.INVALID_RESPONSE, f"GraphQL errors: {messages}")
        if parsed.data is None:
            raise FetchError(ErrorCode.INVALID_RESPONSE, "Response contained no data")

        records: list[PokemonRecord] = []
        for node in parsed.data.pokemon:
            try:
                record = node_to_record(node)
            except ValidationError as exc:
                raise FetchError(
                    ErrorCode.INVALID_RESPONSE, f"Invalid record for id {node.id}: {exc}"
                ) from exc
            if record is None:
                log.debug("pokemon_skipped_no_name", pokemon_id=node.id)
                continue
            records.append(record)

        log.info(
            "pokeapi_fetch_complete",
            count=len(records),
            skipped=len(parsed.data.pokemon) - len(records),
        )
        return records
