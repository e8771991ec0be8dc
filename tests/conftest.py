"""Shared fixtures: sample records, a controllable fake provider, PokeAPI payloads."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable, Sequence
from typing import Any

import pytest

from pokecache.models.pokemon import PokemonRecord

RecordFactory = Callable[..., PokemonRecord]


class FakeProvider:
    """In-memory DataProvider.

    ``gate`` (when set) blocks every fetch until the event is released, which
    lets tests hold an attempt in flight. ``error`` is raised after the gate.
    """

    def __init__(self, records: Sequence[PokemonRecord] = ()) -> None:
        self.records = list(records)
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.calls = 0

    async def fetch_all(self) -> list[PokemonRecord]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.records)


@pytest.fixture()
def make_record() -> RecordFactory:
    def _make(record_id: int, name: str, **overrides: Any) -> PokemonRecord:
        fields: dict[str, Any] = {
            "id": record_id,
            "name": name,
            "national_dex_number": record_id,
            "base_stats": (45, 49, 49, 65, 65, 45),
            "types": ("normal",),
            "abilities": ("Run Away",),
        }
        fields.update(overrides)
        return PokemonRecord(**fields)

    return _make


@pytest.fixture()
def sample_records(make_record: RecordFactory) -> list[PokemonRecord]:
    return [
        make_record(
            1,
            "Bulbasaur",
            types=("grass", "poison"),
            abilities=("Overgrow", "Chlorophyll"),
        ),
        make_record(
            4,
            "Charmander",
            base_stats=(39, 52, 43, 60, 50, 65),
            types=("fire",),
            abilities=("Blaze", "Solar Power"),
        ),
        make_record(
            6,
            "Charizard",
            base_stats=(78, 84, 78, 109, 85, 100),
            types=("fire", "flying"),
            abilities=("Blaze", "Solar Power"),
        ),
        make_record(
            25,
            "Pikachu",
            base_stats=(35, 55, 40, 50, 50, 90),
            types=("electric",),
            abilities=("Static", "Lightning Rod"),
        ),
    ]


@pytest.fixture()
def fake_provider(sample_records: list[PokemonRecord]) -> FakeProvider:
    return FakeProvider(sample_records)


@pytest.fixture()
def pokeapi_payload() -> dict[str, Any]:
    """A trimmed GraphQL response as returned by beta.pokeapi.co."""

    def ability(slug: str, localized: str | None) -> dict[str, Any]:
        names = [{"name": localized}] if localized else []
        return {"pokemon_v2_ability": {"name": slug, "pokemon_v2_abilitynames": names}}

    return {
        "data": {
            "pokemon_v2_pokemon": [
                {
                    "id": 6,
                    "pokemon_v2_pokemonstats": [
                        {"base_stat": s} for s in (78, 84, 78, 109, 85, 100)
                    ],
                    "pokemon_v2_pokemontypes": [
                        {"pokemon_v2_type": {"name": "fire"}},
                        {"pokemon_v2_type": {"name": "flying"}},
                    ],
                    "pokemon_v2_pokemonabilities": [
                        ability("blaze", "Blaze"),
                        ability("solar-power", None),
                    ],
                    "pokemon_v2_pokemonspecy": {
                        "id": 6,
                        "pokemon_v2_pokemonspeciesnames": [{"name": "Charizard"}],
                    },
                },
                {
                    "id": 25,
                    "pokemon_v2_pokemonstats": [
                        {"base_stat": s} for s in (35, 55, 40, 50, 50, 90)
                    ],
                    "pokemon_v2_pokemontypes": [{"pokemon_v2_type": {"name": "electric"}}],
                    "pokemon_v2_pokemonabilities": [
                        ability("static", "Static"),
                        ability("lightning-rod", "Lightning Rod"),
                    ],
                    "pokemon_v2_pokemonspecy": {
                        "id": 25,
                        "pokemon_v2_pokemonspeciesnames": [{"name": "Pikachu"}],
                    },
                },
                {
                    # A form with no English species name: skipped.
                    "id": 10999,
                    "pokemon_v2_pokemonstats": [],
                    "pokemon_v2_pokemontypes": [],
                    "pokemon_v2_pokemonabilities": [],
                    "pokemon_v2_pokemonspecy": {
                        "id": 999,
                        "pokemon_v2_pokemonspeciesnames": [],
                    },
                },
            ]
        }
    }


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    """Environment for running ``python -m pokecache`` without touching the network.

    The endpoint points at a closed local port, so every refresh fails fast.
    """
    env = os.environ.copy()
    env["POKECACHE__PROVIDER__ENDPOINT"] = "http://127.0.0.1:9/graphql"
    env["POKECACHE__PROVIDER__REQUEST_TIMEOUT_SECONDS"] = "2"
    env["POKECACHE__LOGGING__FORMAT"] = "json"
    return env
