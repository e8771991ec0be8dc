from __future__ import annotations

from pokecache.models.pokeapi import (
    AbilitySlot,
    AllPokemonData,
    AllPokemonResponse,
    GraphQLError,
    PokemonNode,
    SpeciesRef,
    StatSlot,
    TypeSlot,
)
from pokecache.models.pokemon import PokemonRecord

__all__ = [
    # cache
    "PokemonRecord",
    # pokeapi
    "AllPokemonResponse",
    "AllPokemonData",
    "PokemonNode",
    "SpeciesRef",
    "StatSlot",
    "TypeSlot",
    "AbilitySlot",
    "GraphQLError",
]
