"""Response shapes of the PokeAPI GraphQL endpoint.

Only the fields selected by ``pokecache.provider.ALL_POKEMON_QUERY`` are
modelled. Unknown fields are ignored so upstream additions don't break parsing.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LocalizedName(BaseModel):
    name: str


class StatSlot(BaseModel):
    base_stat: int


class TypeRef(BaseModel):
    name: str


class TypeSlot(BaseModel):
    type: TypeRef = Field(alias="pokemon_v2_type")


class AbilityRef(BaseModel):
    name: str  # slug, e.g. "solar-power"
    names: list[LocalizedName] = Field(default=[], alias="pokemon_v2_abilitynames")


class AbilitySlot(BaseModel):
    ability: AbilityRef = Field(alias="pokemon_v2_ability")


class SpeciesRef(BaseModel):
    id: int
    names: list[LocalizedName] = Field(default=[], alias="pokemon_v2_pokemonspeciesnames")


class PokemonNode(BaseModel):
    id: int
    stats: list[StatSlot] = Field(default=[], alias="pokemon_v2_pokemonstats")
    types: list[TypeSlot] = Field(default=[], alias="pokemon_v2_pokemontypes")
    abilities: list[AbilitySlot] = Field(default=[], alias="pokemon_v2_pokemonabilities")
    species: SpeciesRef | None = Field(default=None, alias="pokemon_v2_pokemonspecy")


class AllPokemonData(BaseModel):
    pokemon: list[PokemonNode] = Field(alias="pokemon_v2_pokemon")


class GraphQLError(BaseModel):
    message: str


class AllPokemonResponse(BaseModel):
    data: AllPokemonData | None = None
    errors: list[GraphQLError] = []
