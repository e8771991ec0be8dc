from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class PokemonRecord(BaseModel):
    """One normalized Pokémon, as held in a cache snapshot."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    national_dex_number: int
    base_stats: tuple[int, ...] = ()  # HP, Atk, Def, SpA, SpD, Spe
    types: tuple[str, ...] = ()
    abilities: tuple[str, ...] = ()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v
