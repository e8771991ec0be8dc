"""Immutable record snapshots and the store that swaps them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import TYPE_CHECKING

from pokecache.errors import ErrorCode, FetchError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from pokecache.models.pokemon import PokemonRecord


@dataclass(frozen=True)
class Snapshot:
    """Read-only id → record mapping produced by one refresh.

    Iteration order is the order records were supplied to ``build``.
    """

    records: Mapping[int, PokemonRecord] = field(default_factory=lambda: MappingProxyType({}))
    fetched_at: datetime | None = None

    @classmethod
    def build(cls, records: Iterable[PokemonRecord]) -> Snapshot:
        by_id: dict[int, PokemonRecord] = {}
        for record in records:
            if record.id in by_id:
                raise FetchError(
                    ErrorCode.DUPLICATE_RECORD,
                    f"Duplicate record id {record.id} ({by_id[record.id].name!r}, {record.name!r})",
                )
            by_id[record.id] = record
        return cls(records=MappingProxyType(by_id), fetched_at=datetime.now(UTC))

    def __len__(self) -> int:
        return len(self.records)


EMPTY_SNAPSHOT = Snapshot()


class RecordStore:
    """Holds the current snapshot. The only write is a wholesale ``install``."""

    def __init__(self) -> None:
        self._snapshot = EMPTY_SNAPSHOT

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def current(self) -> Mapping[int, PokemonRecord]:
        return self._snapshot.records

    def install(self, snapshot: Snapshot) -> None:
        # Single reference swap: readers see the old snapshot or the new one.
        self._snapshot = snapshot
