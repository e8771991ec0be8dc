"""Free-text name → record id resolution by edit distance, memoized per snapshot."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pokecache.store import RecordStore, Snapshot

log = structlog.get_logger()


def levenshtein(a: str, b: str) -> int:
    """Minimum number of single-character edits turning ``a`` into ``b``."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Keep the row as short as possible.
    if len(a) > len(b):
        a, b = b, a

    prev = list(range(len(a) + 1))
    for i, ch_b in enumerate(b, start=1):
        cur = [i]
        for j, ch_a in enumerate(a, start=1):
            cost = 0 if ch_a == ch_b else 1
            cur.append(min(prev[j] + 1, cur[j - 1] + 1, prev[j - 1] + cost))
        prev = cur
    return prev[-1]


class NameMemo:
    """Query → id associations valid for exactly one snapshot."""

    __slots__ = ("snapshot", "entries")

    def __init__(self, snapshot: Snapshot) -> None:
        self.snapshot = snapshot
        self.entries: dict[str, int] = {}


class NameResolver:
    """Resolve possibly-misspelled names against the store's current snapshot.

    The closest name by case-insensitive Levenshtein distance wins; on a tie the
    record that comes first in snapshot order is kept. Results are memoized on
    the exact (unfolded) query string until the next snapshot is installed.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store
        self._memo = NameMemo(store.snapshot)
        self.comparisons = 0

    def clear(self) -> None:
        """Discard every memoized association and bind to the current snapshot."""
        self._memo = NameMemo(self._store.snapshot)

    def memo_size(self) -> int:
        return len(self._memo.entries)

    def resolve(self, query: str) -> int | None:
        if not query:
            return None

        snapshot = self._store.snapshot
        memo = self._memo
        if memo.snapshot is not snapshot:
            # Store was swapped without clear(); never serve a stale association.
            memo = NameMemo(snapshot)
            self._memo = memo

        cached = memo.entries.get(query)
        if cached is not None:
            return cached

        folded = query.casefold()
        best_id: int | None = None
        best_distance: int | None = None
        for record_id, record in snapshot.records.items():
            distance = levenshtein(record.name.casefold(), folded)
            self.comparisons += 1
            if best_distance is None or distance < best_distance:
                best_id = record_id
                best_distance = distance
                if distance == 0:
                    break

        if best_id is None:
            return None

        memo.entries[query] = best_id
        log.debug("name_resolved", query=query, record_id=best_id, distance=best_distance)
        return best_id
