# src/fibcalc/history.py
"""In-memory, most-recent-first log of the session's calculations."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass

from fibcalc.runtime import current as _rt_current


@dataclass(frozen=True, slots=True, eq=False)
class HistoryEntry:
    """One calculation; two entries are equal only if they are the same record."""
    n: int
    value: int
    timestamp: float  # time.time()

    @classmethod
    def make(cls, n: int, value: int) -> HistoryEntry:
        return cls(n=n, value=value, timestamp=time.time())


class HistoryStore:
    """
    Keeps the last `capacity` entries, newest first.

    Recording at capacity drops the oldest entry. Equal indices are not merged:
    every calculation gets its own entry.
    """

    def __init__(self, capacity: int | None = None) -> None:
        if capacity is None:
            capacity = _rt_current().history_capacity
        if capacity < 1:
            raise ValueError(f"history capacity must be >= 1, got {capacity}")
        self._entries: deque[HistoryEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def record(self, entry: HistoryEntry) -> None:
        # deque(maxlen) discards from the opposite end, i.e. the oldest entry
        self._entries.appendleft(entry)

    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def replay(self, n: int) -> int:
        """Hand back n for re-entry; nothing is looked up or recomputed."""
        return n

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(tuple(self._entries))
