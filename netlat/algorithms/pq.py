"""Indexed min-priority queue over vertex indices.

Backed by ``heapq`` with lazy invalidation: ``decrease_key`` pushes a fresh
entry and marks the previous one stale, so each operation stays O(log n).
Entries with equal keys pop in insertion order.
"""

from __future__ import annotations

from heapq import heappop, heappush
from itertools import count
from typing import Dict, List, Tuple

from netlat.types import Cost

# Heap entry: [key, sequence, index, live]
_Entry = List


class IndexMinPQ:
    """Min-priority queue keyed by an integer index in ``[0, capacity)``.

    Args:
        capacity: Upper bound (exclusive) for indices.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"Capacity must be non-negative, got {capacity}")
        self._capacity = capacity
        self._heap: List[_Entry] = []
        self._entries: Dict[int, _Entry] = {}
        self._sequence = count()

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= self._capacity:
            raise IndexError(f"Index {index} is out of range [0, {self._capacity})")

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __contains__(self, index: int) -> bool:
        return index in self._entries

    def is_empty(self) -> bool:
        return not self._entries

    def contains(self, index: int) -> bool:
        """Return True if ``index`` is currently queued."""
        self._check_index(index)
        return index in self._entries

    def key_of(self, index: int) -> Cost:
        """Return the current key of a queued index."""
        self._check_index(index)
        if index not in self._entries:
            raise KeyError(f"Index {index} is not in the priority queue")
        return self._entries[index][0]

    def insert(self, index: int, key: Cost) -> None:
        """Queue ``index`` with priority ``key``.

        Raises:
            ValueError: If ``index`` is already queued.
        """
        self._check_index(index)
        if index in self._entries:
            raise ValueError(f"Index {index} is already in the priority queue")
        self._push(index, key)

    def decrease_key(self, index: int, key: Cost) -> None:
        """Lower the priority of a queued index.

        Raises:
            KeyError: If ``index`` is not queued.
            ValueError: If ``key`` is larger than the current key.
        """
        current = self.key_of(index)
        if key > current:
            raise ValueError(
                f"New key {key} is larger than current key {current} for index {index}"
            )
        self._entries[index][3] = False
        self._push(index, key)

    def pop_min(self) -> Tuple[int, Cost]:
        """Remove and return ``(index, key)`` with the smallest key.

        Raises:
            IndexError: If the queue is empty.
        """
        while self._heap:
            key, _, index, live = heappop(self._heap)
            if live:
                del self._entries[index]
                return index, key
        raise IndexError("Priority queue underflow")

    def _push(self, index: int, key: Cost) -> None:
        entry: _Entry = [key, next(self._sequence), index, True]
        self._entries[index] = entry
        heappush(self._heap, entry)
