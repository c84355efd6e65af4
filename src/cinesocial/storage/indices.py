"""Pair-keyed relationship indices and id sequences.

A ``RelationIndex`` maps ``(left_id, right_id)`` pairs to a value and keeps an
adjacency map per side, so "who follows X" and "whom does X follow" are both
answered without scanning or parsing keys. Iteration follows insertion order.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator
from itertools import count
from typing import Generic, TypeVar

V = TypeVar("V")

Pair = tuple[int, int]


def canonical_pair(a: int, b: int) -> Pair:
    """Return the unordered pair ``{a, b}`` in a fixed (low, high) order."""
    return (min(a, b), max(a, b))


class IdSequence:
    """Monotonic identifier generator starting at 1; ids are never reused."""

    def __init__(self) -> None:
        self._counter = count(1)

    def next(self) -> int:
        return next(self._counter)


class RelationIndex(Generic[V]):
    """Many-to-many association between two id spaces."""

    def __init__(self) -> None:
        self._entries: dict[Pair, V] = {}
        # dicts used as insertion-ordered sets
        self._by_left: defaultdict[int, dict[int, None]] = defaultdict(dict)
        self._by_right: defaultdict[int, dict[int, None]] = defaultdict(dict)

    def __contains__(self, pair: object) -> bool:
        return pair in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Pair]:
        return iter(list(self._entries))

    def get(self, left: int, right: int, default: V | None = None) -> V | None:
        return self._entries.get((left, right), default)

    def add(self, left: int, right: int, value: V) -> bool:
        """Insert the pair if absent; return True only when it was newly added."""
        if (left, right) in self._entries:
            return False
        self.set(left, right, value)
        return True

    def set(self, left: int, right: int, value: V) -> None:
        """Insert or overwrite the value stored for the pair."""
        self._entries[(left, right)] = value
        self._by_left[left][right] = None
        self._by_right[right][left] = None

    def discard(self, left: int, right: int) -> V | None:
        """Remove the pair; return its value, or None if it was not present."""
        if (left, right) not in self._entries:
            return None
        value = self._entries.pop((left, right))
        self._unlink(self._by_left, left, right)
        self._unlink(self._by_right, right, left)
        return value

    def rights_of(self, left: int) -> list[int]:
        """Return every right id associated with ``left``."""
        return list(self._by_left.get(left, ()))

    def lefts_of(self, right: int) -> list[int]:
        """Return every left id associated with ``right``."""
        return list(self._by_right.get(right, ()))

    def neighbours(self, node: int) -> list[int]:
        """Return ids paired with ``node`` on either side (for symmetric relations)."""
        seen = dict.fromkeys(self.rights_of(node))
        seen.update(dict.fromkeys(self.lefts_of(node)))
        return list(seen)

    def items_for(self, node: int) -> list[tuple[Pair, V]]:
        """Return every (pair, value) in which ``node`` takes part on either side."""
        pairs = [(node, right) for right in self.rights_of(node)]
        pairs += [(left, node) for left in self.lefts_of(node) if left != node]
        return [(pair, self._entries[pair]) for pair in pairs]

    def values(self) -> list[V]:
        return list(self._entries.values())

    def discard_left(self, left: int) -> int:
        """Remove every pair whose left id is ``left``; return how many were removed."""
        rights = self.rights_of(left)
        for right in rights:
            self.discard(left, right)
        return len(rights)

    def discard_right(self, right: int) -> int:
        """Remove every pair whose right id is ``right``; return how many were removed."""
        lefts = self.lefts_of(right)
        for left in lefts:
            self.discard(left, right)
        return len(lefts)

    @staticmethod
    def _unlink(side: defaultdict[int, dict[int, None]], key: int, other: int) -> None:
        bucket = side.get(key)
        if bucket is None:
            return
        bucket.pop(other, None)
        if not bucket:
            del side[key]
