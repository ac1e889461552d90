"""Bounded selection of the most extreme invariant values in a single pass."""

from __future__ import annotations

from typing import List, Tuple

from graph_invariants.approx_map import ApproxKeyedMultiMap, Bucket, Key, has_nan, normalize_key


class ExtremalSelector:
    """Keep the ``count`` most extreme keys seen so far with all their witnesses.

    Keys are offered one at a time together with a graph identifier.  While
    fewer than ``count`` distinct keys are held every pair is accepted; after
    that a pair joins a retained key it matches, replaces the least extreme
    retained key (and its whole bucket) when it is strictly more extreme, or is
    discarded.
    """

    def __init__(self, count: int, maximize: bool = True) -> None:
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")
        self._count = count
        self._maximize = maximize
        self._map = ApproxKeyedMultiMap()

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        mode = "max" if self._maximize else "min"
        return f"ExtremalSelector(count={self._count}, mode={mode}, keys={len(self._map)})"

    @property
    def count(self) -> int:
        return self._count

    @property
    def maximize(self) -> bool:
        return self._maximize

    @property
    def map(self) -> ApproxKeyedMultiMap:
        return self._map

    def worst_key(self) -> Key:
        """Return the least extreme key currently retained.

        Keys holding ``NaN`` count as the least extreme in both modes.
        """

        last = self._map.last_key()
        if not self._maximize or has_nan(last):
            return last
        return self._map.first_key()

    def _more_extreme(self, key: Key, other: Key) -> bool:
        # Undefined keys are the least extreme in both modes.
        if has_nan(key):
            return False
        if has_nan(other):
            return True
        return key > other if self._maximize else key < other

    def offer(self, key, identifier: str) -> bool:
        """Consider ``(key, identifier)`` and return ``True`` if it was retained."""

        if len(self._map) < self._count or self._map.contains_approx(key):
            self._map.put(key, identifier)
            return True

        key = normalize_key(key)
        worst = self.worst_key()
        if not self._more_extreme(key, worst):
            return False
        self._map.remove(worst)
        self._map.put(key, identifier)
        return True

    def keys(self) -> List[Key]:
        """Return the retained keys in ascending order."""

        return self._map.keys()

    def items(self) -> List[Tuple[Key, Bucket]]:
        """Return retained ``(key, bucket)`` pairs in ascending key order."""

        return self._map.items()

    def ranked_items(self) -> List[Tuple[Key, Bucket]]:
        """Return retained pairs from the most to the least extreme key."""

        items = self._map.items()
        if not self._maximize:
            return items
        defined = [item for item in items if not has_nan(item[0])]
        undefined = [item for item in items if has_nan(item[0])]
        return list(reversed(defined)) + undefined
