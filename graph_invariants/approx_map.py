"""Ordered multimap whose keys are compared up to the equality threshold.

Batch scans group graphs by the value of an invariant (a float) or by a whole
spectrum (a tuple of floats).  Values produced by eigensolvers are only equal
up to rounding noise, so a new key that lies within the threshold of a key
already present joins that key's bucket instead of opening a new one.  The
key seen first stays the representative of its bucket.

Keys are held in a sorted list and the threshold window around a key is found
with :mod:`bisect`, so lookups stay logarithmic in the number of distinct keys
(per coordinate for tuple keys).
"""

from __future__ import annotations

import math
from bisect import bisect_left, bisect_right, insort
from typing import Dict, Iterator, List, Optional, Tuple, Union

import numpy as np

from graph_invariants.tolerance import (
    approx_equal,
    approx_equal_sequences,
    equality_threshold,
)

Key = Union[float, Tuple[float, ...]]
Bucket = List[str]


def normalize_key(key) -> Key:
    """Return ``key`` as a float, or as a tuple of floats for sequences."""

    if isinstance(key, (tuple, list, np.ndarray)):
        return tuple(float(value) for value in key)
    return float(key)


def has_nan(key: Key) -> bool:
    if isinstance(key, tuple):
        return any(math.isnan(value) for value in key)
    return math.isnan(key)


def keys_equal(a: Key, b: Key) -> bool:
    """Return ``True`` when two normalised keys are equal up to the threshold."""

    if isinstance(a, tuple) and isinstance(b, tuple):
        return approx_equal_sequences(a, b)
    if isinstance(a, tuple) or isinstance(b, tuple):
        return False
    return approx_equal(a, b)


class ApproxKeyedMultiMap:
    """Map from tolerance-equal keys to growing lists of graph identifiers.

    Scalar keys are ordered numerically.  Tuple keys are ordered
    lexicographically, a strict prefix sorting before its extensions.  Keys
    holding ``NaN`` (undefined invariants) are grouped together and ordered
    after every other key.  A map holds either scalar or tuple keys, not both.
    """

    def __init__(self) -> None:
        self._keys: List[Key] = []
        self._buckets: Dict[Key, Bucket] = {}
        self._nan_entries: List[Tuple[Key, Bucket]] = []
        self._vector: Optional[bool] = None

    def __len__(self) -> int:
        return len(self._keys) + len(self._nan_entries)

    def __iter__(self) -> Iterator[Key]:
        return iter(self.keys())

    def __contains__(self, key) -> bool:
        return self.contains_approx(key)

    def __repr__(self) -> str:
        return f"ApproxKeyedMultiMap({len(self)} keys)"

    @property
    def is_vector(self) -> Optional[bool]:
        """``True`` for tuple keys, ``False`` for scalars, ``None`` while empty."""

        return self._vector

    def _normalize(self, key) -> Key:
        normalized = normalize_key(key)
        vector = isinstance(normalized, tuple)
        if self._vector is not None and vector != self._vector:
            expected = "tuple" if self._vector else "scalar"
            raise TypeError(f"This map holds {expected} keys, got {key!r}")
        return normalized

    # ------------------------------------------------------------------
    # Threshold window
    # ------------------------------------------------------------------

    def _matching_keys(self, key: Key) -> List[Key]:
        """Return stored keys equal to ``key`` up to the threshold, ascending."""

        if has_nan(key):
            return [stored for stored, _ in self._nan_entries if keys_equal(stored, key)]
        if not self._keys:
            return []

        eps = equality_threshold()
        if not isinstance(key, tuple):
            lo = bisect_left(self._keys, key - eps)
            hi = bisect_right(self._keys, key + eps)
            return [stored for stored in self._keys[lo:hi] if approx_equal(stored, key)]

        matches: List[Key] = []
        self._vector_window(key, 0, 0, len(self._keys), eps, matches)
        return matches

    def _vector_window(self, key: Tuple[float, ...], depth: int, lo: int, hi: int,
                       eps: float, matches: List[Key]) -> None:
        # keys[lo:hi] agree exactly on their first ``depth`` coordinates, all
        # within the threshold of key[:depth]; they are sorted by coordinate
        # ``depth`` apart from a possible length-``depth`` key at the front.
        keys = self._keys
        if lo < hi and len(keys[lo]) == depth:
            if depth == len(key):
                matches.append(keys[lo])
                return
            lo += 1
        if depth == len(key) or lo >= hi:
            return

        def coordinate(stored):
            return stored[depth]

        target = key[depth]
        start = bisect_left(keys, target - eps, lo, hi, key=coordinate)
        stop = bisect_right(keys, target + eps, lo, hi, key=coordinate)
        while start < stop:
            value = keys[start][depth]
            run_end = bisect_right(keys, value, start, stop, key=coordinate)
            if approx_equal(value, target):
                self._vector_window(key, depth + 1, start, run_end, eps, matches)
            start = run_end

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def put(self, key, identifier: str) -> Bucket:
        """Add ``identifier`` under ``key`` and return the bucket it joined.

        When a stored key lies within the threshold of ``key`` the identifier
        is appended to that bucket and the stored key is left untouched.
        """

        key = self._normalize(key)
        matches = self._matching_keys(key)
        if matches:
            bucket = self._bucket_of(matches[0])
            bucket.append(identifier)
            return bucket

        bucket = [identifier]
        if self._vector is None:
            self._vector = isinstance(key, tuple)
        if has_nan(key):
            self._nan_entries.append((key, bucket))
        else:
            insort(self._keys, key)
            self._buckets[key] = bucket
        return bucket

    def _bucket_of(self, stored: Key) -> Bucket:
        if has_nan(stored):
            for candidate, bucket in self._nan_entries:
                if candidate is stored:
                    return bucket
        return self._buckets[stored]

    def lookup_approx(self, key) -> Optional[Bucket]:
        """Return the bucket whose key is within the threshold of ``key``, if any."""

        if not len(self):
            return None
        matches = self._matching_keys(self._normalize(key))
        return self._bucket_of(matches[0]) if matches else None

    def contains_approx(self, key) -> bool:
        """Return ``True`` when some stored key is within the threshold of ``key``."""

        return self.lookup_approx(key) is not None

    def equal_identifiers(self, key) -> Bucket:
        """Return every identifier stored under any key close to ``key``."""

        if not len(self):
            return []
        identifiers: Bucket = []
        for stored in self._matching_keys(self._normalize(key)):
            identifiers.extend(self._bucket_of(stored))
        return identifiers

    def get(self, key) -> Optional[Bucket]:
        """Return the bucket stored under exactly ``key`` (no tolerance)."""

        key = normalize_key(key)
        if has_nan(key):
            for stored, bucket in self._nan_entries:
                if keys_equal(stored, key):
                    return bucket
            return None
        return self._buckets.get(key)

    def remove(self, key) -> Bucket:
        """Remove the stored ``key`` with its whole bucket and return the bucket."""

        key = normalize_key(key)
        if has_nan(key):
            for index, (stored, bucket) in enumerate(self._nan_entries):
                if keys_equal(stored, key):
                    del self._nan_entries[index]
                    return bucket
            raise KeyError(key)

        bucket = self._buckets.pop(key)
        del self._keys[bisect_left(self._keys, key)]
        return bucket

    def first_key(self) -> Key:
        """Return the smallest key."""

        if self._keys:
            return self._keys[0]
        if self._nan_entries:
            return self._nan_entries[0][0]
        raise KeyError("first_key() on an empty map")

    def last_key(self) -> Key:
        """Return the largest key (``NaN`` keys sort last)."""

        if self._nan_entries:
            return self._nan_entries[-1][0]
        if self._keys:
            return self._keys[-1]
        raise KeyError("last_key() on an empty map")

    def keys(self) -> List[Key]:
        return list(self._keys) + [stored for stored, _ in self._nan_entries]

    def items(self) -> List[Tuple[Key, Bucket]]:
        """Return ``(key, bucket)`` pairs in key order."""

        pairs = [(stored, self._buckets[stored]) for stored in self._keys]
        pairs.extend(self._nan_entries)
        return pairs

    def groups(self, min_size: int = 2) -> List[Tuple[Key, Bucket]]:
        """Return the pairs whose bucket holds at least ``min_size`` identifiers."""

        return [(stored, bucket) for stored, bucket in self.items() if len(bucket) >= min_size]
