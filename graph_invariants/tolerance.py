"""Tolerant floating point comparisons shared by every spectral computation.

Eigen-decompositions return values polluted by rounding noise, so equality of
eigenvalues, invariant keys and integrality checks are all decided against a
single process-wide threshold held here.
"""

from __future__ import annotations

import math
from typing import Sequence

DEFAULT_EQUALITY_THRESHOLD = 1e-8

_EQUALITY_THRESHOLD = DEFAULT_EQUALITY_THRESHOLD


def set_equality_threshold(value: float | None) -> None:
    """Configure the threshold used by all comparisons (``None`` resets to default)."""

    global _EQUALITY_THRESHOLD
    if value is None:
        _EQUALITY_THRESHOLD = DEFAULT_EQUALITY_THRESHOLD
        return
    value = float(value)
    if not value > 0:
        raise ValueError(f"Equality threshold must be positive, got {value!r}")
    _EQUALITY_THRESHOLD = value


def equality_threshold() -> float:
    """Return the threshold currently in force."""

    return _EQUALITY_THRESHOLD


def approx_equal(a: float, b: float) -> bool:
    """Return ``True`` when ``a`` and ``b`` differ by less than the threshold.

    Identical values (infinities included) are equal, and two NaNs are treated
    as the same value so that undefined invariants group together.
    """

    if a == b:
        return True
    if math.isnan(a) or math.isnan(b):
        return math.isnan(a) and math.isnan(b)
    return abs(a - b) < _EQUALITY_THRESHOLD


def approx_equal_sequences(a: Sequence[float], b: Sequence[float]) -> bool:
    """Elementwise :func:`approx_equal`; sequences of different length differ."""

    if len(a) != len(b):
        return False
    return all(approx_equal(x, y) for x, y in zip(a, b))


def approx_compare(a: float, b: float) -> int:
    """Three-way comparison where values within the threshold compare equal."""

    if a < b - _EQUALITY_THRESHOLD:
        return -1
    if a > b + _EQUALITY_THRESHOLD:
        return 1
    return 0


def is_approx_integer(value: float) -> bool:
    """Return ``True`` when ``value`` lies within the threshold of an integer."""

    if not math.isfinite(value):
        return False
    return approx_equal(value, float(round(value)))


def approx_positive(value: float) -> bool:
    """Return ``True`` when ``value`` exceeds zero by more than the threshold."""

    return approx_compare(value, 0.0) > 0
