"""Constructors for parametrised graph families.

Each constructor builds an adjacency matrix from its parameters and hands it
to the ordinary :class:`Graph` constructor.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from graph_invariants.graph import Graph
from graph_invariants.spectral import SpectralEngine


def _parse_bits(bits: str | Sequence[int]) -> list[int]:
    if isinstance(bits, str):
        bits = [char for char in bits.strip()]
    parsed = []
    for bit in bits:
        value = int(bit)
        if value not in (0, 1):
            raise ValueError(f"Threshold bits must be 0 or 1, got {bit!r}")
        parsed.append(value)
    return parsed


def threshold_graph(bits: str | Sequence[int], engine: Optional[SpectralEngine] = None) -> Graph:
    """Return the threshold graph on ``len(bits) + 1`` vertices.

    Vertex ``i`` (``i >= 1``) is added as a dominating vertex when
    ``bits[i - 1]`` is 1 and as an isolated vertex when it is 0, so it is
    joined to every earlier vertex exactly when its bit is set.
    """

    parsed = _parse_bits(bits)
    n = len(parsed) + 1
    adjacency = np.zeros((n, n), dtype=np.int64)
    for i in range(1, n):
        adjacency[i, :i] = parsed[i - 1]
        adjacency[:i, i] = parsed[i - 1]
    return Graph(adjacency, engine=engine)


def broom_graph(a: int, b: int, engine: Optional[SpectralEngine] = None) -> Graph:
    """Return the broom: a path on ``a`` vertices with ``b`` leaves on its last vertex."""

    if a < 1 or b < 0:
        raise ValueError(f"Broom needs a >= 1 and b >= 0, got a={a}, b={b}")
    n = a + b
    adjacency = np.zeros((n, n), dtype=np.int64)
    for i in range(a - 1):
        adjacency[i, i + 1] = adjacency[i + 1, i] = 1
    adjacency[a - 1, a:] = 1
    adjacency[a:, a - 1] = 1
    return Graph(adjacency, engine=engine)


def complement_graph(G: Graph) -> Graph:
    """Return the complement of ``G`` sharing its spectral engine."""

    adjacency = 1 - G.adjacency
    np.fill_diagonal(adjacency, 0)
    return Graph(adjacency, engine=G.engine)
