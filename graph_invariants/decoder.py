"""Decoding of graph6 codes into adjacency matrices.

A graph6 code stores the order of the graph in a short header followed by the
strict upper triangle of the adjacency matrix, six bits per printable
character.  Only the decoder lives here; encoding goes through NetworkX (see
:meth:`graph_invariants.graph.Graph.graph6`).
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from graph_invariants.errors import FormatError
from graph_invariants.graph import Graph
from graph_invariants.spectral import SpectralEngine

_OFFSET = 63
_LONG_ORDER = 126
_HEADER = ">>graph6<<"


def _sextets(code: str, start: int, stop: int) -> List[int]:
    """Return the six-bit values stored in ``code[start:stop]``."""

    values = []
    for position in range(start, stop):
        byte = ord(code[position])
        if byte < _OFFSET or byte > _LONG_ORDER:
            raise FormatError(
                f"Invalid graph6 character {code[position]!r} at position {position}"
            )
        values.append(byte - _OFFSET)
    return values


def _read_order(code: str) -> Tuple[int, int]:
    """Return ``(n, body_start)`` parsed from the header of ``code``."""

    if ord(code[0]) != _LONG_ORDER:
        return _sextets(code, 0, 1)[0], 1

    if len(code) >= 2 and ord(code[1]) == _LONG_ORDER:
        width, start = 6, 2
    else:
        width, start = 3, 1
    if len(code) < start + width:
        raise FormatError(f"Truncated graph6 order header in {code!r}")

    n = 0
    for value in _sextets(code, start, start + width):
        n = (n << 6) | value
    return n, start + width


def decode_adjacency(code: str) -> np.ndarray:
    """Return the symmetric 0/1 adjacency matrix encoded by ``code``.

    Bits are consumed column by column over the strict upper triangle, that
    is ``(0,1), (0,2), (1,2), (0,3), ...``.  Padding bits after the last pair
    are ignored.
    """

    code = code.strip()
    if code.startswith(_HEADER):
        code = code[len(_HEADER):]
    if not code:
        raise FormatError("Empty graph6 code")

    n, start = _read_order(code)
    pairs = n * (n - 1) // 2
    needed = (pairs + 5) // 6
    if len(code) - start < needed:
        raise FormatError(
            f"graph6 code {code!r} holds {len(code) - start} data characters, "
            f"{needed} required for {n} vertices"
        )

    sextets = np.array(_sextets(code, start, start + needed), dtype=np.uint8)
    bits = np.unpackbits(sextets[:, None], axis=1)[:, 2:].ravel()[:pairs]

    adjacency = np.zeros((n, n), dtype=np.int64)
    if pairs:
        # np.triu_indices walks rows; graph6 walks columns of the upper triangle.
        rows, cols = np.triu_indices(n, k=1)
        order = np.lexsort((rows, cols))
        upper_i = rows[order]
        upper_j = cols[order]
        adjacency[upper_i, upper_j] = bits
        adjacency[upper_j, upper_i] = bits
    return adjacency


def decode(code: str, engine: Optional[SpectralEngine] = None) -> Graph:
    """Return the :class:`~graph_invariants.graph.Graph` encoded by ``code``."""

    return Graph(decode_adjacency(code), engine=engine)
