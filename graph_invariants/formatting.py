"""Plain-text renderings of graphs, matrices and vectors.

Matrices and vectors are written with a three-character delimiter string
(opening, separator, closing), ``"[,]"`` by default.  Graphs are exported in
the Graphviz ``.dot`` format, optionally with an extra boxed label carrying
the invariant values that selected the graph.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import numpy as np

from graph_invariants.graph import Graph


def _format_entry(value) -> str:
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    return repr(float(value))


def format_vector(values: Iterable, delims: str = "[,]") -> str:
    """Return ``values`` as ``[a, b, c]`` using ``delims``."""

    opening, separator, closing = delims
    return opening + f"{separator} ".join(_format_entry(value) for value in values) + closing


def format_matrix(matrix, delims: str = "[,]") -> str:
    """Return ``matrix`` as nested rows, e.g. ``[[0, 1], [1, 0]]``."""

    opening, separator, closing = delims
    rows = [format_vector(row, delims) for row in np.asarray(matrix)]
    return opening + f"{separator} ".join(rows) + closing


def format_edge_list(G: Graph) -> str:
    """Return the edges as ``"0 1, 0 2, ..."``."""

    return ", ".join(f"{i} {j}" for i, j in G.edges())


def dot_format(G: Graph, data: Optional[str] = None) -> str:
    """Return the Graphviz description of ``G``.

    When ``data`` is given it becomes the label of a separate boxed node drawn
    next to the graph.
    """

    lines = ["Graph {"]
    lines.extend(f"{i} -- {j}" for i, j in G.edges())
    if data is not None:
        escaped = data.replace('"', '\\"')
        lines.append(f'data [shape=box, label="{escaped}"]')
    lines.append("}")
    return "\n".join(lines) + "\n"


def save_dot(G: Graph, path: str | Path, data: Optional[str] = None) -> Path:
    """Write :func:`dot_format` output to ``path`` and return the path."""

    path = Path(path)
    with path.open("w", encoding="utf-8") as handle:
        handle.write(dot_format(G, data))
    return path
