"""Graph model holding the adjacency matrix and its lazily derived matrices.

A :class:`Graph` is built once per graph6 code and never mutated.  The
Laplacian, signless Laplacian, distance and modularity matrices as well as the
spectra and eigenvectors of every matrix family are computed on first access
and cached on the instance.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

import networkx as nx
import numpy as np

from graph_invariants.spectral import Decomposition, SpectralEngine, default_engine


class MatrixKind(str, Enum):
    """Matrix families whose spectra are studied."""

    ADJACENCY = "adjacency"
    LAPLACIAN = "laplacian"
    SIGNLESS_LAPLACIAN = "signless_laplacian"
    DISTANCE = "distance"
    MODULARITY = "modularity"


def _frozen(matrix: np.ndarray) -> np.ndarray:
    matrix.setflags(write=False)
    return matrix


class Graph:
    """Simple undirected graph given by a symmetric 0/1 adjacency matrix.

    The matrix is assumed symmetric with a zero diagonal; this is not checked.
    Pass ``engine`` to use a specific eigensolver, otherwise the process-wide
    default is used.
    """

    def __init__(self, adjacency, engine: Optional[SpectralEngine] = None) -> None:
        matrix = np.array(adjacency, dtype=np.int64)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"Adjacency matrix must be square, got shape {matrix.shape}")
        self._adjacency = _frozen(matrix)
        self._n = matrix.shape[0]
        self._degrees = _frozen(matrix.sum(axis=1))
        self._m = int(self._degrees.sum()) // 2
        self._engine = engine if engine is not None else default_engine()
        self._matrices: Dict[MatrixKind, np.ndarray] = {MatrixKind.ADJACENCY: self._adjacency}
        self._decompositions: Dict[MatrixKind, Decomposition] = {}

    @classmethod
    def from_networkx(cls, graph: nx.Graph, engine: Optional[SpectralEngine] = None) -> "Graph":
        """Build a graph from ``graph`` using its sorted node order."""

        nodes = sorted(graph.nodes())
        return cls(nx.to_numpy_array(graph, nodelist=nodes, dtype=int), engine=engine)

    def __repr__(self) -> str:
        return f"Graph(n={self._n}, m={self._m})"

    @property
    def n(self) -> int:
        return self._n

    @property
    def m(self) -> int:
        return self._m

    @property
    def degrees(self) -> np.ndarray:
        return self._degrees

    @property
    def adjacency(self) -> np.ndarray:
        return self._adjacency

    @property
    def engine(self) -> SpectralEngine:
        return self._engine

    # ------------------------------------------------------------------
    # Derived matrices
    # ------------------------------------------------------------------

    def matrix(self, kind) -> np.ndarray:
        """Return the (read-only, cached) matrix of the requested family."""

        kind = MatrixKind(kind)
        cached = self._matrices.get(kind)
        if cached is not None:
            return cached

        builders = {
            MatrixKind.LAPLACIAN: self._build_laplacian,
            MatrixKind.SIGNLESS_LAPLACIAN: self._build_signless_laplacian,
            MatrixKind.DISTANCE: self._build_distance,
            MatrixKind.MODULARITY: self._build_modularity,
        }
        matrix = _frozen(builders[kind]())
        self._matrices[kind] = matrix
        return matrix

    @property
    def laplacian(self) -> np.ndarray:
        return self.matrix(MatrixKind.LAPLACIAN)

    @property
    def signless_laplacian(self) -> np.ndarray:
        return self.matrix(MatrixKind.SIGNLESS_LAPLACIAN)

    @property
    def distance(self) -> np.ndarray:
        return self.matrix(MatrixKind.DISTANCE)

    @property
    def modularity(self) -> np.ndarray:
        return self.matrix(MatrixKind.MODULARITY)

    def _build_laplacian(self) -> np.ndarray:
        return np.diag(self._degrees) - self._adjacency

    def _build_signless_laplacian(self) -> np.ndarray:
        return np.diag(self._degrees) + self._adjacency

    def _build_distance(self) -> np.ndarray:
        """Floyd-Warshall distances; unreachable pairs keep the value ``n``.

        ``n`` exceeds every finite distance in an ``n``-vertex graph and is
        deliberately left in place for disconnected graphs, so distance based
        invariants of such graphs are computed with it.
        """

        n = self._n
        dist = np.where(self._adjacency == 1, 1, n).astype(np.int64)
        np.fill_diagonal(dist, 0)
        for k in range(n):
            # Row k and column k do not change during pass k.
            np.minimum(dist, dist[:, k, None] + dist[None, k, :], out=dist)
        return dist

    def _build_modularity(self) -> np.ndarray:
        degrees = self._degrees.astype(float)
        with np.errstate(divide="ignore", invalid="ignore"):
            expected = np.outer(degrees, degrees) / (2.0 * self._m)
        return self._adjacency - expected

    # ------------------------------------------------------------------
    # Spectra
    # ------------------------------------------------------------------

    def _decomposition(self, kind) -> Decomposition:
        kind = MatrixKind(kind)
        cached = self._decompositions.get(kind)
        if cached is not None:
            return cached
        eigenvalues, eigenvectors = self._engine.decompose(self.matrix(kind))
        result = (_frozen(eigenvalues), _frozen(eigenvectors))
        self._decompositions[kind] = result
        return result

    def spectrum(self, kind=MatrixKind.ADJACENCY) -> np.ndarray:
        """Return the ascending eigenvalues of the requested matrix family."""

        return self._decomposition(kind)[0]

    def eigenvectors(self, kind=MatrixKind.ADJACENCY) -> np.ndarray:
        """Return unit eigenvectors as columns aligned with :meth:`spectrum`."""

        return self._decomposition(kind)[1]

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def edges(self) -> List[Tuple[int, int]]:
        """Return the edges as ``(i, j)`` pairs with ``i < j`` in row order."""

        rows, cols = np.nonzero(np.triu(self._adjacency, k=1))
        return [(int(i), int(j)) for i, j in zip(rows, cols)]

    def is_connected(self) -> bool:
        """Return ``True`` when every pair of vertices is joined by a path."""

        if self._n <= 1:
            return True
        return bool((self.distance < self._n).all())

    def to_networkx(self) -> nx.Graph:
        """Return the graph as a NetworkX graph on vertices ``0..n-1``."""

        graph = nx.Graph()
        graph.add_nodes_from(range(self._n))
        graph.add_edges_from(self.edges())
        return graph

    def graph6(self) -> str:
        """Return the graph6 code of the graph."""

        return nx.to_graph6_bytes(self.to_networkx(), header=False).decode("ascii").strip()
