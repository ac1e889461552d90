"""Spectral, distance-based and degree-based invariants of :class:`Graph` objects.

Every function only reads the cached matrices and spectra of the graphs it is
given.  Spectrum-level helpers (:func:`energy`, :func:`estrada`) accept any
sequence of eigenvalues so that the same formula serves every matrix family.
The registries at the bottom map the names used on the command line to the
implementations.
"""

import math

import numpy as np

from graph_invariants.graph import MatrixKind
from graph_invariants.spectral import default_engine
from graph_invariants.tolerance import (
    approx_equal,
    approx_equal_sequences,
    approx_positive,
    is_approx_integer,
)


# Spectrum-level formulas


def energy(eigenvalues):
    """Return ``sum |lambda - mean|`` over ``eigenvalues``.

    For the adjacency matrix the mean is zero and this is the usual graph
    energy; for the other families it is the deviation-from-average energy.
    """

    values = np.asarray(eigenvalues, dtype=float)
    if values.size == 0:
        return 0.0
    return float(np.abs(values - values.mean()).sum())


def estrada(eigenvalues):
    """Return ``sum exp(lambda)`` over ``eigenvalues``."""

    return float(np.exp(np.asarray(eigenvalues, dtype=float)).sum())


def integral_values(eigenvalues):
    """Return ``True`` when every eigenvalue is within the threshold of an integer."""

    return all(is_approx_integer(float(value)) for value in eigenvalues)


# Energies


def adjacency_energy(G):
    """Return the energy of the adjacency spectrum."""

    return energy(G.spectrum(MatrixKind.ADJACENCY))


def laplacian_energy(G):
    """Return the Laplacian energy ``sum |mu - 2m/n|``."""

    return energy(G.spectrum(MatrixKind.LAPLACIAN))


def signless_laplacian_energy(G):
    return energy(G.spectrum(MatrixKind.SIGNLESS_LAPLACIAN))


def distance_energy(G):
    return energy(G.spectrum(MatrixKind.DISTANCE))


def modularity_energy(G):
    """Return the modularity energy (``NaN`` for edgeless graphs)."""

    return energy(G.spectrum(MatrixKind.MODULARITY))


def lel(G):
    """Return the Laplacian-like energy ``sum sqrt(mu)`` over positive ``mu``."""

    return float(sum(math.sqrt(mu) for mu in G.spectrum(MatrixKind.LAPLACIAN) if approx_positive(mu)))


def estrada_index(G):
    return estrada(G.spectrum(MatrixKind.ADJACENCY))


def laplacian_estrada_index(G):
    return estrada(G.spectrum(MatrixKind.LAPLACIAN))


# Further spectral quantities


def nullity(G, kind=MatrixKind.ADJACENCY):
    """Return the multiplicity of zero in the spectrum of the given family."""

    return sum(1 for value in G.spectrum(kind) if approx_equal(float(value), 0.0))


def spectral_radius(G):
    """Return the largest adjacency eigenvalue (``0`` for the empty graph)."""

    spectrum = G.spectrum(MatrixKind.ADJACENCY)
    return float(spectrum[-1]) if spectrum.size else 0.0


def principal_eigenvector(G):
    """Return the eigenvector of the largest adjacency eigenvalue.

    The sign is fixed so that the entries sum to a non-negative value.
    """

    vectors = G.eigenvectors(MatrixKind.ADJACENCY)
    if vectors.size == 0:
        return np.zeros(0)
    vector = np.array(vectors[:, -1])
    return -vector if vector.sum() < 0 else vector


def algebraic_connectivity(G):
    """Return the second smallest Laplacian eigenvalue (``0`` when ``n < 2``)."""

    if G.n < 2:
        return 0.0
    return float(G.spectrum(MatrixKind.LAPLACIAN)[1])


def fiedler_vector(G):
    """Return the Laplacian eigenvector of the second smallest eigenvalue."""

    if G.n < 2:
        raise ValueError("The Fiedler vector needs at least two vertices.")
    return np.array(G.eigenvectors(MatrixKind.LAPLACIAN)[:, 1])


# Distance-based invariants


def diameter(G):
    """Return the largest distance; disconnected graphs report the sentinel ``n``."""

    if G.n < 2:
        return 0
    return int(G.distance.max())


def radius(G):
    """Return the smallest eccentricity (``n`` on graphs with an isolated part)."""

    if G.n == 0:
        return 0
    return int(G.distance.max(axis=1).min())


def wiener(G):
    """Return the sum of distances over unordered pairs of vertices."""

    return int(np.triu(G.distance, k=1).sum())


def dshi(G):
    """Return the distance-sum heterogeneity index.

    ``dshi = sum_i d_i / s_i - 2 sum_{ij in E} (s_i s_j)^{-1/2}`` where ``s_i``
    is the distance sum of vertex ``i`` (Estrada and Vargas-Estrada, 2012).
    """

    sums = G.distance.sum(axis=1).astype(float)
    degrees = G.degrees.astype(float)
    with np.errstate(divide="ignore", invalid="ignore"):
        total = float((degrees / sums).sum())
        for i, j in G.edges():
            total -= 2.0 / math.sqrt(sums[i] * sums[j])
    return total


# Degree-based invariants


def order(G):
    return G.n


def size(G):
    return G.m


def randic(G):
    """Return the Randić index ``sum 1 / sqrt(deg(u) * deg(v))`` over edges."""

    degrees = G.degrees
    return float(sum(1.0 / math.sqrt(degrees[i] * degrees[j]) for i, j in G.edges()))


def zagreb1(G):
    """Return the first Zagreb index ``sum deg(v)^2``."""

    return int((G.degrees ** 2).sum())


def zagreb2(G):
    """Return the second Zagreb index ``sum deg(u) deg(v)`` over edges."""

    degrees = G.degrees
    return int(sum(degrees[i] * degrees[j] for i, j in G.edges()))


# Predicates


def cospectral(G, H, kind=MatrixKind.ADJACENCY):
    """Return ``True`` when ``G`` and ``H`` have tolerance-equal spectra."""

    return approx_equal_sequences(G.spectrum(kind), H.spectrum(kind))


def integral_spectrum(matrix, engine=None):
    """Return ``True`` when every eigenvalue of ``matrix`` is near an integer."""

    engine = engine if engine is not None else default_engine()
    return integral_values(engine.eigenvalues(matrix))


def is_integral(G, kind=MatrixKind.ADJACENCY):
    """Return ``True`` when the spectrum of the given family is integral."""

    return integral_values(G.spectrum(kind))


def is_connected(G):
    return G.is_connected()


def _spectrum_key(kind):
    def key(G):
        return tuple(float(value) for value in G.spectrum(kind))

    key.__name__ = f"{MatrixKind(kind).value}_spectrum"
    key.__doc__ = f"Return the {MatrixKind(kind).value} spectrum as a tuple key."
    return key


def _integrality(kind):
    def predicate(G):
        return is_integral(G, kind)

    predicate.__name__ = f"{MatrixKind(kind).value}_integral"
    return predicate


# Mapping invariant names to implementation functions
invariants_functions = {
    "order": order,
    "size": size,
    "energy": adjacency_energy,
    "laplacian_energy": laplacian_energy,
    "signless_laplacian_energy": signless_laplacian_energy,
    "distance_energy": distance_energy,
    "modularity_energy": modularity_energy,
    "lel": lel,
    "estrada": estrada_index,
    "laplacian_estrada": laplacian_estrada_index,
    "nullity": nullity,
    "spectral_radius": spectral_radius,
    "algebraic_connectivity": algebraic_connectivity,
    "diameter": diameter,
    "radius": radius,
    "wiener": wiener,
    "dshi": dshi,
    "randic": randic,
    "zagreb1": zagreb1,
    "zagreb2": zagreb2,
}

# Mapping names of vector-valued keys to the spectrum they expose
spectrum_functions = {
    f"{kind.value}_spectrum": _spectrum_key(kind) for kind in MatrixKind
}

# Mapping names of boolean properties to predicate functions
binary_properties_functions = {
    "connected": is_connected,
    **{f"{kind.value}_integral": _integrality(kind) for kind in MatrixKind},
}


def _lookup(table, name, label):
    try:
        return table[name]
    except KeyError as exc:
        raise KeyError(f"Unknown {label} '{name}'") from exc


def lookup_invariant(name):
    """Return the scalar invariant registered under ``name``."""

    return _lookup(invariants_functions, name, "invariant")


def lookup_spectrum(name):
    """Return the spectrum key function registered under ``name``."""

    return _lookup(spectrum_functions, name, "spectrum")


def lookup_property(name):
    """Return the predicate registered under ``name``."""

    return _lookup(binary_properties_functions, name, "property")
