"""Dense symmetric eigen-decomposition used by every spectral invariant.

The engine only relies on a callable ``solver(matrix) -> (eigenvalues,
eigenvectors)``; :func:`eigensolve` wraps :func:`scipy.linalg.eigh` and is the
default, but any dense symmetric solver honouring the same contract can be
injected.
"""

from __future__ import annotations

from typing import Callable, Optional, Tuple

import numpy as np
import scipy.linalg

from graph_invariants.errors import NumericError
from graph_invariants.tolerance import equality_threshold

Decomposition = Tuple[np.ndarray, np.ndarray]
Solver = Callable[[np.ndarray], Decomposition]


def eigensolve(matrix: np.ndarray) -> Decomposition:
    """Return ascending eigenvalues and column eigenvectors of a symmetric matrix."""

    return scipy.linalg.eigh(matrix)


class SpectralEngine:
    """Validate input, call the injected solver and normalise its output.

    The returned eigenvalues are always in ascending order and column ``k`` of
    the eigenvector matrix belongs to eigenvalue ``k``.  Eigenvector signs are
    whatever the solver produced.
    """

    def __init__(self, solver: Optional[Solver] = None) -> None:
        self._solver = solver if solver is not None else eigensolve

    @property
    def solver(self) -> Solver:
        return self._solver

    def decompose(self, matrix) -> Decomposition:
        """Return ``(eigenvalues, eigenvectors)`` of the symmetric ``matrix``."""

        dense = np.asarray(matrix, dtype=float)
        if dense.ndim != 2 or dense.shape[0] != dense.shape[1]:
            raise NumericError(f"Expected a square matrix, got shape {dense.shape}")

        size = dense.shape[0]
        if size == 0:
            return np.zeros(0), np.zeros((0, 0))
        finite = np.isfinite(dense)
        if not np.array_equal(finite, finite.T):
            raise NumericError("Matrix is not symmetric")
        with np.errstate(invalid="ignore"):
            asymmetry = np.abs(dense - dense.T)[finite]
        if asymmetry.size and asymmetry.max() >= equality_threshold():
            raise NumericError("Matrix is not symmetric")
        if not finite.all():
            return np.full(size, np.nan), np.full((size, size), np.nan)

        try:
            eigenvalues, eigenvectors = self._solver(dense)
        except (np.linalg.LinAlgError, ValueError) as exc:
            raise NumericError(f"Eigen-decomposition failed: {exc}") from exc

        eigenvalues = np.real(np.asarray(eigenvalues, dtype=complex))
        eigenvectors = np.real(np.asarray(eigenvectors, dtype=complex))
        if eigenvalues.shape != (size,) or eigenvectors.shape != (size, size):
            raise NumericError(
                f"Solver returned shapes {eigenvalues.shape} and {eigenvectors.shape} "
                f"for a {size}x{size} matrix"
            )

        order = np.argsort(eigenvalues, kind="stable")
        return eigenvalues[order], eigenvectors[:, order]

    def eigenvalues(self, matrix) -> np.ndarray:
        """Return the ascending eigenvalues of the symmetric ``matrix``."""

        return self.decompose(matrix)[0]


_DEFAULT_ENGINE = SpectralEngine()


def default_engine() -> SpectralEngine:
    """Return the engine shared by graphs built without an explicit one."""

    return _DEFAULT_ENGINE
