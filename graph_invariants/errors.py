"""Exceptions raised by the graph invariant engine."""


class FormatError(ValueError):
    """Raised when a graph6 code is malformed or truncated."""


class NumericError(ArithmeticError):
    """Raised when an eigen-decomposition cannot be carried out.

    This covers non-square or non-symmetric input as well as solver failures;
    undefined invariants (for instance the modularity matrix of an edgeless
    graph) propagate ``NaN`` instead.
    """
