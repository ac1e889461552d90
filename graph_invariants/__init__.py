from . import invariants
from .approx_map import ApproxKeyedMultiMap
from .decoder import decode, decode_adjacency
from .errors import FormatError, NumericError
from .extremal import ExtremalSelector
from .families import broom_graph, complement_graph, threshold_graph
from .graph import Graph, MatrixKind
from .spectral import SpectralEngine, default_engine, eigensolve
from .tolerance import equality_threshold, set_equality_threshold

__all__ = [
    "ApproxKeyedMultiMap",
    "ExtremalSelector",
    "FormatError",
    "Graph",
    "MatrixKind",
    "NumericError",
    "SpectralEngine",
    "broom_graph",
    "complement_graph",
    "decode",
    "decode_adjacency",
    "default_engine",
    "eigensolve",
    "equality_threshold",
    "invariants",
    "set_equality_threshold",
    "threshold_graph",
]
