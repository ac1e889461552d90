"""Spectral tables over parametrised graph families.

* brooms on ``n`` vertices: the Fiedler vector of every broom ``(a, n - a)``
  with ``3 <= a <= n - 2``, flagging vectors with a zero component;
* threshold graphs on ``length + 1`` vertices: spectral radius and principal
  eigenvector for every bit sequence of the given length.
"""

from __future__ import annotations

import csv
import itertools
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Tuple

from graph_invariants import broom_graph, threshold_graph
from graph_invariants.invariants import fiedler_vector, principal_eigenvector, spectral_radius
from graph_invariants.tolerance import approx_equal

from search_templates.templates import atomic_writer, format_elapsed


@dataclass(slots=True)
class BroomRow:
    a: int
    b: int
    fiedler: Tuple[float, ...]

    @property
    def zero_components(self) -> List[int]:
        return [index for index, value in enumerate(self.fiedler) if approx_equal(value, 0.0)]


def broom_rows(n: int) -> Iterator[BroomRow]:
    """Yield the Fiedler vector of every broom on ``n`` vertices."""

    for a in range(3, n - 1):
        vector = fiedler_vector(broom_graph(a, n - a))
        yield BroomRow(a=a, b=n - a, fiedler=tuple(float(value) for value in vector))


def threshold_rows(length: int) -> Iterator[Tuple[str, float, Tuple[float, ...]]]:
    """Yield ``(bits, spectral radius, principal eigenvector)`` per bit sequence."""

    for combination in itertools.product("01", repeat=length):
        bits = "".join(combination)
        graph = threshold_graph(bits)
        vector = principal_eigenvector(graph)
        yield bits, spectral_radius(graph), tuple(float(value) for value in vector)


def write_broom_report(n: int, path: str | Path, verbose: bool = True) -> List[BroomRow]:
    """Write the broom Fiedler table for order ``n`` and return rows with zero components."""

    start_time = time.time()
    path = Path(path)
    flagged: List[BroomRow] = []
    with atomic_writer(path) as handle:
        writer = csv.writer(handle)
        writer.writerow(["a", "b", "Fiedler vector"])
        for row in broom_rows(n):
            writer.writerow([row.a, row.b, " ".join(f"{value:.5f}" for value in row.fiedler)])
            if row.zero_components:
                flagged.append(row)
                if verbose:
                    for index in row.zero_components:
                        print(f"A zero component with a={row.a}, b={row.b} and i={index}")

    if verbose:
        print(f"Results written to {path}")
        print(format_elapsed(time.time() - start_time))
    return flagged


def write_threshold_report(length: int, path: str | Path, verbose: bool = True) -> int:
    """Write the threshold graph table for ``length`` bits and return the row count."""

    start_time = time.time()
    path = Path(path)
    rows = 0
    with atomic_writer(path) as handle:
        writer = csv.writer(handle)
        writer.writerow(["bit sequence", "spectral radius", "principal eigenvector"])
        for bits, radius, vector in threshold_rows(length):
            writer.writerow([bits, radius, " ".join(f"{value:.5f}" for value in vector)])
            rows += 1

    if verbose:
        print(f"Results written to {path}")
        print(format_elapsed(time.time() - start_time))
    return rows
