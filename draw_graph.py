"""Utility script to inspect and render a graph given by its graph6 code.

Usage example::

    python draw_graph.py --graph6 "Cr" --invariants energy dshi nullity

The listed invariants are printed before the graph is drawn.  With ``--dot``
the graph is also saved in Graphviz format.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, Optional, Sequence

import networkx as nx
from matplotlib import pyplot as plt

from graph_invariants import FormatError, Graph, decode
from graph_invariants.formatting import save_dot
from graph_invariants.invariants import lookup_invariant


def evaluate_graph(graph: Graph, names: Sequence[str]) -> Dict[str, float]:
    """Return the value of every invariant in ``names`` for ``graph``."""

    values = {}
    for name in names:
        try:
            function = lookup_invariant(name)
        except KeyError as exc:
            raise SystemExit(exc.args[0]) from exc
        values[name] = function(graph)
    return values


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Draw a graph and print some of its invariants")
    parser.add_argument("--graph6", required=True, help="Graph encoded in graph6 format")
    parser.add_argument(
        "--invariants",
        nargs="*",
        default=["energy", "spectral_radius", "dshi"],
        help="Invariants to print",
    )
    parser.add_argument("--dot", type=Path, default=None, help="Also save the graph to this .dot file")
    parser.add_argument("--no-show", action="store_true", help="Do not open the drawing window")
    args = parser.parse_args(argv)

    try:
        graph = decode(args.graph6)
    except FormatError as exc:
        raise SystemExit(f"Invalid graph6 code: {exc}") from exc

    print(f"Graph on {graph.n} vertices and {graph.m} edges")
    values = evaluate_graph(graph, args.invariants)
    for name, value in values.items():
        print(f"{name} = {value:.6f}")

    if args.dot is not None:
        data = ", ".join(f"{name}={value:.6f}" for name, value in values.items())
        save_dot(graph, args.dot, data or None)
        print(f"Graph saved to {args.dot}")

    if args.no_show:
        return
    nx.draw(graph.to_networkx(), with_labels=True, node_color="skyblue", edge_color="grey")
    plt.title(f"{args.graph6} (n={graph.n}, m={graph.m})")
    plt.show()


if __name__ == "__main__":
    main()
