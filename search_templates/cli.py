"""Command-line front end for the batch templates.

Examples::

    python -m search_templates.cli extremal graphs10.g6 --invariant dshi --count 3
    python -m search_templates.cli equi graphs8.g6 --invariant energy
    python -m search_templates.cli equi graphs8.g6 --spectrum adjacency_spectrum
    python -m search_templates.cli subset graphs8.g6 --property adjacency_integral --dot
    python -m search_templates.cli report graphs8.g6 --invariants energy nullity
    python -m search_templates.cli brooms 20
    python -m search_templates.cli threshold 9
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from graph_invariants.invariants import (
    binary_properties_functions,
    invariants_functions,
    spectrum_functions,
)
from graph_invariants.tolerance import DEFAULT_EQUALITY_THRESHOLD, set_equality_threshold

from search_templates.family_reports import write_broom_report, write_threshold_report
from search_templates.templates import (
    ScanConfig,
    ScanSummary,
    run_equi,
    run_extremal,
    run_report,
    run_subset,
)


def _add_scan_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", type=Path, help="File with one graph6 code per line")
    parser.add_argument("--output", type=Path, default=None, help="Directory for result files (default: next to input)")
    parser.add_argument("--dot", action="store_true", help="Write Graphviz .dot files for selected graphs")
    parser.add_argument("--progress", type=int, default=10000, help="Report progress every N graphs (0 disables)")
    parser.add_argument("--quiet", action="store_true", help="Do not print progress or timing")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Batch searches over graph6 collections")
    parser.add_argument(
        "--epsilon",
        type=float,
        default=DEFAULT_EQUALITY_THRESHOLD,
        help="Threshold below which two floating values are considered equal",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    extremal = commands.add_parser("extremal", help="Graphs attaining extremal invariant values")
    _add_scan_arguments(extremal)
    extremal.add_argument(
        "--invariant",
        default="dshi",
        help="Invariant to optimise (available: " + ", ".join(invariants_functions) + ")",
    )
    extremal.add_argument("--count", type=int, default=1, help="Number of extremal values to keep")
    extremal.add_argument("--min", action="store_true", help="Look for minimal instead of maximal values")

    equi = commands.add_parser("equi", help="Groups of graphs sharing an invariant value or spectrum")
    _add_scan_arguments(equi)
    key = equi.add_mutually_exclusive_group()
    key.add_argument("--invariant", default=None, help="Scalar invariant to group by (default: energy)")
    key.add_argument(
        "--spectrum",
        default=None,
        help="Spectrum to group by (available: " + ", ".join(spectrum_functions) + ")",
    )

    subset = commands.add_parser("subset", help="Graphs satisfying a property")
    _add_scan_arguments(subset)
    subset.add_argument(
        "--property",
        default="adjacency_integral",
        help="Property to select (available: " + ", ".join(binary_properties_functions) + ")",
    )

    report = commands.add_parser("report", help="CSV report of invariant values")
    _add_scan_arguments(report)
    report.add_argument("--invariants", nargs="+", default=["energy", "nullity"], help="Invariants to report")

    brooms = commands.add_parser("brooms", help="Fiedler vectors of brooms on n vertices")
    brooms.add_argument("n", type=int, help="Order of the brooms")
    brooms.add_argument("--output", type=Path, default=None, help="CSV file (default: brooms-<n>-fiedler.csv)")
    brooms.add_argument("--quiet", action="store_true")

    threshold = commands.add_parser("threshold", help="Principal eigenvectors of threshold graphs")
    threshold.add_argument("length", type=int, help="Length of the bit sequences")
    threshold.add_argument("--output", type=Path, default=None, help="CSV file (default: threshold<n>.csv)")
    threshold.add_argument("--quiet", action="store_true")
    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the batch templates."""

    return build_parser().parse_args(argv)


def _scan_config(args: argparse.Namespace, **overrides) -> ScanConfig:
    if not args.input.exists():
        raise SystemExit(f"Input file not found: {args.input}")
    return ScanConfig(
        input_path=args.input,
        output_dir=args.output,
        dot_files=args.dot,
        progress_interval=args.progress,
        verbose=not args.quiet,
        **overrides,
    )


def run(args: argparse.Namespace) -> Optional[ScanSummary]:
    """Dispatch the parsed ``args`` to the matching template."""

    try:
        set_equality_threshold(args.epsilon)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    if args.command == "brooms":
        if args.n < 5:
            raise SystemExit("Brooms need at least 5 vertices")
        write_broom_report(args.n, args.output or Path(f"brooms-{args.n}-fiedler.csv"), verbose=not args.quiet)
        return None
    if args.command == "threshold":
        if args.length < 1:
            raise SystemExit("Bit sequences need a positive length")
        path = args.output or Path(f"threshold{args.length + 1}.csv")
        write_threshold_report(args.length, path, verbose=not args.quiet)
        return None

    try:
        if args.command == "extremal":
            if args.count < 1:
                raise SystemExit("--count must be at least 1")
            config = _scan_config(args, invariant=args.invariant, count=args.count, maximize=not args.min)
            return run_extremal(config)
        if args.command == "equi":
            if args.spectrum is not None:
                return run_equi(_scan_config(args, invariant=args.spectrum), spectrum=True)
            return run_equi(_scan_config(args, invariant=args.invariant or "energy"))
        if args.command == "subset":
            return run_subset(_scan_config(args, invariant=args.property))
        return run_report(_scan_config(args, invariants=tuple(args.invariants)))
    except KeyError as exc:
        raise SystemExit(exc.args[0]) from exc


def main(argv: Optional[Sequence[str]] = None) -> None:
    run(parse_arguments(argv))


if __name__ == "__main__":
    main()
