"""Batch scans over files holding one graph6 code per line.

Four templates are provided, each a single streaming pass over its input:

* extremal -- the ``count`` largest (or smallest) values of an invariant,
  with every graph attaining them;
* equi -- groups of at least two graphs sharing an invariant value or a
  whole spectrum (equienergetic or cospectral graphs, for instance);
* subset -- the graphs satisfying a named property (integral spectrum, ...);
* reporter -- a CSV row of invariant values for every graph.

Only the graph6 code and the computed key of each graph are kept in memory.
Result files are written next to the input (or in ``output_dir``) and only
appear once the scan has completed.
"""

from __future__ import annotations

import csv
import os
import tempfile
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from graph_invariants import ApproxKeyedMultiMap, ExtremalSelector, Graph, decode
from graph_invariants.formatting import format_vector, save_dot
from graph_invariants.invariants import (
    lookup_invariant,
    lookup_property,
    lookup_spectrum,
)

KeyFunction = Callable[[Graph], object]


@dataclass(slots=True)
class ScanConfig:
    """Parameters shared by the batch templates."""

    input_path: Path
    output_dir: Optional[Path] = None
    invariant: str = "energy"
    invariants: Tuple[str, ...] = field(default_factory=tuple)
    count: int = 1
    maximize: bool = True
    dot_files: bool = False
    progress_interval: int = 10000
    verbose: bool = True


@dataclass(slots=True)
class ScanSummary:
    """Outcome of a completed scan."""

    template: str
    processed: int
    selected: int
    elapsed: float
    results_path: Path
    dot_paths: List[Path] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Input and progress
# ---------------------------------------------------------------------------


def read_codes(path: str | Path) -> Iterator[str]:
    """Yield the graph6 codes of ``path``, skipping blank lines."""

    with Path(path).open("r", encoding="ascii", errors="replace") as handle:
        for line in handle:
            code = line.strip()
            if code:
                yield code


class ProgressCounter:
    """Count processed graphs and report every ``interval`` of them."""

    def __init__(self, interval: int = 10000, verbose: bool = True) -> None:
        self.count = 0
        self._interval = interval
        self._verbose = verbose

    def tick(self) -> None:
        self.count += 1
        if self._verbose and self._interval > 0 and self.count % self._interval == 0:
            print(f"{self.count} graphs processed so far")


def format_elapsed(seconds: float) -> str:
    """Return ``"Time elapsed: M min, S sec"``."""

    minutes, rest = divmod(seconds, 60.0)
    return f"Time elapsed: {int(minutes)} min, {rest:.3f} sec"


def format_key(key) -> str:
    if isinstance(key, tuple):
        return format_vector(key)
    return repr(float(key))


def _key_slug(key) -> str:
    if isinstance(key, tuple):
        return format_vector(key, "[_]")
    return repr(float(key))


@contextmanager
def atomic_writer(path: Path):
    """Open a temporary file next to ``path`` and move it into place on success."""

    path.parent.mkdir(parents=True, exist_ok=True)
    handle = tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", newline="", dir=path.parent,
        prefix=f".{path.name}.", suffix=".tmp", delete=False,
    )
    try:
        with handle:
            yield handle
        os.replace(handle.name, path)
    except BaseException:
        Path(handle.name).unlink(missing_ok=True)
        raise


def _results_path(config: ScanConfig, suffix: str) -> Path:
    directory = config.output_dir if config.output_dir is not None else config.input_path.parent
    return directory / f"{config.input_path.name}.results.{suffix}"


# ---------------------------------------------------------------------------
# Scans (pure, no file output)
# ---------------------------------------------------------------------------


def scan_extremal(
    codes: Iterable[str],
    key_function: KeyFunction,
    count: int,
    maximize: bool = True,
    progress: Optional[ProgressCounter] = None,
) -> ExtremalSelector:
    """Return the selector holding the ``count`` most extreme keys of ``codes``."""

    selector = ExtremalSelector(count, maximize=maximize)
    for code in codes:
        selector.offer(key_function(decode(code)), code)
        if progress is not None:
            progress.tick()
    return selector


def scan_equal(
    codes: Iterable[str],
    key_function: KeyFunction,
    progress: Optional[ProgressCounter] = None,
) -> ApproxKeyedMultiMap:
    """Return every code of ``codes`` grouped by approximately equal key."""

    groups = ApproxKeyedMultiMap()
    for code in codes:
        groups.put(key_function(decode(code)), code)
        if progress is not None:
            progress.tick()
    return groups


def scan_subset(
    codes: Iterable[str],
    predicate: Callable[[Graph], bool],
    progress: Optional[ProgressCounter] = None,
) -> Iterator[Tuple[str, Graph]]:
    """Yield ``(code, graph)`` for the graphs of ``codes`` satisfying ``predicate``."""

    for code in codes:
        graph = decode(code)
        selected = predicate(graph)
        if progress is not None:
            progress.tick()
        if selected:
            yield code, graph


def scan_report(
    codes: Iterable[str],
    functions: Sequence[KeyFunction],
    progress: Optional[ProgressCounter] = None,
) -> Iterator[Tuple[str, Graph, List[object]]]:
    """Yield ``(code, graph, values)`` with one value per function for every graph."""

    for code in codes:
        graph = decode(code)
        values = [function(graph) for function in functions]
        if progress is not None:
            progress.tick()
        yield code, graph, values


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


def write_extremal_results(handle, selector: ExtremalSelector) -> None:
    """Write the retained keys in ascending order, each followed by its codes."""

    handle.write(f"{len(selector)} extremal values are achieved for:\n")
    for key, bucket in selector.items():
        handle.write(f"Following graphs have key={format_key(key)}\n")
        for code in bucket:
            handle.write(code + "\n")


def write_equal_groups(handle, groups: ApproxKeyedMultiMap, label: str, min_size: int = 2) -> int:
    """Write every group of at least ``min_size`` codes and return the group count."""

    written = 0
    for key, bucket in groups.groups(min_size):
        handle.write(f"{label} {format_key(key)} held by graphs:\n")
        for code in bucket:
            handle.write(code + "\n")
        written += 1
    return written


def _save_bucket_dots(
    directory: Path,
    prefix: str,
    name: str,
    key,
    bucket: Sequence[str],
) -> List[Path]:
    paths = []
    for position, code in enumerate(bucket, start=1):
        graph = decode(code)
        filename = f"{prefix}-n-{graph.n}-{name}-{_key_slug(key)}-count-{position}.dot"
        paths.append(save_dot(graph, directory / filename, f"{name}={format_key(key)}"))
    return paths


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def run_extremal(config: ScanConfig) -> ScanSummary:
    """Find the ``config.count`` extremal values of ``config.invariant``."""

    start_time = time.time()
    key_function = lookup_invariant(config.invariant)
    progress = ProgressCounter(config.progress_interval, config.verbose)
    selector = scan_extremal(
        read_codes(config.input_path),
        key_function,
        config.count,
        maximize=config.maximize,
        progress=progress,
    )

    results_path = _results_path(config, "tex")
    with atomic_writer(results_path) as handle:
        write_extremal_results(handle, selector)

    dot_paths: List[Path] = []
    if config.dot_files:
        prefix = ("max" if config.maximize else "min") + config.invariant
        for key, bucket in selector.items():
            dot_paths.extend(
                _save_bucket_dots(results_path.parent, prefix, config.invariant, key, bucket)
            )

    return _finish("extremal", progress, len(selector), start_time, results_path, dot_paths, config)


def run_equi(config: ScanConfig, spectrum: bool = False) -> ScanSummary:
    """Group graphs sharing the value of ``config.invariant``.

    With ``spectrum=True`` the name refers to a spectrum key (for instance
    ``adjacency_spectrum``) and the groups are cospectral graphs.
    """

    start_time = time.time()
    key_function = lookup_spectrum(config.invariant) if spectrum else lookup_invariant(config.invariant)
    progress = ProgressCounter(config.progress_interval, config.verbose)
    groups = scan_equal(read_codes(config.input_path), key_function, progress=progress)

    label = "Spectrum" if spectrum else config.invariant.replace("_", " ").capitalize()
    results_path = _results_path(config, "tex")
    with atomic_writer(results_path) as handle:
        selected = write_equal_groups(handle, groups, label)

    dot_paths: List[Path] = []
    if config.dot_files:
        prefix = "cospectral" if spectrum else "equi"
        for key, bucket in groups.groups(2):
            dot_paths.extend(
                _save_bucket_dots(results_path.parent, prefix, config.invariant, key, bucket)
            )

    return _finish("equi", progress, selected, start_time, results_path, dot_paths, config)


def run_subset(config: ScanConfig) -> ScanSummary:
    """Select the graphs satisfying the property named ``config.invariant``.

    For integrality properties the spectrum of the matching family is written
    below each selected code.
    """

    start_time = time.time()
    predicate = lookup_property(config.invariant)
    spectral = config.invariant.endswith("_integral")
    kind = config.invariant[: -len("_integral")] if spectral else None
    progress = ProgressCounter(config.progress_interval, config.verbose)

    results_path = _results_path(config, "tex")
    selected = 0
    pending_dots: List[Tuple[str, str]] = []
    with atomic_writer(results_path) as handle:
        for code, graph in scan_subset(read_codes(config.input_path), predicate, progress):
            selected += 1
            handle.write(code + "\n")
            data = config.invariant
            if spectral:
                eigenvalues = graph.spectrum(kind)
                handle.write("Eigenvalues: \n")
                handle.write("".join(f"{value:.6f} " for value in eigenvalues) + "\n")
                data = "eigenvalues=" + format_vector(eigenvalues)
            if config.dot_files:
                pending_dots.append((code, data))

    dot_paths = _save_code_dots(results_path.parent, config.invariant, pending_dots)
    return _finish("subset", progress, selected, start_time, results_path, dot_paths, config)


def run_report(config: ScanConfig) -> ScanSummary:
    """Write a CSV row with the values of ``config.invariants`` for every graph."""

    start_time = time.time()
    names = config.invariants or (config.invariant,)
    functions = [lookup_invariant(name) for name in names]
    progress = ProgressCounter(config.progress_interval, config.verbose)

    results_path = _results_path(config, "csv")
    pending_dots: List[Tuple[str, str]] = []
    with atomic_writer(results_path) as handle:
        writer = csv.writer(handle)
        writer.writerow(["g6code", *names])
        for code, _graph, values in scan_report(read_codes(config.input_path), functions, progress):
            writer.writerow([code, *values])
            if config.dot_files:
                pending_dots.append(
                    (code, ", ".join(f"{name}={value}" for name, value in zip(names, values)))
                )

    dot_paths = _save_code_dots(results_path.parent, "-".join(names), pending_dots)
    return _finish("report", progress, progress.count, start_time, results_path, dot_paths, config)


def _save_code_dots(directory: Path, prefix: str, pending: Sequence[Tuple[str, str]]) -> List[Path]:
    paths = []
    for code, data in pending:
        graph = decode(code)
        filename = f"{prefix}-n-{graph.n}-g6code-{code}.dot"
        paths.append(save_dot(graph, directory / filename, data))
    return paths


def _finish(
    template: str,
    progress: ProgressCounter,
    selected: int,
    start_time: float,
    results_path: Path,
    dot_paths: List[Path],
    config: ScanConfig,
) -> ScanSummary:
    elapsed = time.time() - start_time
    if config.verbose:
        print(f"Results written to {results_path}")
        print(format_elapsed(elapsed))
    return ScanSummary(
        template=template,
        processed=progress.count,
        selected=selected,
        elapsed=elapsed,
        results_path=results_path,
        dot_paths=dot_paths,
    )


TEMPLATES = {
    "extremal": run_extremal,
    "equi": run_equi,
    "subset": run_subset,
    "report": run_report,
}


__all__ = [
    "ProgressCounter",
    "ScanConfig",
    "ScanSummary",
    "TEMPLATES",
    "atomic_writer",
    "format_elapsed",
    "format_key",
    "read_codes",
    "run_equi",
    "run_extremal",
    "run_report",
    "run_subset",
    "scan_equal",
    "scan_extremal",
    "scan_report",
    "scan_subset",
    "write_equal_groups",
    "write_extremal_results",
]
