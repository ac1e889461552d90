from pathlib import Path
from typing import List

from search_templates.templates import ScanConfig, run_equi, run_extremal, run_subset


def main() -> None:
    inputs = _load_inputs(Path("data/inputs.txt"))

    missing = [str(path) for path in inputs if not path.exists()]
    if missing:
        missing_files = ", ".join(sorted(missing))
        raise SystemExit(f"Unable to find graph6 file(s): {missing_files}")

    output_dir = Path("out")
    for path in inputs:
        print(f"Processing {path}")

        # Graphs with the largest distance-sum heterogeneity index (dshi).
        run_extremal(
            ScanConfig(
                input_path=path,
                output_dir=output_dir / "dshi",
                invariant="dshi",
                count=3,
                maximize=True,
                dot_files=True,
            )
        )

        # Equienergetic graphs.
        run_equi(ScanConfig(input_path=path, output_dir=output_dir / "equienergetic", invariant="energy"))

        # Cospectral graphs.
        run_equi(
            ScanConfig(input_path=path, output_dir=output_dir / "cospectral", invariant="adjacency_spectrum"),
            spectrum=True,
        )

        # Graphs with integral adjacency spectrum.
        run_subset(
            ScanConfig(
                input_path=path,
                output_dir=output_dir / "integral",
                invariant="adjacency_integral",
                dot_files=True,
            )
        )


def _load_inputs(path: Path) -> List[Path]:
    if not path.exists():
        raise SystemExit(f"Input list not found: {path}")
    inputs: List[Path] = []
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            value = line.strip()
            if value:
                inputs.append(Path(value))
    if not inputs:
        raise SystemExit(f"Input list {path} is empty")
    return inputs


if __name__ == "__main__":
    main()
