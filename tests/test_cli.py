"""Tests for the command-line front end."""

import pytest

from conftest import C4, K2, K3, K4
from graph_invariants import equality_threshold
from search_templates.cli import main, parse_arguments


class TestParsing:
    """Argument parsing."""

    def test_extremal_defaults(self, tmp_path):
        args = parse_arguments(["extremal", str(tmp_path / "g.g6")])

        assert args.invariant == "dshi"
        assert args.count == 1
        assert not args.min
        assert args.epsilon == 1e-8

    def test_equi_options_are_exclusive(self, tmp_path):
        with pytest.raises(SystemExit):
            parse_arguments(["equi", "g.g6", "--invariant", "energy", "--spectrum", "adjacency_spectrum"])


class TestRun:
    """End-to-end runs through main()."""

    def test_extremal(self, write_codes):
        path = write_codes([K2, K3, C4, K4])

        main(["extremal", str(path), "--invariant", "order", "--min", "--quiet"])

        lines = (path.parent / "graphs.g6.results.tex").read_text().splitlines()
        assert lines[2:] == [K2]

    def test_epsilon_option(self, write_codes):
        path = write_codes([K3, C4])

        main(["--epsilon", "0.5", "equi", str(path), "--invariant", "spectral_radius", "--quiet"])

        assert equality_threshold() == 0.5
        lines = (path.parent / "graphs.g6.results.tex").read_text().splitlines()
        assert lines[1:] == [K3, C4]

    def test_report(self, write_codes):
        path = write_codes([C4])

        main(["report", str(path), "--invariants", "order", "wiener", "--quiet"])

        assert (path.parent / "graphs.g6.results.csv").read_text().splitlines()[1] == "Cr,4,8"

    def test_threshold(self, tmp_path):
        output = tmp_path / "t.csv"
        main(["threshold", "2", "--output", str(output), "--quiet"])
        assert len(output.read_text().splitlines()) == 5

    @pytest.mark.parametrize(
        "argv",
        [
            ["extremal", "missing.g6"],
            ["--epsilon", "0", "brooms", "8"],
            ["brooms", "4"],
        ],
    )
    def test_invalid_input_exits(self, argv, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit):
            main(argv)

    def test_unknown_invariant_exits(self, write_codes):
        path = write_codes([C4])
        with pytest.raises(SystemExit, match="girth"):
            main(["extremal", str(path), "--invariant", "girth", "--quiet"])
