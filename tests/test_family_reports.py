"""Tests for the broom and threshold graph tables."""

import csv

import numpy as np
import pytest

from search_templates.family_reports import (
    broom_rows,
    threshold_rows,
    write_broom_report,
    write_threshold_report,
)


class TestBrooms:
    """Fiedler vectors of brooms."""

    def test_rows(self):
        """Test that a ranges over 3..n-2 and vectors have n entries."""
        rows = list(broom_rows(7))

        assert [(row.a, row.b) for row in rows] == [(3, 4), (4, 3), (5, 2)]
        for row in rows:
            assert len(row.fiedler) == 7
            assert sum(row.fiedler) == pytest.approx(0.0, abs=1e-9)
            assert np.linalg.norm(row.fiedler) == pytest.approx(1.0)

    def test_report(self, tmp_path):
        path = tmp_path / "brooms.csv"

        flagged = write_broom_report(8, path, verbose=False)

        with path.open(newline="") as handle:
            rows = list(csv.reader(handle))
        assert rows[0] == ["a", "b", "Fiedler vector"]
        assert len(rows) == 1 + 4
        assert all(len(row[2].split()) == 8 for row in rows[1:])
        assert all(row.zero_components for row in flagged)


class TestThresholdGraphs:
    """Principal eigenvectors of threshold graphs."""

    def test_rows(self):
        rows = list(threshold_rows(2))

        assert [bits for bits, _, _ in rows] == ["00", "01", "10", "11"]
        assert rows[-1][1] == pytest.approx(2.0)
        np.testing.assert_allclose(rows[-1][2], [1 / np.sqrt(3)] * 3)
        assert rows[0][1] == pytest.approx(0.0, abs=1e-12)

    def test_report(self, tmp_path, capsys):
        path = tmp_path / "threshold4.csv"

        count = write_threshold_report(3, path, verbose=True)

        with path.open(newline="") as handle:
            rows = list(csv.reader(handle))
        assert count == 8
        assert rows[0] == ["bit sequence", "spectral radius", "principal eigenvector"]
        assert len(rows) == 9
        assert "Time elapsed:" in capsys.readouterr().out
