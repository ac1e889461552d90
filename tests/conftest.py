"""Shared fixtures: small graphs with hand-checked graph6 codes."""

from pathlib import Path

import pytest

from graph_invariants import decode, set_equality_threshold

K1 = "@"
K2 = "A_"
P3 = "Bg"
K3 = "Bw"
EMPTY3 = "B?"
C4 = "Cr"
P4 = "Ch"
K4 = "C~"
TWO_K2 = "C`"
STAR5 = "Ds_"
C4_PLUS_K1 = "Dr?"


@pytest.fixture(autouse=True)
def reset_threshold():
    """Restore the default equality threshold after every test."""
    yield
    set_equality_threshold(None)


@pytest.fixture
def c4():
    return decode(C4)


@pytest.fixture
def k2():
    return decode(K2)


@pytest.fixture
def p3():
    return decode(P3)


@pytest.fixture
def p4():
    return decode(P4)


@pytest.fixture
def two_k2():
    return decode(TWO_K2)


@pytest.fixture
def write_codes(tmp_path: Path):
    """Return a helper writing codes (one per line) to a file under ``tmp_path``."""

    def _write(codes, name="graphs.g6"):
        path = tmp_path / name
        path.write_text("\n".join(codes) + "\n", encoding="ascii")
        return path

    return _write
