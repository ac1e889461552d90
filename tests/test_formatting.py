"""Tests for text renderings."""

from graph_invariants.formatting import (
    dot_format,
    format_edge_list,
    format_matrix,
    format_vector,
    save_dot,
)


class TestFormatting:
    """Vectors, matrices and edge lists."""

    def test_vector(self):
        assert format_vector([1, 2, 3]) == "[1, 2, 3]"
        assert format_vector([0.5, -1.0], "(;)") == "(0.5; -1.0)"

    def test_matrix(self, k2):
        assert format_matrix(k2.adjacency) == "[[0, 1], [1, 0]]"

    def test_edge_list(self, p3):
        assert format_edge_list(p3) == "0 1, 1 2"


class TestDot:
    """Graphviz export."""

    def test_without_data(self, p3):
        assert dot_format(p3) == "Graph {\n0 -- 1\n1 -- 2\n}\n"

    def test_with_data(self, k2):
        text = dot_format(k2, 'energy="2.0"')

        assert text.splitlines() == [
            "Graph {",
            "0 -- 1",
            'data [shape=box, label="energy=\\"2.0\\""]',
            "}",
        ]

    def test_save(self, c4, tmp_path):
        path = save_dot(c4, tmp_path / "c4.dot", "n=4")

        assert path.read_text(encoding="utf-8") == dot_format(c4, "n=4")
