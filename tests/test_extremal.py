"""Tests for bounded extremal selection."""

import math

import pytest

from graph_invariants import ExtremalSelector


def offer_all(selector, pairs):
    for key, ident in pairs:
        selector.offer(key, ident)
    return selector


class TestSelection:
    """Top-K and bottom-K selection."""

    def test_single_maximum(self):
        """Test that K = 1 keeps only the largest key."""
        selector = offer_all(
            ExtremalSelector(1), [(3.0, "a"), (7.0, "b"), (2.0, "c"), (9.0, "d"), (5.0, "e")]
        )

        assert selector.keys() == [9.0]
        assert selector.items() == [(9.0, ["d"])]

    def test_minimum(self):
        selector = offer_all(
            ExtremalSelector(2, maximize=False),
            [(3.0, "a"), (7.0, "b"), (2.0, "c"), (9.0, "d"), (5.0, "e")],
        )

        assert selector.keys() == [2.0, 3.0]
        assert [key for key, _ in selector.ranked_items()] == [2.0, 3.0]

    def test_top_three_ranked(self):
        """Test that ranked items list the most extreme key first."""
        selector = offer_all(
            ExtremalSelector(3), [(float(value), str(value)) for value in [4, 1, 8, 6, 2, 9]]
        )

        assert selector.keys() == [6.0, 8.0, 9.0]
        assert [key for key, _ in selector.ranked_items()] == [9.0, 8.0, 6.0]
        assert selector.worst_key() == 6.0

    def test_ties_keep_every_witness(self):
        """Test that graphs attaining a retained key all stay in its bucket."""
        selector = offer_all(
            ExtremalSelector(1), [(9.0, "a"), (9.0 + 1e-10, "b"), (1.0, "c"), (9.0, "d")]
        )

        assert selector.items() == [(9.0, ["a", "b", "d"])]

    def test_replacement_drops_whole_bucket(self):
        selector = offer_all(ExtremalSelector(1), [(1.0, "a"), (1.0, "b"), (2.0, "c")])
        assert selector.items() == [(2.0, ["c"])]

    def test_offer_reports_retention(self):
        selector = ExtremalSelector(1)

        assert selector.offer(5.0, "a")
        assert not selector.offer(4.0, "b")
        assert selector.offer(5.0, "c")
        assert selector.offer(6.0, "d")
        assert len(selector) == 1

    def test_vector_keys(self):
        """Test lexicographic selection over tuple keys."""
        selector = offer_all(
            ExtremalSelector(1), [((1.0, 2.0), "a"), ((1.0, 3.0), "b"), ((0.0, 9.0), "c")]
        )
        assert selector.keys() == [(1.0, 3.0)]

    def test_nan_keys_order_last(self):
        """Test that undefined values are never preferred as minima."""
        selector = offer_all(ExtremalSelector(1, maximize=False), [(math.nan, "a"), (3.0, "b")])
        assert selector.keys() == [3.0]

    def test_nan_key_does_not_evict_maximum(self):
        """Test that an undefined value arriving late leaves the maximum in place."""
        selector = ExtremalSelector(1)

        assert selector.offer(5.0, "a")
        assert not selector.offer(math.nan, "edgeless")
        assert selector.items() == [(5.0, ["a"])]

    def test_defined_key_evicts_nan_in_max_mode(self):
        """Test that an undefined value seen first is displaced by a defined one."""
        selector = offer_all(ExtremalSelector(2), [(math.nan, "a"), (5.0, "b"), (7.0, "c")])

        assert selector.keys() == [5.0, 7.0]
        assert [key for key, _ in selector.ranked_items()] == [7.0, 5.0]

    def test_invalid_count(self):
        with pytest.raises(ValueError):
            ExtremalSelector(0)
