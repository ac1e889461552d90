"""Tests for the tolerance-keyed multimap."""

import math

import pytest

from graph_invariants import ApproxKeyedMultiMap, set_equality_threshold


@pytest.fixture
def scalar_map():
    groups = ApproxKeyedMultiMap()
    for key, ident in [(3.0, "c"), (1.0, "a"), (2.0, "b")]:
        groups.put(key, ident)
    return groups


class TestScalarKeys:
    """Scalar keys compared up to the threshold."""

    @pytest.mark.parametrize("first, second", [(1.0, 1.0 + 1e-10), (1.0 + 1e-10, 1.0)])
    def test_close_keys_share_a_bucket(self, first, second):
        """Test that insertion order does not matter for close keys."""
        groups = ApproxKeyedMultiMap()
        groups.put(first, "g1")
        groups.put(second, "g2")

        assert len(groups) == 1
        assert groups.keys() == [first]
        assert groups.lookup_approx(second) == ["g1", "g2"]

    def test_canonical_key_is_first_seen(self):
        """Test that a later close key does not replace the stored key."""
        groups = ApproxKeyedMultiMap()
        groups.put(2.0, "x")
        groups.put(2.0 + 5e-9, "y")
        groups.put(2.0 - 5e-9, "z")

        assert groups.keys() == [2.0]
        assert groups.get(2.0) == ["x", "y", "z"]
        assert groups.get(2.0 + 5e-9) is None

    def test_distinct_keys_are_ordered(self, scalar_map):
        assert scalar_map.keys() == [1.0, 2.0, 3.0]
        assert list(scalar_map) == [1.0, 2.0, 3.0]
        assert scalar_map.first_key() == 1.0
        assert scalar_map.last_key() == 3.0

    def test_contains_and_lookup(self, scalar_map):
        assert scalar_map.contains_approx(2.0 + 1e-9)
        assert 2.0 in scalar_map
        assert 2.5 not in scalar_map
        assert scalar_map.lookup_approx(2.5) is None
        assert ApproxKeyedMultiMap().lookup_approx(1.0) is None

    def test_remove(self, scalar_map):
        """Test removal of a key together with its bucket."""
        assert scalar_map.remove(1.0) == ["a"]
        assert scalar_map.keys() == [2.0, 3.0]
        with pytest.raises(KeyError):
            scalar_map.remove(1.0)

    def test_empty_map(self):
        groups = ApproxKeyedMultiMap()
        assert len(groups) == 0
        assert groups.is_vector is None
        with pytest.raises(KeyError):
            groups.first_key()
        with pytest.raises(KeyError):
            groups.last_key()

    def test_groups(self, scalar_map):
        scalar_map.put(3.0, "d")
        assert scalar_map.groups() == [(3.0, ["c", "d"])]
        assert len(scalar_map.groups(min_size=1)) == 3

    def test_equal_identifiers_spans_buckets(self):
        """Test that every bucket within the threshold of the query contributes."""
        groups = ApproxKeyedMultiMap()
        groups.put(1.0, "a")
        groups.put(1.0 + 1.5e-8, "b")

        assert len(groups) == 2
        assert groups.equal_identifiers(1.0 + 0.75e-8) == ["a", "b"]
        assert groups.equal_identifiers(5.0) == []

    def test_threshold_is_read_at_query_time(self):
        groups = ApproxKeyedMultiMap()
        groups.put(1.0, "a")
        set_equality_threshold(0.5)
        groups.put(1.3, "b")
        assert groups.items() == [(1.0, ["a", "b"])]


class TestVectorKeys:
    """Tuple keys such as whole spectra."""

    def test_close_vectors_share_a_bucket(self):
        groups = ApproxKeyedMultiMap()
        groups.put((-2.0, 0.0, 2.0), "g1")
        groups.put([-2.0 + 1e-11, 1e-12, 2.0], "g2")

        assert groups.is_vector
        assert len(groups) == 1
        assert groups.lookup_approx((-2.0, 0.0, 2.0)) == ["g1", "g2"]

    def test_one_far_coordinate_separates(self):
        groups = ApproxKeyedMultiMap()
        groups.put((1.0, 2.0, 3.0), "g1")
        groups.put((1.0, 2.0, 3.1), "g2")
        assert len(groups) == 2

    def test_lexicographic_order_with_prefixes(self):
        """Test that a strict prefix sorts before its extensions."""
        groups = ApproxKeyedMultiMap()
        for key in [(1.0, 2.0), (1.0,), (0.5, 9.0), (1.0, 1.0, 1.0)]:
            groups.put(key, str(key))

        assert groups.keys() == [(0.5, 9.0), (1.0,), (1.0, 1.0, 1.0), (1.0, 2.0)]
        assert groups.lookup_approx((1.0,)) == ["(1.0,)"]
        assert groups.lookup_approx((1.0, 2.0 + 1e-10)) == ["(1.0, 2.0)"]
        assert groups.lookup_approx((1.0, 1.0)) is None

    def test_match_found_beyond_first_coordinate_run(self):
        """Test a query whose first coordinate matches several stored values."""
        groups = ApproxKeyedMultiMap()
        groups.put((1.0, 5.0), "a")
        groups.put((1.0 + 1.5e-8, 3.0), "b")

        assert groups.lookup_approx((1.0 + 0.75e-8, 3.0)) == ["b"]

    def test_mixing_kinds_is_rejected(self):
        groups = ApproxKeyedMultiMap()
        groups.put((1.0, 2.0), "a")
        with pytest.raises(TypeError):
            groups.put(1.0, "b")

        scalars = ApproxKeyedMultiMap()
        scalars.put(1.0, "a")
        with pytest.raises(TypeError):
            scalars.put((1.0,), "b")


class TestNanKeys:
    """Keys holding NaN group together and sort last."""

    def test_nan_scalar_keys(self, scalar_map):
        scalar_map.put(math.nan, "u")
        scalar_map.put(float("nan"), "v")

        assert len(scalar_map) == 4
        assert math.isnan(scalar_map.last_key())
        assert scalar_map.first_key() == 1.0
        assert scalar_map.lookup_approx(math.nan) == ["u", "v"]
        assert scalar_map.remove(math.nan) == ["u", "v"]
        assert scalar_map.last_key() == 3.0

    def test_nan_vector_keys(self):
        groups = ApproxKeyedMultiMap()
        groups.put((math.nan, math.nan), "u")
        groups.put((0.0, 1.0), "a")
        groups.put((math.nan, math.nan), "v")
        groups.put((math.nan,), "w")

        assert len(groups) == 3
        assert groups.keys()[0] == (0.0, 1.0)
        assert groups.lookup_approx((math.nan, math.nan)) == ["u", "v"]
