"""
Tests for the vectorized PTS algebra.
"""

import pytest
import numpy as np
from mpegpts import PTSArray
from mpegpts.PTS import (
    PTS, MAX_PTS, LOWER_ROLLOVER_THRESHOLD, UPPER_ROLLOVER_THRESHOLD,
    after, greater_or_equal, rolled_over, duration_from, add,
)


# Values around both thresholds and the ends of the range
EDGE_VALUES = [
    0, 1, 100, 34_692,
    LOWER_ROLLOVER_THRESHOLD - 1, LOWER_ROLLOVER_THRESHOLD, 200_000_000,
    4_294_967_296, 8_000_000_000,
    UPPER_ROLLOVER_THRESHOLD, UPPER_ROLLOVER_THRESHOLD + 1,
    8_500_000_000, 8_589_900_000, MAX_PTS,
]

# 3000-tick (1/30s) frame spacing across a wrap
WRAPPED_STREAM = [8_589_930_000, 8_589_933_000, 1_408, 4_408]


class TestScalarEquivalence:
    """Vectorized results must match the scalar algebra."""

    @pytest.fixture
    def pairs(self):
        """Every ordered pair of edge values."""
        a = [x for x in EDGE_VALUES for _ in EDGE_VALUES]
        b = [y for _ in EDGE_VALUES for y in EDGE_VALUES]
        return a, b

    def test_rolled_over(self, pairs):
        """rolled_over() matches the scalar result for every pair."""
        a, b = pairs
        result = PTSArray(a).rolled_over(PTSArray(b))
        assert result.tolist() == [rolled_over(x, y) for x, y in zip(a, b)]

    def test_after(self, pairs):
        """after() matches the scalar result for every pair."""
        a, b = pairs
        result = PTSArray(a).after(PTSArray(b))
        assert result.tolist() == [after(x, y) for x, y in zip(a, b)]

    def test_greater_or_equal(self, pairs):
        """greater_or_equal() matches the scalar result for every pair."""
        a, b = pairs
        result = PTSArray(a).greater_or_equal(PTSArray(b))
        assert result.tolist() == [greater_or_equal(x, y) for x, y in zip(a, b)]

    def test_duration_from(self, pairs):
        """duration_from() matches the scalar result for every pair."""
        a, b = pairs
        result = PTSArray(a).duration_from(PTSArray(b))
        assert result.tolist() == [duration_from(x, y) for x, y in zip(a, b)]

    def test_add(self):
        """add() matches the scalar result for each offset."""
        offsets = [0, 1, 10, 3003, -10, MAX_PTS]
        for offset in offsets:
            result = PTSArray(EDGE_VALUES).add(offset)
            assert list(result) == [add(x, offset) for x in EDGE_VALUES]


class TestPTSArray:
    """Test PTSArray operations."""

    def test_intervals_across_wrap(self):
        """Frame spacing is constant through the wrap."""
        np.testing.assert_array_equal(PTSArray(WRAPPED_STREAM).intervals(), [3000, 3000, 3000])

    def test_rollover_indices(self):
        """The first post-wrap sample is reported."""
        np.testing.assert_array_equal(PTSArray(WRAPPED_STREAM).rollover_indices(), [2])
        assert len(PTSArray([1000, 4000, 7000]).rollover_indices()) == 0

    def test_is_monotonic(self):
        """A wrapped stream is still monotonic; a backward step is not."""
        assert PTSArray(WRAPPED_STREAM).is_monotonic()
        assert PTSArray([1000, 1000, 4000]).is_monotonic()
        assert not PTSArray([1000, 500, 4000]).is_monotonic()
        assert PTSArray([]).is_monotonic()
        assert PTSArray([42]).is_monotonic()

    def test_add_wraps(self):
        """Addition folds modulo 2^33."""
        np.testing.assert_array_equal(PTSArray([MAX_PTS, 0]).add(10).values, [9, 10])

    def test_broadcast_scalar_operands(self):
        """PTS and int operands broadcast across the array."""
        pts = PTSArray([100, 5000, 8_500_000_000])
        np.testing.assert_array_equal(pts.after(PTS(1000)), [False, True, False])
        np.testing.assert_array_equal(pts.after(8_589_900_000), [True, True, False])
        np.testing.assert_array_equal(pts.duration_from(1000), [900, 4000, 89_935_592])

    def test_container_protocol(self):
        """Indexing and iteration yield PTS values."""
        pts = PTSArray([PTS(1), 2, 3])
        assert len(pts) == 3
        assert pts[0] == PTS(1)
        assert list(pts) == [PTS(1), PTS(2), PTS(3)]

    def test_from_numpy(self):
        """numpy input is kept as int64."""
        pts = PTSArray(np.array([1, 2, 3], dtype=np.uint32))
        assert pts.values.dtype == np.int64

    def test_to_seconds(self):
        """Seconds use the 90kHz clock."""
        np.testing.assert_allclose(PTSArray([0, 90_000, 135_000]).to_seconds(), [0.0, 1.0, 1.5])

    def test_empty(self):
        """Empty arrays have no intervals."""
        assert len(PTSArray([]).intervals()) == 0

    def test_rejects_sentinels(self):
        """Infinities cannot be stored or broadcast."""
        with pytest.raises(ValueError):
            PTSArray([PTS.POSITIVE_INFINITY])
        with pytest.raises(ValueError):
            PTSArray([1, 2]).after(PTS.NEGATIVE_INFINITY)

    def test_rejects_2d(self):
        """Only one-dimensional input is accepted."""
        with pytest.raises(ValueError):
            PTSArray(np.zeros((2, 2), dtype=np.int64))
