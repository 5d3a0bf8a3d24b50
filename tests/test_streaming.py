"""
Tests for the bounded streaming step.

Checks the direction of every plane, the absence of wraparound, and that
the double-buffered and in-place kernels agree.
"""

import pytest
import numpy as np
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from fluidsim.lattice import EX, EY, Q
from fluidsim.streaming import stream_bounded, stream_bounded_fast


@pytest.fixture
def random_f():
    rng = np.random.default_rng(7)
    return rng.random((Q, 9, 13))


class TestStreamingDirections:
    """A single marked value moves one cell along its direction."""

    @pytest.mark.parametrize("stream", [stream_bounded, stream_bounded_fast])
    @pytest.mark.parametrize("k", range(1, Q))
    def test_single_value_moves(self, stream, k):
        ny, nx = 7, 7
        f = np.zeros((Q, ny, nx))
        f[k, 3, 3] = 1.0

        f_out = stream(f.copy())

        assert f_out[k, 3 + EY[k], 3 + EX[k]] == 1.0
        assert np.sum(f_out[k]) == 1.0

    @pytest.mark.parametrize("stream", [stream_bounded, stream_bounded_fast])
    def test_rest_plane_untouched(self, stream, random_f):
        f_out = stream(random_f.copy())

        np.testing.assert_array_equal(f_out[0], random_f[0])

    @pytest.mark.parametrize("stream", [stream_bounded, stream_bounded_fast])
    def test_up_is_decreasing_row(self, stream):
        f = np.zeros((Q, 5, 5))
        f[2, 2, 2] = 1.0

        f_out = stream(f)

        assert f_out[2, 1, 2] == 1.0


class TestNoWraparound:
    """Values leaving the lattice are dropped."""

    @pytest.mark.parametrize("stream", [stream_bounded, stream_bounded_fast])
    def test_right_edge_drops(self, stream):
        ny, nx = 4, 6
        f = np.zeros((Q, ny, nx))
        f[1, :, -1] = 5.0

        f_out = stream(f)

        # Nothing reappears on the left edge
        assert np.all(f_out[1, :, 0] == 0.0)
        assert np.sum(f_out[1]) == 0.0

    @pytest.mark.parametrize("stream", [stream_bounded, stream_bounded_fast])
    def test_entering_edge_keeps_old_value(self, stream, random_f):
        """The column a rightward plane moves away from is left as it was."""
        f_out = stream(random_f.copy())

        np.testing.assert_array_equal(f_out[1, :, 0], random_f[1, :, 0])
        np.testing.assert_array_equal(f_out[2, -1, :], random_f[2, -1, :])
        np.testing.assert_array_equal(f_out[3, :, -1], random_f[3, :, -1])
        np.testing.assert_array_equal(f_out[4, 0, :], random_f[4, 0, :])


class TestStreamingConsistency:
    """Double-buffered and in-place kernels agree."""

    def test_fast_equals_standard(self, random_f):
        f_std = stream_bounded(random_f)
        f_fast = stream_bounded_fast(random_f.copy())

        np.testing.assert_array_equal(f_fast, f_std)

    def test_standard_does_not_mutate_input(self, random_f):
        original = random_f.copy()

        stream_bounded(random_f)

        np.testing.assert_array_equal(random_f, original)

    def test_fast_is_in_place(self, random_f):
        f_out = stream_bounded_fast(random_f)

        assert f_out is random_f

    def test_interior_shift_matches_slices(self, random_f):
        """Interior cells pull from x - e_i."""
        f_out = stream_bounded_fast(random_f.copy())

        for k in range(1, Q):
            np.testing.assert_array_equal(
                f_out[k, 1:-1, 1:-1],
                random_f[k, 1 - EY[k]:random_f.shape[1] - 1 - EY[k],
                         1 - EX[k]:random_f.shape[2] - 1 - EX[k]],
            )

    @pytest.mark.parametrize("shape", [(1, 1), (1, 5), (5, 1), (2, 2)])
    def test_degenerate_extents(self, shape):
        rng = np.random.default_rng(3)
        f = rng.random((Q,) + shape)

        np.testing.assert_array_equal(stream_bounded_fast(f.copy()), stream_bounded(f))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
