#!/usr/bin/env python3
"""
Unit tests for interval_wavelets/core/dyadic.py
"""

import pytest

import numpy as np

from interval_wavelets.core import SupportInterval, dyadic_grid, grid_size, is_dyadic, level_indices, x2index


@pytest.fixture
def support():
    return SupportInterval(-1, 2)


class TestDyadicGrid:
    """Grid enumeration and indexing."""

    def test_integer_grid(self, support):
        np.testing.assert_array_equal(dyadic_grid(support, 0), [-1, 0, 1, 2])

    def test_grid_size(self, support):
        assert grid_size(support, 3) == 3 * 8 + 1
        assert dyadic_grid(support, 3).size == grid_size(support, 3)

    def test_grid_spacing(self, support):
        grid = dyadic_grid(support, 2)

        assert grid[0] == -1.0
        assert grid[-1] == 2.0
        np.testing.assert_allclose(np.diff(grid), 0.25)

    def test_x2index_roundtrip(self, support):
        grid = dyadic_grid(support, 4)

        np.testing.assert_array_equal(x2index(grid, support, 4), np.arange(grid.size))

    def test_x2index_scalar(self, support):
        assert x2index(0.5, support, 1) == 3
        assert isinstance(x2index(0.5, support, 1), int)

    def test_is_dyadic(self):
        assert is_dyadic(0.375, 3)
        assert not is_dyadic(0.375, 2)
        np.testing.assert_array_equal(is_dyadic(np.array([1.0, 0.5, 0.1]), 4), [True, True, False])


class TestLevels:
    """Points new at each resolution level."""

    def test_level_zero_is_integers(self, support):
        grid = dyadic_grid(support, 3)

        np.testing.assert_array_equal(grid[level_indices(support, 3, 0)], [-1, 0, 1, 2])

    def test_level_points_have_exact_denominator(self, support):
        grid = dyadic_grid(support, 3)

        np.testing.assert_array_equal(grid[level_indices(support, 3, 1)], [-0.5, 0.5, 1.5])
        level3 = grid[level_indices(support, 3, 3)]
        assert np.all(is_dyadic(level3, 3))
        assert not np.any(is_dyadic(level3, 2))

    def test_levels_partition_grid(self, support):
        resolution = 4
        positions = np.concatenate([level_indices(support, resolution, level) for level in range(resolution + 1)])

        np.testing.assert_array_equal(np.sort(positions), np.arange(grid_size(support, resolution)))
