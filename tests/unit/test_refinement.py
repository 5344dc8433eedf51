#!/usr/bin/env python3
"""
Unit tests for interval_wavelets/alg/refinement.py

Tests level-by-level tabulation of the interior and boundary scaling
functions on dyadic grids.
"""

import pytest

import numpy as np

from interval_wavelets import (
    DomainError,
    FilterConfigurationError,
    ScalingConfig,
    Side,
    WaveletEvaluationError,
    interior_filter,
    scaling_filters,
)
from interval_wavelets.alg import boundary_values, interior_integer_values, interior_values, origin_values
from interval_wavelets.alg.refinement import ValueTable, _check_aliasing
from interval_wavelets.core import SupportInterval, make_boundary_filter

# =============================================================================
# Interior Table
# =============================================================================


class TestInteriorValues:
    def test_level_zero(self):
        table = interior_values(interior_filter(2), 0)

        np.testing.assert_allclose(table.values[0], interior_integer_values(interior_filter(2)))
        np.testing.assert_array_equal(table.grid, [-1, 0, 1, 2])

    def test_haar_is_box(self):
        table = interior_values(interior_filter(1), 3)

        np.testing.assert_allclose(table.values[0], [1, 1, 1, 1, 1, 1, 1, 1, 0])

    @pytest.mark.parametrize("p", [2, 3, 4])
    def test_partition_of_unity(self, p):
        table = interior_values(interior_filter(p), 5)
        x = table.grid[(table.grid >= 0) & (table.grid <= 1)]

        total = sum(table.lookup(x - n) for n in range(-2 * p, 2 * p + 1))
        np.testing.assert_allclose(total, 1.0, atol=1e-10)

    def test_daubechies_2_half_integer(self):
        """D4 at x = 1/2 (standard support [0, 3]) equals (2 + sqrt(3)) / 4."""
        table = interior_values(interior_filter(2), 1)

        assert table.values[0, table.index(-0.5)] == pytest.approx((2 + np.sqrt(3.0)) / 4, abs=1e-12)

    def test_negative_resolution(self):
        with pytest.raises(DomainError):
            interior_values(interior_filter(2), -1)


# =============================================================================
# Boundary Table
# =============================================================================


class TestBoundaryValues:
    @pytest.mark.parametrize("resolution", [0, 2, 4])
    def test_shape_and_grid(self, vanishing_moments, side, resolution):
        p = vanishing_moments
        filters = scaling_filters(p, side)
        table = boundary_values(filters.boundary, filters.interior, resolution)

        n_points = (2 * p - 1) * 2**resolution + 1
        assert table.shape == (p, n_points)
        assert table.grid.size == n_points
        assert np.all(np.diff(table.grid) > 0)
        assert table.grid[0] == filters.boundary.support.left
        assert table.grid[-1] == filters.boundary.support.right

    def test_origin_column(self, filters):
        table = boundary_values(filters.boundary, filters.interior, 3)

        np.testing.assert_array_equal(table.origin(), origin_values(filters.boundary))

    def test_origin_column_position(self):
        left = scaling_filters(2, Side.LEFT)
        right = scaling_filters(2, Side.RIGHT)

        assert boundary_values(left.boundary, left.interior, 2).index(0) == 0
        assert boundary_values(right.boundary, right.interior, 2).index(0) == 12

    def test_haar_left(self):
        filters = scaling_filters(1, Side.LEFT)
        table = boundary_values(filters.boundary, filters.interior, 2)

        np.testing.assert_allclose(table.values, [[1.0, 1.0, 1.0, 1.0, 0.0]], atol=1e-14)

    def test_haar_right(self):
        filters = scaling_filters(1, Side.RIGHT)
        table = boundary_values(filters.boundary, filters.interior, 2)

        np.testing.assert_allclose(table.values, [[1.0, 1.0, 1.0, 1.0, 1.0]], atol=1e-14)

    @pytest.mark.parametrize("p", [2, 3])
    def test_vanishes_at_far_end(self, p, side):
        filters = scaling_filters(p, side)
        table = boundary_values(filters.boundary, filters.interior, 3)
        far_end = filters.boundary.support.right if side is Side.LEFT else filters.boundary.support.left

        np.testing.assert_allclose(table.column(far_end), 0.0, atol=1e-12)

    def test_function_k_supported_near_edge(self, side):
        """Boundary function k vanishes beyond p + k from the edge."""
        p = 3
        filters = scaling_filters(p, side)
        table = boundary_values(filters.boundary, filters.interior, 4)
        distance = np.abs(table.grid)

        for k in range(p):
            np.testing.assert_allclose(table.values[k, distance >= p + k], 0.0, atol=1e-12)

    def test_resolution_consistency(self, filters):
        fine = boundary_values(filters.boundary, filters.interior, 5)
        coarse = boundary_values(filters.boundary, filters.interior, 0)

        np.testing.assert_allclose(fine.restrict(0).values, coarse.values, rtol=0, atol=1e-13)
        np.testing.assert_array_equal(fine.restrict(0).grid, coarse.grid)

    def test_precomputed_interior_table(self, left_filters_p2):
        filters = left_filters_p2
        interior_table = interior_values(filters.interior, 3)

        with_table = boundary_values(filters.boundary, filters.interior, 3, interior_table=interior_table)
        without = boundary_values(filters.boundary, filters.interior, 3)
        np.testing.assert_array_equal(with_table.values, without.values)

    def test_interior_table_resolution_mismatch(self, left_filters_p2):
        filters = left_filters_p2
        interior_table = interior_values(filters.interior, 2)

        with pytest.raises(FilterConfigurationError):
            boundary_values(filters.boundary, filters.interior, 3, interior_table=interior_table)

    def test_aliasing_check_can_be_disabled(self, left_filters_p2):
        filters = left_filters_p2
        checked = boundary_values(filters.boundary, filters.interior, 3)
        unchecked = boundary_values(filters.boundary, filters.interior, 3, config=ScalingConfig(check_aliasing=False))

        np.testing.assert_array_equal(checked.values, unchecked.values)


class TestBoundaryValuesErrors:
    def test_negative_resolution(self, left_filters_p2):
        with pytest.raises(DomainError):
            boundary_values(left_filters_p2.boundary, left_filters_p2.interior, -1)

    def test_mismatched_vanishing_moments(self, left_filters_p2):
        with pytest.raises(FilterConfigurationError):
            boundary_values(left_filters_p2.boundary, interior_filter(3), 2)

    def test_short_interior_taps(self):
        boundary = make_boundary_filter(Side.LEFT, [[0.5, 0.5, 0.1], [0.5, 0.5, 0.1, 0.1]])

        with pytest.raises(FilterConfigurationError, match="row 1"):
            boundary_values(boundary, interior_filter(2), 1)


# =============================================================================
# Value Table
# =============================================================================


class TestValueTable:
    @pytest.fixture
    def table(self):
        grid = np.array([0.0, 0.5, 1.0, 1.5, 2.0])
        return ValueTable(np.arange(10.0).reshape(2, 5), grid, SupportInterval(0, 2), 1)

    def test_column(self, table):
        np.testing.assert_array_equal(table.column(1.5), [3.0, 8.0])

    @pytest.mark.parametrize("x", [0.25, -0.5, 2.5])
    def test_column_off_grid(self, table, x):
        with pytest.raises(DomainError):
            table.column(x)

    def test_lookup_zero_outside(self, table):
        np.testing.assert_array_equal(table.lookup(np.array([-1.0, 0.5, 3.0]), row=1), [0.0, 6.0, 0.0])

    def test_restrict(self, table):
        coarse = table.restrict(0)

        np.testing.assert_array_equal(coarse.values, [[0.0, 2.0, 4.0], [5.0, 7.0, 9.0]])
        assert coarse.resolution == 0

    def test_restrict_finer_rejected(self, table):
        with pytest.raises(DomainError):
            table.restrict(2)


def test_aliasing_detection():
    with pytest.raises(WaveletEvaluationError) as excinfo:
        _check_aliasing(np.array([1, 3, 5]), np.array([2, 5]), level=2, component="Test")
    assert excinfo.value.error_code == "REFINEMENT_ALIASING"

    _check_aliasing(np.array([1, 3, 5]), np.array([0, 2, 4]), level=2, component="Test")
