"""
Pytest configuration and shared fixtures for the interval_wavelets test suite.
"""

import pytest

import numpy as np

from interval_wavelets import Side, interior_values, scaling_filters

# =============================================================================
# Test Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (slower, cross-component)")
    config.addinivalue_line("markers", "mathematical: Mathematical property validation tests")
    config.addinivalue_line("markers", "slow: Slow tests (may take >10 seconds)")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test paths."""
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/mathematical/" in test_path:
            item.add_marker(pytest.mark.mathematical)

        if "slow" in item.name:
            item.add_marker(pytest.mark.slow)


# =============================================================================
# Filter Fixtures
# =============================================================================


@pytest.fixture(params=[Side.LEFT, Side.RIGHT], ids=["left", "right"])
def side(request):
    """Both interval edges."""
    return request.param


@pytest.fixture(params=[1, 2, 3], ids=["p1", "p2", "p3"])
def vanishing_moments(request):
    """Small vanishing moment counts covered by the property tests."""
    return request.param


@pytest.fixture
def filters(vanishing_moments, side):
    """Boundary and interior filters for every (p, side) combination."""
    return scaling_filters(vanishing_moments, side)


@pytest.fixture
def left_filters_p2():
    """Daubechies 2 filters at the left edge."""
    return scaling_filters(2, Side.LEFT)


# =============================================================================
# Helpers
# =============================================================================


def interior_translate_sum(filters, interior_table, x):
    """
    Sum of the whole interior translates of the half-line basis at ``x``.

    Left edge: phi(x - n) for n >= p; right edge: n <= -p - 1.
    """
    p = filters.vanishing_moments
    x = np.atleast_1d(np.asarray(x, dtype=float))
    if filters.side is Side.LEFT:
        shifts = range(p, 3 * p)
    else:
        shifts = range(-3 * p, -p)
    return sum(interior_table.lookup(x - n) for n in shifts)


@pytest.fixture
def translate_sum():
    """Expose interior_translate_sum to tests."""
    return interior_translate_sum


@pytest.fixture
def interior_table_factory():
    """Interior table for a filter pair at a given resolution."""

    def factory(filters, resolution):
        return interior_values(filters.interior, resolution)

    return factory
