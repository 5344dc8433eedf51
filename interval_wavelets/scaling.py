"""
One-call tabulation of Daubechies scaling functions.

Usage:
    >>> from interval_wavelets import Side, scaling_values
    >>> table = scaling_values(2, Side.LEFT, 3)
    >>> table.values.shape
    (2, 25)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from interval_wavelets.alg.filter_construction import interior_filter, scaling_filters
from interval_wavelets.alg.refinement import boundary_values, interior_values

if TYPE_CHECKING:
    from interval_wavelets.alg.refinement import ValueTable
    from interval_wavelets.config import ScalingConfig
    from interval_wavelets.core.filters import Side


def scaling_values(p: int, side: Side | str, resolution: int, config: ScalingConfig | None = None) -> ValueTable:
    """
    Boundary scaling functions with p vanishing moments at ``side``.

    Args:
        p: Vanishing moments
        side: Side.LEFT or Side.RIGHT
        resolution: Finest dyadic level R >= 0
        config: Evaluation settings

    Returns:
        ValueTable of shape (p, (2p - 1) * 2^R + 1)
    """
    filters = scaling_filters(p, side, config)
    return boundary_values(filters.boundary, filters.interior, resolution, config=config)


def interior_scaling_values(p: int, resolution: int, config: ScalingConfig | None = None) -> ValueTable:
    """Interior Daubechies scaling function with p vanishing moments on [-p+1, p]."""
    return interior_values(interior_filter(p, config), resolution, config=config)
