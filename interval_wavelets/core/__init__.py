"""
Core data model: sides, supports, filters and dyadic grids.
"""

from __future__ import annotations

from .dyadic import dyadic_grid, grid_size, is_dyadic, level_indices, x2index
from .filters import (
    SQRT2,
    BoundaryFilter,
    InteriorFilter,
    ScalingFilters,
    Side,
    SupportInterval,
    boundary_support,
    interior_support,
    make_boundary_filter,
)

__all__ = [
    "SQRT2",
    "BoundaryFilter",
    "InteriorFilter",
    "ScalingFilters",
    "Side",
    "SupportInterval",
    "boundary_support",
    "interior_support",
    "make_boundary_filter",
    "dyadic_grid",
    "grid_size",
    "is_dyadic",
    "level_indices",
    "x2index",
]
