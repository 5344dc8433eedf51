"""
Two-scale refinement of scaling function values on dyadic grids.

Values are tabulated on the grid of resolution R over the support and filled
level by level: level 0 holds the integers, level L the odd multiples of
2^-L. The two-scale relation at x reads values at 2x, which for a point of
level L >= 1 belongs to level L - 1. All points of one level are therefore
independent and are computed together; levels run in order.

On the integers of a boundary support the relation at x reads 2x, which lies
farther from the edge than x. Integers are thus processed from the far end of
the support towards the edge, where the origin values seed the table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from interval_wavelets.alg.boundary_matrix import boundary_coefficient_matrix
from interval_wavelets.alg.origin_values import interior_integer_values, origin_values
from interval_wavelets.config import resolve_config
from interval_wavelets.core.dyadic import dyadic_grid, is_dyadic, level_indices, x2index
from interval_wavelets.core.filters import SQRT2, Side
from interval_wavelets.utils.exceptions import (
    DomainError,
    FilterConfigurationError,
    WaveletEvaluationError,
    validate_resolution,
)
from interval_wavelets.utils.logger import context_extra, get_logger, log_table_summary

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from interval_wavelets.config import ScalingConfig
    from interval_wavelets.core.filters import BoundaryFilter, InteriorFilter, SupportInterval

logger = get_logger(__name__)


@dataclass
class ValueTable:
    """
    Function values on a dyadic grid.

    Attributes:
        values: Array of shape (functions, points); row k holds function k
        grid: Grid points in increasing order, one per column
        support: Interval covered by the grid
        resolution: Grid spacing is 2^-resolution
    """

    values: NDArray
    grid: NDArray
    support: SupportInterval
    resolution: int

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape

    def index(self, x) -> int:
        """Column of the grid point ``x``."""
        if not self.support.contains(x) or not is_dyadic(x, self.resolution):
            raise DomainError(
                "x",
                x,
                valid_range=(self.support.left, self.support.right),
                component="ValueTable",
                reason=f"not a grid point at resolution {self.resolution}",
            )
        return x2index(x, self.support, self.resolution)

    def column(self, x) -> NDArray:
        """Values of all functions at the grid point ``x``."""
        return self.values[:, self.index(x)]

    def origin(self) -> NDArray:
        """Values at x = 0."""
        return self.column(0)

    def lookup(self, x: NDArray, row: int = 0) -> NDArray:
        """Values of function ``row`` at grid points ``x``; zero outside the support."""
        x = np.asarray(x, dtype=float)
        out = np.zeros(x.shape)
        inside = self.support.contains(x)
        out[inside] = self.values[row, x2index(x[inside], self.support, self.resolution)]
        return out

    def restrict(self, resolution: int) -> ValueTable:
        """Sub-table on the coarser grid of ``resolution``."""
        resolution = validate_resolution(resolution, component="ValueTable")
        if resolution > self.resolution:
            raise DomainError(
                "resolution", resolution, valid_range=(0, self.resolution), component="ValueTable"
            )
        stride = 2 ** (self.resolution - resolution)
        return ValueTable(self.values[:, ::stride].copy(), self.grid[::stride].copy(), self.support, resolution)


def _check_aliasing(written: NDArray, read: NDArray, level: int, component: str):
    overlap = np.intersect1d(written, read)
    if overlap.size:
        raise WaveletEvaluationError(
            f"Refinement level {level} reads grid columns it writes",
            component=component,
            error_code="REFINEMENT_ALIASING",
            diagnostic_data={"columns": overlap.tolist()},
        )


def interior_values(
    interior: InteriorFilter,
    resolution: int,
    config: ScalingConfig | None = None,
    scale: float = SQRT2,
) -> ValueTable:
    """
    Tabulate the interior scaling function at resolution R.

    Args:
        interior: Interior filter
        resolution: Finest dyadic level R >= 0
        config: Evaluation settings
        scale: Factor of the two-scale relation

    Returns:
        One-row ValueTable over the interior support
    """
    config = resolve_config(config)
    resolution = validate_resolution(resolution, component="RefinementEngine")
    support = interior.support
    grid = dyadic_grid(support, resolution)

    phi = np.zeros((1, grid.size))
    phi[0, level_indices(support, resolution, 0)] = interior_integer_values(interior, config, scale=scale)

    for level in range(1, resolution + 1):
        positions = level_indices(support, resolution, level)
        doublex = 2.0 * grid[positions]
        total = np.zeros(positions.size)

        for j, h in zip(interior.indices, interior.coefficients, strict=True):
            arg = doublex - j
            inside = support.contains(arg)
            read = x2index(arg[inside], support, resolution)
            if config.check_aliasing:
                _check_aliasing(positions, read, level, "RefinementEngine")
            total[inside] += h * phi[0, read]

        phi[0, positions] = scale * total

    table = ValueTable(phi, grid, support, resolution)
    log_table_summary(logger, "interior table", table.values, resolution, vanishing_moments=interior.vanishing_moments)
    return table


def _refine_points(
    boundary: BoundaryFilter,
    values: NDArray,
    phi: ValueTable,
    grid: NDArray,
    positions: NDArray,
    matrix: NDArray,
    resolution: int,
    scale: float,
    check_aliasing: bool,
    level: int,
) -> NDArray:
    """Two-scale relation for all boundary functions at the grid ``positions``."""
    p = boundary.vanishing_moments
    support = boundary.support
    doublex = 2.0 * grid[positions]
    block = np.zeros((p, positions.size))

    # Boundary contribution, read from coarser columns
    inside = support.contains(doublex)
    read = x2index(doublex[inside], support, resolution)
    if check_aliasing:
        _check_aliasing(positions, read, level, "RefinementEngine")
    block[:, inside] = matrix @ values[:, read]

    # Interior contribution; the number of taps grows with k
    for k in range(p):
        row = boundary.row(k)
        for j, shift in enumerate(boundary.interior_shifts(k)):
            block[k] += scale * row[p + j] * phi.lookup(doublex - shift)

    return block


def boundary_values(
    boundary: BoundaryFilter,
    interior: InteriorFilter,
    resolution: int,
    config: ScalingConfig | None = None,
    interior_table: ValueTable | None = None,
    scale: float = SQRT2,
) -> ValueTable:
    """
    Tabulate the p boundary scaling functions at resolution R.

    Args:
        boundary: Boundary filter of one edge
        interior: Interior filter the boundary filter was built from
        resolution: Finest dyadic level R >= 0
        config: Evaluation settings
        interior_table: Precomputed interior table at resolution R (optional)
        scale: Factor of the two-scale relation

    Returns:
        ValueTable of shape (p, N) over the boundary support; ``grid`` is the
        companion sequence of dyadic rationals in increasing order

    Raises:
        DomainError: Negative resolution
        FilterConfigurationError: Mismatched p or malformed rows
        EigenvalueNotFoundError: No simple eigenvalue 1 in the dilation matrix
    """
    config = resolve_config(config)
    resolution = validate_resolution(resolution, component="RefinementEngine")

    p = boundary.vanishing_moments
    if interior.vanishing_moments != p:
        raise FilterConfigurationError(
            "boundary and interior filters disagree on the vanishing moments",
            component="RefinementEngine",
            diagnostic_data={"boundary_p": p, "interior_p": interior.vanishing_moments},
        )
    boundary.check_row_lengths(component="RefinementEngine")

    if interior_table is None:
        interior_table = interior_values(interior, resolution, config, scale=scale)
    elif interior_table.resolution != resolution or interior_table.support != interior.support:
        raise FilterConfigurationError(
            "interior table does not match the requested resolution or interior support",
            vanishing_moments=p,
            component="RefinementEngine",
            diagnostic_data={"table_resolution": interior_table.resolution, "resolution": resolution},
        )

    support = boundary.support
    grid = dyadic_grid(support, resolution)
    matrix = boundary_coefficient_matrix(boundary, scale=scale)
    values = np.zeros((p, grid.size))

    values[:, x2index(0, support, resolution)] = origin_values(boundary, config, scale=scale)

    # Integers, from the far end of the support towards the edge
    if boundary.side is Side.LEFT:
        integers = range(support.right, 0, -1)
    else:
        integers = range(support.left, 0)
    for x in integers:
        position = np.array([x2index(x, support, resolution)])
        values[:, position] = _refine_points(
            boundary, values, interior_table, grid, position, matrix, resolution, scale, config.check_aliasing, 0
        )

    for level in range(1, resolution + 1):
        positions = level_indices(support, resolution, level)
        values[:, positions] = _refine_points(
            boundary, values, interior_table, grid, positions, matrix, resolution, scale, config.check_aliasing, level
        )
        logger.debug(
            f"Boundary level filled ({positions.size} points)",
            extra=context_extra(p, boundary.side, level),
        )

    table = ValueTable(values, grid, support, resolution)
    log_table_summary(logger, "boundary table", table.values, resolution, vanishing_moments=p, side=boundary.side)
    return table
