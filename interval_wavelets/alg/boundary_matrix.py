"""
Dilation matrices of the two-scale relations.

For the boundary functions, entry [k, l] couples phi_k(x) to phi_l(2x); at
x = 0 every interior term vanishes, so the origin values form an eigenvector
of this matrix for the eigenvalue 1.

For the interior function the analogous matrix acts on the integer values
phi(-p+1), ..., phi(p-1): M[i, j] = scale * h_{2i-j}.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from interval_wavelets.core.filters import SQRT2
from interval_wavelets.utils.exceptions import FilterConfigurationError

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from interval_wavelets.core.filters import BoundaryFilter, InteriorFilter


def boundary_coefficient_matrix(boundary: BoundaryFilter, scale: float = SQRT2) -> NDArray:
    """
    Collect the boundary taps of every row in a p x p matrix.

    Args:
        boundary: Boundary filter with p rows
        scale: Factor of the two-scale relation (sqrt(2) for L2-normalized filters)

    Returns:
        Matrix whose k'th row is ``scale * boundary.row(k)[:p]``

    Raises:
        FilterConfigurationError: If a row has fewer than p coefficients
    """
    p = boundary.vanishing_moments
    matrix = np.zeros((p, p))

    for k, row in enumerate(boundary.rows):
        if row.size < p:
            raise FilterConfigurationError(
                f"row {k} has {row.size} coefficients, needs at least {p}",
                vanishing_moments=p,
                component="BoundaryMatrixBuilder",
            )
        matrix[k, :] = scale * row[:p]

    return matrix


def interior_coefficient_matrix(interior: InteriorFilter, scale: float = SQRT2) -> NDArray:
    """Dilation matrix acting on the interior values at the integers -p+1..p-1."""
    p = interior.vanishing_moments
    points = np.arange(-p + 1, p)
    matrix = np.zeros((points.size, points.size))

    for i, x in enumerate(points):
        for j, y in enumerate(points):
            matrix[i, j] = scale * interior.tap(2 * x - y)

    return matrix
