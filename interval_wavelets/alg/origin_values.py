"""
Scaling function values at the integers from eigen-relations.

The two-scale relation evaluated on the integers is a finite linear
fixed-point equation v = M v, so the values are an eigenvector of M for the
eigenvalue 1. An eigenvector only fixes the direction; the scale (and sign)
is fixed here by reproduction of the constant function:

- interior: sum_n phi(n) = 1;
- boundary: sum_k a_k phi_k(0) = 1 with a_k = integral of phi_k. All
  interior translates of the half-line basis vanish at x = 0, so this is the
  partition of unity evaluated at the edge.

Integrating the boundary two-scale relation gives the moments without any
function values:

    a_k = (scale / 2) * (sum_l H[k, l] a_l + s_k),   s_k = sum of interior taps of row k

i.e. (2/scale * I - H) a = s, because the interior function integrates to 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from interval_wavelets.alg.boundary_matrix import boundary_coefficient_matrix, interior_coefficient_matrix
from interval_wavelets.config import resolve_config
from interval_wavelets.core.filters import SQRT2
from interval_wavelets.utils.exceptions import EigenvalueNotFoundError, WaveletEvaluationError
from interval_wavelets.utils.logger import get_logger

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from interval_wavelets.config import ScalingConfig
    from interval_wavelets.core.filters import BoundaryFilter, InteriorFilter

logger = get_logger(__name__)


def unit_eigenvector(matrix: NDArray, tolerance: float, component: str | None = None) -> NDArray:
    """
    Eigenvector of ``matrix`` for its eigenvalue 1.

    Raises:
        EigenvalueNotFoundError: If no eigenvalue, or more than one, lies
            within ``tolerance`` of 1
    """
    eigenvalues, eigenvectors = np.linalg.eig(matrix)
    matches = np.flatnonzero(np.abs(eigenvalues - 1.0) <= tolerance)

    if matches.size != 1:
        raise EigenvalueNotFoundError(eigenvalues, tolerance, matches=int(matches.size), component=component)

    logger.debug(f"{component}: eigenvalue {eigenvalues[matches[0]]!r} selected from {eigenvalues.size}")

    # LAPACK returns real eigenvectors for real eigenvalues of real matrices
    vector = eigenvectors[:, matches[0]]
    return np.real(vector) if np.iscomplexobj(vector) else vector


def boundary_moments(boundary: BoundaryFilter, scale: float = SQRT2) -> NDArray:
    """Integrals of the p boundary functions, from the integrated two-scale relation."""
    p = boundary.vanishing_moments
    taps = boundary_coefficient_matrix(boundary, scale=1.0)
    interior_sums = np.array([row[p:].sum() for row in boundary.rows])

    return np.linalg.solve(2.0 / scale * np.eye(p) - taps, interior_sums)


def _normalize(vector: NDArray, weights: NDArray, component: str) -> NDArray:
    total = float(weights @ vector)
    if abs(total) < np.finfo(float).eps * max(1.0, float(np.abs(vector).max())):
        raise WaveletEvaluationError(
            "Eigenvector is orthogonal to the normalization weights",
            component=component,
            error_code="DEGENERATE_NORMALIZATION",
            diagnostic_data={"vector": np.array2string(vector), "weights": np.array2string(weights)},
        )
    return vector / total


def origin_values(
    boundary: BoundaryFilter,
    config: ScalingConfig | None = None,
    scale: float = SQRT2,
) -> NDArray:
    """
    Values of the p boundary functions at the edge x = 0.

    Args:
        boundary: Boundary filter
        config: Evaluation settings (eigenvalue tolerance)
        scale: Factor of the two-scale relation

    Returns:
        Vector E with E[k] = phi_k(0), scaled so that sum_k a_k E[k] = 1

    Raises:
        FilterConfigurationError: Malformed filter rows
        EigenvalueNotFoundError: The dilation matrix has no simple eigenvalue 1
    """
    config = resolve_config(config)
    matrix = boundary_coefficient_matrix(boundary, scale=scale)
    vector = unit_eigenvector(matrix, config.eigenvalue_tolerance, component="OriginValueSolver")

    return _normalize(vector, boundary_moments(boundary, scale=scale), component="OriginValueSolver")


def interior_integer_values(
    interior: InteriorFilter,
    config: ScalingConfig | None = None,
    scale: float = SQRT2,
) -> NDArray:
    """
    Values of the interior scaling function at the integers of its support.

    Returns:
        Array of length 2p with phi(-p+1), ..., phi(p); the last entry is 0
        and the values sum to 1
    """
    config = resolve_config(config)
    matrix = interior_coefficient_matrix(interior, scale=scale)
    vector = unit_eigenvector(matrix, config.eigenvalue_tolerance, component="InteriorValueSolver")
    vector = _normalize(vector, np.ones_like(vector), component="InteriorValueSolver")

    return np.append(vector, 0.0)
