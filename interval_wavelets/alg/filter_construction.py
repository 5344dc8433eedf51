"""
Daubechies interior and boundary filters.

The interior filter is the extremal phase Daubechies filter ``db{p}`` from
PyWavelets, indexed over the support [-p+1, p].

Boundary filters follow the Cohen-Daubechies-Vial construction on the left
edge [0, inf):

1. Interior translates phi(x - n) with n in S = [-p+1, p-1] straddle the edge.
   Restricted to x >= 0, the combinations sum_n q(n) phi(x - n) with q a
   polynomial of degree < p span the edge space (the part of the polynomial
   reproduction not covered by the whole translates n >= p).
2. Choosing q_k(n) = prod_{i=k+1}^{p-1} (n - i) gives edge functions with
   nested supports [0, p + k].
3. Their half-line Gram matrix follows from the Gram matrix of the truncated
   translates, A(a, b) = int_0^inf phi(x - a) phi(x - b) dx, which solves the
   refinement system

       A(a, b) = sum_{j, j'} h_j h_j' A(2a + j, 2b + j'),

   with A(a, b) = delta_ab as soon as a >= p or b >= p and A(a, b) = 0 as soon
   as a <= -p or b <= -p.
4. A Cholesky factor orthonormalizes the edge functions while keeping the
   nested supports: phi_k(x) = sum_n C[k, n] phi(x - n) on x >= 0.
5. Refining phi(x - n) splits the coefficients into taps on the truncated
   fine-scale translates (rewritten in the boundary basis by a least squares
   solve) and taps on whole translates phi(2x - m), m = p..p+2k.

The right edge uses the reflection phi'(x) = phi(1 - x), whose filter is
h'_j = h_{1-j}: the left construction for h' mirrored to x <= 0 gives
phi^R_k(x) = sum_{l} ... + sqrt(2) sum_j row_k[p+j] phi(2x + p + 1 + j).
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import pywt
from scipy import linalg

from interval_wavelets.config import resolve_config
from interval_wavelets.core.filters import (
    InteriorFilter,
    ScalingFilters,
    Side,
    interior_support,
    make_boundary_filter,
)
from interval_wavelets.utils.exceptions import WaveletEvaluationError, validate_vanishing_moments
from interval_wavelets.utils.logger import context_extra, get_logger

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from interval_wavelets.config import ScalingConfig
    from interval_wavelets.core.filters import BoundaryFilter

logger = get_logger(__name__)

# Residual of the boundary tap solve above which the construction is rejected
_CONSTRUCTION_TOLERANCE = 1e-8


@dataclass(frozen=True)
class EdgeExpansion:
    """
    Boundary functions as truncated combinations of interior translates.

    phi_k(x) = sum_i coefficients[k, i] * phi(x - translates[i]) for x on the
    half-line of ``side``.
    """

    side: Side
    translates: NDArray
    coefficients: NDArray


def interior_filter(p: int, config: ScalingConfig | None = None) -> InteriorFilter:
    """Daubechies scaling filter with p vanishing moments on the support [-p+1, p]."""
    config = resolve_config(config)
    p = validate_vanishing_moments(p, config.max_vanishing_moments, component="FilterProvider")
    return _interior_filter(p)


def boundary_filter(p: int, side: Side | str, config: ScalingConfig | None = None) -> BoundaryFilter:
    """Boundary filter of the p boundary scaling functions at ``side``."""
    config = resolve_config(config)
    p = validate_vanishing_moments(p, config.max_vanishing_moments, component="FilterProvider")
    return _boundary_filter(p, Side(side))


def scaling_filters(p: int, side: Side | str, config: ScalingConfig | None = None) -> ScalingFilters:
    """Boundary filter at ``side`` paired with its interior filter."""
    return ScalingFilters(boundary_filter(p, side, config), interior_filter(p, config))


def edge_expansion(p: int, side: Side | str, config: ScalingConfig | None = None) -> EdgeExpansion:
    """Expansion of the boundary functions in interior translates."""
    config = resolve_config(config)
    p = validate_vanishing_moments(p, config.max_vanishing_moments, component="FilterProvider")
    return _edge_expansion(p, Side(side))


@functools.lru_cache(maxsize=None)
def _interior_filter(p: int) -> InteriorFilter:
    wavelet = pywt.Wavelet(f"db{p}")
    return InteriorFilter(np.asarray(wavelet.rec_lo, dtype=float), interior_support(p))


@functools.lru_cache(maxsize=None)
def _construction(p: int, side: Side) -> tuple[BoundaryFilter, EdgeExpansion]:
    logger.info("Constructing boundary filter", extra=context_extra(p, side))
    interior = _interior_filter(p)
    rows, coefficients = _left_construction(interior if side is Side.LEFT else interior.reflected())

    translates = np.arange(-p + 1, p)
    if side is Side.RIGHT:
        # phi'(-x - n) = phi(x - (-n - 1))
        translates = -translates - 1
    translates.setflags(write=False)
    coefficients.setflags(write=False)

    return make_boundary_filter(side, rows), EdgeExpansion(side, translates, coefficients)


def _boundary_filter(p: int, side: Side) -> BoundaryFilter:
    return _construction(p, side)[0]


def _edge_expansion(p: int, side: Side) -> EdgeExpansion:
    return _construction(p, side)[1]


def half_line_gram(interior: InteriorFilter) -> NDArray:
    """
    Gram matrix of the truncated translates phi(x - n), n = -p+1..p-1, on [0, inf).

    Solves the refinement system for all pairs at once.
    """
    p = interior.vanishing_moments
    n = 2 * p - 1
    offset = p - 1
    taps = interior.indices
    h = interior.coefficients

    system = np.eye(n * n)
    rhs = np.zeros(n * n)

    for a in range(-p + 1, p):
        for b in range(-p + 1, p):
            row = (a + offset) * n + (b + offset)
            c = 2 * a + taps[:, None]
            d = 2 * b + taps[None, :]
            weight = h[:, None] * h[None, :]
            c, d = np.broadcast_arrays(c, d)

            outside_right = (c >= p) | (d >= p)
            outside_left = (c <= -p) | (d <= -p)
            rhs[row] += np.sum(weight[outside_right & ~outside_left & (c == d)])

            unknown = ~(outside_right | outside_left)
            columns = (c[unknown] + offset) * n + (d[unknown] + offset)
            np.add.at(system[row], columns, -weight[unknown])

    gram = np.linalg.solve(system, rhs).reshape(n, n)
    return 0.5 * (gram + gram.T)


def _edge_polynomials(p: int) -> NDArray:
    """Rows q_k(n) = prod_{i=k+1}^{p-1} (n - i) at n = -p+1..p-1, scaled to unit max norm."""
    points = np.arange(-p + 1, p, dtype=float)
    polynomials = np.ones((p, points.size))
    for k in range(p):
        for i in range(k + 1, p):
            polynomials[k] *= points - i
        polynomials[k] /= np.abs(polynomials[k]).max()
    return polynomials


def _left_construction(interior: InteriorFilter) -> tuple[list[NDArray], NDArray]:
    """Rows of the left boundary filter and the edge coefficients C."""
    p = interior.vanishing_moments
    translates = np.arange(-p + 1, p)

    polynomials = _edge_polynomials(p)
    try:
        gram = polynomials @ half_line_gram(interior) @ polynomials.T
        factor = linalg.cholesky(gram, lower=True)
        coefficients = linalg.solve_triangular(factor, polynomials, lower=True)
    except linalg.LinAlgError as err:
        raise WaveletEvaluationError(
            "Edge Gram matrix is singular or not positive definite",
            component="FilterProvider",
            suggested_action="Use fewer vanishing moments",
            error_code="CONSTRUCTION_FAILED",
            diagnostic_data={"vanishing_moments": p, "linalg_error": str(err)},
        ) from err

    # phi_k(x) = sqrt(2) sum_r fine[k, r] phi(2x - r), r = 2n + j
    fine_shifts = np.arange(2 * translates[0] + interior.support.left, 2 * translates[-1] + interior.support.right + 1)
    fine = np.zeros((p, fine_shifts.size))
    for i, n in enumerate(translates):
        for j, h in zip(interior.indices, interior.coefficients, strict=True):
            fine[:, 2 * n + j - fine_shifts[0]] += coefficients[:, i] * h

    truncated = (fine_shifts >= -p + 1) & (fine_shifts <= p - 1)
    solution, *_ = linalg.lstsq(coefficients.T, fine[:, truncated].T)
    boundary_taps = solution.T

    residual = np.abs(boundary_taps @ coefficients - fine[:, truncated]).max()
    if residual > _CONSTRUCTION_TOLERANCE:
        raise WaveletEvaluationError(
            "Edge functions are not refinable in the boundary basis",
            component="FilterProvider",
            error_code="CONSTRUCTION_FAILED",
            diagnostic_data={"vanishing_moments": p, "residual": f"{residual:.2e}"},
        )

    rows = []
    for k in range(p):
        whole = fine[k, (fine_shifts >= p) & (fine_shifts <= p + 2 * k)]
        rows.append(np.concatenate([boundary_taps[k], whole]))

    logger.debug(f"Boundary construction tap residual {residual:.2e}", extra=context_extra(p))
    return rows, coefficients
