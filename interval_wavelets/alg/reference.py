"""
Pointwise recursive evaluation of interior and boundary scaling functions.

Each value is obtained by unrolling the two-scale relation until the
arguments are integers (interior function) or leave the support (boundary
functions), without tabulation or memoization. This is slow - the call tree
grows geometrically with the dyadic level of the argument - and exists as an
independent check of the refinement tables and for single-point queries.

Arguments inside the support must be dyadic rationals whose level does not
exceed the configured ``max_reference_resolution``; other reals never reach
an integer. Any finite argument outside the support evaluates to 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

import numpy as np

from interval_wavelets.alg.origin_values import interior_integer_values
from interval_wavelets.config import resolve_config
from interval_wavelets.core.dyadic import is_dyadic
from interval_wavelets.core.filters import SQRT2
from interval_wavelets.utils.exceptions import (
    DomainError,
    validate_argument,
    validate_argument_vector,
    validate_basis_index,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from numpy.typing import ArrayLike, NDArray

    from interval_wavelets.config import ScalingConfig
    from interval_wavelets.core.filters import ScalingFilters, SupportInterval


@dataclass(frozen=True)
class InteriorPoint:
    """Evaluate the interior scaling function."""


@dataclass(frozen=True)
class BoundaryPoint:
    """Evaluate boundary scaling function ``k``."""

    k: int


EvaluationMode = Union[InteriorPoint, BoundaryPoint]


class ReferenceEvaluator:
    """
    Recursive evaluator for one edge.

    Example:
        >>> evaluator = ReferenceEvaluator(scaling_filters(2, Side.LEFT))
        >>> evaluator.evaluate(BoundaryPoint(0), 0.75)
        >>> evaluator.evaluate(InteriorPoint(), [0.5, 1.25])
    """

    def __init__(self, filters: ScalingFilters, config: ScalingConfig | None = None, scale: float = SQRT2):
        self.filters = filters
        self.config = resolve_config(config)
        self.scale = scale

        boundary = filters.boundary
        interior = filters.interior
        boundary.check_row_lengths(component="ReferenceEvaluator")

        self.p = boundary.vanishing_moments
        self.boundary_support = boundary.support
        self.interior_support = interior.support

        self._integer_values = interior_integer_values(interior, self.config, scale=scale).tolist()
        self._interior_taps = list(zip(interior.indices.tolist(), interior.coefficients.tolist(), strict=True))
        self._boundary_taps = [boundary.row(k)[: self.p].tolist() for k in range(self.p)]
        self._interior_couplings = [
            list(zip(boundary.interior_shifts(k).tolist(), boundary.row(k)[self.p :].tolist(), strict=True))
            for k in range(self.p)
        ]

    def evaluate(self, mode: EvaluationMode, x: float | ArrayLike) -> float | NDArray:
        """
        Evaluate the function selected by ``mode`` at ``x``.

        Args:
            mode: InteriorPoint() or BoundaryPoint(k)
            x: Real argument (dyadic inside the support), or a one-dimensional
                sequence of them

        Returns:
            A float for a scalar argument, otherwise an array in input order

        Raises:
            DomainError: Unknown mode, basis index outside [0, p), malformed
                arguments, or non-dyadic arguments inside the support
        """
        function, support = self._select(mode)

        if np.ndim(x) == 0:
            return self._evaluate_point(function, support, validate_argument(x, component="ReferenceEvaluator"))

        points = validate_argument_vector(x, component="ReferenceEvaluator")
        return np.array([self._evaluate_point(function, support, point) for point in points.tolist()])

    def _select(self, mode: EvaluationMode) -> tuple[Callable[[float], float], SupportInterval]:
        if isinstance(mode, InteriorPoint):
            return self.interior_value, self.interior_support
        if isinstance(mode, BoundaryPoint):
            k = validate_basis_index(mode.k, self.p, component="ReferenceEvaluator")
            return (lambda point: self.boundary_value(point, k)), self.boundary_support
        raise DomainError("mode", mode, component="ReferenceEvaluator", reason="expected InteriorPoint or BoundaryPoint")

    def _evaluate_point(self, function: Callable[[float], float], support: SupportInterval, x: float) -> float:
        # Zero outside the support for every real x; the dyadic requirement applies inside only
        if not support.contains(x):
            return 0.0
        return function(self._check_dyadic(x))

    def _check_dyadic(self, x: float) -> float:
        resolution = self.config.max_reference_resolution
        if not is_dyadic(x, resolution):
            raise DomainError(
                "x",
                x,
                component="ReferenceEvaluator",
                reason=f"not a dyadic rational with denominator at most 2^{resolution}",
            )
        return x

    def interior_value(self, x: float) -> float:
        """Interior scaling function at the dyadic rational ``x``."""
        left, right = self.interior_support
        if x < left or x > right:
            return 0.0

        if float(x).is_integer():
            return self._integer_values[int(x) - left]

        total = 0.0
        for j, h in self._interior_taps:
            total += h * self.interior_value(2 * x - j)
        return self.scale * total

    def boundary_value(self, x: float, k: int) -> float:
        """
        Boundary scaling function ``k`` at the dyadic rational ``x``.

        Returns 0 at x = 0; the edge value is only available from
        origin_values() or a refinement table.
        """
        left, right = self.boundary_support
        if x < left or x > right or x == 0:
            return 0.0

        doublex = 2 * x
        total = 0.0
        for l, coefficient in enumerate(self._boundary_taps[k]):
            total += coefficient * self.boundary_value(doublex, l)
        for shift, coefficient in self._interior_couplings[k]:
            total += coefficient * self.interior_value(doublex - shift)
        return self.scale * total
