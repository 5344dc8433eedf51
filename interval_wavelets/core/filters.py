"""
Filter data model for Daubechies scaling functions on an interval.

The interior filter h is indexed over its support [-p+1, p], so that

    phi(x) = sqrt(2) * sum_{j=-p+1}^{p} h_j phi(2x - j).

A boundary filter holds one row per boundary function k = 0..p-1. Row k has
p + 2k + 1 coefficients: p taps on the boundary functions at the finer scale,
followed by 2k + 1 taps on interior translates,

    phi_k(x) = sqrt(2) * sum_{l<p} row_k[l] phi_l(2x)
             + sqrt(2) * sum_{j=0}^{2k} row_k[p+j] phi(2x - start - j*step)

with (start, step) = (p, +1) on the left edge and (-(p+1), -1) on the right.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from interval_wavelets.utils.exceptions import FilterConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from numpy.typing import ArrayLike, NDArray


SQRT2 = float(np.sqrt(2.0))


class Side(str, Enum):
    """Interval edge a boundary function lives at."""

    LEFT = "left"
    RIGHT = "right"


def _readonly(values: ArrayLike) -> NDArray:
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class SupportInterval:
    """Closed integer interval [left, right] outside of which a function vanishes."""

    left: int
    right: int

    def __post_init__(self):
        if self.left > self.right:
            raise FilterConfigurationError(
                f"support [{self.left}, {self.right}] is empty", component="SupportInterval"
            )

    def contains(self, x):
        """Membership test; works elementwise on arrays."""
        return (x >= self.left) & (x <= self.right)

    @property
    def length(self) -> int:
        return self.right - self.left

    def __iter__(self) -> Iterator[int]:
        yield self.left
        yield self.right


@dataclass(frozen=True)
class InteriorFilter:
    """Classical Daubechies scaling filter of length 2p on the support [-p+1, p]."""

    coefficients: NDArray
    support: SupportInterval

    def __post_init__(self):
        coefficients = _readonly(self.coefficients)
        object.__setattr__(self, "coefficients", coefficients)

        if coefficients.ndim != 1 or coefficients.size == 0 or coefficients.size % 2:
            raise FilterConfigurationError(
                f"interior filter must have an even, positive length, got {coefficients.shape}",
                component="InteriorFilter",
            )
        p = coefficients.size // 2
        if tuple(self.support) != (-p + 1, p):
            raise FilterConfigurationError(
                f"interior support must be [{-p + 1}, {p}], got [{self.support.left}, {self.support.right}]",
                vanishing_moments=p,
                component="InteriorFilter",
            )

    @property
    def vanishing_moments(self) -> int:
        return self.coefficients.size // 2

    @property
    def indices(self) -> NDArray:
        """Tap positions j matching ``coefficients``."""
        return np.arange(self.support.left, self.support.right + 1)

    def tap(self, j: int) -> float:
        """Coefficient h_j; zero outside the support."""
        if not self.support.contains(j):
            return 0.0
        return float(self.coefficients[j - self.support.left])

    def reflected(self) -> InteriorFilter:
        """Filter of x -> phi(1 - x), i.e. h'_j = h_{1-j}."""
        return InteriorFilter(self.coefficients[::-1].copy(), self.support)


@dataclass(frozen=True)
class BoundaryFilter:
    """Dilation coefficients of the p boundary scaling functions at one edge."""

    side: Side
    vanishing_moments: int
    rows: tuple[NDArray, ...]
    support: SupportInterval

    def __post_init__(self):
        object.__setattr__(self, "side", Side(self.side))
        object.__setattr__(self, "rows", tuple(_readonly(row) for row in self.rows))

        if len(self.rows) != self.vanishing_moments:
            raise FilterConfigurationError(
                f"expected {self.vanishing_moments} rows, got {len(self.rows)}",
                vanishing_moments=self.vanishing_moments,
                component="BoundaryFilter",
            )

    def row(self, k: int) -> NDArray:
        return self.rows[k]

    @property
    def interior_start(self) -> int:
        """Shift of the first interior tap: phi(2x - start)."""
        p = self.vanishing_moments
        return p if self.side is Side.LEFT else -(p + 1)

    @property
    def interior_step(self) -> int:
        """Direction in which successive interior taps move away from the edge."""
        return 1 if self.side is Side.LEFT else -1

    def interior_shifts(self, k: int) -> NDArray:
        """Shifts m such that row k couples to phi(2x - m), in tap order."""
        return self.interior_start + self.interior_step * np.arange(2 * k + 1)

    def check_row_lengths(self, component: str | None = None):
        """Raise if some row is too short for its interior taps."""
        p = self.vanishing_moments
        for k, row in enumerate(self.rows):
            if row.size < p + 2 * k + 1:
                raise FilterConfigurationError(
                    f"row {k} has {row.size} coefficients, needs {p + 2 * k + 1}",
                    vanishing_moments=p,
                    component=component or "BoundaryFilter",
                )


@dataclass(frozen=True)
class ScalingFilters:
    """A boundary filter together with the interior filter it was built from."""

    boundary: BoundaryFilter
    interior: InteriorFilter

    def __post_init__(self):
        if self.boundary.vanishing_moments != self.interior.vanishing_moments:
            raise FilterConfigurationError(
                "boundary and interior filters disagree on the vanishing moments",
                component="ScalingFilters",
                diagnostic_data={
                    "boundary_p": self.boundary.vanishing_moments,
                    "interior_p": self.interior.vanishing_moments,
                },
            )

    @property
    def vanishing_moments(self) -> int:
        return self.boundary.vanishing_moments

    @property
    def side(self) -> Side:
        return self.boundary.side


def boundary_support(p: int, side: Side) -> SupportInterval:
    """Joint support of the p boundary functions at ``side``."""
    if Side(side) is Side.LEFT:
        return SupportInterval(0, 2 * p - 1)
    return SupportInterval(-(2 * p - 1), 0)


def interior_support(p: int) -> SupportInterval:
    return SupportInterval(-p + 1, p)


def make_boundary_filter(side: Side, rows: Sequence[ArrayLike]) -> BoundaryFilter:
    """Wrap raw rows into a BoundaryFilter with the standard support."""
    p = len(rows)
    return BoundaryFilter(Side(side), p, tuple(rows), boundary_support(p, side))
