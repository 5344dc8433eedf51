"""
Dyadic rational grids over a support interval.

A grid at resolution R over [left, right] holds the points left + i / 2^R,
i = 0..(right - left) * 2^R, in increasing order. Level L of the grid is the
set of points with exact denominator 2^L (level 0: the integers).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from .filters import SupportInterval


def grid_size(support: SupportInterval, resolution: int) -> int:
    return support.length * 2**resolution + 1


def dyadic_grid(support: SupportInterval, resolution: int) -> NDArray:
    """All dyadic rationals with denominator 2^resolution in ``support``."""
    return support.left + np.arange(grid_size(support, resolution)) / 2**resolution


def x2index(x, support: SupportInterval, resolution: int):
    """
    Grid position of ``x`` (scalar or array) at ``resolution``.

    Dyadic arguments are exact in binary floating point, so rounding only
    removes the float representation of the integer.
    """
    idx = np.rint((np.asarray(x, dtype=float) - support.left) * 2**resolution).astype(int)
    return int(idx) if idx.ndim == 0 else idx


def is_dyadic(x, resolution: int):
    """True where ``x`` is an integer multiple of 2^-resolution."""
    scaled = np.asarray(x, dtype=float) * 2**resolution
    return scaled == np.floor(scaled)


def level_indices(support: SupportInterval, resolution: int, level: int) -> NDArray:
    """
    Grid positions (at ``resolution``) of the points that are new at ``level``.

    Level 0 gives all integers; level L >= 1 gives odd multiples of 2^-L.
    """
    positions = np.arange(grid_size(support, resolution))
    # support.left is an integer, so offsets from it have the same denominators
    if level == 0:
        return positions[positions % 2**resolution == 0]
    stride = 2 ** (resolution - level)
    return positions[(positions % stride == 0) & (positions % (2 * stride) != 0)]
