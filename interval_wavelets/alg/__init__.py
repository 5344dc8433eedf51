"""
Evaluation algorithms for Daubechies scaling functions on an interval.

- boundary_matrix: dilation matrices of the two-scale relations
- origin_values: eigen-relations for the values at the integers and the edge
- refinement: level-by-level tabulation on dyadic grids
- reference: recursive pointwise evaluation
- filter_construction: interior and boundary Daubechies filters
"""

from __future__ import annotations

from .boundary_matrix import boundary_coefficient_matrix, interior_coefficient_matrix
from .filter_construction import (
    EdgeExpansion,
    boundary_filter,
    edge_expansion,
    half_line_gram,
    interior_filter,
    scaling_filters,
)
from .origin_values import boundary_moments, interior_integer_values, origin_values, unit_eigenvector
from .reference import BoundaryPoint, EvaluationMode, InteriorPoint, ReferenceEvaluator
from .refinement import ValueTable, boundary_values, interior_values

__all__ = [
    # Dilation matrices
    "boundary_coefficient_matrix",
    "interior_coefficient_matrix",
    # Eigen-relations
    "boundary_moments",
    "interior_integer_values",
    "origin_values",
    "unit_eigenvector",
    # Refinement
    "ValueTable",
    "boundary_values",
    "interior_values",
    # Reference evaluation
    "BoundaryPoint",
    "EvaluationMode",
    "InteriorPoint",
    "ReferenceEvaluator",
    # Filters
    "EdgeExpansion",
    "boundary_filter",
    "edge_expansion",
    "half_line_gram",
    "interior_filter",
    "scaling_filters",
]
