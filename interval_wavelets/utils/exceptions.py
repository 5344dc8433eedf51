"""
Exception classes for interval_wavelets with helpful error messages.

Every failure in the evaluation engine is deterministic in its inputs, so
errors are raised immediately and carry enough context (component name,
error code, diagnostic data) to reproduce them.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np


class WaveletEvaluationError(Exception):
    """
    Base exception for boundary scaling function evaluation errors.

    Provides structured error information:
    - Clear error description
    - Component context information
    - Suggested actions for resolution
    - Optional diagnostic data
    """

    def __init__(
        self,
        message: str,
        component: str | None = None,
        suggested_action: str | None = None,
        error_code: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.component = component or "interval_wavelets"
        self.suggested_action = suggested_action
        self.error_code = error_code
        self.diagnostic_data = diagnostic_data or {}

        full_message = f"[{self.component}] {message}"

        if self.suggested_action:
            full_message += f"\nSuggestion: {self.suggested_action}"

        if self.error_code:
            full_message += f"\nError Code: {self.error_code}"

        if self.diagnostic_data:
            full_message += "\nDiagnostic Information:"
            for key, value in self.diagnostic_data.items():
                full_message += f"\n   - {key}: {value}"

        super().__init__(full_message)


class FilterConfigurationError(WaveletEvaluationError):
    """Exception raised when filter data does not match its declared vanishing moments."""

    def __init__(
        self,
        reason: str,
        vanishing_moments: int | None = None,
        component: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        diagnostic = dict(diagnostic_data or {})
        if vanishing_moments is not None:
            diagnostic["vanishing_moments"] = vanishing_moments

        super().__init__(
            message=f"Malformed filter configuration: {reason}",
            component=component,
            suggested_action="Rebuild the filters with interval_wavelets.scaling_filters(p, side)",
            error_code="INVALID_FILTER_CONFIGURATION",
            diagnostic_data=diagnostic,
        )


class DomainError(WaveletEvaluationError):
    """Exception raised when an argument lies outside the domain of an operation."""

    def __init__(
        self,
        parameter_name: str,
        provided_value: Any,
        valid_range: tuple | None = None,
        component: str | None = None,
        reason: str | None = None,
    ):
        diagnostic_data = {
            "parameter": parameter_name,
            "provided_value": str(provided_value),
            "provided_type": type(provided_value).__name__,
        }

        if valid_range:
            diagnostic_data["valid_range"] = f"[{valid_range[0]}, {valid_range[1]}]"

        message = f"Invalid value for '{parameter_name}'"
        if reason:
            message += f": {reason}"

        super().__init__(
            message=message,
            component=component,
            suggested_action=_generate_domain_suggestions(parameter_name, provided_value, valid_range),
            error_code="DOMAIN_ERROR",
            diagnostic_data=diagnostic_data,
        )


class EigenvalueNotFoundError(WaveletEvaluationError):
    """Exception raised when a dilation matrix has no usable eigenvalue 1."""

    def __init__(
        self,
        eigenvalues: np.ndarray,
        tolerance: float,
        matches: int = 0,
        component: str | None = None,
    ):
        eigenvalues = np.asarray(eigenvalues)
        diagnostic_data = {
            "eigenvalues": np.array2string(eigenvalues, precision=12),
            "tolerance": f"{tolerance:.2e}",
            "matches": matches,
        }
        if eigenvalues.size:
            closest = eigenvalues[np.argmin(np.abs(eigenvalues - 1.0))]
            diagnostic_data["closest_distance"] = f"{abs(closest - 1.0):.2e}"

        if matches == 0:
            message = "No eigenvalue within tolerance of 1"
            suggestion = "Check that the filter is a valid Daubechies filter; do not loosen the tolerance blindly"
        else:
            message = f"Eigenvalue 1 is not simple ({matches} candidates)"
            suggestion = "Tighten eigenvalue_tolerance so a single eigenvector is selected"

        super().__init__(
            message=message,
            component=component,
            suggested_action=suggestion,
            error_code="EIGENVALUE_NOT_FOUND",
            diagnostic_data=diagnostic_data,
        )


# Helper functions for generating specific suggestions


def _generate_domain_suggestions(parameter_name: str, provided_value: Any, valid_range: tuple | None) -> str:
    """Generate specific suggestions for domain errors."""

    suggestions = []

    if valid_range and isinstance(provided_value, (int, float)):
        if provided_value < valid_range[0]:
            suggestions.append(f"Increase {parameter_name} to at least {valid_range[0]}")
        elif provided_value > valid_range[1]:
            suggestions.append(f"Decrease {parameter_name} to at most {valid_range[1]}")

    if "resolution" in parameter_name.lower():
        suggestions.append("Resolution is the exponent R of the finest denominator 2^R")

    return " | ".join(suggestions) if suggestions else f"Check {parameter_name} value and try again"


# Convenience functions for common error scenarios


def validate_resolution(resolution: Any, component: str | None = None) -> int:
    """Validate a resolution level R >= 0 and return it as an int."""
    if isinstance(resolution, bool) or not isinstance(resolution, (int, np.integer)):
        raise DomainError("resolution", resolution, component=component, reason="must be an integer")
    if resolution < 0:
        raise DomainError("resolution", resolution, valid_range=(0, math.inf), component=component)
    return int(resolution)


def validate_vanishing_moments(p: Any, max_value: int, component: str | None = None) -> int:
    """Validate a vanishing moment count 1 <= p <= max_value."""
    if isinstance(p, bool) or not isinstance(p, (int, np.integer)):
        raise DomainError("vanishing_moments", p, component=component, reason="must be an integer")
    if not 1 <= p <= max_value:
        raise DomainError("vanishing_moments", p, valid_range=(1, max_value), component=component)
    return int(p)


def validate_basis_index(k: Any, p: int, component: str | None = None) -> int:
    """Validate a boundary basis index 0 <= k < p."""
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise DomainError("k", k, component=component, reason="basis index must be an integer")
    if not 0 <= k < p:
        raise DomainError("k", k, valid_range=(0, p - 1), component=component)
    return int(k)


def validate_argument_vector(x: Any, component: str | None = None) -> np.ndarray:
    """Validate a list of evaluation points: one-dimensional and finite."""
    try:
        arr = np.asarray(x, dtype=float)
    except (TypeError, ValueError) as err:
        raise DomainError("x", x, component=component, reason="arguments must be real numbers") from err

    if arr.ndim != 1:
        raise DomainError("x", x, component=component, reason=f"expected a one-dimensional sequence, got ndim={arr.ndim}")
    if not np.all(np.isfinite(arr)):
        raise DomainError("x", x, component=component, reason="arguments must be finite")
    return arr


def validate_argument(x: Any, component: str | None = None) -> float:
    """Validate a single evaluation point."""
    try:
        value = float(x)
    except (TypeError, ValueError) as err:
        raise DomainError("x", x, component=component, reason="argument must be a real number") from err
    if not math.isfinite(value):
        raise DomainError("x", x, component=component, reason="argument must be finite")
    return value
