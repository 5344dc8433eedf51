"""
Utility modules for interval_wavelets.

- exceptions: structured error classes and argument validation helpers
- logger: logging manager with optional colored output
"""

from __future__ import annotations

from .exceptions import (
    DomainError,
    EigenvalueNotFoundError,
    FilterConfigurationError,
    WaveletEvaluationError,
    validate_argument,
    validate_argument_vector,
    validate_basis_index,
    validate_resolution,
    validate_vanishing_moments,
)
from .logger import configure_logging, context_extra, get_logger

__all__ = [
    # Exceptions
    "WaveletEvaluationError",
    "FilterConfigurationError",
    "DomainError",
    "EigenvalueNotFoundError",
    # Validation helpers
    "validate_argument",
    "validate_argument_vector",
    "validate_basis_index",
    "validate_resolution",
    "validate_vanishing_moments",
    # Logging
    "get_logger",
    "configure_logging",
    "context_extra",
]
