"""
Configuration for boundary scaling function evaluation.

Configurations specify HOW values are computed (tolerances, normalization
policy, runtime checks), not WHAT is computed (filters, side, resolution -
those are arguments of the evaluation operations).
"""

from __future__ import annotations

import warnings
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScalingConfig(BaseModel):
    """
    Evaluation settings shared by the origin solver and the refinement engine.

    Attributes
    ----------
    eigenvalue_tolerance : float
        Distance from 1 within which an eigenvalue of a dilation matrix is
        accepted as the eigenvalue 1 (default: 1e-9)
    normalization : Literal["partition_of_unity"]
        Scaling rule for eigenvectors. ``partition_of_unity`` scales the
        origin values so that the constant function is reproduced at x = 0.
    check_aliasing : bool
        Assert that each refinement level writes only grid columns it does
        not read (default: True)
    max_vanishing_moments : int
        Largest vanishing moment count accepted by the filter provider
        (default and maximum: 8)
    max_reference_resolution : int
        Finest dyadic level accepted by the recursive reference evaluator
        (default: 12)
    """

    eigenvalue_tolerance: float = Field(1e-9, gt=0.0, le=1e-3, description="Tolerance for the eigenvalue 1")
    normalization: Literal["partition_of_unity"] = Field(
        "partition_of_unity", description="Normalization rule for eigenvectors"
    )
    check_aliasing: bool = Field(True, description="Check that refinement levels never read what they write")
    # The half-line Gram system loses the accuracy the tap solve needs beyond p = 8
    max_vanishing_moments: int = Field(8, ge=1, le=8, description="Upper bound for the vanishing moments p")
    max_reference_resolution: int = Field(12, ge=0, le=30, description="Deepest dyadic level of reference queries")

    @field_validator("eigenvalue_tolerance")
    @classmethod
    def validate_tolerance_strictness(cls, v: float) -> float:
        """Warn when the tolerance is loose enough to accept a wrong eigenvalue."""
        if v > 1e-6:
            warnings.warn(
                f"Loose eigenvalue tolerance ({v:.2e}) may accept an eigenvalue that is not 1",
                UserWarning,
            )
        return v

    model_config = ConfigDict(validate_assignment=True)


DEFAULT_CONFIG = ScalingConfig()


def resolve_config(config: ScalingConfig | None) -> ScalingConfig:
    """Return ``config`` or the default configuration when it is None."""
    return DEFAULT_CONFIG if config is None else config
