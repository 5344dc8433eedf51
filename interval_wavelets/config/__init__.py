"""
Configuration system for interval_wavelets.

Usage:
    >>> from interval_wavelets.config import ScalingConfig
    >>> config = ScalingConfig(eigenvalue_tolerance=1e-10)
"""

from __future__ import annotations

from .scaling_config import DEFAULT_CONFIG, ScalingConfig, resolve_config

__all__ = ["DEFAULT_CONFIG", "ScalingConfig", "resolve_config"]
