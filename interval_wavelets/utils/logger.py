#!/usr/bin/env python3
"""
Logging infrastructure for interval_wavelets.

Library modules obtain their loggers through get_logger(); nothing is
configured or emitted at import time. Records may carry the evaluation
context as ``extra`` fields (``vanishing_moments``, ``side``,
``refinement_level``), which the formatter appends as a compact tag:

    2026-01-01 12:00:00 - interval_wavelets.alg.refinement - DEBUG - level filled [p=2 left L=3]
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any, ClassVar

import colorlog

CONTEXT_FIELDS = (("vanishing_moments", "p={}"), ("side", "{}"), ("refinement_level", "L={}"))


def context_extra(
    vanishing_moments: int | None = None, side: Any = None, refinement_level: int | None = None
) -> dict[str, Any]:
    """Build the ``extra`` mapping for a log call; ``None`` fields are left out."""
    extra = {
        "vanishing_moments": vanishing_moments,
        "side": getattr(side, "value", side),
        "refinement_level": refinement_level,
    }
    return {key: value for key, value in extra.items() if value is not None}


class WaveletFormatter(colorlog.ColoredFormatter):
    """Colored formatter that appends the evaluation context of a record."""

    def __init__(self, use_colors: bool = True):
        super().__init__(
            "%(log_color)s%(asctime)s - %(name)-20s - %(levelname)-8s - %(message)s%(context)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
            no_color=not use_colors,
        )

    def format(self, record: logging.LogRecord) -> str:
        parts = [template.format(getattr(record, field)) for field, template in CONTEXT_FIELDS if hasattr(record, field)]
        record.context = f" [{' '.join(parts)}]" if parts else ""
        return super().format(record)


class WaveletLogger:
    """
    Central logging manager.

    Logger creation uses double-check locking, so get_logger() may be called
    concurrently without duplicating handlers.
    """

    _instance = None
    _lock: ClassVar[threading.Lock] = threading.Lock()
    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _log_level = logging.WARNING
    _use_colors = True

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def configure(cls, level: str | int = "WARNING", use_colors: bool = True):
        """
        Configure global logging settings for interval_wavelets.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            use_colors: Use colored terminal output
        """
        with cls._lock:
            cls._log_level = getattr(logging, level.upper()) if isinstance(level, str) else level
            cls._use_colors = use_colors

            for logger in cls._loggers.values():
                cls._setup_logger(logger)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get or create the logger ``name`` (typically ``__name__``)."""
        if name in cls._loggers:
            return cls._loggers[name]

        with cls._lock:
            if name not in cls._loggers:
                logger = logging.getLogger(name)

                # Configured externally: leave its handlers alone
                if not logger.handlers:
                    cls._setup_logger(logger)

                cls._loggers[name] = logger

        return cls._loggers[name]

    @classmethod
    def _setup_logger(cls, logger: logging.Logger):
        logger.handlers.clear()
        logger.setLevel(cls._log_level)

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(WaveletFormatter(use_colors=cls._use_colors))
        handler.setLevel(cls._log_level)
        logger.addHandler(handler)

        logger.propagate = False


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger for the current module.

    Args:
        name: Logger name (if None, uses "interval_wavelets")
    """
    return WaveletLogger.get_logger(name or "interval_wavelets")


def configure_logging(level: str | int = "WARNING", use_colors: bool = True):
    """
    Configure global logging settings.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_colors: Use colored terminal output
    """
    WaveletLogger.configure(level=level, use_colors=use_colors)


def log_table_summary(
    logger: logging.Logger,
    label: str,
    values: Any,
    resolution: int,
    vanishing_moments: int | None = None,
    side: Any = None,
):
    """Log the shape and range of a computed value table."""
    largest = float(abs(values).max()) if getattr(values, "size", 0) else 0.0
    logger.debug(
        f"{label}: shape={getattr(values, 'shape', None)}, resolution={resolution}, max|value|={largest:.6e}",
        extra=context_extra(vanishing_moments, side),
    )
