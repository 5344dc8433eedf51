from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("interval_wavelets")  # Matches the name in pyproject.toml
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0-dev"

from .alg import (  # noqa: E402
    BoundaryPoint,
    EdgeExpansion,
    InteriorPoint,
    ReferenceEvaluator,
    ValueTable,
    boundary_coefficient_matrix,
    boundary_filter,
    boundary_moments,
    boundary_values,
    edge_expansion,
    interior_filter,
    interior_integer_values,
    interior_values,
    origin_values,
    scaling_filters,
)
from .config import ScalingConfig  # noqa: E402
from .core import (  # noqa: E402
    BoundaryFilter,
    InteriorFilter,
    ScalingFilters,
    Side,
    SupportInterval,
    dyadic_grid,
    x2index,
)
from .scaling import interior_scaling_values, scaling_values  # noqa: E402
from .utils import (  # noqa: E402
    DomainError,
    EigenvalueNotFoundError,
    FilterConfigurationError,
    WaveletEvaluationError,
    configure_logging,
    get_logger,
)

__all__ = [
    "__version__",
    # Data model
    "BoundaryFilter",
    "InteriorFilter",
    "ScalingFilters",
    "Side",
    "SupportInterval",
    "dyadic_grid",
    "x2index",
    # Filters
    "EdgeExpansion",
    "boundary_filter",
    "edge_expansion",
    "interior_filter",
    "scaling_filters",
    # Evaluation
    "boundary_coefficient_matrix",
    "boundary_moments",
    "origin_values",
    "interior_integer_values",
    "interior_values",
    "boundary_values",
    "ValueTable",
    "scaling_values",
    "interior_scaling_values",
    "ReferenceEvaluator",
    "InteriorPoint",
    "BoundaryPoint",
    # Configuration and errors
    "ScalingConfig",
    "WaveletEvaluationError",
    "FilterConfigurationError",
    "DomainError",
    "EigenvalueNotFoundError",
    "configure_logging",
    "get_logger",
]
