"""refinedfloats: result categories for refined floating-point types.
refinedfloats computes, for every float operation and every combination of
input shapes, which IEEE-754 features the result can exhibit (NaN, zero,
infinity, sign) and picks the narrowest refined category that is guaranteed
to hold it:
- StrictlyPositiveFinite, PositiveFinite, NonNaNFinite, ...
- or no category at all, meaning the result may be NaN
Example:
    >>> from refinedfloats import result_category
    >>> result_category("abs", "NegativeFinite").name
    'PositiveFinite'
    >>> result_category("sub", "StrictlyPositiveFinite", "StrictlyNegativeFinite").name
    'StrictlyPositive'
"""

from refinedfloats.analysis.catalog import DEFAULT_CATALOG, Catalog, CategoryDefinition, FloatType
from refinedfloats.analysis.matcher import match, require_match
from refinedfloats.analysis.matrix import CompatibilityMatrix, MatrixBuilder, MatrixCell
from refinedfloats.analysis.registry import REGISTRY, Operation, OperationSpec, apply
from refinedfloats.analysis.rounding import RoundingModel
from refinedfloats.api import (
    build_matrices,
    build_matrix,
    classify,
    configure,
    result_category,
    verify_catalog,
)
from refinedfloats.core.classification import Classification
from refinedfloats.core.exceptions import (
    ArityError,
    CatalogError,
    ConfigError,
    NoSafeCategoryError,
    RefinedFloatsError,
    UnknownOperationError,
)
from refinedfloats.core.precision import FloatPrecision
from refinedfloats.core.sign import SignRange

__version__ = "0.1.0-alpha"
__author__ = "refinedfloats contributors"
from refinedfloats.config import RefinedFloatsConfig, load_config
from refinedfloats.logging import LogLevel, configure_logging, get_logger

__all__ = [
    "Classification",
    "SignRange",
    "FloatPrecision",
    "CategoryDefinition",
    "Catalog",
    "DEFAULT_CATALOG",
    "FloatType",
    "Operation",
    "OperationSpec",
    "REGISTRY",
    "apply",
    "match",
    "require_match",
    "RoundingModel",
    "MatrixBuilder",
    "CompatibilityMatrix",
    "MatrixCell",
    "classify",
    "result_category",
    "build_matrix",
    "build_matrices",
    "configure",
    "verify_catalog",
    "RefinedFloatsError",
    "CatalogError",
    "NoSafeCategoryError",
    "UnknownOperationError",
    "ArityError",
    "ConfigError",
    "RefinedFloatsConfig",
    "load_config",
    "LogLevel",
    "configure_logging",
    "get_logger",
]
