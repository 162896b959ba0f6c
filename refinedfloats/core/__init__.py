"""Core module for refinedfloats.
Provides:
- SignRange, the three-valued sign lattice
- Classification, the over-approximate description of a float set
- FloatPrecision width metadata
- The exception hierarchy
"""

from refinedfloats.core.classification import Classification
from refinedfloats.core.exceptions import (
    ArityError,
    CatalogError,
    ConfigError,
    NoSafeCategoryError,
    RefinedFloatsError,
    UnknownOperationError,
)
from refinedfloats.core.precision import FloatPrecision, get_fp_sort
from refinedfloats.core.sign import SignRange

__all__ = [
    "Classification",
    "SignRange",
    "FloatPrecision",
    "get_fp_sort",
    "RefinedFloatsError",
    "CatalogError",
    "NoSafeCategoryError",
    "UnknownOperationError",
    "ArityError",
    "ConfigError",
]
