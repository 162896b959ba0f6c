"""Analysis module: transfer functions, catalog matching and the matrix.
This module provides:
- The operation registry and its transfer functions
- Rounding models (algebraic and IEEE range-limit widening)
- The category catalog and the narrowest-category matcher
- The compatibility matrix builder
- Z3-backed IEEE soundness checks
"""
from refinedfloats.analysis.catalog import (
    DEFAULT_CATALOG,
    Catalog,
    CategoryDefinition,
    FloatType,
)
from refinedfloats.analysis.ieee_verifier import (
    SUPPORTED_OPERATIONS,
    IEEEVerifier,
    VerificationResult,
    Violation,
)
from refinedfloats.analysis.matcher import match, require_match
from refinedfloats.analysis.matrix import CompatibilityMatrix, MatrixBuilder, MatrixCell
from refinedfloats.analysis.registry import (
    REGISTRY,
    Operation,
    OperationSpec,
    apply,
    binary_operations,
    get_spec,
    unary_operations,
)
from refinedfloats.analysis.rounding import RoundingModel

__all__ = [
    "DEFAULT_CATALOG",
    "Catalog",
    "CategoryDefinition",
    "FloatType",
    "SUPPORTED_OPERATIONS",
    "IEEEVerifier",
    "VerificationResult",
    "Violation",
    "match",
    "require_match",
    "CompatibilityMatrix",
    "MatrixBuilder",
    "MatrixCell",
    "REGISTRY",
    "Operation",
    "OperationSpec",
    "apply",
    "binary_operations",
    "get_spec",
    "unary_operations",
    "RoundingModel",
]
