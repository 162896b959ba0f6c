"""Public API for refinedfloats."""
from __future__ import annotations
from pathlib import Path
from typing import TextIO
from refinedfloats.analysis.catalog import DEFAULT_CATALOG, Catalog, CategoryDefinition
from refinedfloats.analysis.ieee_verifier import IEEEVerifier, VerificationResult
from refinedfloats.analysis.matcher import match
from refinedfloats.analysis.matrix import CompatibilityMatrix, MatrixBuilder
from refinedfloats.analysis.registry import Operation, apply
from refinedfloats.analysis.rounding import RoundingModel
from refinedfloats.config import RefinedFloatsConfig, load_config
from refinedfloats.core.classification import Classification
from refinedfloats.core.precision import FloatPrecision
from refinedfloats.logging import configure_logging
Operand = Classification | CategoryDefinition | str
def _as_classification(value: Operand, catalog: Catalog) -> Classification:
    if isinstance(value, Classification):
        return value
    if isinstance(value, str):
        value = catalog.get(value)
    if isinstance(value, CategoryDefinition):
        return value.worst_case()
    raise TypeError(f"Expected a Classification, category or category name, got {type(value).__name__}")
def classify(
    operation: Operation | str,
    *inputs: Operand,
    rounding: RoundingModel | str = RoundingModel.ALGEBRAIC,
    catalog: Catalog = DEFAULT_CATALOG,
) -> Classification:
    """
    Classify the possible results of an operation.
    Inputs may be Classifications, catalog categories or category names;
    categories stand for their worst-case Classification.
    Example:
        >>> classify("ln", "StrictlyPositiveFinite").describe()
        '{zero, +/-}'
    """
    return apply(
        operation,
        *(_as_classification(value, catalog) for value in inputs),
        rounding=RoundingModel.from_name(rounding),
    )
def result_category(
    operation: Operation | str,
    *inputs: Operand,
    rounding: RoundingModel | str = RoundingModel.ALGEBRAIC,
    catalog: Catalog = DEFAULT_CATALOG,
) -> CategoryDefinition | None:
    """
    Narrowest category for the result of an operation, None when unrefined.
    Example:
        >>> result_category("add", "StrictlyPositiveFinite", "StrictlyNegativeFinite").name
        'NonNaNFinite'
        >>> result_category("div", "PositiveFinite", "PositiveFinite") is None
        True
    """
    return match(classify(operation, *inputs, rounding=rounding, catalog=catalog), catalog)
def build_matrix(
    precision: FloatPrecision | str = FloatPrecision.DOUBLE,
    config: RefinedFloatsConfig | None = None,
    catalog: Catalog = DEFAULT_CATALOG,
) -> CompatibilityMatrix:
    """Build the compatibility matrix for one precision using config settings."""
    config = config or RefinedFloatsConfig()
    builder = MatrixBuilder(
        catalog=catalog,
        rounding=config.matrix.resolve_rounding(),
        max_workers=config.matrix.max_workers,
    )
    return builder.build(
        FloatPrecision.from_name(precision),
        config.matrix.resolve_operations(),
    )
def build_matrices(
    config: RefinedFloatsConfig | None = None,
    catalog: Catalog = DEFAULT_CATALOG,
) -> dict[FloatPrecision, CompatibilityMatrix]:
    """Build one matrix per configured precision."""
    config = config or RefinedFloatsConfig()
    builder = MatrixBuilder(
        catalog=catalog,
        rounding=config.matrix.resolve_rounding(),
        max_workers=config.matrix.max_workers,
    )
    return builder.build_all(
        config.matrix.resolve_precisions(),
        config.matrix.resolve_operations(),
    )
def configure(
    config: RefinedFloatsConfig | None = None,
    start_dir: Path | None = None,
    stream: TextIO | None = None,
) -> RefinedFloatsConfig:
    """
    Load configuration (searching from start_dir when none is given) and
    set up the global logger from its ``[output]`` section.
    Returns:
        The configuration in effect
    """
    if config is None:
        config = load_config(start_dir=start_dir)
    configure_logging(
        level=config.output.log_level(),
        color=config.output.color,
        stream=stream,
    )
    return config
def verify_catalog(
    config: RefinedFloatsConfig | None = None,
    catalog: Catalog = DEFAULT_CATALOG,
    report_slack: bool = False,
) -> list[VerificationResult]:
    """Check the configured operations against IEEE semantics using the ``[verify]`` settings."""
    config = config or RefinedFloatsConfig()
    verifier = IEEEVerifier.from_config(config)
    operations = config.matrix.resolve_operations()
    if operations is not None:
        operations = [op for op in operations if verifier.supports(op)]
    return verifier.verify_catalog(catalog, operations, report_slack=report_slack)
__all__ = [
    "classify",
    "result_category",
    "build_matrix",
    "build_matrices",
    "configure",
    "verify_catalog",
]
