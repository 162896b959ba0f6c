"""Narrowest-category matching."""
from __future__ import annotations
from refinedfloats.analysis.catalog import DEFAULT_CATALOG, Catalog, CategoryDefinition
from refinedfloats.core.classification import Classification
from refinedfloats.core.exceptions import NoSafeCategoryError
from refinedfloats.logging import get_logger
def match(
    classification: Classification,
    catalog: Catalog = DEFAULT_CATALOG,
) -> CategoryDefinition | None:
    """
    Find the narrowest category covering a classification.
    The catalog is ordered as a linear extension of the acceptance order,
    so the first accepting entry is the unique minimal one.
    Returns:
        The category, or None when the result may be NaN or no entry covers
        it; callers then fall back to the unrefined float type.
    """
    if classification.nan:
        get_logger().trace(
            f"{classification.describe()} may be NaN, no refined category",
            category="match",
        )
        return None
    for entry in catalog:
        if entry.accepts(classification):
            return entry
    get_logger().trace(
        f"No catalog entry covers {classification.describe()}",
        category="match",
    )
    return None
def require_match(
    classification: Classification,
    catalog: Catalog = DEFAULT_CATALOG,
) -> CategoryDefinition:
    """Like :func:`match` but raises NoSafeCategoryError instead of returning None."""
    entry = match(classification, catalog)
    if entry is None:
        raise NoSafeCategoryError(classification)
    return entry
__all__ = ["match", "require_match"]
