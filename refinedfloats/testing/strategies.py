"""Hypothesis strategies for the classification lattice.
Used by the property tests: arbitrary Classifications, ordered pairs
``(narrow, wide)`` with ``narrow <= wide``, catalog entries and operations.
"""

from __future__ import annotations

from hypothesis import strategies as st

from refinedfloats.analysis.catalog import DEFAULT_CATALOG, Catalog
from refinedfloats.analysis.registry import (
    Operation,
    binary_operations,
    unary_operations,
)
from refinedfloats.analysis.rounding import RoundingModel
from refinedfloats.core.classification import Classification
from refinedfloats.core.sign import SignRange


def sign_ranges() -> st.SearchStrategy[SignRange]:
    return st.sampled_from(list(SignRange))


def classifications(allow_nan: bool = True) -> st.SearchStrategy[Classification]:
    """Strategy for any Classification."""
    return st.builds(
        Classification,
        nan=st.booleans() if allow_nan else st.just(False),
        zero=st.booleans(),
        infinite=st.booleans(),
        range=sign_ranges(),
    )


def _narrow_range(range_: SignRange) -> st.SearchStrategy[SignRange]:
    if range_ is SignRange.FULL:
        return sign_ranges()
    return st.just(range_)


def _narrow_flag(flag: bool) -> st.SearchStrategy[bool]:
    return st.booleans() if flag else st.just(False)


@st.composite
def narrower(draw, wide: Classification) -> Classification:
    """A Classification drawn from below ``wide``."""
    return Classification(
        nan=draw(_narrow_flag(wide.nan)),
        zero=draw(_narrow_flag(wide.zero)),
        infinite=draw(_narrow_flag(wide.infinite)),
        range=draw(_narrow_range(wide.range)),
    )


@st.composite
def ordered_pairs(draw, allow_nan: bool = True) -> tuple[Classification, Classification]:
    """``(narrow, wide)`` with ``narrow.is_subset_of(wide)``."""
    wide = draw(classifications(allow_nan=allow_nan))
    return draw(narrower(wide)), wide


def categories(catalog: Catalog = DEFAULT_CATALOG):
    return st.sampled_from(list(catalog))


def operations() -> st.SearchStrategy[Operation]:
    return st.sampled_from(list(Operation))


def unary_ops() -> st.SearchStrategy[Operation]:
    return st.sampled_from(unary_operations())


def binary_ops() -> st.SearchStrategy[Operation]:
    return st.sampled_from(binary_operations())


def rounding_models() -> st.SearchStrategy[RoundingModel]:
    return st.sampled_from(list(RoundingModel))


__all__ = [
    "sign_ranges",
    "classifications",
    "narrower",
    "ordered_pairs",
    "categories",
    "operations",
    "unary_ops",
    "binary_ops",
    "rounding_models",
]
