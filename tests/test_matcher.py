"""Tests for narrowest-category matching."""

import pytest
from hypothesis import given

from refinedfloats.analysis.catalog import (
    DEFAULT_CATALOG,
    NON_NAN,
    POSITIVE_FINITE,
    STRICTLY_NEGATIVE_FINITE,
    Catalog,
)
from refinedfloats.analysis.matcher import match, require_match
from refinedfloats.core.classification import Classification
from refinedfloats.core.exceptions import NoSafeCategoryError
from refinedfloats.core.sign import SignRange
from refinedfloats.logging import LogLevel
from refinedfloats.testing.strategies import categories, classifications


class TestMatch:
    def test_nan_is_never_refined(self):
        assert match(Classification(nan=True, range=SignRange.POSITIVE_ONLY)) is None

    def test_exact(self):
        c = Classification(zero=True, range=SignRange.POSITIVE_ONLY)
        assert match(c) is POSITIVE_FINITE

    def test_top_of_non_nan(self):
        assert match(Classification(zero=True, infinite=True)) is NON_NAN

    def test_custom_catalog_without_cover(self):
        small = Catalog([STRICTLY_NEGATIVE_FINITE])
        assert match(Classification(range=SignRange.POSITIVE_ONLY), small) is None

    def test_custom_catalog_picks_first_cover(self):
        small = Catalog([POSITIVE_FINITE, NON_NAN])
        assert match(Classification(range=SignRange.POSITIVE_ONLY), small) is POSITIVE_FINITE
        assert match(Classification(range=SignRange.NEGATIVE_ONLY), small) is NON_NAN

    def test_traces_unrefined(self, quiet_logger):
        quiet_logger.set_level(LogLevel.TRACE)
        match(Classification.top())
        entries = quiet_logger.get_entries(category="match")
        assert len(entries) == 1
        assert "NaN" in entries[0].message


class TestRequireMatch:
    def test_returns_entry(self):
        assert require_match(Classification(zero=True, infinite=True)) is NON_NAN

    def test_raises(self):
        c = Classification.top()
        with pytest.raises(NoSafeCategoryError) as exc_info:
            require_match(c)
        assert exc_info.value.classification == c


class TestMinimality:
    @given(classifications(allow_nan=False))
    def test_exact_fit(self, c):
        # The default catalog has one entry per non-NaN flag combination.
        entry = match(c)
        assert entry is not None
        assert entry.worst_case() == c

    @given(classifications(allow_nan=False), categories())
    def test_no_earlier_entry_accepts(self, c, other):
        entry = match(c)
        if other.accepts(c):
            assert DEFAULT_CATALOG.index(entry) <= DEFAULT_CATALOG.index(other)
            assert entry.is_narrower_or_equal(other)
