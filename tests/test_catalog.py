"""Tests for categories and catalog validation."""

import itertools

import pytest

from refinedfloats.analysis.catalog import (
    DEFAULT_CATALOG,
    NON_NAN,
    NON_NAN_FINITE,
    POSITIVE,
    POSITIVE_FINITE,
    STRICTLY_NEGATIVE_FINITE,
    STRICTLY_POSITIVE,
    STRICTLY_POSITIVE_FINITE,
    Catalog,
    CategoryDefinition,
    FloatType,
)
from refinedfloats.analysis.matcher import match
from refinedfloats.core.classification import Classification
from refinedfloats.core.exceptions import CatalogError
from refinedfloats.core.precision import FloatPrecision
from refinedfloats.core.sign import SignRange


class TestCategoryDefinition:
    def test_accepts(self):
        assert POSITIVE_FINITE.accepts(Classification(zero=True, range=SignRange.POSITIVE_ONLY))
        assert not POSITIVE_FINITE.accepts(Classification(zero=True, range=SignRange.FULL))
        assert not NON_NAN.accepts(Classification.top())

    def test_worst_case(self):
        assert STRICTLY_POSITIVE.worst_case() == Classification(
            infinite=True, range=SignRange.POSITIVE_ONLY
        )
        assert NON_NAN.worst_case() == Classification(zero=True, infinite=True)

    @pytest.mark.parametrize("entry", list(DEFAULT_CATALOG), ids=lambda e: e.name)
    def test_accepts_own_worst_case(self, entry):
        assert entry.accepts(entry.worst_case())

    def test_narrower(self):
        assert STRICTLY_POSITIVE_FINITE.is_strictly_narrower(POSITIVE)
        assert POSITIVE.is_narrower_or_equal(POSITIVE)
        assert not POSITIVE.is_strictly_narrower(POSITIVE)
        assert not POSITIVE_FINITE.is_narrower_or_equal(STRICTLY_POSITIVE)

    def test_instantiate(self):
        t = POSITIVE_FINITE.instantiate(FloatPrecision.SINGLE)
        assert t.is_refined
        assert t.name == "PositiveFinite<f32>"
        assert str(t) == "PositiveFinite<f32>"

    def test_unrefined_type(self):
        t = FloatType(None, FloatPrecision.DOUBLE)
        assert not t.is_refined
        assert t.name == "f64"


class TestDefaultCatalog:
    def test_size_and_order(self):
        assert len(DEFAULT_CATALOG) == 12
        assert DEFAULT_CATALOG[0] is STRICTLY_POSITIVE_FINITE
        assert DEFAULT_CATALOG[-1] is NON_NAN
        assert DEFAULT_CATALOG.index(NON_NAN_FINITE) == 9

    def test_no_entry_accepts_nan(self):
        assert all(not entry.accepts_nan for entry in DEFAULT_CATALOG)

    def test_linear_extension(self):
        entries = list(DEFAULT_CATALOG)
        for i, j in itertools.combinations(range(len(entries)), 2):
            assert not entries[j].is_strictly_narrower(entries[i])

    def test_covers_every_non_nan_classification(self):
        flags = {entry.flags() for entry in DEFAULT_CATALOG}
        assert len(flags) == 12

    def test_lookup(self):
        assert DEFAULT_CATALOG.get("NonNaN") is NON_NAN
        assert "Positive" in DEFAULT_CATALOG
        assert POSITIVE in DEFAULT_CATALOG
        assert "Natural" not in DEFAULT_CATALOG
        with pytest.raises(KeyError):
            DEFAULT_CATALOG.get("Natural")

    def test_names(self):
        names = DEFAULT_CATALOG.names()
        assert names[:2] == ["StrictlyPositiveFinite", "StrictlyNegativeFinite"]
        assert repr(DEFAULT_CATALOG).startswith("Catalog(StrictlyPositiveFinite, ")


class TestValidation:
    def test_empty(self):
        with pytest.raises(CatalogError):
            Catalog([])

    def test_out_of_order(self):
        with pytest.raises(CatalogError) as exc_info:
            Catalog([NON_NAN, STRICTLY_POSITIVE_FINITE])
        assert exc_info.value.entries == ("NonNaN", "StrictlyPositiveFinite")

    def test_incomparable_entries_in_any_order(self):
        Catalog([STRICTLY_NEGATIVE_FINITE, STRICTLY_POSITIVE_FINITE])
        Catalog([STRICTLY_POSITIVE_FINITE, STRICTLY_NEGATIVE_FINITE])

    def test_duplicate_names(self):
        clone = CategoryDefinition("NonNaN", False, False, False, True, False)
        with pytest.raises(CatalogError) as exc_info:
            Catalog([clone, NON_NAN])
        assert exc_info.value.entries == ("NonNaN",)

    def test_duplicate_flags(self):
        alias = CategoryDefinition("Anything", False, True, True, True, True)
        with pytest.raises(CatalogError):
            Catalog([NON_NAN, alias])

    def test_rejects_nan(self):
        with pytest.raises(CatalogError):
            Catalog([CategoryDefinition("MaybeNaN", True, True, True, True, True)])

    def test_rejects_signless(self):
        with pytest.raises(CatalogError):
            Catalog([CategoryDefinition("Nothing", False, True, True, False, False)])

    @pytest.mark.parametrize(
        "entries",
        [
            [POSITIVE_FINITE, STRICTLY_POSITIVE],
            [STRICTLY_POSITIVE, POSITIVE_FINITE],
            [POSITIVE_FINITE, STRICTLY_POSITIVE, POSITIVE],
        ],
        ids=["finite-first", "infinite-first", "with-common-cover"],
    )
    def test_ambiguous_narrowest(self, entries):
        # both accept strictly positive finite values and neither is narrower
        with pytest.raises(CatalogError) as exc_info:
            Catalog(entries)
        assert {"PositiveFinite", "StrictlyPositive"} <= set(exc_info.value.entries)

    def test_common_narrower_entry_resolves_ambiguity(self):
        small = Catalog([STRICTLY_POSITIVE_FINITE, POSITIVE_FINITE, STRICTLY_POSITIVE])
        c = Classification(range=SignRange.POSITIVE_ONLY)
        assert match(c, small) is STRICTLY_POSITIVE_FINITE

    def test_partial_catalog(self):
        small = Catalog([POSITIVE_FINITE, NON_NAN])
        assert len(small) == 2
        assert list(small) == [POSITIVE_FINITE, NON_NAN]
