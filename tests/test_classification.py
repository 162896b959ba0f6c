"""Tests for Classification."""

import dataclasses

import pytest
from hypothesis import given

from refinedfloats.core.classification import Classification
from refinedfloats.core.sign import SignRange
from refinedfloats.testing.strategies import classifications, ordered_pairs


class TestClassification:
    def test_defaults(self):
        c = Classification()
        assert not c.nan and not c.zero and not c.infinite
        assert c.range is SignRange.FULL

    def test_frozen(self):
        c = Classification()
        with pytest.raises(dataclasses.FrozenInstanceError):
            c.nan = True

    def test_hashable_and_equal(self):
        a = Classification(zero=True, range=SignRange.POSITIVE_ONLY)
        b = Classification(zero=True, range=SignRange.POSITIVE_ONLY)
        assert a == b
        assert len({a, b}) == 1

    def test_top(self):
        top = Classification.top()
        assert top.nan and top.zero and top.infinite
        assert top.range is SignRange.FULL

    def test_subset(self, spf):
        wider = spf.with_(zero=True)
        assert spf.is_subset_of(wider)
        assert spf <= wider
        assert not wider <= spf
        assert not spf <= Classification(range=SignRange.NEGATIVE_ONLY)

    def test_join(self, spf, snf):
        joined = spf.join(snf.with_(infinite=True))
        assert joined == Classification(infinite=True, range=SignRange.FULL)

    def test_with(self, spf):
        assert spf.with_(nan=True).nan
        assert not spf.nan

    def test_from_signs(self):
        c = Classification.from_signs(
            nan=False, zero=True, infinite=False, positive=False, negative=True
        )
        assert c == Classification(zero=True, range=SignRange.NEGATIVE_ONLY)

    def test_to_dict(self):
        c = Classification(nan=True, range=SignRange.NEGATIVE_ONLY)
        assert c.to_dict() == {
            "nan": True,
            "zero": False,
            "infinite": False,
            "range": "negative",
        }

    def test_describe(self):
        assert Classification.top().describe() == "{nan, zero, inf, +/-}"
        assert Classification(range=SignRange.POSITIVE_ONLY).describe() == "{+}"

    def test_le_rejects_other_types(self):
        with pytest.raises(TypeError):
            Classification() <= 1


class TestLattice:
    @given(classifications())
    def test_reflexive(self, c):
        assert c <= c

    @given(classifications())
    def test_top_is_greatest(self, c):
        assert c <= Classification.top()

    @given(classifications(), classifications())
    def test_join_is_upper_bound(self, a, b):
        j = a.join(b)
        assert a <= j and b <= j

    @given(ordered_pairs())
    def test_ordered_pairs_are_ordered(self, pair):
        narrow, wide = pair
        assert narrow <= wide
        assert narrow.join(wide) == wide
