"""Sign range lattice.
    FULL
   /    \\
POS      NEG
The sign is the IEEE sign bit, so it also applies to zeros and infinities:
``+0.0`` is positive and ``-0.0`` is negative. There is no empty element;
every set of floats described by a Classification has at least one sign.
"""
from __future__ import annotations
from enum import Enum
class SignRange(Enum):
    """Which signs the non-NaN members of a float set may carry."""
    FULL = "full"
    POSITIVE_ONLY = "positive"
    NEGATIVE_ONLY = "negative"
    def opposite(self) -> SignRange:
        """Range after negation."""
        if self is SignRange.POSITIVE_ONLY:
            return SignRange.NEGATIVE_ONLY
        if self is SignRange.NEGATIVE_ONLY:
            return SignRange.POSITIVE_ONLY
        return SignRange.FULL
    def can_be_positive(self) -> bool:
        return self is not SignRange.NEGATIVE_ONLY
    def can_be_negative(self) -> bool:
        return self is not SignRange.POSITIVE_ONLY
    def includes(self, other: SignRange) -> bool:
        """Partial order: FULL includes every range, others only themselves."""
        return self is SignRange.FULL or self is other
    def join(self, other: SignRange) -> SignRange:
        """Least upper bound."""
        if self is other:
            return self
        return SignRange.FULL
    def product(self, other: SignRange) -> SignRange:
        """Sign of a product or quotient of members of both ranges."""
        if self is SignRange.FULL or other is SignRange.FULL:
            return SignRange.FULL
        if self is other:
            return SignRange.POSITIVE_ONLY
        return SignRange.NEGATIVE_ONLY
    @classmethod
    def from_signs(cls, positive: bool, negative: bool) -> SignRange:
        """Range admitting exactly the given signs."""
        if positive and negative:
            return cls.FULL
        if positive:
            return cls.POSITIVE_ONLY
        if negative:
            return cls.NEGATIVE_ONLY
        raise ValueError("A sign range must admit at least one sign")
    def __repr__(self) -> str:
        return f"SignRange.{self.name}"
__all__ = ["SignRange"]
