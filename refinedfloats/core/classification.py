"""Classification of a set of floats.
A Classification over-approximates the results an operation can produce:
a flag that is ``True`` means the feature *may* occur, a flag that is
``False`` means it provably cannot. Soundness is one-directional, so every
rule in :mod:`refinedfloats.analysis.transfer` may set a flag it cannot rule
out, but must never clear a flag for a reachable value.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from refinedfloats.core.sign import SignRange


@dataclass(frozen=True)
class Classification:
    """
    Which float features a value set may exhibit.
    Attributes:
        nan: NaN may occur
        zero: ``+0.0`` or ``-0.0`` may occur (which one is decided by range)
        infinite: an infinity may occur (its sign is decided by range)
        range: signs the non-NaN members may carry
    Every Classification admits nonzero finite members of at least one
    sign; there is no representation for "only zero" or "only infinity".
    """

    nan: bool = False
    zero: bool = False
    infinite: bool = False
    range: SignRange = SignRange.FULL

    def can_be_positive(self) -> bool:
        return self.range.can_be_positive()

    def can_be_negative(self) -> bool:
        return self.range.can_be_negative()

    def is_subset_of(self, other: Classification) -> bool:
        """Componentwise order: every flag set here is also set in other."""
        return (
            (not self.nan or other.nan)
            and (not self.zero or other.zero)
            and (not self.infinite or other.infinite)
            and other.range.includes(self.range)
        )

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Classification):
            return NotImplemented
        return self.is_subset_of(other)

    def join(self, other: Classification) -> Classification:
        """Least upper bound."""
        return Classification(
            nan=self.nan or other.nan,
            zero=self.zero or other.zero,
            infinite=self.infinite or other.infinite,
            range=self.range.join(other.range),
        )

    def with_(self, **changes: Any) -> Classification:
        """Copy with some fields replaced."""
        return replace(self, **changes)

    @classmethod
    def top(cls) -> Classification:
        """Any float, NaN included."""
        return cls(nan=True, zero=True, infinite=True, range=SignRange.FULL)

    @classmethod
    def from_signs(
        cls,
        *,
        nan: bool,
        zero: bool,
        infinite: bool,
        positive: bool,
        negative: bool,
    ) -> Classification:
        """Build from five independent flags."""
        return cls(
            nan=nan,
            zero=zero,
            infinite=infinite,
            range=SignRange.from_signs(positive, negative),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "nan": self.nan,
            "zero": self.zero,
            "infinite": self.infinite,
            "range": self.range.value,
        }

    def describe(self) -> str:
        """Short human readable form, e.g. ``{zero, inf, +}``."""
        parts = []
        if self.nan:
            parts.append("nan")
        if self.zero:
            parts.append("zero")
        if self.infinite:
            parts.append("inf")
        if self.range is SignRange.FULL:
            parts.append("+/-")
        elif self.range is SignRange.POSITIVE_ONLY:
            parts.append("+")
        else:
            parts.append("-")
        return "{" + ", ".join(parts) + "}"


__all__ = ["Classification"]
