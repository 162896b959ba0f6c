"""
Category catalog.
A category is a named acceptance predicate over Classifications; each one
stands for a refined float type ("strictly positive and finite", ...). The
catalog is an ordered, validated, immutable list of categories, ordered
from most to least restrictive so that the first accepting entry is the
narrowest one.
Acceptance partial order:
    A ⊑ B  iff  every Classification accepted by A is accepted by B
The literal order of a catalog must be a linear extension of ⊑, and the
entries accepting any non-NaN Classification must have a least element, so
that the first match is the unique narrowest one. Both are checked when the
catalog is built; a catalog violating them is rejected with
:class:`CatalogError` before it can be used for matching.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from refinedfloats.core.classification import Classification
from refinedfloats.core.exceptions import CatalogError
from refinedfloats.core.precision import FloatPrecision
from refinedfloats.core.sign import SignRange
from refinedfloats.logging import get_logger


@dataclass(frozen=True)
class CategoryDefinition:
    """One catalog entry."""

    name: str
    accepts_nan: bool
    accepts_zero: bool
    accepts_infinite: bool
    accepts_positive: bool
    accepts_negative: bool

    def accepts(self, classification: Classification) -> bool:
        """Whether every value the classification admits is in this category."""
        return (
            (self.accepts_nan or not classification.nan)
            and (self.accepts_zero or not classification.zero)
            and (self.accepts_infinite or not classification.infinite)
            and (self.accepts_positive or not classification.can_be_positive())
            and (self.accepts_negative or not classification.can_be_negative())
        )

    def worst_case(self) -> Classification:
        """The acceptance predicate read as a Classification."""
        return Classification.from_signs(
            nan=self.accepts_nan,
            zero=self.accepts_zero,
            infinite=self.accepts_infinite,
            positive=self.accepts_positive,
            negative=self.accepts_negative,
        )

    def flags(self) -> tuple[bool, bool, bool, bool, bool]:
        return (
            self.accepts_nan,
            self.accepts_zero,
            self.accepts_infinite,
            self.accepts_positive,
            self.accepts_negative,
        )

    def is_narrower_or_equal(self, other: CategoryDefinition) -> bool:
        """A ⊑ B: every flag accepted here is accepted by other."""
        return all(not mine or theirs for mine, theirs in zip(self.flags(), other.flags()))

    def is_strictly_narrower(self, other: CategoryDefinition) -> bool:
        return self.is_narrower_or_equal(other) and self.flags() != other.flags()

    def instantiate(self, precision: FloatPrecision) -> FloatType:
        return FloatType(self, precision)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class FloatType:
    """A category at a given width, or the unrefined primitive when category is None."""

    category: CategoryDefinition | None
    precision: FloatPrecision

    @property
    def is_refined(self) -> bool:
        return self.category is not None

    @property
    def name(self) -> str:
        if self.category is None:
            return self.precision.type_name
        return f"{self.category.name}<{self.precision.type_name}>"

    def __str__(self) -> str:
        return self.name


def _category(
    name: str,
    *,
    zero: bool,
    infinite: bool,
    positive: bool,
    negative: bool,
) -> CategoryDefinition:
    return CategoryDefinition(
        name=name,
        accepts_nan=False,
        accepts_zero=zero,
        accepts_infinite=infinite,
        accepts_positive=positive,
        accepts_negative=negative,
    )


def _non_nan_classifications() -> Iterator[Classification]:
    for zero, infinite, range_ in itertools.product((False, True), (False, True), SignRange):
        yield Classification(zero=zero, infinite=infinite, range=range_)


class Catalog:
    """Ordered, validated, read-only sequence of categories."""

    def __init__(self, entries: Iterable[CategoryDefinition]):
        self._entries: tuple[CategoryDefinition, ...] = tuple(entries)
        self._by_name = {entry.name: entry for entry in self._entries}
        self._validate()
        get_logger().debug(
            f"Catalog validated with {len(self._entries)} categories",
            category="catalog",
        )

    def _validate(self) -> None:
        if not self._entries:
            raise CatalogError("Catalog is empty")
        if len(self._by_name) != len(self._entries):
            names = tuple(entry.name for entry in self._entries)
            duplicates = tuple(sorted({n for n in names if names.count(n) > 1}))
            raise CatalogError(f"Duplicate category names: {duplicates}", duplicates)
        seen: dict[tuple[bool, ...], str] = {}
        for entry in self._entries:
            if entry.accepts_nan:
                raise CatalogError(f"{entry.name} accepts NaN", (entry.name,))
            if not (entry.accepts_positive or entry.accepts_negative):
                raise CatalogError(f"{entry.name} accepts no sign", (entry.name,))
            flags = entry.flags()
            if flags in seen:
                raise CatalogError(
                    f"{entry.name} and {seen[flags]} accept the same classifications",
                    (seen[flags], entry.name),
                )
            seen[flags] = entry.name
        for i, earlier in enumerate(self._entries):
            for later in self._entries[i + 1 :]:
                if later.is_strictly_narrower(earlier):
                    raise CatalogError(
                        f"{later.name} is narrower than {earlier.name} "
                        "but comes after it",
                        (earlier.name, later.name),
                    )
        for classification in _non_nan_classifications():
            accepting = [entry for entry in self._entries if entry.accepts(classification)]
            if accepting and not any(
                all(candidate.is_narrower_or_equal(other) for other in accepting)
                for candidate in accepting
            ):
                names = tuple(entry.name for entry in accepting)
                raise CatalogError(
                    f"No narrowest category accepts {classification.describe()}: "
                    f"{', '.join(names)}",
                    names,
                )

    def get(self, name: str) -> CategoryDefinition:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Unknown category: {name!r}") from None

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._by_name
        return item in self._entries

    def index(self, entry: CategoryDefinition) -> int:
        return self._entries.index(entry)

    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]

    def __iter__(self) -> Iterator[CategoryDefinition]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> CategoryDefinition:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"Catalog({', '.join(self.names())})"


STRICTLY_POSITIVE_FINITE = _category(
    "StrictlyPositiveFinite", zero=False, infinite=False, positive=True, negative=False
)
STRICTLY_NEGATIVE_FINITE = _category(
    "StrictlyNegativeFinite", zero=False, infinite=False, positive=False, negative=True
)
POSITIVE_FINITE = _category(
    "PositiveFinite", zero=True, infinite=False, positive=True, negative=False
)
NEGATIVE_FINITE = _category(
    "NegativeFinite", zero=True, infinite=False, positive=False, negative=True
)
STRICTLY_POSITIVE = _category(
    "StrictlyPositive", zero=False, infinite=True, positive=True, negative=False
)
STRICTLY_NEGATIVE = _category(
    "StrictlyNegative", zero=False, infinite=True, positive=False, negative=True
)
NON_ZERO_NON_NAN_FINITE = _category(
    "NonZeroNonNaNFinite", zero=False, infinite=False, positive=True, negative=True
)
POSITIVE = _category("Positive", zero=True, infinite=True, positive=True, negative=False)
NEGATIVE = _category("Negative", zero=True, infinite=True, positive=False, negative=True)
NON_NAN_FINITE = _category(
    "NonNaNFinite", zero=True, infinite=False, positive=True, negative=True
)
NON_ZERO_NON_NAN = _category(
    "NonZeroNonNaN", zero=False, infinite=True, positive=True, negative=True
)
NON_NAN = _category("NonNaN", zero=True, infinite=True, positive=True, negative=True)

DEFAULT_CATALOG = Catalog(
    [
        STRICTLY_POSITIVE_FINITE,
        STRICTLY_NEGATIVE_FINITE,
        POSITIVE_FINITE,
        NEGATIVE_FINITE,
        STRICTLY_POSITIVE,
        STRICTLY_NEGATIVE,
        NON_ZERO_NON_NAN_FINITE,
        POSITIVE,
        NEGATIVE,
        NON_NAN_FINITE,
        NON_ZERO_NON_NAN,
        NON_NAN,
    ]
)


__all__ = [
    "CategoryDefinition",
    "FloatType",
    "Catalog",
    "DEFAULT_CATALOG",
    "STRICTLY_POSITIVE_FINITE",
    "STRICTLY_NEGATIVE_FINITE",
    "POSITIVE_FINITE",
    "NEGATIVE_FINITE",
    "STRICTLY_POSITIVE",
    "STRICTLY_NEGATIVE",
    "NON_ZERO_NON_NAN_FINITE",
    "POSITIVE",
    "NEGATIVE",
    "NON_NAN_FINITE",
    "NON_ZERO_NON_NAN",
    "NON_NAN",
]
