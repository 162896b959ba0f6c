"""Rounding models.
The algebraic rules in :mod:`refinedfloats.analysis.transfer` describe what
an operation can produce when its exact result is representable or
overflows algebraically. Some results are only reachable because the exact
value falls outside the finite range of the format and is rounded:
- ``MIN_POSITIVE * MIN_POSITIVE`` underflows to ``+0.0``
- ``MAX / 0.5`` overflows to ``+inf``
- ``1 / smallest_subnormal`` overflows to ``+inf``
- ``to_degrees(MAX)`` overflows, ``to_radians(smallest_subnormal)`` underflows
The IEEE model widens the algebraic result with these cases. It never
narrows anything, so it stays monotone.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from refinedfloats.core.classification import Classification
from refinedfloats.core.exceptions import ConfigError

Hazard = Callable[[Classification], Classification]


class RoundingModel(Enum):
    """How results reachable only through range-limit rounding are treated."""

    ALGEBRAIC = "algebraic"
    IEEE = "ieee"

    @classmethod
    def from_name(cls, name: str | RoundingModel) -> RoundingModel:
        if isinstance(name, RoundingModel):
            return name
        key = str(name).strip().lower()
        for model in cls:
            if key == model.value:
                return model
        raise ConfigError("rounding", name, "expected 'algebraic' or 'ieee'")


def underflow(result: Classification) -> Classification:
    """Nonzero finite operands can round to a zero result."""
    return result.with_(zero=True)


def overflow(result: Classification) -> Classification:
    """Finite operands can round to an infinite result."""
    return result.with_(infinite=True)


def underflow_and_overflow(result: Classification) -> Classification:
    return result.with_(zero=True, infinite=True)


def widen(
    result: Classification,
    hazard: Hazard | None,
    rounding: RoundingModel = RoundingModel.ALGEBRAIC,
) -> Classification:
    """Apply an operation's rounding hazard when the model asks for it."""
    if rounding is RoundingModel.ALGEBRAIC or hazard is None:
        return result
    return hazard(result)


__all__ = [
    "Hazard",
    "RoundingModel",
    "underflow",
    "overflow",
    "underflow_and_overflow",
    "widen",
]
