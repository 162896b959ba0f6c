"""
Transfer functions for float operations.
Each function maps the Classification(s) of its input(s) to a Classification
covering every result the operation can produce under IEEE-754 semantics.
All functions are pure, total and monotone: widening an input never narrows
the output.
Functions sharing a rule are aliases of one function (``ln`` serves
``log2`` and ``log10``, ``sin_cos`` serves both ``sin`` and ``cos``, ...).
Effects that only appear because an exact result leaves the finite range of
the format (underflow of a product to zero, ...) are not modelled here; see
:mod:`refinedfloats.analysis.rounding`.
"""

from __future__ import annotations

from refinedfloats.core.classification import Classification
from refinedfloats.core.sign import SignRange


def _can_be_nonzero(c: Classification) -> bool:
    # Every classification admits nonzero finite members of some sign.
    return c.can_be_positive() or c.can_be_negative()


def _opposite_signs(lhs: Classification, rhs: Classification) -> bool:
    return (lhs.can_be_positive() and rhs.can_be_negative()) or (
        lhs.can_be_negative() and rhs.can_be_positive()
    )


# Unary operations


def neg(x: Classification) -> Classification:
    return x.with_(range=x.range.opposite())


def abs_(x: Classification) -> Classification:
    return x.with_(range=SignRange.POSITIVE_ONLY)


def ceil(x: Classification) -> Classification:
    """``ceil(-0.5)`` is ``-0.0``, so negatives can reach zero."""
    return x.with_(zero=x.zero or x.can_be_negative())


def floor(x: Classification) -> Classification:
    """``floor(0.5)`` is ``+0.0``, so positives can reach zero."""
    return x.with_(zero=x.zero or x.can_be_positive())


def round_(x: Classification) -> Classification:
    """Round half away from zero; any magnitude below one can become zero."""
    return x.with_(zero=True)


def trunc(x: Classification) -> Classification:
    return x.with_(zero=True)


def fract(x: Classification) -> Classification:
    """
    Fractional part, ``x - trunc(x)``.
    Infinities have no fractional part (NaN). A non-negative input yields a
    non-negative result, and an integral input yields ``+0.0``.
    """
    return Classification(
        nan=x.nan or x.infinite,
        zero=True,
        infinite=False,
        range=SignRange.FULL if x.can_be_negative() else SignRange.POSITIVE_ONLY,
    )


def signum(x: Classification) -> Classification:
    """``1.0`` or ``-1.0`` following the sign bit; NaN stays NaN."""
    return Classification(nan=x.nan, zero=False, infinite=False, range=x.range)


def sqrt(x: Classification) -> Classification:
    # sqrt(-0.0) is -0.0, the rest of the negatives are domain errors.
    return x.with_(nan=x.nan or x.can_be_negative())


def exp(x: Classification) -> Classification:
    """Shared by ``exp`` and ``exp2``."""
    return Classification(
        nan=x.nan,
        zero=x.can_be_negative(),
        infinite=x.can_be_positive(),
        range=SignRange.POSITIVE_ONLY,
    )


def ln(x: Classification) -> Classification:
    """
    Shared by ``ln``, ``log2`` and ``log10``.
    ``ln(1) = 0`` is reachable from any positive input, ``ln(0) = -inf``
    and ``ln(+inf) = +inf``, negative inputs are domain errors.
    """
    return Classification(
        nan=x.nan or x.can_be_negative(),
        zero=x.can_be_positive(),
        infinite=x.infinite or x.zero,
        range=SignRange.FULL,
    )


def recip(x: Classification) -> Classification:
    """``1/0 = inf`` and ``1/inf = 0``; the sign survives."""
    return x.with_(zero=x.infinite, infinite=x.zero)


def sin_cos(x: Classification) -> Classification:
    return Classification(
        nan=x.nan or x.infinite,
        zero=True,
        infinite=False,
        range=SignRange.FULL,
    )


def tan(x: Classification) -> Classification:
    return Classification(
        nan=x.nan or x.infinite,
        zero=True,
        infinite=True,
        range=SignRange.FULL,
    )


def asin(x: Classification) -> Classification:
    """Anything outside [-1, 1] is NaN; no classification excludes that."""
    return x.with_(nan=True, infinite=False)


def acos(x: Classification) -> Classification:
    return Classification(
        nan=True,
        zero=True,
        infinite=False,
        range=SignRange.POSITIVE_ONLY,
    )


def sinh_asinh(x: Classification) -> Classification:
    return x.with_(infinite=True)


def cosh(x: Classification) -> Classification:
    return Classification(
        nan=x.nan,
        zero=False,
        infinite=True,
        range=SignRange.POSITIVE_ONLY,
    )


def tanh_atan(x: Classification) -> Classification:
    return x.with_(infinite=False)


def powi(x: Classification) -> Classification:
    """Integer power, worst case over every exponent.
    Odd exponents keep negative signs, even ones make them positive,
    negative exponents swap zero and infinity and large ones overflow.
    """
    return Classification(
        nan=x.nan,
        zero=True,
        infinite=True,
        range=SignRange.FULL if x.can_be_negative() else SignRange.POSITIVE_ONLY,
    )


def scale(x: Classification) -> Classification:
    """Multiplication by a positive finite constant (``to_degrees``, ``to_radians``)."""
    return x


# Binary operations


def add(lhs: Classification, rhs: Classification) -> Classification:
    """
    Sum of two classifications.
    Opposite signs can cancel to zero, and opposite infinities give NaN.
    Two operands of the same sign can overflow to infinity.
    """
    opposite = _opposite_signs(lhs, rhs)
    same_sign_overflow = (lhs.can_be_positive() and rhs.can_be_positive()) or (
        lhs.can_be_negative() and rhs.can_be_negative()
    )
    if lhs.range is rhs.range and lhs.range is not SignRange.FULL:
        result_range = lhs.range
    else:
        result_range = SignRange.FULL
    return Classification(
        nan=lhs.nan or rhs.nan or (lhs.infinite and rhs.infinite and opposite),
        zero=lhs.zero or rhs.zero or opposite,
        infinite=lhs.infinite or rhs.infinite or same_sign_overflow,
        range=result_range,
    )


def sub(lhs: Classification, rhs: Classification) -> Classification:
    return add(lhs, neg(rhs))


def mul(lhs: Classification, rhs: Classification) -> Classification:
    infinite = (
        (lhs.infinite and _can_be_nonzero(rhs))
        or (rhs.infinite and _can_be_nonzero(lhs))
        or (_can_be_nonzero(lhs) and _can_be_nonzero(rhs))
    )
    return Classification(
        nan=lhs.nan
        or rhs.nan
        or (lhs.zero and rhs.infinite)
        or (lhs.infinite and rhs.zero),
        zero=lhs.zero or rhs.zero,
        infinite=infinite,
        range=lhs.range.product(rhs.range),
    )


def div(lhs: Classification, rhs: Classification) -> Classification:
    return Classification(
        nan=lhs.nan
        or rhs.nan
        or (lhs.zero and rhs.zero)
        or (lhs.infinite and rhs.infinite),
        zero=lhs.zero or rhs.infinite,
        infinite=rhs.zero or lhs.infinite,
        range=lhs.range.product(rhs.range),
    )


def rem(lhs: Classification, rhs: Classification) -> Classification:
    """Truncated remainder; the result takes the sign of the dividend.
    ``x % inf`` is ``x``, so a finite dividend stays finite, and an
    infinite dividend is a NaN.
    """
    return Classification(
        nan=lhs.nan or rhs.nan or lhs.infinite or rhs.zero,
        zero=True,
        infinite=False,
        range=lhs.range,
    )


def hypot(lhs: Classification, rhs: Classification) -> Classification:
    return Classification(
        nan=lhs.nan or rhs.nan,
        zero=lhs.zero and rhs.zero,
        infinite=True,
        range=SignRange.POSITIVE_ONLY,
    )


def _pick_common(lhs: Classification, rhs: Classification) -> tuple[bool, bool, bool]:
    # min and max return one of their operands, or the non-NaN one.
    return (
        lhs.nan or rhs.nan,
        lhs.zero or rhs.zero,
        lhs.infinite or rhs.infinite,
    )


def _signed_zeros_meet(lhs: Classification, rhs: Classification) -> bool:
    # IEEE leaves the sign of min(+0, -0) and max(+0, -0) unspecified.
    return lhs.zero and rhs.zero and _opposite_signs(lhs, rhs)


def min_(lhs: Classification, rhs: Classification) -> Classification:
    nan, zero, infinite = _pick_common(lhs, rhs)
    positive = (
        (lhs.can_be_positive() and rhs.can_be_positive())
        or (lhs.nan and rhs.can_be_positive())
        or (rhs.nan and lhs.can_be_positive())
        or _signed_zeros_meet(lhs, rhs)
    )
    negative = lhs.can_be_negative() or rhs.can_be_negative()
    return Classification(
        nan=nan,
        zero=zero,
        infinite=infinite,
        range=SignRange.from_signs(positive, negative),
    )


def max_(lhs: Classification, rhs: Classification) -> Classification:
    nan, zero, infinite = _pick_common(lhs, rhs)
    positive = lhs.can_be_positive() or rhs.can_be_positive()
    negative = (
        (lhs.can_be_negative() and rhs.can_be_negative())
        or (lhs.nan and rhs.can_be_negative())
        or (rhs.nan and lhs.can_be_negative())
        or _signed_zeros_meet(lhs, rhs)
    )
    return Classification(
        nan=nan,
        zero=zero,
        infinite=infinite,
        range=SignRange.from_signs(positive, negative),
    )


__all__ = [
    "neg",
    "abs_",
    "ceil",
    "floor",
    "round_",
    "trunc",
    "fract",
    "signum",
    "sqrt",
    "exp",
    "ln",
    "recip",
    "sin_cos",
    "tan",
    "asin",
    "acos",
    "sinh_asinh",
    "cosh",
    "tanh_atan",
    "powi",
    "scale",
    "add",
    "sub",
    "mul",
    "div",
    "rem",
    "hypot",
    "min_",
    "max_",
]
