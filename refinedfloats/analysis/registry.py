"""Operation registry.
Closed set of operations and, for each, its arity, transfer function and
rounding hazard. The registry is built once at import, checked for
exhaustiveness over :class:`Operation`, and exposed read-only.
Example:
    >>> from refinedfloats.analysis.registry import Operation, apply
    >>> from refinedfloats.core.classification import Classification
    >>> from refinedfloats.core.sign import SignRange
    >>> x = Classification(zero=True, range=SignRange.NEGATIVE_ONLY)
    >>> apply(Operation.ABS, x).range
    SignRange.POSITIVE_ONLY
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from refinedfloats.analysis import transfer
from refinedfloats.analysis.rounding import (
    Hazard,
    RoundingModel,
    overflow,
    underflow,
    underflow_and_overflow,
    widen,
)
from refinedfloats.core.classification import Classification
from refinedfloats.core.exceptions import (
    ArityError,
    RefinedFloatsError,
    UnknownOperationError,
)


class Operation(Enum):
    """Every operation the engine classifies."""

    NEG = "neg"
    ABS = "abs"
    CEIL = "ceil"
    FLOOR = "floor"
    ROUND = "round"
    TRUNC = "trunc"
    FRACT = "fract"
    SIGNUM = "signum"
    SQRT = "sqrt"
    EXP = "exp"
    EXP2 = "exp2"
    LN = "ln"
    LOG2 = "log2"
    LOG10 = "log10"
    RECIP = "recip"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    ASINH = "asinh"
    POWI = "powi"
    TO_DEGREES = "to_degrees"
    TO_RADIANS = "to_radians"
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    REM = "rem"
    HYPOT = "hypot"
    MIN = "min"
    MAX = "max"

    @classmethod
    def from_name(cls, name: str | Operation) -> Operation:
        """Look up by value (``"ln"``) or member name (``"LN"``)."""
        if isinstance(name, Operation):
            return name
        key = str(name).strip()
        try:
            return cls(key.lower())
        except ValueError:
            pass
        try:
            return cls[key.upper()]
        except KeyError:
            raise UnknownOperationError(name) from None

    @property
    def arity(self) -> int:
        return REGISTRY[self].arity

    @property
    def is_binary(self) -> bool:
        return REGISTRY[self].arity == 2


@dataclass(frozen=True)
class OperationSpec:
    """Registry entry for one operation."""

    operation: Operation
    arity: int
    transfer: Callable[..., Classification]
    display: str
    hazard: Hazard | None = None

    def __call__(
        self,
        *inputs: Classification,
        rounding: RoundingModel = RoundingModel.ALGEBRAIC,
    ) -> Classification:
        if len(inputs) != self.arity:
            raise ArityError(self.operation.value, self.arity, len(inputs))
        return widen(self.transfer(*inputs), self.hazard, rounding)


def _unary(op: Operation, fn: Callable[..., Classification], display: str, hazard=None):
    return OperationSpec(op, 1, fn, display, hazard)


def _binary(op: Operation, fn: Callable[..., Classification], display: str, hazard=None):
    return OperationSpec(op, 2, fn, display, hazard)


_SPECS = (
    _unary(Operation.NEG, transfer.neg, "-x"),
    _unary(Operation.ABS, transfer.abs_, "x.abs()"),
    _unary(Operation.CEIL, transfer.ceil, "x.ceil()"),
    _unary(Operation.FLOOR, transfer.floor, "x.floor()"),
    _unary(Operation.ROUND, transfer.round_, "x.round()"),
    _unary(Operation.TRUNC, transfer.trunc, "x.trunc()"),
    _unary(Operation.FRACT, transfer.fract, "x.fract()"),
    _unary(Operation.SIGNUM, transfer.signum, "x.signum()"),
    _unary(Operation.SQRT, transfer.sqrt, "x.sqrt()"),
    _unary(Operation.EXP, transfer.exp, "x.exp()"),
    _unary(Operation.EXP2, transfer.exp, "x.exp2()"),
    _unary(Operation.LN, transfer.ln, "x.ln()"),
    _unary(Operation.LOG2, transfer.ln, "x.log2()"),
    _unary(Operation.LOG10, transfer.ln, "x.log10()"),
    _unary(Operation.RECIP, transfer.recip, "x.recip()", overflow),
    _unary(Operation.SIN, transfer.sin_cos, "x.sin()"),
    _unary(Operation.COS, transfer.sin_cos, "x.cos()"),
    _unary(Operation.TAN, transfer.tan, "x.tan()"),
    _unary(Operation.ASIN, transfer.asin, "x.asin()"),
    _unary(Operation.ACOS, transfer.acos, "x.acos()"),
    _unary(Operation.ATAN, transfer.tanh_atan, "x.atan()"),
    _unary(Operation.SINH, transfer.sinh_asinh, "x.sinh()"),
    _unary(Operation.COSH, transfer.cosh, "x.cosh()"),
    _unary(Operation.TANH, transfer.tanh_atan, "x.tanh()"),
    _unary(Operation.ASINH, transfer.sinh_asinh, "x.asinh()"),
    _unary(Operation.POWI, transfer.powi, "x.powi(n)"),
    _unary(Operation.TO_DEGREES, transfer.scale, "x.to_degrees()", overflow),
    _unary(Operation.TO_RADIANS, transfer.scale, "x.to_radians()", underflow),
    _binary(Operation.ADD, transfer.add, "x + y"),
    _binary(Operation.SUB, transfer.sub, "x - y"),
    _binary(Operation.MUL, transfer.mul, "x * y", underflow),
    _binary(Operation.DIV, transfer.div, "x / y", underflow_and_overflow),
    _binary(Operation.REM, transfer.rem, "x % y"),
    _binary(Operation.HYPOT, transfer.hypot, "x.hypot(y)"),
    _binary(Operation.MIN, transfer.min_, "x.min(y)"),
    _binary(Operation.MAX, transfer.max_, "x.max(y)"),
)


def _build_registry() -> Mapping[Operation, OperationSpec]:
    registry = {spec.operation: spec for spec in _SPECS}
    missing = [op.value for op in Operation if op not in registry]
    if missing:
        raise RefinedFloatsError(f"Operations without a transfer function: {missing}")
    if len(registry) != len(_SPECS):
        raise RefinedFloatsError("Operation registered more than once")
    return MappingProxyType(registry)


REGISTRY: Mapping[Operation, OperationSpec] = _build_registry()


def get_spec(operation: Operation | str) -> OperationSpec:
    return REGISTRY[Operation.from_name(operation)]


def apply(
    operation: Operation | str,
    *inputs: Classification,
    rounding: RoundingModel | str = RoundingModel.ALGEBRAIC,
) -> Classification:
    """
    Classify the results of an operation.
    Args:
        operation: Operation or its name
        inputs: one Classification for unary operations, two for binary ones
        rounding: whether to include results reachable only through
            range-limit rounding
    Returns:
        Classification covering every possible result
    Raises:
        UnknownOperationError: the name is not a registered operation
        ArityError: wrong number of inputs
    """
    return get_spec(operation)(*inputs, rounding=RoundingModel.from_name(rounding))


def unary_operations() -> tuple[Operation, ...]:
    return tuple(op for op in Operation if REGISTRY[op].arity == 1)


def binary_operations() -> tuple[Operation, ...]:
    return tuple(op for op in Operation if REGISTRY[op].arity == 2)


__all__ = [
    "Operation",
    "OperationSpec",
    "REGISTRY",
    "apply",
    "get_spec",
    "unary_operations",
    "binary_operations",
]
