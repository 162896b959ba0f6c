"""IEEE-754 soundness checks for transfer functions using Z3's FP theory.
For the operations Z3 models exactly, the inputs are made symbolic,
constrained to their Classifications, and the solver is asked whether each
result feature (NaN, zero, infinity, positive sign, negative sign) is
reachable. A reachable feature the transfer function does not cover is a
soundness violation, reported with a counterexample.
Z3 rounds exactly like hardware does, so checks should be run against
:attr:`RoundingModel.IEEE` results. The rules do not depend on the width,
which makes the half-precision sort the cheapest faithful choice.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import z3

from refinedfloats.analysis.catalog import DEFAULT_CATALOG, Catalog
from refinedfloats.analysis.registry import REGISTRY, Operation
from refinedfloats.analysis.rounding import RoundingModel
from refinedfloats.core.classification import Classification
from refinedfloats.core.precision import FloatPrecision, get_fp_sort
from refinedfloats.logging import get_logger

if TYPE_CHECKING:
    from refinedfloats.config import RefinedFloatsConfig

FEATURES = ("nan", "zero", "infinite", "positive", "negative")


def _feature_predicate(feature: str, value: z3.FPRef) -> z3.BoolRef:
    if feature == "nan":
        return z3.fpIsNaN(value)
    if feature == "zero":
        return z3.fpIsZero(value)
    if feature == "infinite":
        return z3.fpIsInf(value)
    if feature == "positive":
        return z3.fpIsPositive(value)
    return z3.fpIsNegative(value)


def covers(classification: Classification, feature: str) -> bool:
    """Whether a Classification admits a result feature."""
    if feature == "nan":
        return classification.nan
    if feature == "zero":
        return classification.zero
    if feature == "infinite":
        return classification.infinite
    if feature == "positive":
        return classification.can_be_positive()
    return classification.can_be_negative()


def constrain(value: z3.FPRef, classification: Classification) -> list[z3.BoolRef]:
    """Constraints restricting a symbolic float to a Classification."""
    constraints = []
    if not classification.nan:
        constraints.append(z3.Not(z3.fpIsNaN(value)))
    if not classification.zero:
        constraints.append(z3.Not(z3.fpIsZero(value)))
    if not classification.infinite:
        constraints.append(z3.Not(z3.fpIsInf(value)))
    if not classification.can_be_positive():
        constraints.append(z3.Or(z3.fpIsNaN(value), z3.fpIsNegative(value)))
    if not classification.can_be_negative():
        constraints.append(z3.Or(z3.fpIsNaN(value), z3.fpIsPositive(value)))
    return constraints


def _round_to_integral(rm: Callable[[], z3.FPRMRef]) -> Callable[..., z3.FPRef]:
    return lambda sort, x: z3.fpRoundToIntegral(rm(), x)


def _signum(sort: z3.FPSortRef, x: z3.FPRef) -> z3.FPRef:
    one = z3.FPVal(1.0, sort)
    return z3.If(z3.fpIsNaN(x), x, z3.If(z3.fpIsNegative(x), z3.fpNeg(one), one))


_SYMBOLIC: dict[Operation, Callable[..., z3.FPRef]] = {
    Operation.NEG: lambda sort, x: z3.fpNeg(x),
    Operation.ABS: lambda sort, x: z3.fpAbs(x),
    Operation.CEIL: _round_to_integral(z3.RTP),
    Operation.FLOOR: _round_to_integral(z3.RTN),
    Operation.ROUND: _round_to_integral(z3.RNA),
    Operation.TRUNC: _round_to_integral(z3.RTZ),
    Operation.FRACT: lambda sort, x: z3.fpSub(
        z3.RNE(), x, z3.fpRoundToIntegral(z3.RTZ(), x)
    ),
    Operation.SIGNUM: _signum,
    Operation.SQRT: lambda sort, x: z3.fpSqrt(z3.RNE(), x),
    Operation.RECIP: lambda sort, x: z3.fpDiv(z3.RNE(), z3.FPVal(1.0, sort), x),
    Operation.ADD: lambda sort, x, y: z3.fpAdd(z3.RNE(), x, y),
    Operation.SUB: lambda sort, x, y: z3.fpSub(z3.RNE(), x, y),
    Operation.MUL: lambda sort, x, y: z3.fpMul(z3.RNE(), x, y),
    Operation.DIV: lambda sort, x, y: z3.fpDiv(z3.RNE(), x, y),
    Operation.MIN: lambda sort, x, y: z3.fpMin(x, y),
    Operation.MAX: lambda sort, x, y: z3.fpMax(x, y),
}

SUPPORTED_OPERATIONS: frozenset[Operation] = frozenset(_SYMBOLIC)


@dataclass
class Violation:
    """A reachable result feature the transfer function does not admit."""

    feature: str
    counterexample: dict[str, str]

    def format(self) -> str:
        args = ", ".join(f"{name}={value}" for name, value in self.counterexample.items())
        return f"{self.feature} reachable with {args}"


@dataclass
class VerificationResult:
    """Outcome of checking one operation on one input combination."""

    operation: Operation
    inputs: tuple[Classification, ...]
    claimed: Classification
    violations: list[Violation] = field(default_factory=list)
    unknown: list[str] = field(default_factory=list)
    slack: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    def format(self) -> str:
        args = ", ".join(c.describe() for c in self.inputs)
        head = f"{self.operation.value}({args}) -> {self.claimed.describe()}"
        if self.ok:
            return f"{head}: sound"
        details = "; ".join(v.format() for v in self.violations)
        return f"{head}: UNSOUND ({details})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation.value,
            "inputs": [c.to_dict() for c in self.inputs],
            "claimed": self.claimed.to_dict(),
            "violations": [
                {"feature": v.feature, "counterexample": v.counterexample}
                for v in self.violations
            ],
            "unknown": list(self.unknown),
            "slack": list(self.slack),
        }


class IEEEVerifier:
    """Checks transfer functions against Z3's model of IEEE-754 arithmetic."""

    def __init__(
        self,
        precision: FloatPrecision = FloatPrecision.HALF,
        rounding: RoundingModel = RoundingModel.IEEE,
        timeout_ms: int = 10000,
    ):
        self.precision = precision
        self.rounding = rounding
        self.timeout_ms = timeout_ms
        self._sort = get_fp_sort(precision)
        self._query_count = 0

    @classmethod
    def from_config(cls, config: RefinedFloatsConfig) -> IEEEVerifier:
        """Verifier using the ``[verify]`` section of a configuration."""
        return cls(
            precision=config.verify.resolve_precision(),
            timeout_ms=config.verify.timeout_ms,
        )

    @staticmethod
    def supports(operation: Operation | str) -> bool:
        return Operation.from_name(operation) in SUPPORTED_OPERATIONS

    def _symbolic_inputs(self, arity: int) -> list[z3.FPRef]:
        names = ("x", "y")[:arity]
        return [z3.FP(name, self._sort) for name in names]

    def _query(
        self,
        constraints: list[z3.BoolRef],
        inputs: list[z3.FPRef],
    ) -> tuple[z3.CheckSatResult, dict[str, str]]:
        solver = z3.Solver()
        solver.set("timeout", self.timeout_ms)
        solver.add(constraints)
        self._query_count += 1
        result = solver.check()
        if result != z3.sat:
            return result, {}
        model = solver.model()
        witness = {
            str(var): str(model.eval(var, model_completion=True)) for var in inputs
        }
        return result, witness

    def reachable(
        self,
        operation: Operation | str,
        *inputs: Classification,
    ) -> dict[str, bool | None]:
        """Which result features are reachable (None when the solver gave up)."""
        op = Operation.from_name(operation)
        xs, result = self._build(op, inputs)
        base = [c for x, cls in zip(xs, inputs) for c in constrain(x, cls)]
        found: dict[str, bool | None] = {}
        for feature in FEATURES:
            status, _ = self._query(base + [_feature_predicate(feature, result)], xs)
            found[feature] = None if status == z3.unknown else status == z3.sat
        return found

    def _build(
        self, op: Operation, inputs: tuple[Classification, ...]
    ) -> tuple[list[z3.FPRef], z3.FPRef]:
        if op not in _SYMBOLIC:
            raise ValueError(f"Z3 has no exact model of {op.value}")
        spec = REGISTRY[op]
        if len(inputs) != spec.arity:
            raise ValueError(f"{op.value} takes {spec.arity} input(s), got {len(inputs)}")
        xs = self._symbolic_inputs(spec.arity)
        return xs, _SYMBOLIC[op](self._sort, *xs)

    def verify(
        self,
        operation: Operation | str,
        *inputs: Classification,
        report_slack: bool = False,
    ) -> VerificationResult:
        """
        Check that the transfer function covers every reachable result.
        Args:
            operation: an operation in SUPPORTED_OPERATIONS
            inputs: input Classifications
            report_slack: also list features the transfer function admits
                but Z3 proves unreachable (costs extra queries)
        Returns:
            VerificationResult; ``ok`` is False when a violation was found
        """
        op = Operation.from_name(operation)
        xs, result = self._build(op, inputs)
        claimed = REGISTRY[op](*inputs, rounding=self.rounding)
        base = [c for x, cls in zip(xs, inputs) for c in constrain(x, cls)]
        outcome = VerificationResult(operation=op, inputs=tuple(inputs), claimed=claimed)
        for feature in FEATURES:
            admitted = covers(claimed, feature)
            if admitted and not report_slack:
                continue
            status, witness = self._query(base + [_feature_predicate(feature, result)], xs)
            if status == z3.unknown:
                outcome.unknown.append(feature)
            elif status == z3.sat and not admitted:
                outcome.violations.append(Violation(feature, witness))
            elif status == z3.unsat and admitted:
                outcome.slack.append(feature)
        if not outcome.ok:
            get_logger().verbose(outcome.format(), category="verify")
        return outcome

    def verify_catalog(
        self,
        catalog: Catalog = DEFAULT_CATALOG,
        operations: Iterable[Operation | str] | None = None,
        report_slack: bool = False,
    ) -> list[VerificationResult]:
        """Verify every supported operation on every catalog entry or entry pair.
        With ``report_slack`` each result also lists the admitted features
        that no input can produce.
        """
        if operations is None:
            ops = [op for op in Operation if op in SUPPORTED_OPERATIONS]
        else:
            ops = [Operation.from_name(o) for o in operations]
        results = []
        logger = get_logger()
        with logger.timer("IEEE verification", category="verify"):
            for op in ops:
                for lhs in catalog:
                    if REGISTRY[op].arity == 1:
                        results.append(
                            self.verify(op, lhs.worst_case(), report_slack=report_slack)
                        )
                        continue
                    for rhs in catalog:
                        results.append(
                            self.verify(
                                op,
                                lhs.worst_case(),
                                rhs.worst_case(),
                                report_slack=report_slack,
                            )
                        )
        failures = sum(1 for r in results if not r.ok)
        logger.debug(
            f"{len(results)} checks, {failures} unsound, {self._query_count} solver queries",
            category="verify",
        )
        return results

    def get_stats(self) -> dict[str, int]:
        return {"queries": self._query_count}


__all__ = [
    "FEATURES",
    "SUPPORTED_OPERATIONS",
    "IEEEVerifier",
    "Violation",
    "VerificationResult",
    "constrain",
    "covers",
]
