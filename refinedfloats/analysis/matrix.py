"""
Compatibility matrix.
For every operation and every combination of catalog entries as operand
categories, the worst-case Classification of each operand is pushed through
the transfer function and the result is matched against the catalog. The
published mapping is total:
    (operation, lhs category[, rhs category]) -> category | unrefined
Cells are independent pure computations, so they may be computed in any
order and on any number of worker threads.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from refinedfloats.analysis.catalog import DEFAULT_CATALOG, Catalog, CategoryDefinition, FloatType
from refinedfloats.analysis.matcher import match
from refinedfloats.analysis.registry import REGISTRY, Operation
from refinedfloats.analysis.rounding import RoundingModel
from refinedfloats.core.classification import Classification
from refinedfloats.core.precision import FloatPrecision
from refinedfloats.logging import get_logger

CellKey = tuple[Operation, str, "str | None"]


@dataclass(frozen=True)
class MatrixCell:
    """One computed entry of the matrix."""

    operation: Operation
    lhs: CategoryDefinition
    rhs: CategoryDefinition | None
    classification: Classification
    result: CategoryDefinition | None

    @property
    def key(self) -> CellKey:
        return (self.operation, self.lhs.name, self.rhs.name if self.rhs else None)

    @property
    def is_refined(self) -> bool:
        return self.result is not None


@dataclass
class CompatibilityMatrix:
    """Result categories for every operation and operand combination."""

    precision: FloatPrecision
    rounding: RoundingModel
    catalog: Catalog
    cells: dict[CellKey, MatrixCell] = field(default_factory=dict)

    def _key(
        self,
        operation: Operation | str,
        lhs: CategoryDefinition | str,
        rhs: CategoryDefinition | str | None,
    ) -> CellKey:
        op = Operation.from_name(operation)
        lhs_name = lhs if isinstance(lhs, str) else lhs.name
        rhs_name = rhs if rhs is None or isinstance(rhs, str) else rhs.name
        return (op, lhs_name, rhs_name)

    def cell(
        self,
        operation: Operation | str,
        lhs: CategoryDefinition | str,
        rhs: CategoryDefinition | str | None = None,
    ) -> MatrixCell:
        key = self._key(operation, lhs, rhs)
        try:
            return self.cells[key]
        except KeyError:
            raise KeyError(f"No matrix cell for {key[0].value}({key[1]}, {key[2]})") from None

    def lookup(
        self,
        operation: Operation | str,
        lhs: CategoryDefinition | str,
        rhs: CategoryDefinition | str | None = None,
    ) -> CategoryDefinition | None:
        """Narrowest result category, or None for the unrefined fallback."""
        return self.cell(operation, lhs, rhs).result

    def result_type(
        self,
        operation: Operation | str,
        lhs: CategoryDefinition | str,
        rhs: CategoryDefinition | str | None = None,
    ) -> FloatType:
        return FloatType(self.lookup(operation, lhs, rhs), self.precision)

    def result_name(
        self,
        operation: Operation | str,
        lhs: CategoryDefinition | str,
        rhs: CategoryDefinition | str | None = None,
    ) -> str:
        """Category name, or the primitive type name (``f64``) when unrefined."""
        result = self.lookup(operation, lhs, rhs)
        return result.name if result is not None else self.precision.type_name

    def cells_for(self, operation: Operation | str) -> list[MatrixCell]:
        op = Operation.from_name(operation)
        return [cell for key, cell in self.cells.items() if key[0] is op]

    def operations(self) -> list[Operation]:
        seen = {key[0] for key in self.cells}
        return [op for op in Operation if op in seen]

    def __iter__(self) -> Iterator[MatrixCell]:
        return iter(self.cells.values())

    def __len__(self) -> int:
        return len(self.cells)

    def to_dict(self) -> dict[str, Any]:
        """Nested mapping ``{"unary": {op: {lhs: result}}, "binary": {op: {lhs: {rhs: result}}}}``."""
        unary: dict[str, dict[str, str]] = {}
        binary: dict[str, dict[str, dict[str, str]]] = {}
        unrefined = self.precision.type_name
        for (op, lhs, rhs), cell in self.cells.items():
            result = cell.result.name if cell.result is not None else unrefined
            if rhs is None:
                unary.setdefault(op.value, {})[lhs] = result
            else:
                binary.setdefault(op.value, {}).setdefault(lhs, {})[rhs] = result
        return {
            "precision": self.precision.type_name,
            "rounding": self.rounding.value,
            "categories": self.catalog.names(),
            "unary": unary,
            "binary": binary,
        }


class MatrixBuilder:
    """Computes compatibility matrices; pure composition of transfer and match."""

    def __init__(
        self,
        catalog: Catalog = DEFAULT_CATALOG,
        rounding: RoundingModel = RoundingModel.ALGEBRAIC,
        max_workers: int = 1,
    ):
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.catalog = catalog
        self.rounding = rounding
        self.max_workers = max_workers

    def compute_cell(
        self,
        operation: Operation,
        lhs: CategoryDefinition,
        rhs: CategoryDefinition | None = None,
    ) -> MatrixCell:
        spec = REGISTRY[operation]
        inputs = [lhs.worst_case()]
        if rhs is not None:
            inputs.append(rhs.worst_case())
        classification = spec(*inputs, rounding=self.rounding)
        return MatrixCell(
            operation=operation,
            lhs=lhs,
            rhs=rhs,
            classification=classification,
            result=match(classification, self.catalog),
        )

    def _tasks(
        self, operations: Iterable[Operation]
    ) -> list[tuple[Operation, CategoryDefinition, CategoryDefinition | None]]:
        tasks: list[tuple[Operation, CategoryDefinition, CategoryDefinition | None]] = []
        for op in operations:
            for lhs in self.catalog:
                if REGISTRY[op].arity == 1:
                    tasks.append((op, lhs, None))
                else:
                    for rhs in self.catalog:
                        tasks.append((op, lhs, rhs))
        return tasks

    def build(
        self,
        precision: FloatPrecision = FloatPrecision.DOUBLE,
        operations: Iterable[Operation | str] | None = None,
    ) -> CompatibilityMatrix:
        """
        Compute the matrix for one precision.
        Args:
            precision: width metadata attached to the result
            operations: restrict to these operations (default: all)
        Returns:
            CompatibilityMatrix with one cell per operation and operand
            combination
        """
        logger = get_logger()
        ops = list(Operation) if operations is None else [Operation.from_name(o) for o in operations]
        tasks = self._tasks(ops)
        logger.verbose(
            f"Building {precision.type_name} matrix: {len(ops)} operations, "
            f"{len(tasks)} cells, rounding={self.rounding.value}",
            category="matrix",
        )
        matrix = CompatibilityMatrix(precision=precision, rounding=self.rounding, catalog=self.catalog)
        with logger.timer(f"{precision.type_name} matrix", category="matrix"):
            if self.max_workers == 1:
                cells = [self.compute_cell(*task) for task in tasks]
            else:
                with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                    cells = list(pool.map(lambda task: self.compute_cell(*task), tasks))
        for cell in cells:
            matrix.cells[cell.key] = cell
        refined = sum(1 for cell in cells if cell.is_refined)
        logger.count("matrix_cells", len(cells))
        logger.debug(
            f"{refined}/{len(cells)} cells have a refined result",
            category="matrix",
        )
        return matrix

    def build_all(
        self,
        precisions: Iterable[FloatPrecision],
        operations: Iterable[Operation | str] | None = None,
    ) -> dict[FloatPrecision, CompatibilityMatrix]:
        ops = None if operations is None else list(operations)
        return {precision: self.build(precision, ops) for precision in precisions}


__all__ = ["MatrixCell", "CompatibilityMatrix", "MatrixBuilder", "CellKey"]
