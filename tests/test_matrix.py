"""Tests for the compatibility matrix."""

import pytest

from refinedfloats.analysis.catalog import (
    DEFAULT_CATALOG,
    NON_NAN_FINITE,
    POSITIVE,
    POSITIVE_FINITE,
    STRICTLY_POSITIVE,
    Catalog,
    NON_NAN,
)
from refinedfloats.analysis.matrix import CompatibilityMatrix, MatrixBuilder
from refinedfloats.analysis.registry import Operation, binary_operations, unary_operations
from refinedfloats.analysis.rounding import RoundingModel
from refinedfloats.core.precision import FloatPrecision

UNARY_CELLS = len(unary_operations()) * 12
BINARY_CELLS = len(binary_operations()) * 12 * 12


@pytest.fixture(scope="module")
def matrix():
    return MatrixBuilder().build(FloatPrecision.DOUBLE)


class TestBuild:
    def test_total(self, matrix):
        assert len(matrix) == UNARY_CELLS + BINARY_CELLS == 336 + 1152
        assert matrix.operations() == list(Operation)

    def test_cells_for(self, matrix):
        assert len(matrix.cells_for("neg")) == 12
        assert len(matrix.cells_for(Operation.ADD)) == 144

    def test_lookup(self, matrix):
        assert matrix.lookup("abs", "NegativeFinite") is POSITIVE_FINITE
        assert matrix.lookup("add", "StrictlyPositiveFinite", "StrictlyNegativeFinite") is NON_NAN_FINITE
        assert matrix.lookup("add", "StrictlyPositive", "StrictlyPositive") is STRICTLY_POSITIVE
        assert matrix.lookup("div", "PositiveFinite", "PositiveFinite") is None

    def test_lookup_accepts_definitions(self, matrix):
        assert matrix.lookup(Operation.EXP, NON_NAN) is POSITIVE

    def test_result_names(self, matrix):
        assert matrix.result_name("sqrt", "NonNaN") == "f64"
        assert matrix.result_name("abs", "NonNaN") == "Positive"
        assert matrix.result_type("abs", "NonNaN").name == "Positive<f64>"

    def test_missing_cell(self, matrix):
        with pytest.raises(KeyError):
            matrix.cell("add", "NonNaN")

    def test_cell_carries_classification(self, matrix):
        cell = matrix.cell("ln", "StrictlyPositiveFinite")
        assert cell.classification.zero
        assert cell.is_refined
        assert cell.key == (Operation.LN, "StrictlyPositiveFinite", None)

    def test_subset_of_operations(self):
        m = MatrixBuilder().build(FloatPrecision.SINGLE, operations=["neg", "mul"])
        assert len(m) == 12 + 144
        assert m.operations() == [Operation.NEG, Operation.MUL]

    def test_threaded_build_matches_serial(self, matrix):
        threaded = MatrixBuilder(max_workers=4).build(FloatPrecision.DOUBLE)
        assert threaded.cells == matrix.cells

    def test_invalid_workers(self):
        with pytest.raises(ValueError):
            MatrixBuilder(max_workers=0)

    def test_build_all(self):
        matrices = MatrixBuilder().build_all(
            [FloatPrecision.SINGLE, FloatPrecision.DOUBLE], operations=["abs"]
        )
        assert set(matrices) == {FloatPrecision.SINGLE, FloatPrecision.DOUBLE}
        assert matrices[FloatPrecision.SINGLE].result_name("abs", "NonNaN") == "Positive"

    def test_custom_catalog(self):
        small = Catalog([POSITIVE_FINITE, NON_NAN])
        m = MatrixBuilder(catalog=small).build(operations=["abs"])
        assert len(m) == 2
        assert m.lookup("abs", "NonNaN").name == "NonNaN"


class TestRoundingModes:
    def test_ieee_changes_mul(self):
        algebraic = MatrixBuilder().build(operations=["mul"])
        ieee = MatrixBuilder(rounding=RoundingModel.IEEE).build(operations=["mul"])
        assert algebraic.result_name("mul", "StrictlyPositiveFinite", "StrictlyPositiveFinite") == "StrictlyPositive"
        assert ieee.result_name("mul", "StrictlyPositiveFinite", "StrictlyPositiveFinite") == "Positive"


class TestExport:
    def test_to_dict(self, matrix):
        data = matrix.to_dict()
        assert data["precision"] == "f64"
        assert data["rounding"] == "algebraic"
        assert data["categories"] == DEFAULT_CATALOG.names()
        assert data["unary"]["abs"]["NegativeFinite"] == "PositiveFinite"
        assert data["binary"]["div"]["PositiveFinite"]["PositiveFinite"] == "f64"
        assert len(data["unary"]) == len(unary_operations())
        assert len(data["binary"]["add"]) == 12

    def test_empty_matrix(self):
        m = CompatibilityMatrix(FloatPrecision.HALF, RoundingModel.IEEE, DEFAULT_CATALOG)
        assert len(m) == 0
        assert m.to_dict()["unary"] == {}
