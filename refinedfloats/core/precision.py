"""Float widths.
The acceptance and transfer logic is the same for every width; precision is
metadata carried by concrete type instantiations, plus the z3 sort used when
the rules are checked against IEEE semantics.
"""
from __future__ import annotations
from enum import Enum
import z3
from refinedfloats.core.exceptions import ConfigError
class FloatPrecision(Enum):
    """Floating-point precision levels."""
    HALF = "f16"
    SINGLE = "f32"
    DOUBLE = "f64"
    @property
    def type_name(self) -> str:
        """Name of the unrefined primitive type."""
        return self.value
    @classmethod
    def from_name(cls, name: str | FloatPrecision) -> FloatPrecision:
        """Parse ``"f32"``, ``"single"``, ``"SINGLE"`` and the like."""
        if isinstance(name, FloatPrecision):
            return name
        key = str(name).strip().lower()
        for precision in cls:
            if key in (precision.value, precision.name.lower()):
                return precision
        raise ConfigError("precision", name, "expected one of f16, f32, f64")
def get_fp_sort(precision: FloatPrecision) -> z3.FPSortRef:
    """Get Z3 FP sort for a precision level."""
    if precision == FloatPrecision.HALF:
        return z3.FPSort(5, 11)
    elif precision == FloatPrecision.SINGLE:
        return z3.Float32()
    return z3.Float64()
__all__ = ["FloatPrecision", "get_fp_sort"]
