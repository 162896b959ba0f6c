"""Exception hierarchy for refinedfloats.
Transfer functions are total and never raise. The only runtime outcome that
is not a Classification is "no safe category", which callers normally
receive as ``None`` from :func:`refinedfloats.analysis.matcher.match`;
:class:`NoSafeCategoryError` exists for callers that prefer an exception.
Everything else here signals a programming or configuration defect.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from refinedfloats.core.classification import Classification


class RefinedFloatsError(Exception):
    """Base class for all refinedfloats errors."""


class CatalogError(RefinedFloatsError):
    """Raised when a category catalog is malformed.
    A malformed catalog is a definition defect, detected when the catalog
    is constructed and before any classification is matched against it.
    """

    def __init__(self, message: str, entries: tuple[str, ...] = ()):
        self.entries = entries
        super().__init__(message)


class NoSafeCategoryError(RefinedFloatsError):
    """Raised when no catalog entry covers a classification."""

    def __init__(self, classification: Classification):
        self.classification = classification
        super().__init__(
            f"No refined category covers {classification.describe()}; "
            "fall back to the unrefined float type"
        )


class UnknownOperationError(RefinedFloatsError, KeyError):
    """Raised when an operation name is not in the registry."""

    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Unknown operation: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


class ArityError(RefinedFloatsError, TypeError):
    """Raised when an operation is applied to the wrong number of inputs."""

    def __init__(self, operation: str, expected: int, got: int):
        self.operation = operation
        self.expected = expected
        self.got = got
        super().__init__(f"{operation} takes {expected} input(s), got {got}")


class ConfigError(RefinedFloatsError, ValueError):
    """Raised when a configuration value cannot be resolved."""

    def __init__(self, key: str, value: Any, message: str = ""):
        self.key = key
        self.value = value
        detail = f": {message}" if message else ""
        super().__init__(f"Invalid value for {key}: {value!r}{detail}")


__all__ = [
    "RefinedFloatsError",
    "CatalogError",
    "NoSafeCategoryError",
    "UnknownOperationError",
    "ArityError",
    "ConfigError",
]
