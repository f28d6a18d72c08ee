"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so callers (CLI, web layer) can catch them uniformly and display
user-friendly messages.  Each exception keeps the offending field or key
as an attribute so a caller can render a specific message without parsing
the text.
"""

from __future__ import annotations

from typing import Any


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    def __init__(self, entity: str, key: str, message: str | None = None) -> None:
        super().__init__(message or f"{entity} not found: '{key}'")
        self.entity = entity
        self.key = key


class ConflictError(DomainException):
    """A uniqueness constraint was violated by a write."""


class DuplicateBarcodeError(ConflictError):
    """The barcode is already assigned to another variant."""

    def __init__(self, barcode: str) -> None:
        super().__init__(f"Barcode {barcode} is already in use")
        self.barcode = barcode


class DuplicateVariantError(ConflictError):
    """Another variant already has the same name/category/size/color."""

    def __init__(self, key: tuple[str, str, str, str]) -> None:
        super().__init__(
            "A variant for {} / {} / {} / {} already exists".format(*key)
        )
        self.key = key


class AllocationExhaustedError(DomainException):
    """No unused barcode was found within the attempt budget."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"Could not generate a unique barcode after {attempts} attempts"
        )
        self.attempts = attempts


class PartialFailureError(DomainException):
    """Some sizes of a multi-size stock addition failed.

    ``result`` holds both the applied changes and the failures, so the
    caller can tell exactly which sizes made it into the ledger.
    """

    def __init__(self, result: Any) -> None:
        failed = ", ".join(f.size for f in result.failures)
        super().__init__(
            f"{len(result.failures)} size(s) could not be applied: {failed}"
        )
        self.result = result


class StorageError(DomainException):
    """The backing store could not be read or written."""
