"""
Validation outcomes for form fields.

A result is either valid, or invalid with a non-empty, ordered tuple of
failure descriptors (one per failing rule, in rule declaration order).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class ValidationErrorKind(Enum):
    """The kinds of rule failure a field can report."""

    INVALID_PATTERN = "invalid_pattern"
    INSUFFICIENT_LENGTH = "insufficient_length"


@dataclass(frozen=True)
class ValidationFailure:
    """Descriptor for a failed rule: its kind and the user-facing message."""

    kind: ValidationErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one value against a set of rules.

    Use :meth:`valid` and :meth:`invalid` to build results. The result is
    falsy when invalid, so callers can write ``if not result: ...``.
    """

    errors: tuple[ValidationFailure, ...] = ()

    @classmethod
    def valid(cls) -> ValidationResult:
        """Return a passing result."""
        return cls()

    @classmethod
    def invalid(cls, errors: Iterable[ValidationFailure]) -> ValidationResult:
        """
        Return a failing result.

        Raises:
            ValueError: If ``errors`` is empty
        """
        errors = tuple(errors)
        if not errors:
            raise ValueError("An invalid result needs at least one error")
        return cls(errors)

    @property
    def is_valid(self) -> bool:
        """True if no rule failed."""
        return not self.errors

    @property
    def first_error(self) -> ValidationFailure | None:
        """The first failure in rule order, or None when valid."""
        return self.errors[0] if self.errors else None

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Combine two results, keeping this result's errors first."""
        if self.is_valid and other.is_valid:
            return self
        return ValidationResult.invalid(self.errors + other.errors)

    def __bool__(self) -> bool:
        return self.is_valid
