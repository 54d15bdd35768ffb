"""
Validation rules for login form fields.

Each rule pairs a predicate over a string value with the failure descriptor
reported when the predicate does not hold. Rules are grouped per field in an
ordered RuleSet.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from enum import Enum

from .result import ValidationErrorKind, ValidationFailure, ValidationResult


class EmailPattern(Enum):
    """Email address patterns, matched against the whole value."""

    # Anything with an @ and a dot after it
    SIMPLE = r"^.+@.+\..+$"
    STANDARD = r"^[A-Z0-9a-z._%+-]+@([A-Za-z0-9-]+\.)+[A-Za-z]{2,}$"


class ValidationRule(ABC):
    """Base class for a single field rule."""

    def __init__(self, failure: ValidationFailure):
        self.failure = failure

    @abstractmethod
    def check(self, value: str) -> bool:
        """Return True if the value satisfies the rule."""

    def validate(self, value: str) -> ValidationResult:
        """Validate a value against this rule alone."""
        if self.check(value):
            return ValidationResult.valid()
        return ValidationResult.invalid([self.failure])


class PatternRule(ValidationRule):
    """
    Rule requiring the entire value to match a regular expression.

    Accepts a pattern string, a compiled pattern or an EmailPattern member.
    """

    def __init__(self, pattern: str | re.Pattern[str] | EmailPattern, message: str):
        super().__init__(ValidationFailure(ValidationErrorKind.INVALID_PATTERN, message))
        if isinstance(pattern, EmailPattern):
            pattern = pattern.value
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def check(self, value: str) -> bool:
        return self.pattern.fullmatch(value) is not None

    def __repr__(self) -> str:
        return f"PatternRule({self.pattern.pattern!r})"


class LengthRule(ValidationRule):
    """
    Rule bounding the number of characters in a value.

    The value passes when ``minimum <= len(value)`` and, if a maximum is set,
    ``len(value) <= maximum``. Both bounds report the same failure.
    """

    def __init__(self, message: str, minimum: int = 0, maximum: int | None = None):
        if minimum < 0:
            raise ValueError(f"Minimum length cannot be negative: {minimum}")
        if maximum is not None and maximum < minimum:
            raise ValueError(f"Maximum length {maximum} is below minimum {minimum}")

        super().__init__(ValidationFailure(ValidationErrorKind.INSUFFICIENT_LENGTH, message))
        self.minimum = minimum
        self.maximum = maximum

    def check(self, value: str) -> bool:
        length = len(value)
        if length < self.minimum:
            return False
        return self.maximum is None or length <= self.maximum

    def __repr__(self) -> str:
        return f"LengthRule(minimum={self.minimum}, maximum={self.maximum})"


class RuleSet:
    """Ordered collection of rules applied to a single field."""

    def __init__(self, rules: Iterable[ValidationRule] = ()):
        self._rules: list[ValidationRule] = list(rules)

    def add(self, rule: ValidationRule) -> None:
        """Append a rule; rules are evaluated in the order they were added."""
        self._rules.append(rule)

    def validate(self, value: str) -> ValidationResult:
        """
        Evaluate every rule against the value.

        Args:
            value: The field value to check

        Returns:
            Valid if all rules pass, otherwise Invalid with the descriptor of
            every failing rule in declaration order
        """
        failures = [rule.failure for rule in self._rules if not rule.check(value)]
        if failures:
            return ValidationResult.invalid(failures)
        return ValidationResult.valid()

    def __iter__(self) -> Iterator[ValidationRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
