"""
Form field model.
"""

from __future__ import annotations

from collections.abc import Iterable

from .result import ValidationResult
from .rules import RuleSet, ValidationRule


class Field:
    """
    A named form input with its current value and validation rules.

    ``last_result`` always holds the most recently computed result, while
    ``error_message`` is what the display layer shows (None when hidden).
    """

    def __init__(
        self,
        key: str,
        rules: RuleSet | Iterable[ValidationRule] = (),
        value: str = "",
        trim: bool = False,
    ):
        self.key = key
        self.rules = rules if isinstance(rules, RuleSet) else RuleSet(rules)
        self.value = value
        self.trim = trim
        self.last_result: ValidationResult | None = None
        self.error_message: str | None = None

    @property
    def error_visible(self) -> bool:
        """True if an error message is currently displayed for this field."""
        return self.error_message is not None

    def submitted_value(self) -> str:
        """Return the value handed to the host on submission."""
        return self.value.strip() if self.trim else self.value

    def __repr__(self) -> str:
        return f"Field(key={self.key!r}, rules={len(self.rules)}, error={self.error_message!r})"
