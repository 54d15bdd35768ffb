"""
Rule evaluation for a whole form.

FormValidator holds the form's fields in declaration (tab) order, validates
them on demand or on change, and applies the display policy: errors computed
before the first submission attempt are kept but not shown.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..form_state import FormState
from .field import Field
from .result import ValidationResult

logger = logging.getLogger(__name__)


class FormValidator:
    """Evaluates field rules and decides whether the form may be submitted."""

    def __init__(self, fields: Iterable[Field], state: FormState | None = None):
        self._fields: dict[str, Field] = {}
        for field in fields:
            if field.key in self._fields:
                raise ValueError(f"Duplicate field key: '{field.key}'")
            self._fields[field.key] = field

        self.state = state or FormState()

    @property
    def fields(self) -> list[Field]:
        """Fields in declaration order."""
        return list(self._fields.values())

    @property
    def keys(self) -> list[str]:
        """Field keys in declaration order."""
        return list(self._fields)

    def field(self, key: str) -> Field:
        """
        Look up a field by key.

        Raises:
            KeyError: If no field has this key
        """
        try:
            return self._fields[key]
        except KeyError:
            raise KeyError(f"Unknown field: '{key}'") from None

    @staticmethod
    def validate_field(field: Field) -> ValidationResult:
        """
        Evaluate the field's rules against the value it would submit. No side effects.

        Fields with ``trim`` set are checked without surrounding whitespace,
        so the value that passes is the value handed to the host.
        """
        return field.rules.validate(field.submitted_value())

    def validate_all(self) -> tuple[bool, dict[str, ValidationResult]]:
        """
        Validate every field in declaration order and update displayed errors.

        Each invalid field shows its first error message, each valid field has
        its message cleared.

        Returns:
            Tuple of (overall_valid, results keyed by field key)
        """
        results: dict[str, ValidationResult] = {}
        for field in self._fields.values():
            result = self.validate_field(field)
            field.last_result = result
            self._display(field, result)
            results[field.key] = result

        overall_valid = all(result.is_valid for result in results.values())
        logger.debug(f"Validated {len(results)} fields, overall_valid={overall_valid}")
        return overall_valid, results

    def on_field_changed(self, key: str, value: str) -> ValidationResult:
        """
        Handle an input change for a field.

        The result is always computed and stored; the displayed error is only
        updated once a submission has been attempted.

        Args:
            key: Field identifier
            value: The new input value

        Returns:
            The field's new validation result
        """
        field = self.field(key)
        field.value = value
        result = self.validate_field(field)
        field.last_result = result

        if self.state.submission_attempted:
            self._display(field, result)

        return result

    def mark_submission_attempted(self) -> None:
        """Record that the user tried to submit; errors become visible from now on."""
        self.state.submission_attempted = True

    def next_field_key(self, key: str) -> str | None:
        """Return the key after ``key`` in tab order, or None if it is the last."""
        keys = list(self._fields)
        index = keys.index(self.field(key).key)
        return keys[index + 1] if index + 1 < len(keys) else None

    @property
    def errors(self) -> dict[str, str]:
        """Currently displayed error messages, keyed by field."""
        return {field.key: field.error_message for field in self._fields.values() if field.error_message is not None}

    @staticmethod
    def _display(field: Field, result: ValidationResult) -> None:
        first_error = result.first_error
        field.error_message = first_error.message if first_error else None
