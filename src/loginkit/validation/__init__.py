"""
Form validation for LoginKit.

This package provides validation rules, results and the form-level validator
that decides when errors are shown and whether a form may be submitted.
"""

from .field import Field
from .form_validator import FormValidator
from .login_rules import build_login_fields
from .result import ValidationErrorKind, ValidationFailure, ValidationResult
from .rules import EmailPattern, LengthRule, PatternRule, RuleSet, ValidationRule

__all__ = [
    "EmailPattern",
    "Field",
    "FormValidator",
    "LengthRule",
    "PatternRule",
    "RuleSet",
    "ValidationErrorKind",
    "ValidationFailure",
    "ValidationResult",
    "ValidationRule",
    "build_login_fields",
]
