"""
Rules and fields of the login form.
"""

from __future__ import annotations

from .field import Field
from .rules import EmailPattern, LengthRule, PatternRule, RuleSet

EMAIL_FIELD = "email"
PASSWORD_FIELD = "password"

EMAIL_INVALID_MESSAGE = "Email address is invalid"
DEFAULT_PASSWORD_MIN_LENGTH = 8


def password_length_message(min_length: int = DEFAULT_PASSWORD_MIN_LENGTH) -> str:
    """Return the error shown when a password is shorter than ``min_length``."""
    return f"Password must be at least {min_length} characters"


def email_rule(pattern: EmailPattern = EmailPattern.STANDARD) -> PatternRule:
    """
    Build the rule an email address must satisfy.

    Args:
        pattern: STANDARD for the strict address grammar, SIMPLE for "x@y.z"

    Returns:
        PatternRule reporting EMAIL_INVALID_MESSAGE on mismatch
    """
    return PatternRule(pattern, EMAIL_INVALID_MESSAGE)


def password_length_rule(min_length: int = DEFAULT_PASSWORD_MIN_LENGTH) -> LengthRule:
    """Build the minimum-length rule for passwords."""
    return LengthRule(password_length_message(min_length), minimum=min_length)


def build_login_fields(
    email_pattern: EmailPattern = EmailPattern.STANDARD,
    password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
    trim_email: bool = True,
) -> list[Field]:
    """
    Build the login form fields in tab order.

    Args:
        email_pattern: Pattern the email address must match
        password_min_length: Minimum number of password characters
        trim_email: Strip surrounding whitespace from the email on submission

    Returns:
        List of [email, password] fields
    """
    email = Field(EMAIL_FIELD, RuleSet([email_rule(email_pattern)]), trim=trim_email)
    password = Field(PASSWORD_FIELD, RuleSet([password_length_rule(password_min_length)]))
    return [email, password]
