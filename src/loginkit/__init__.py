"""
LoginKit: a validated email/password login form for PySide6 applications.

The validation core lives in :mod:`loginkit.validation`; :class:`LoginForm`
is the controller a view binds to and a host application listens to.
"""

from .form_state import FormState, SubmissionState
from .login_form import LoginForm

__all__ = ["FormState", "LoginForm", "SubmissionState"]
