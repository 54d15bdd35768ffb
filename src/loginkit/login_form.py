"""
Login form controller.

LoginForm owns the form's fields, validation policy and submission state
machine. It knows nothing about widgets: a view feeds it input events and
listens to its signals, and the host application listens for
loginRequested, forgotPasswordRequested and cancelRequested.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from PySide6.QtCore import QObject, Signal

from .config_manager import ConfigManager
from .error_handler import get_error_handler
from .errors import create_validation_error
from .form_state import FormState, SubmissionState
from .validation.field import Field
from .validation.form_validator import FormValidator
from .validation.login_rules import EMAIL_FIELD, PASSWORD_FIELD, build_login_fields
from .validation.result import ValidationResult
from .validation.rules import EmailPattern


class LoginForm(QObject):
    """
    Controller for an email/password login form.

    Signals:
        loginRequested(str, str): Validation passed; email and password to log in with
        forgotPasswordRequested(): The user asked to recover the password
        cancelRequested(): The user backed out of the form
        fieldErrorChanged(str, str): Visible error for a field changed ("" clears it)
        focusRequested(str): The view should focus the field with this key
        stateChanged(object): New SubmissionState
        loginEnabledChanged(bool): Whether the login action is available
    """

    loginRequested = Signal(str, str)  # email, password
    forgotPasswordRequested = Signal()
    cancelRequested = Signal()
    fieldErrorChanged = Signal(str, str)  # key, message
    focusRequested = Signal(str)  # key
    stateChanged = Signal(object)  # SubmissionState
    loginEnabledChanged = Signal(bool)

    def __init__(
        self,
        fields: Iterable[Field] | None = None,
        parent: QObject | None = None,
        config_manager: ConfigManager | None = None,
    ):
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._error_handler = get_error_handler()
        self._config_manager = config_manager

        self._validator = FormValidator(fields if fields is not None else build_login_fields(), FormState())
        missing = [key for key in (EMAIL_FIELD, PASSWORD_FIELD) if key not in self._validator.keys]
        if missing:
            raise ValueError(f"Login form requires fields {missing}")

        self._state = SubmissionState.IDLE
        self._login_in_progress = False

    @classmethod
    def from_config(cls, config_manager: ConfigManager, parent: QObject | None = None) -> LoginForm:
        """
        Build a login form from stored settings.

        Args:
            config_manager: Source of validation settings
            parent: Parent QObject for lifetime management

        Returns:
            LoginForm with the email prefilled when remember_email is enabled
        """
        fields = build_login_fields(
            email_pattern=EmailPattern[config_manager.get_checked("email_pattern").upper()],
            password_min_length=config_manager.get_checked("password_min_length"),
            trim_email=config_manager.get_checked("trim_email"),
        )
        form = cls(fields, parent=parent, config_manager=config_manager)

        if config_manager.get("remember_email"):
            last_email = config_manager.get("last_email")
            if last_email:
                form.set_field_value(EMAIL_FIELD, last_email)

        return form

    @property
    def validator(self) -> FormValidator:
        return self._validator

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def submission_attempted(self) -> bool:
        return self._validator.state.submission_attempted

    @property
    def login_in_progress(self) -> bool:
        return self._login_in_progress

    @login_in_progress.setter
    def login_in_progress(self, in_progress: bool) -> None:
        """Set by the host while its login call runs; disables the login action."""
        if in_progress == self._login_in_progress:
            return
        self._login_in_progress = in_progress
        self.loginEnabledChanged.emit(not in_progress)

    def field_value(self, key: str) -> str:
        return self._validator.field(key).value

    def field_error(self, key: str) -> str | None:
        """Return the error currently shown for a field, or None."""
        return self._validator.field(key).error_message

    def set_field_value(self, key: str, value: str) -> ValidationResult:
        """
        Feed an input change into the form.

        Args:
            key: Field identifier
            value: The new input value

        Returns:
            The field's new validation result, shown only after a submit attempt
        """
        field = self._validator.field(key)
        previous_message = field.error_message

        result = self._validator.on_field_changed(key, value)
        self._publish_error(field, previous_message)
        return result

    def submit(self) -> bool:
        """
        Attempt to submit the form.

        Marks the submission as attempted, validates every field and, if all
        pass, emits loginRequested with the email and password values.

        Returns:
            True if loginRequested was emitted
        """
        if self._login_in_progress:
            self._logger.debug("Submit ignored while a login is in progress")
            return False

        self._validator.mark_submission_attempted()

        previous_messages = {field.key: field.error_message for field in self._validator.fields}
        overall_valid, _ = self._validator.validate_all()
        for field in self._validator.fields:
            self._publish_error(field, previous_messages[field.key])

        if not overall_valid:
            self._set_state(SubmissionState.ATTEMPTED_INVALID)
            self._logger.info(f"Login blocked: invalid fields {sorted(self._validator.errors)}")
            self._set_state(SubmissionState.IDLE)
            return False

        self._set_state(SubmissionState.ATTEMPTED_VALID)
        email = self._validator.field(EMAIL_FIELD).submitted_value()
        password = self._validator.field(PASSWORD_FIELD).submitted_value()
        self._remember_email(email)

        self._set_state(SubmissionState.SUBMITTED)
        self._logger.info("Login requested")
        self.loginRequested.emit(email, password)
        return True

    def advance_from(self, key: str) -> None:
        """
        Handle a return/next action on a field.

        Focus moves to the next field in tab order; on the last field the
        action submits the form exactly as the login button does.
        """
        next_key = self._validator.next_field_key(key)
        if next_key is not None:
            self.focusRequested.emit(next_key)
        else:
            self.submit()

    def forgot_password(self) -> None:
        self.forgotPasswordRequested.emit()

    def cancel(self) -> None:
        self.cancelRequested.emit()

    def _set_state(self, state: SubmissionState) -> None:
        self._state = state
        self.stateChanged.emit(state)

    def _publish_error(self, field: Field, previous_message: str | None) -> None:
        """Emit fieldErrorChanged and log the error when the visible message changed."""
        if field.error_message == previous_message:
            return

        self.fieldErrorChanged.emit(field.key, field.error_message or "")

        first_error = field.last_result.first_error if field.last_result is not None else None
        if field.error_message and first_error:
            self._error_handler.handle(create_validation_error(field.key, first_error))

    def _remember_email(self, email: str) -> None:
        if self._config_manager and self._config_manager.get("remember_email"):
            self._config_manager.set("last_email", email)
