"""
Tests for the LoginForm controller: submission flow, signals and field advance.
"""

from unittest.mock import Mock, patch

import pytest

from loginkit.config_manager import ConfigManager
from loginkit.form_state import SubmissionState
from loginkit.login_form import LoginForm
from loginkit.validation.field import Field
from loginkit.validation.login_rules import EMAIL_INVALID_MESSAGE, build_login_fields, password_length_message
from loginkit.validation.rules import EmailPattern, LengthRule, PatternRule


@pytest.fixture
def form():
    """LoginForm with the error handler patched out."""
    with patch("loginkit.login_form.get_error_handler") as mock_get_handler:
        mock_get_handler.return_value = Mock()
        yield LoginForm()


def fill(form, email, password):
    form.set_field_value("email", email)
    form.set_field_value("password", password)


class TestSubmit:
    """Test the submit action and the submission state machine."""

    def test_valid_submit_emits_login_requested(self, qtbot, form):
        """Test that a valid form hands the real field values to the host."""
        fill(form, "a@b.com", "abcdefgh")

        with qtbot.waitSignal(form.loginRequested, timeout=1000) as blocker:
            assert form.submit() is True

        assert blocker.args == ["a@b.com", "abcdefgh"]
        assert form.state == SubmissionState.SUBMITTED
        assert form.field_error("email") is None
        assert form.field_error("password") is None

    def test_email_is_trimmed_password_is_not(self, qtbot):
        """Test the values passed on submission."""
        with patch("loginkit.login_form.get_error_handler"):
            form = LoginForm(build_login_fields(email_pattern=EmailPattern.SIMPLE))
        fill(form, " a@b.com ", " spaced password ")

        with qtbot.waitSignal(form.loginRequested, timeout=1000) as blocker:
            form.submit()

        assert blocker.args == ["a@b.com", " spaced password "]

    def test_surrounding_spaces_accepted_by_standard_pattern(self, qtbot, form):
        """Test that a trailing space left by autocomplete does not block login."""
        fill(form, "a@b.com ", "abcdefgh")

        with qtbot.waitSignal(form.loginRequested, timeout=1000) as blocker:
            assert form.submit() is True

        assert blocker.args == ["a@b.com", "abcdefgh"]
        assert form.field_error("email") is None

    def test_invalid_submit_shows_errors(self, qtbot, form):
        """Test that a failed submit blocks login and reveals every error."""
        fill(form, "not-an-email", "short")
        requested = []
        form.loginRequested.connect(lambda email, password: requested.append((email, password)))

        assert form.submit() is False

        assert requested == []
        assert form.submission_attempted is True
        assert form.field_error("email") == EMAIL_INVALID_MESSAGE
        assert form.field_error("password") == password_length_message()
        assert form.state == SubmissionState.IDLE

    def test_state_transitions_on_invalid_submit(self, form):
        """Test Idle -> AttemptedInvalid -> Idle."""
        states = []
        form.stateChanged.connect(states.append)

        form.submit()

        assert states == [SubmissionState.ATTEMPTED_INVALID, SubmissionState.IDLE]

    def test_state_transitions_on_valid_submit(self, form):
        """Test Idle -> AttemptedValid -> Submitted."""
        fill(form, "a@b.com", "abcdefgh")
        states = []
        form.stateChanged.connect(states.append)

        form.submit()

        assert states == [SubmissionState.ATTEMPTED_VALID, SubmissionState.SUBMITTED]

    def test_correct_and_retry(self, qtbot, form):
        """Test that the user can fix errors and submit again."""
        fill(form, "bad", "short")
        form.submit()

        fill(form, "a@b.com", "abcdefgh")
        assert form.field_error("email") is None

        with qtbot.waitSignal(form.loginRequested, timeout=1000):
            assert form.submit() is True

    def test_submit_ignored_while_login_in_progress(self, form):
        """Test that the login action is disabled while the host logs in."""
        fill(form, "a@b.com", "abcdefgh")
        enabled = []
        requested = []
        form.loginEnabledChanged.connect(enabled.append)
        form.loginRequested.connect(lambda email, password: requested.append((email, password)))

        form.login_in_progress = True
        assert form.submit() is False
        form.login_in_progress = False
        assert form.submit() is True

        assert enabled == [False, True]
        assert requested == [("a@b.com", "abcdefgh")]

    def test_visible_errors_reported_to_error_handler(self, form):
        """Test that newly shown errors are logged without the field value."""
        fill(form, "bad", "secret")

        form.submit()

        handled = [call.args[0] for call in form._error_handler.handle.call_args_list]
        assert [error.field for error in handled] == ["email", "password"]
        assert [error.user_message for error in handled] == [EMAIL_INVALID_MESSAGE, password_length_message()]
        assert all("value" not in error.context for error in handled)

    def test_error_shown_while_typing_is_reported_once(self, form):
        """Test that a live error is reported when it appears, not on every keystroke."""
        fill(form, "a@b.com", "abcdefgh")
        form.submit()
        form._error_handler.handle.reset_mock()

        form.set_field_value("password", "abc")
        form.set_field_value("password", "abcd")

        (call,) = form._error_handler.handle.call_args_list
        assert call.args[0].field == "password"


class TestLiveErrors:
    """Test per-keystroke error display."""

    def test_no_errors_before_submission_attempt(self, form):
        """Test that empty fields fail silently until the first submit."""
        changes = []
        form.fieldErrorChanged.connect(lambda key, message: changes.append((key, message)))

        fill(form, "", "")

        assert changes == []
        assert form.field_error("email") is None
        assert form.field_error("password") is None
        assert not form.set_field_value("email", "").is_valid

    def test_errors_update_live_after_attempt(self, form):
        """Test that changes after a submit update errors immediately."""
        form.submit()
        changes = []
        form.fieldErrorChanged.connect(lambda key, message: changes.append((key, message)))

        form.set_field_value("email", "a@b.com")
        form.set_field_value("email", "a@b.com!")

        assert changes == [("email", ""), ("email", EMAIL_INVALID_MESSAGE)]

    def test_unchanged_message_emits_nothing(self, form):
        """Test that typing within the same error state does not re-emit."""
        form.submit()
        changes = []
        form.fieldErrorChanged.connect(lambda key, message: changes.append((key, message)))

        form.set_field_value("password", "abc")
        form.set_field_value("password", "abcd")

        assert changes == []


class TestFieldAdvance:
    """Test return/next navigation between fields."""

    def test_advance_moves_focus_to_next_field(self, qtbot, form):
        """Test that return on the email field focuses the password field."""
        with qtbot.waitSignal(form.focusRequested, timeout=1000) as blocker:
            form.advance_from("email")

        assert blocker.args == ["password"]
        assert form.submission_attempted is False

    def test_advance_from_last_field_submits(self, qtbot, form):
        """Test that return on the last field behaves like the login button."""
        fill(form, "a@b.com", "abcdefgh")

        with qtbot.waitSignal(form.loginRequested, timeout=1000):
            form.advance_from("password")

        assert form.state == SubmissionState.SUBMITTED

    def test_advance_from_last_field_validates_like_submit(self, form):
        """Test that an invalid form reveals errors when submitted via return."""
        fill(form, "not-an-email", "short")

        form.advance_from("password")

        assert form.submission_attempted is True
        assert form.field_error("email") == EMAIL_INVALID_MESSAGE
        assert form.field_error("password") == password_length_message()


class TestHostActions:
    """Test actions without preconditions."""

    def test_forgot_password(self, qtbot, form):
        with qtbot.waitSignal(form.forgotPasswordRequested, timeout=1000):
            form.forgot_password()

    def test_cancel(self, qtbot, form):
        with qtbot.waitSignal(form.cancelRequested, timeout=1000):
            form.cancel()


class TestFromConfig:
    """Test building the form from settings."""

    def make_config(self, **overrides):
        values = {
            "email_pattern": "standard",
            "password_min_length": 8,
            "trim_email": True,
            "remember_email": False,
            "last_email": "",
        }
        values.update(overrides)
        config_manager = Mock()
        config_manager.get.side_effect = lambda key: values[key]
        config_manager.get_checked.side_effect = lambda key: values[key]
        return config_manager

    def test_uses_configured_minimum(self):
        """Test that the password rule follows password_min_length."""
        with patch("loginkit.login_form.get_error_handler"):
            configured = LoginForm.from_config(self.make_config(password_min_length=12))

        configured.set_field_value("email", "a@b.com")
        configured.set_field_value("password", "abcdefghij")

        assert configured.submit() is False
        assert configured.field_error("password") == "Password must be at least 12 characters"

    def test_prefills_and_remembers_email(self):
        """Test that remember_email restores and stores the last email."""
        config_manager = self.make_config(remember_email=True, last_email="old@example.com")
        with patch("loginkit.login_form.get_error_handler"):
            configured = LoginForm.from_config(config_manager)

        assert configured.field_value("email") == "old@example.com"

        configured.set_field_value("email", " new@example.com ")
        configured.set_field_value("password", "abcdefgh")
        configured.submit()

        config_manager.set.assert_called_once_with("last_email", "new@example.com")

    def test_invalid_stored_settings_fall_back_to_defaults(self):
        """Test that out-of-range settings do not stop the form from being built."""
        stored = {"email_pattern": "Standard ", "password_min_length": 0}
        with (
            patch("loginkit.config_manager.QSettings") as mock_qsettings_class,
            patch("loginkit.config_manager.setup_qsettings"),
            patch("loginkit.login_form.get_error_handler"),
        ):
            mock_qsettings_class.return_value.value.side_effect = lambda key, default: stored.get(key, default)
            configured = LoginForm.from_config(ConfigManager())

        configured.set_field_value("email", "a@b.com")
        configured.set_field_value("password", "short")

        assert configured.submit() is False
        assert configured.field_error("password") == password_length_message()
        assert configured.field_error("email") is None


class TestFieldSet:
    """Test the fields a login form accepts."""

    def test_rejects_fields_without_credentials(self):
        """Test that a form without email and password fields cannot be built."""
        fields = [Field("username", [LengthRule("Username is required", minimum=1)])]

        with patch("loginkit.login_form.get_error_handler"), pytest.raises(ValueError, match="email"):
            LoginForm(fields)

    def test_accepts_extra_fields(self, qtbot):
        """Test that additional fields are validated alongside the credentials."""
        fields = [*build_login_fields(), Field("otp", [PatternRule(r"\d{6}", "Enter the 6-digit code")])]
        with patch("loginkit.login_form.get_error_handler"):
            form = LoginForm(fields)
        fill(form, "a@b.com", "abcdefgh")

        assert form.submit() is False
        assert form.field_error("otp") == "Enter the 6-digit code"

        with qtbot.waitSignal(form.loginRequested, timeout=1000) as blocker:
            form.set_field_value("otp", "123456")
            form.submit()

        assert blocker.args == ["a@b.com", "abcdefgh"]
