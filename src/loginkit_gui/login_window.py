"""
Login widget for LoginKit.

This module binds QLineEdit inputs and buttons to a LoginForm controller and
renders the controller's visible field errors.
"""

from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from loginkit.login_form import LoginForm
from loginkit.validation.login_rules import EMAIL_FIELD, PASSWORD_FIELD


class LoginWindow(QWidget):
    """
    Email/password login screen.

    The widget only forwards input events to its LoginForm and reflects the
    form's signals; all validation decisions live in the controller.
    """

    def __init__(self, form: LoginForm | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self.form = form if form is not None else LoginForm(parent=self)

        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        self.setObjectName("loginWindow")
        self.setWindowTitle("Log in")
        self.setAccessibleName("Login form")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(8)

        self.email_input = QLineEdit()
        self.email_input.setObjectName("emailInput")
        self.email_input.setPlaceholderText("Email")
        self.email_input.setAccessibleName("Email address")
        self.email_input.setText(self.form.field_value(EMAIL_FIELD))
        layout.addWidget(self.email_input)

        self.email_error_label = self._create_error_label("emailError")
        layout.addWidget(self.email_error_label)

        self.password_input = QLineEdit()
        self.password_input.setObjectName("passwordInput")
        self.password_input.setPlaceholderText("Password")
        self.password_input.setAccessibleName("Password")
        self.password_input.setEchoMode(QLineEdit.EchoMode.Password)
        layout.addWidget(self.password_input)

        self.password_error_label = self._create_error_label("passwordError")
        layout.addWidget(self.password_error_label)

        self.login_button = QPushButton("Log in")
        self.login_button.setObjectName("loginButton")
        self.login_button.setDefault(True)
        layout.addWidget(self.login_button)

        links_layout = QHBoxLayout()
        self.back_button = QPushButton("Back")
        self.back_button.setObjectName("backButton")
        self.back_button.setFlat(True)
        links_layout.addWidget(self.back_button)
        links_layout.addStretch()

        self.forgot_password_button = QPushButton("Forgot password?")
        self.forgot_password_button.setObjectName("forgotPasswordButton")
        self.forgot_password_button.setFlat(True)
        links_layout.addWidget(self.forgot_password_button)
        layout.addLayout(links_layout)

        self._inputs: dict[str, QLineEdit] = {
            EMAIL_FIELD: self.email_input,
            PASSWORD_FIELD: self.password_input,
        }
        self._error_labels: dict[str, QLabel] = {
            EMAIL_FIELD: self.email_error_label,
            PASSWORD_FIELD: self.password_error_label,
        }

        QWidget.setTabOrder(self.email_input, self.password_input)
        QWidget.setTabOrder(self.password_input, self.login_button)

    def _create_error_label(self, name: str) -> QLabel:
        label = QLabel()
        label.setObjectName(name)
        label.setStyleSheet("color: #c62828; font-size: 11px;")
        label.setVisible(False)
        return label

    def _connect_signals(self) -> None:
        """Wire widget events to the controller and back."""
        for key, line_edit in self._inputs.items():
            line_edit.textChanged.connect(lambda text, key=key: self.form.set_field_value(key, text))
            line_edit.returnPressed.connect(lambda key=key: self.form.advance_from(key))

        self.login_button.clicked.connect(self.form.submit)
        self.forgot_password_button.clicked.connect(self.form.forgot_password)
        self.back_button.clicked.connect(self.form.cancel)

        self.form.fieldErrorChanged.connect(self._on_field_error_changed)
        self.form.focusRequested.connect(self._on_focus_requested)
        self.form.loginEnabledChanged.connect(self.login_button.setEnabled)

    def _on_field_error_changed(self, key: str, message: str) -> None:
        """Show or clear the error for a field."""
        line_edit = self._inputs.get(key)
        label = self._error_labels.get(key)
        if line_edit is None or label is None:
            self._logger.warning(f"No widget for field '{key}'")
            return

        label.setText(message)
        label.setVisible(bool(message))

        line_edit.setProperty("hasError", bool(message))
        line_edit.style().polish(line_edit)  # Refresh styling

    def _on_focus_requested(self, key: str) -> None:
        line_edit = self._inputs.get(key)
        if line_edit is not None:
            line_edit.setFocus()
