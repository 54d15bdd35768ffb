"""
Main entry point for the LoginKit demo application.
"""

import logging
import sys

from PySide6.QtWidgets import QApplication

from loginkit.config_manager import ConfigManager
from loginkit.error_handler import init_logging, mask_emails, setup_error_handling
from loginkit.login_form import LoginForm
from loginkit_gui.login_window import LoginWindow

logger = logging.getLogger(__name__)


def main() -> int:
    """Main application entry point."""
    app = QApplication(sys.argv)

    config_manager = ConfigManager()
    init_logging(config_manager.get("log_level"))
    setup_error_handling()

    form = LoginForm.from_config(config_manager)
    window = LoginWindow(form)

    form.loginRequested.connect(lambda email, _password: logger.info(f"Login requested for {mask_emails(email)}"))
    form.forgotPasswordRequested.connect(lambda: logger.info("Password recovery requested"))
    form.cancelRequested.connect(window.close)

    window.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
