"""
Shared fixtures for LoginKit tests.
"""

import os

# Set offscreen platform to prevent display errors on headless systems
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtCore import QStandardPaths
from PySide6.QtWidgets import QApplication

from loginkit.validation.login_rules import build_login_fields

# Keep logs and settings out of the real user directories
QStandardPaths.setTestModeEnabled(True)


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Create QApplication for all tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def login_fields():
    """Fresh [email, password] fields with the default rules."""
    return build_login_fields()
