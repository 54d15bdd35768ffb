"""
PySide6 widgets for LoginKit.
"""

from .login_window import LoginWindow

__all__ = ["LoginWindow"]
