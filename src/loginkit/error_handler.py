"""
Central error reporting for LoginKit.

ErrorHandler is a process-wide QObject that turns exceptions into
BaseAppError records, writes them to the login error log and emits
errorOccurred for whichever view wants to show them. Nothing that reaches
the log may carry a credential: password-like context keys are redacted and
email addresses in context text are masked.
"""

from __future__ import annotations

import logging
import logging.handlers
import re
import sys
import threading
import traceback
from pathlib import Path
from typing import Any, ClassVar

from PySide6.QtCore import QObject, QStandardPaths, Signal

from .config import get_app_config_dir
from .errors import BaseAppError, ErrorSeverity, map_exception

SENSITIVE_KEYS = ("password", "token", "key", "secret")
MAX_CONTEXT_TEXT = 200
LOG_FILE_NAME = "login.log"

# Keeps the first character of the local part: "alice@example.com" -> "a***@example.com"
_EMAIL_LOCAL_PART = re.compile(r"([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@")


def mask_emails(text: str) -> str:
    """Mask the local part of every email address in ``text``."""
    return _EMAIL_LOCAL_PART.sub(r"\1***@", text)


class ErrorHandler(QObject):
    """
    Singleton that logs login errors and broadcasts them.

    Validation failures arrive with LOW severity and are logged at INFO; any
    other error is logged at ERROR.
    """

    errorOccurred = Signal(object)  # BaseAppError

    _instance: ClassVar[ErrorHandler | None] = None
    _logger: ClassVar[logging.Logger | None] = None

    def __new__(cls) -> ErrorHandler:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if hasattr(self, "_initialized"):
            return

        super().__init__()
        self._initialized = True
        self._saved_excepthook: Any = None
        self._saved_threading_excepthook: Any = None
        self._hooks_installed = False

        self._setup_logging()

    @property
    def hooks_installed(self) -> bool:
        return self._hooks_installed

    def capture(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Convert an exception into a BaseAppError with scrubbed context.

        Args:
            exception: The exception to convert
            context: Extra information about where it happened

        Returns:
            The BaseAppError, with a "traceback" entry added to its context
        """
        app_error = map_exception(exception, self._scrub_context(context or {}))

        technical = app_error.technical_message or f"{type(exception).__name__}: {exception}"
        app_error.technical_message = mask_emails(technical)

        if "traceback" not in app_error.context:
            if exception.__traceback__ is not None:
                lines = traceback.format_exception(type(exception), exception, exception.__traceback__)
                app_error.context["traceback"] = mask_emails("".join(lines))
            else:
                app_error.context["traceback"] = mask_emails(f"{type(exception).__name__}: {exception}\n")

        return app_error

    def handle(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Capture, log and broadcast an exception.

        SystemExit and KeyboardInterrupt are re-raised untouched.

        Returns:
            The BaseAppError that was emitted
        """
        if isinstance(exception, SystemExit | KeyboardInterrupt):
            raise exception

        app_error = self.capture(exception, context)

        if self._logger:
            level = logging.INFO if app_error.severity == ErrorSeverity.LOW else logging.ERROR
            self._logger.log(
                level,
                f"[{app_error.code.value}] {mask_emails(app_error.user_message)}",
                extra={
                    "app_code": app_error.code.value,
                    "field": app_error.context.get("field", "-"),
                },
            )

        self.errorOccurred.emit(app_error)
        return app_error

    def _setup_logging(self) -> None:
        """Attach a rotating file handler for the login error log."""
        try:
            location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
            logs_dir = (Path(location) if location else get_app_config_dir()) / "logs"
            logs_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logging.getLogger(__name__).error(f"Login error log disabled: {e}")
            return

        logger = logging.getLogger("loginkit.errors")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        ErrorHandler._logger = logger

        if logger.handlers:
            return

        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)s | field=%(field)s | code=%(app_code)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler = logging.handlers.RotatingFileHandler(
            logs_dir / LOG_FILE_NAME,
            maxBytes=5_242_880,  # 5MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        if __debug__:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            console_handler.setLevel(logging.WARNING)
            logger.addHandler(console_handler)

    @staticmethod
    def _scrub_context(context: dict[str, Any]) -> dict[str, Any]:
        """Redact credential keys, mask email addresses and shorten long values."""
        scrubbed: dict[str, Any] = {}
        for key, value in context.items():
            if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
                scrubbed[key] = "[REDACTED]"
                continue

            text = value if isinstance(value, str) else repr(value)
            text = mask_emails(text)
            if len(text) > MAX_CONTEXT_TEXT:
                text = text[:MAX_CONTEXT_TEXT] + "..."
            scrubbed[key] = text
        return scrubbed

    def install_hooks(self) -> None:
        """
        Route unhandled exceptions from the main thread and worker threads here.

        The hooks active at install time are saved and put back by
        restore_hooks(). Installing twice keeps the first saved hooks.
        """
        if self._hooks_installed:
            return

        saved_excepthook = self._saved_excepthook = sys.excepthook
        saved_threading_excepthook = self._saved_threading_excepthook = threading.excepthook
        self._hooks_installed = True

        def excepthook(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: Any) -> None:
            if not isinstance(exc_value, Exception):
                saved_excepthook(exc_type, exc_value, exc_traceback)
                return
            self.handle(exc_value, {"source": "sys.excepthook"})

        def threading_excepthook(args: threading.ExceptHookArgs) -> None:
            if not isinstance(args.exc_value, Exception):
                saved_threading_excepthook(args)
                return
            thread_name = args.thread.name if args.thread else "unknown"
            self.handle(args.exc_value, {"source": "threading.excepthook", "thread": thread_name})

        sys.excepthook = excepthook
        threading.excepthook = threading_excepthook

    def restore_hooks(self) -> None:
        """Put back the hooks saved by install_hooks()."""
        if not self._hooks_installed:
            return

        sys.excepthook = self._saved_excepthook
        threading.excepthook = self._saved_threading_excepthook
        self._saved_excepthook = None
        self._saved_threading_excepthook = None
        self._hooks_installed = False


def get_error_handler() -> ErrorHandler:
    """Get the singleton ErrorHandler instance."""
    return ErrorHandler()


def setup_error_handling() -> ErrorHandler:
    """Create the error handler and install its exception hooks."""
    handler = get_error_handler()
    handler.install_hooks()
    return handler


def init_logging(level: str = "INFO") -> None:
    """
    Configure root logging and open the login error log.

    Args:
        level: Name of the root log level, e.g. "DEBUG"; unknown names mean INFO
    """
    get_error_handler()

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
