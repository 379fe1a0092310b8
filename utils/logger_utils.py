from __future__ import annotations

import logging
import sys
import warnings
from logging import Formatter, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Self, TextIO

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = ["LoggerUtils"]

_LOG_FILE_SIZE: Final[int] = 2 * 1024 * 1024  # 2MB
_LOG_BACKUP_COUNT: Final[int] = 2

DEFAULT_NAMESPACE: Final[str] = "TranslationService"
SERVER_LOGGER_NAME: Final[str] = "aiohttp"

_CONSOLE_FORMAT: Final[str] = "%(levelname)s: %(message)s"
_FILE_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s %(process)5d %(lineno)4d %(name)-40s\t%(funcName)s\t%(message)s"


class LoggerUtils:
    """Process-wide logging setup for the translation service.

    The first instantiation attaches a console handler (WARNING and above) and, when a file name
    is given, a rotating UTF-8 file handler (DEBUG and above) to the service namespace logger and
    to the aiohttp server loggers, so access and server errors land in the same log.
    Later instantiations return the same object and leave the handlers untouched.

    Module loggers are obtained with ``LoggerUtils.get_logger(__name__)``.

    Attributes:
        _configured (bool): Whether handlers have already been attached.
        _instance (LoggerUtils | None): The singleton instance.
    """

    _configured: ClassVar[bool] = False
    _instance: ClassVar[Self | None] = None

    def __new__(cls, *args, **kwargs) -> Self:
        _ = args, kwargs
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, filename: str | Path = "", *, debug: bool = False) -> None:
        """Attach the handlers and set the level.

        Args:
            filename (str | Path): Log file path. If empty, file logging is disabled.
            debug (bool): Log at DEBUG instead of INFO.
        """
        if LoggerUtils._configured:
            return

        self.level: int = logging.DEBUG if debug else logging.INFO
        self.loggers: tuple[logging.Logger, ...] = (
            logging.getLogger(DEFAULT_NAMESPACE),
            logging.getLogger(SERVER_LOGGER_NAME),
        )
        self.handlers: list[logging.Handler] = [self._console_handler()]
        filename = str(filename)
        if filename.strip():
            file_handler: RotatingFileHandler | None = self._file_handler(filename)
            if file_handler is not None:
                self.handlers.append(file_handler)

        for target in self.loggers:
            target.setLevel(self.level)
            for handler in self.handlers:
                target.addHandler(handler)

        if len(self.handlers) == 1:
            self.service_logger.info("No log file in use. Logging to the console only.")

        warnings.showwarning = self.warning_to_log
        LoggerUtils._configured = True

    @property
    def service_logger(self) -> logging.Logger:
        return self.loggers[0]

    def warning_to_log(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        """Route ``warnings.warn`` output to the log (signature of ``warnings.showwarning``)."""
        _ = file, line
        self.service_logger.warning("%s:%d: %s: %s", filename, lineno, category.__name__, message)

    @staticmethod
    def _console_handler() -> logging.Handler:
        # sys.stderr is None when the process has no console.
        if sys.stderr is None:
            return logging.NullHandler()
        handler: StreamHandler[TextIO] = StreamHandler(sys.stderr)
        handler.setLevel(logging.WARNING)
        handler.setFormatter(Formatter(_CONSOLE_FORMAT))
        return handler

    @staticmethod
    def _file_handler(filename: str) -> RotatingFileHandler | None:
        try:
            handler = RotatingFileHandler(
                filename=filename,
                maxBytes=_LOG_FILE_SIZE,
                backupCount=_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except (FileNotFoundError, PermissionError):
            logging.getLogger(DEFAULT_NAMESPACE).error(
                "Cannot open log file: %s\nLogging to the file is not performed.", filename
            )
            return None

        handler.setLevel(logging.DEBUG)
        handler.setFormatter(Formatter(_FILE_FORMAT))
        return handler

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Get a logger below the service namespace.

        Args:
            name (str | None): Logger name, usually ``__name__``. If None, the namespace root is returned.

        Returns:
            logging.Logger: The logger instance.
        """
        return logging.getLogger(f"{DEFAULT_NAMESPACE}.{name}" if name else DEFAULT_NAMESPACE)
