#!/usr/bin/env python3
"""Progress logging for PasteCleaner.

Commands report what they do one step per line, for example
``Removing prefab entities... done | file=base.json changed=3``.
Keyword details given to a call are appended as ``key=value`` pairs and
attached to the record as ``details``. While a file of a batch is being
processed its name is pushed with ``for_file()`` and added to every line.

Example:
    >>> logger = Logger(level="DEBUG")
    >>> with logger.for_file("bases/base.json"):
    ...     logger.progress("Removing prefab entities", "done", changed=3)
"""

import logging
import logging.handlers
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotation of the --log-file output
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

FAILED = "failed"


def _formatted(handler: logging.Handler) -> logging.Handler:
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


class Logger:
    """Console logger with optional rotating log file."""

    def __init__(
        self,
        name: str = "pastecleaner",
        level: str = "INFO",
        console: bool = True,
        log_file: Optional[Union[str, Path]] = None,
    ):
        """Initialize logger.

        Args:
            name: Name of the underlying standard logger
            level: One of LEVELS, case insensitive
            console: Write to stderr
            log_file: Also write to this file, rotated when it grows
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.handlers.clear()
        self.logger.propagate = False
        self._files: List[str] = []

        self.set_level(level)
        if console:
            self.logger.addHandler(_formatted(logging.StreamHandler()))
        if log_file:
            self.add_log_file(log_file)

    def set_level(self, level: str) -> None:
        """Set the minimum level.

        Raises:
            ValueError: If level is not one of LEVELS
        """
        name = str(level).upper()
        if name not in LEVELS:
            raise ValueError(f"Unknown log level: {level!r}")
        self.logger.setLevel(getattr(logging, name))

    def add_log_file(self, path: Union[str, Path]) -> logging.Handler:
        """Send every line to a rotating file as well."""
        handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
        )
        self.logger.addHandler(_formatted(handler))
        return handler

    @contextmanager
    def for_file(self, path: Union[str, Path]) -> Iterator[None]:
        """Tag lines logged inside the block with the file's name."""
        self._files.append(Path(path).name)
        try:
            yield
        finally:
            self._files.pop()

    def _emit(self, level: int, msg: str, details: Dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        if self._files:
            details = {"file": self._files[-1], **details}
        if details:
            msg = msg + " | " + " ".join(f"{k}={v}" for k, v in details.items())
        self.logger.log(level, msg, extra={"details": details})

    def debug(self, msg: str, **details) -> None:
        self._emit(logging.DEBUG, msg, details)

    def info(self, msg: str, **details) -> None:
        self._emit(logging.INFO, msg, details)

    def warning(self, msg: str, **details) -> None:
        self._emit(logging.WARNING, msg, details)

    def error(self, msg: str, **details) -> None:
        self._emit(logging.ERROR, msg, details)

    def progress(self, step: str, outcome: str, **details) -> None:
        """Log the outcome of one step as ``<step>... <outcome>``.

        Failed steps are logged as errors, the others as info.
        """
        level = logging.ERROR if outcome == FAILED else logging.INFO
        self._emit(level, f"{step}... {outcome}", details)


_current: Optional[Logger] = None


def get_logger() -> Logger:
    """The logger installed by the CLI, or a console logger if none was."""
    global _current
    if _current is None:
        _current = Logger()
    return _current


def install_logger(logger: Optional[Logger]) -> None:
    """Make a logger the one returned by get_logger (None resets it)."""
    global _current
    _current = logger
