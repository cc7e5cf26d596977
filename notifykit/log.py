"""Log level handling and the console log handler."""

from __future__ import annotations

import enum
import logging
import sys

__all__ = [
    "LogLevel",
    "MESSAGE",
    "level_to_string",
    "set_level_from_string",
    "set_level",
    "get_level",
    "init_logging",
]

#: Standard-library level used for informational "message" records.
MESSAGE = 25
logging.addLevelName(MESSAGE, "MESSAGE")

_LOGGER_NAME = "notifykit"


class LogLevel(enum.IntEnum):
    """Severity levels; a lower value is more severe."""

    ERROR = 1 << 2
    CRITICAL = 1 << 3
    WARNING = 1 << 4
    MESSAGE = 1 << 5
    INFO = 1 << 6
    DEBUG = 1 << 7


_NAMES = {
    "critical": LogLevel.CRITICAL,
    "crit": LogLevel.CRITICAL,
    "warning": LogLevel.WARNING,
    "warn": LogLevel.WARNING,
    "message": LogLevel.MESSAGE,
    "mesg": LogLevel.MESSAGE,
    "info": LogLevel.INFO,
    "debug": LogLevel.DEBUG,
    "deb": LogLevel.DEBUG,
}

_level: LogLevel = LogLevel.WARNING
_handler: logging.Handler | None = None
_log = logging.getLogger(__name__)


def level_to_string(level: int) -> str:
    """Return the upper-case name of ``level``, or ``"UNKNOWN"``."""
    try:
        return LogLevel(level).name
    except ValueError:
        return "UNKNOWN"


def set_level_from_string(level: str | None) -> None:
    """Set the threshold from a (case-insensitive) name; unknown names are ignored."""
    global _level
    if level is None:
        return
    found = _NAMES.get(level.lower())
    if found is None:
        _log.warning("Unknown log level: '%s'", level)
        return
    _level = found


def set_level(level: LogLevel) -> None:
    """Set the threshold to ``level``."""
    global _level
    _level = LogLevel(level)


def get_level() -> LogLevel:
    """Return the current threshold."""
    return _level


def _from_python(levelno: int) -> LogLevel:
    if levelno >= logging.CRITICAL:
        return LogLevel.CRITICAL
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARNING
    if levelno >= MESSAGE:
        return LogLevel.MESSAGE
    if levelno >= logging.INFO:
        return LogLevel.INFO
    return LogLevel.DEBUG


class _ConsoleHandler(logging.Handler):
    """Print records as ``LEVEL: message``; warnings and worse go to stderr."""

    def __init__(self, testing: bool) -> None:
        super().__init__(logging.NOTSET)
        self.testing = testing

    def emit(self, record: logging.LogRecord) -> None:
        if self.testing:
            return
        level = _from_python(record.levelno)
        if _level < level:
            return
        try:
            message = record.getMessage()
        except Exception:
            self.handleError(record)
            return
        stream = sys.stderr if level <= LogLevel.WARNING else sys.stdout
        stream.write(f"{level_to_string(level)}: {message}\n")
        stream.flush()


def init_logging(testing: bool = False) -> None:
    """Install the console handler; with ``testing`` all output is suppressed."""
    global _handler
    logger = logging.getLogger(_LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
    _handler = _ConsoleHandler(bool(testing))
    logger.addHandler(_handler)
    logger.setLevel(logging.DEBUG)