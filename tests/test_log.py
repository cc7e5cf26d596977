import logging

import pytest

from notifykit import log
from notifykit.log import LogLevel


@pytest.fixture(autouse=True)
def restore_level():
    old = log.get_level()
    yield
    log.set_level(old)


@pytest.mark.parametrize(
    "level, shortstr, longstr",
    [
        (LogLevel.CRITICAL, "crit", "CRITICAL"),
        (LogLevel.WARNING, "warn", "WARNING"),
        (LogLevel.MESSAGE, "mesg", "MESSAGE"),
        (LogLevel.INFO, "info", "INFO"),
        (LogLevel.DEBUG, "deb", "DEBUG"),
    ],
)
def test_log_level(level, shortstr, longstr):
    assert log.level_to_string(level) == longstr
    log.set_level(LogLevel.ERROR)
    log.set_level_from_string(shortstr)
    assert log.get_level() == level
    log.set_level(LogLevel.ERROR)
    log.set_level_from_string(longstr)
    assert log.get_level() == level


def test_log_level_error():
    assert log.level_to_string(LogLevel.ERROR) == "ERROR"
    log.set_level(LogLevel.INFO)
    log.set_level_from_string(None)
    assert log.get_level() == LogLevel.INFO
    log.set_level_from_string("ERROR")
    assert log.get_level() == LogLevel.INFO


def test_unknown_level_string_keeps_level():
    log.set_level(LogLevel.DEBUG)
    log.set_level_from_string("loud")
    assert log.get_level() == LogLevel.DEBUG


def test_level_to_string_unknown():
    assert log.level_to_string(3) == "UNKNOWN"


def test_handler_writes_warning_to_stderr(capsys):
    log.init_logging(False)
    log.set_level(LogLevel.WARNING)
    logging.getLogger("notifykit.sample").warning("disk %s", "full")
    captured = capsys.readouterr()
    assert captured.err == "WARNING: disk full\n"
    assert captured.out == ""


def test_handler_filters_below_threshold(capsys):
    log.init_logging(False)
    log.set_level(LogLevel.WARNING)
    logging.getLogger("notifykit.sample").info("chatty")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_handler_info_goes_to_stdout(capsys):
    log.init_logging(False)
    log.set_level(LogLevel.DEBUG)
    logging.getLogger("notifykit.sample").info("hello")
    assert capsys.readouterr().out == "INFO: hello\n"


def test_handler_message_level(capsys):
    log.init_logging(False)
    log.set_level(LogLevel.MESSAGE)
    logging.getLogger("notifykit.sample").log(log.MESSAGE, "note")
    assert capsys.readouterr().out == "MESSAGE: note\n"


def test_testing_mode_suppresses_output(capsys):
    log.init_logging(True)
    log.set_level(LogLevel.DEBUG)
    logging.getLogger("notifykit.sample").error("quiet")
    captured = capsys.readouterr()
    assert captured.err == ""
    assert captured.out == ""