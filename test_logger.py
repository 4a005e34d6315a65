"""Tests for logging setup."""

import io
import logging
from datetime import date

import pytest

import logger
from logger import LOGGER_NAME, setup_logging
from picker import DatePicker


@pytest.fixture
def fresh_logger(monkeypatch):
    """Run with no handler installed, restoring the logger afterwards."""
    log = logging.getLogger(LOGGER_NAME)
    saved_handlers, saved_level = list(log.handlers), log.level
    for h in saved_handlers:
        log.removeHandler(h)
    monkeypatch.setattr(logger, "_handler", None)
    yield log
    for h in list(log.handlers):
        log.removeHandler(h)
    for h in saved_handlers:
        log.addHandler(h)
    log.setLevel(saved_level)


def test_library_calls_install_no_handler(fresh_logger, monday_formatter, capsys) -> None:
    picker = DatePicker(today_provider=lambda: date(2013, 1, 8))
    picker.initialize_range(date(2013, 1, 1), date(2013, 2, 1), monday_formatter)
    picker.select(date(2014, 1, 1))
    assert fresh_logger.handlers == []
    assert capsys.readouterr().out == ""


def test_setup_installs_one_handler(fresh_logger) -> None:
    stream = io.StringIO()
    setup_logging(logging.INFO, stream)
    setup_logging(logging.DEBUG, stream)
    assert len(fresh_logger.handlers) == 1
    assert fresh_logger.level == logging.DEBUG
    fresh_logger.info("Adding month %s", "2013-01")
    assert "date_picker - INFO - Adding month 2013-01" in stream.getvalue()
