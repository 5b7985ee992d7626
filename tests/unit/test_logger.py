"""Unit tests for logger setup."""

import logging
import uuid

from lgrep.utils.logger import get_logger, set_level


def _name():
    return f"lgrep.test.{uuid.uuid4().hex}"


def test_handler_added_once():
    name = _name()
    first = get_logger(name)
    second = get_logger(name)
    assert first is second
    assert len(first.handlers) >= 1
    assert len(second.handlers) == len(first.handlers)


def test_explicit_level():
    assert get_logger(_name(), level="debug").level == logging.DEBUG


def test_set_level_applies_to_lgrep_loggers():
    logger = get_logger(_name(), level="warning")
    other = logging.getLogger(f"unrelated.{uuid.uuid4().hex}")
    other.setLevel(logging.ERROR)
    set_level("DEBUG")
    try:
        assert logger.level == logging.DEBUG
        assert other.level == logging.ERROR
    finally:
        set_level("WARNING")
