"""Tests for logger setup."""

import logging

from curvecv.utils import setup_logger


def test_setup_twice_keeps_one_handler():
    logger = setup_logger("curvecv.test_once")
    logger = setup_logger("curvecv.test_once")
    assert len(logger.handlers) == 1


def test_log_file(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    logger = setup_logger("curvecv.test_file", logging.DEBUG, log_file=str(log_file))
    logger.debug("hello %s", "file")
    for handler in logger.handlers:
        handler.flush()
    assert "hello file" in log_file.read_text()
    assert logger.level == logging.DEBUG
