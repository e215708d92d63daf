"""
Tests for logger configuration
"""
import logging

from products_api.utils.logger import get_logger, log_level


def test_log_level_follows_debug_flag():
    assert log_level(None, debug=True) == logging.DEBUG
    assert log_level("", debug=False) == logging.INFO


def test_log_level_explicit_name():
    assert log_level("warning") == logging.WARNING
    assert log_level("not-a-level", debug=True) == logging.DEBUG


def test_get_logger_adds_single_handler():
    logger = get_logger("products_api.tests.sample")
    get_logger("products_api.tests.sample")
    assert len(logger.handlers) == 1
