"""Tests for logging configuration."""

import logging

from sso.config import Settings
from sso.util.logging import log_level, setup_logging


def test_log_level_follows_environment():
    assert log_level(Settings(environment="development")) == logging.INFO
    assert log_level(Settings(environment="production")) == logging.WARNING
    assert log_level(Settings(environment="production", debug=True)) == logging.DEBUG


def test_noisy_libraries_are_quieted():
    setup_logging(Settings(debug=True))

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
