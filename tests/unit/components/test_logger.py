"""
Unit tests for logging setup.
"""

import logging

import pytest
from folio.logger import configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_level():
    yield
    logging.getLogger("folio").setLevel(logging.NOTSET)


class TestGetLogger:
    def test_returns_named_logger(self):
        assert get_logger("folio.dom") is logging.getLogger("folio.dom")

    def test_has_no_side_effects(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        get_logger("folio.anything")
        assert root.handlers == handlers
        assert root.level == level
        assert logging.getLogger("folio").level == logging.NOTSET


class TestConfigureLogging:
    def test_default_level_is_warning(self):
        configure_logging()
        assert logging.getLogger("folio").level == logging.WARNING

    def test_explicit_level(self):
        configure_logging(logging.DEBUG)
        assert logging.getLogger("folio").getEffectiveLevel() == logging.DEBUG

    def test_keeps_existing_handlers(self):
        root = logging.getLogger()
        handlers = list(root.handlers)
        if not handlers:
            pytest.skip("root logger has no handlers to preserve")
        configure_logging(logging.INFO)
        assert root.handlers == handlers
