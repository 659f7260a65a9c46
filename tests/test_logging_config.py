"""
Tests for the console logging setup.
"""

import logging

import pytest

from eventgo.core.logging_config import configure_logging


@pytest.fixture
def bare_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = [h for h in saved_handlers if h.get_name() != "eventgo"]
    yield root
    root.handlers = saved_handlers
    root.setLevel(saved_level)


class TestConfigureLogging:

    def test_installs_one_named_handler(self, bare_root_logger):
        configure_logging("debug")
        configure_logging("debug")

        named = [h for h in bare_root_logger.handlers if h.get_name() == "eventgo"]
        assert len(named) == 1
        assert bare_root_logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, bare_root_logger):
        configure_logging("chatty")

        assert bare_root_logger.level == logging.INFO
