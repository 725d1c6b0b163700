"""
Tests for logging helpers.
"""

import logging

from docshape.utils.logging import ROOT_LOGGER, LogContext, get_logger, set_level


class TestLogging:
    """Logger configuration tests."""

    def test_module_loggers_are_children(self):
        logger = get_logger("docshape.query.filters")
        assert logger.name.startswith(ROOT_LOGGER + ".")
        assert get_logger("docshape.query.filters") is logger

    def test_package_logger_has_handler(self):
        get_logger("docshape.anything")
        assert logging.getLogger(ROOT_LOGGER).handlers

    def test_set_level(self):
        root = get_logger()
        previous = root.level
        try:
            set_level("debug")
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)

    def test_log_context_restores_level(self):
        logger = get_logger()
        before = logger.level
        with LogContext(logger, "ERROR") as scoped:
            assert scoped.level == logging.ERROR
        assert logger.level == before
