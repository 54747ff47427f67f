from __future__ import annotations

import logging
from io import StringIO

from sheet_analyzer.logging.init import (
    LabeledFormatter,
    get_logger,
    log_summary,
    set_debug,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == "sheet_analyzer"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)


def test_logging_labeled_prefixes():
    captured = StringIO()
    logger = setup_logging(stream=captured)

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    log_summary("Test summary message")

    lines = captured.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_module_loggers_propagate_to_package_logger():
    captured = StringIO()
    setup_logging(stream=captured)
    logging.getLogger("sheet_analyzer.services.ingest").info("from module")
    assert captured.getvalue() == "INFO from module\n"


def test_setup_logging_idempotent():
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert get_logger() is logger1
    assert len(logger1.handlers) == 1


def test_debug_switch():
    captured = StringIO()
    logger = setup_logging(stream=captured)
    logger.debug("hidden")
    set_debug(True)
    logger.debug("shown")
    set_debug(False)
    logger.debug("hidden again")
    assert captured.getvalue() == "DEBUG shown\n"


def test_summary_level_name():
    setup_logging()
    assert logging.getLevelName(25) == "SUMMARY"
