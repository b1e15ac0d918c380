"""Tests for logging setup."""

import logging

import pytest
from task_tracker.utils.logger import setup_logger


@pytest.fixture
def logger_name():
    name = "task_tracker_test_logger"
    yield name
    logger = logging.getLogger(name)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


class TestSetupLogger:
    """Tests for setup_logger."""

    def test_console_only_by_default(self, logger_name):
        logger = setup_logger(name=logger_name, level=logging.INFO)

        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_file_handler_when_log_dir_given(self, logger_name, tmp_path):
        logger = setup_logger(name=logger_name, log_dir=tmp_path / "logs")
        logger.warning("written to file")
        for handler in logger.handlers:
            handler.flush()

        log_files = list((tmp_path / "logs").glob("tracker_*.log"))
        assert len(log_files) == 1
        assert "written to file" in log_files[0].read_text(encoding="utf-8")

    def test_repeated_setup_does_not_duplicate_handlers(self, logger_name):
        setup_logger(name=logger_name)
        logger = setup_logger(name=logger_name)

        assert len(logger.handlers) == 1
