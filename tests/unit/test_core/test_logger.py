"""Tests for the logging helpers."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from kbdiag.core.config.settings import LoggingSettings
from kbdiag.core.logger.logger import LOGGER_NAME, get_logger, log_raw, setup_logging


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """Restore the package logger after a test reconfigures it."""
    package = logging.getLogger(LOGGER_NAME)
    handlers, level = list(package.handlers), package.level
    yield package
    for handler in package.handlers:
        if handler not in handlers:
            handler.close()
    package.handlers[:] = handlers
    package.setLevel(level)


class TestGetLogger:
    """Tests for get_logger."""

    def test_module_names_kept(self) -> None:
        """Test package module names are used as-is."""
        assert get_logger("kbdiag.diagnostic.engine").name == "kbdiag.diagnostic.engine"

    def test_short_names_nested(self) -> None:
        """Test names outside the package are nested below it."""
        assert get_logger("report") is get_logger("kbdiag.report")

    def test_default_is_package_logger(self) -> None:
        """Test omitting the name returns the package logger."""
        assert get_logger().name == LOGGER_NAME


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_configures_package_not_root(self, package_logger: logging.Logger) -> None:
        """Test handlers go on the package logger and the root is left alone."""
        root_handlers = list(logging.getLogger().handlers)

        configured = setup_logging(LoggingSettings(level="WARNING", use_rich=False))

        assert configured is package_logger
        assert package_logger.level == logging.WARNING
        assert len(package_logger.handlers) == 1
        assert logging.getLogger().handlers == root_handlers

    def test_file_handler(self, package_logger: logging.Logger, temp_dir: Path) -> None:
        """Test a log file is created when configured."""
        log_file = temp_dir / "logs" / "kbdiag.log"

        setup_logging(LoggingSettings(use_rich=False, file=str(log_file)))
        get_logger("tests.file").info("written to file")
        for handler in package_logger.handlers:
            handler.flush()

        assert "written to file" in log_file.read_text()


class TestLogRaw:
    """Tests for log_raw."""

    def test_disables_markup(self) -> None:
        """Test raw lines carry markup=False and keep their text."""
        records: list[logging.LogRecord] = []

        class _Collect(logging.Handler):
            def emit(self, record: logging.LogRecord) -> None:
                records.append(record)

        logger = logging.getLogger("kbdiag.tests.raw")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        handler = _Collect()
        logger.addHandler(handler)
        try:
            log_raw(logger, logging.WARNING, "make[1]: *** [Makefile:1234: vmlinux] Error 2")
        finally:
            logger.removeHandler(handler)

        assert records[0].levelno == logging.WARNING
        assert records[0].getMessage() == "make[1]: *** [Makefile:1234: vmlinux] Error 2"
        assert records[0].markup is False
