"""Logging helpers."""

from kbdiag.core.logger.logger import (
    LOGGER_NAME,
    get_console,
    get_logger,
    log_raw,
    setup_logging,
)

__all__ = ["LOGGER_NAME", "get_console", "get_logger", "log_raw", "setup_logging"]
