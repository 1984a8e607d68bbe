"""Logging system with Rich support.

Handlers are attached to the ``kbdiag`` package logger rather than the root
logger, so embedding the engine in another tool leaves that tool's logging
untouched. Build log lines are passed through :func:`log_raw`, which stops
Rich from reading ``make[1]: *** [Makefile]`` as console markup.
"""

import logging
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from kbdiag.core.config.settings import LoggingSettings, get_settings

LOGGER_NAME = "kbdiag"

# Record extra that disables RichHandler markup for a single message
RAW_TEXT: dict[str, Any] = {"markup": False}

# Global console instance
_console: Console | None = None
_loggers: dict[str, logging.Logger] = {}


def setup_logging(settings: LoggingSettings | None = None) -> logging.Logger:
    """Configure the kbdiag package logger.

    Args:
        settings: Logging settings. Uses global settings if not provided.

    Returns:
        The configured package logger.
    """
    global _console

    if settings is None:
        settings = get_settings().logging

    if settings.use_rich:
        _console = Console(stderr=True)

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(getattr(logging, settings.level))
    package_logger.handlers.clear()

    handler: RichHandler | logging.StreamHandler
    if settings.use_rich:
        handler = RichHandler(
            console=_console,
            show_path=False,
            show_time=False,
            rich_tracebacks=True,
            markup=True,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(settings.format))

    package_logger.addHandler(handler)

    if settings.file:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, settings.level))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        package_logger.addHandler(file_handler)

    return package_logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get or create a logger under the kbdiag namespace.

    Names outside the namespace are nested below it, so ``get_logger("report")``
    and ``get_logger("kbdiag.report")`` return the same logger.

    Args:
        name: Logger name (typically __name__). The package logger if omitted.

    Returns:
        Configured logger instance.
    """
    if not name or name == LOGGER_NAME:
        name = LOGGER_NAME
    elif not name.startswith(f"{LOGGER_NAME}."):
        name = f"{LOGGER_NAME}.{name}"

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

        # Setup logging if not already done
        if not logging.getLogger(LOGGER_NAME).handlers:
            setup_logging()

    return _loggers[name]


def log_raw(logger: logging.Logger, level: int, message: str) -> None:
    """Log text verbatim, with Rich markup disabled.

    Args:
        logger: Logger to write to.
        level: Logging level.
        message: Raw text such as a compiler output line.
    """
    logger.log(level, message, extra=RAW_TEXT)


def get_console() -> Console:
    """Get the global Rich console instance.

    Returns:
        Console instance.
    """
    global _console
    if _console is None:
        _console = Console(stderr=True)
    return _console
