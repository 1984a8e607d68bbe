"""Report rendering and reporting sinks.

A sink receives report lines in order at one of three levels. The
engine does not care where they end up: logging, a Rich console, or an
in-memory buffer are interchangeable.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum

from rich.console import Console
from rich.markup import escape

from kbdiag.core.logger.logger import get_console, get_logger, log_raw
from kbdiag.diagnostic.models import DiagnosticReport


class Level(str, Enum):
    """Severity of a report line."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ReportSink(ABC):
    """Destination for report lines."""

    @abstractmethod
    def emit(self, level: Level, message: str) -> None:
        """Deliver one report line."""
        pass

    def info(self, message: str) -> None:
        self.emit(Level.INFO, message)

    def warning(self, message: str) -> None:
        self.emit(Level.WARNING, message)

    def error(self, message: str) -> None:
        self.emit(Level.ERROR, message)


class LoggerSink(ReportSink):
    """Sends report lines through the project logger."""

    _LEVELS = {
        Level.INFO: logging.INFO,
        Level.WARNING: logging.WARNING,
        Level.ERROR: logging.ERROR,
    }

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_logger("report")

    def emit(self, level: Level, message: str) -> None:
        log_raw(self.logger, self._LEVELS[level], message)


class ConsoleSink(ReportSink):
    """Prints report lines to a Rich console."""

    _STYLES = {
        Level.INFO: None,
        Level.WARNING: "yellow",
        Level.ERROR: "bold red",
    }

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or get_console()

    def emit(self, level: Level, message: str) -> None:
        style = self._STYLES[level]
        text = escape(message)
        self.console.print(
            f"[{style}]{text}[/]" if style else text,
            highlight=False,
            soft_wrap=True,
        )


class MemorySink(ReportSink):
    """Collects report lines in memory."""

    def __init__(self) -> None:
        self.records: list[tuple[Level, str]] = []

    def emit(self, level: Level, message: str) -> None:
        self.records.append((level, message))

    def messages(self, level: Level | None = None) -> list[str]:
        """Recorded messages, optionally filtered by level."""
        return [msg for lvl, msg in self.records if level is None or lvl is level]

    def text(self) -> str:
        return "\n".join(msg for _, msg in self.records)

    def clear(self) -> None:
        self.records.clear()


class ReportWriter:
    """Formats a diagnostic report onto a sink.

    Layout: a listing block per incident, then (only when incidents were
    found) an error summary restating every category and suggestion.
    """

    def __init__(self, sink: ReportSink, width: int = 56) -> None:
        self.sink = sink
        self.width = width

    def separator(self, char: str = "-") -> None:
        self.sink.info(char * self.width)

    def header(self, source: str | None) -> None:
        if source:
            self.sink.info(f"Analyzing log file: {source}")
        self.separator()

    def incidents(self, report: DiagnosticReport) -> None:
        """Emit the per-incident listing."""
        for entry in report.entries:
            self.sink.info(f"Error #{entry.ordinal}:")
            for line in entry.incident.lines:
                self.sink.info(f"  {line.text}")
            self.sink.info(f"Error: {entry.classification.category}")
            self.sink.warning(f"Suggestion: {entry.classification.remediation}")
            self.separator()

    def totals(self, report: DiagnosticReport) -> None:
        self.sink.info(f"Total found {report.total} error(s).")
        self.sink.warning("Please carefully review the error messages and suggestions above.")

    def summary(self, report: DiagnosticReport) -> None:
        """Emit the closing summary block."""
        rule = "=" * self.width
        self.sink.info("")
        self.sink.info(rule)
        self.sink.info("Error Summary".center(self.width).rstrip())
        self.sink.info(rule)
        for entry in report.entries:
            self.sink.info(f"  [{entry.ordinal}] {entry.classification.category}")
            self.sink.warning(f"      {entry.classification.remediation}")
        self.sink.info(rule)
        self.sink.info(f"Total: {report.total} error(s)")
        self.sink.info(rule)

    def no_errors(self) -> None:
        self.sink.info("No errors found.")
