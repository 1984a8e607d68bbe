"""Tests for report rendering and sinks."""

import logging
from io import StringIO

import pytest
from rich.console import Console

from kbdiag.diagnostic.engine import DiagnosticEngine
from kbdiag.diagnostic.report import ConsoleSink, Level, LoggerSink, MemorySink, ReportWriter


class TestReportWriter:
    """Tests for the published report layout."""

    def test_incident_listing(self, engine: DiagnosticEngine, memory_sink: MemorySink) -> None:
        """Test each incident is listed with its lines and classification."""
        report = engine.diagnose("foo.c: error: undefined reference to 'bar'\nnote: declared here\n")
        engine.publish(report)

        info = memory_sink.messages(Level.INFO)
        assert "Error #1:" in info
        assert "  foo.c: error: undefined reference to 'bar'" in info
        assert "  note: declared here" in info
        assert "Error: Link Error: Missing Library or Function" in info

        warnings = memory_sink.messages(Level.WARNING)
        assert warnings[0].startswith("Suggestion: Check if required libraries are missing")

    def test_summary_pairs_category_and_suggestion(
        self, engine: DiagnosticEngine, memory_sink: MemorySink
    ) -> None:
        """Test the summary restates every incident in order."""
        report = engine.diagnose("a.c: error: x\n\nb.c: error: division by zero\n")
        engine.publish(report)

        info = memory_sink.messages(Level.INFO)
        first = info.index("  [1] Uncommon Error")
        second = info.index("  [2] Division by Zero")
        assert first < second
        assert "Total found 2 error(s)." in info
        assert "Total: 2 error(s)" in info

        # Each summary category is followed by its suggestion
        records = memory_sink.records
        pos = records.index((Level.INFO, "  [2] Division by Zero"))
        level, message = records[pos + 1]
        assert level is Level.WARNING
        assert "divisor is not zero" in message

    def test_no_errors(self, engine: DiagnosticEngine, memory_sink: MemorySink) -> None:
        """Test a clean report prints a single verdict and no summary."""
        engine.publish(engine.diagnose("all good\n"))

        assert "No errors found." in memory_sink.messages()
        assert not any("Error Summary" in m for m in memory_sink.messages())
        assert memory_sink.messages(Level.WARNING) == []

    def test_separator_width(self, memory_sink: MemorySink) -> None:
        """Test separators honour the configured width."""
        ReportWriter(memory_sink, width=20).separator()

        assert memory_sink.messages() == ["-" * 20]


class TestSinks:
    """Tests for reporting sinks."""

    def test_memory_sink(self) -> None:
        """Test records keep level and order."""
        sink = MemorySink()
        sink.info("one")
        sink.warning("two")
        sink.error("three")

        assert sink.records == [(Level.INFO, "one"), (Level.WARNING, "two"), (Level.ERROR, "three")]
        assert sink.text() == "one\ntwo\nthree"

    def test_console_sink_keeps_brackets(self) -> None:
        """Test raw make output is printed without markup interpretation."""
        buffer = StringIO()
        sink = ConsoleSink(Console(file=buffer, width=200, color_system=None))

        sink.info("make[2]: *** [scripts/Makefile.build:250: drivers/foo.o] Error 1")
        sink.warning("[bold]not markup[/bold]")

        output = buffer.getvalue()
        assert "make[2]: *** [scripts/Makefile.build:250: drivers/foo.o] Error 1" in output
        assert "[bold]not markup[/bold]" in output

    @pytest.mark.parametrize(
        "level,expected",
        [(Level.INFO, logging.INFO), (Level.WARNING, logging.WARNING), (Level.ERROR, logging.ERROR)],
    )
    def test_logger_sink_levels(self, level: Level, expected: int) -> None:
        """Test sink levels map to logging levels."""
        records: list[logging.LogRecord] = []

        class _Collect(logging.Handler):
            def emit(self, record: logging.LogRecord) -> None:
                records.append(record)

        logger = logging.getLogger("kbdiag.tests.sink")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        handler = _Collect()
        logger.addHandler(handler)
        try:
            LoggerSink(logger).emit(level, "hello [x]")
        finally:
            logger.removeHandler(handler)

        assert len(records) == 1
        assert records[0].levelno == expected
        assert records[0].getMessage() == "hello [x]"
        assert records[0].markup is False
