"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import pytest

from kbdiag.core.config.settings import DiagnosticSettings
from kbdiag.diagnostic.engine import DiagnosticEngine
from kbdiag.diagnostic.report import MemorySink

SAMPLE_LOG = """\
foo.c: error: undefined reference to 'bar'
note: declared here

baz.c: error: unrecognized command line option '-fxyz'
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def memory_sink() -> MemorySink:
    """Create an in-memory reporting sink."""
    return MemorySink()


@pytest.fixture
def diagnostic_settings(temp_dir: Path) -> DiagnosticSettings:
    """Diagnostic settings with the marker inside the temporary directory."""
    return DiagnosticSettings(marker_path=temp_dir / "have_error")


@pytest.fixture
def engine(memory_sink: MemorySink, diagnostic_settings: DiagnosticSettings) -> DiagnosticEngine:
    """Create an engine reporting to memory."""
    return DiagnosticEngine(sink=memory_sink, settings=diagnostic_settings)


@pytest.fixture
def write_log(temp_dir: Path) -> Callable[..., Path]:
    """Return a helper that writes log content to a file.

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Function taking the content and an optional file name.
    """

    def _write(content: str, name: str = "build.log") -> Path:
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_log(write_log: Callable[..., Path]) -> Path:
    """Two-incident build log."""
    return write_log(SAMPLE_LOG)
