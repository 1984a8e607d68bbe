"""Build diagnostic engine.

This module ties the segmenter, the classifier and the report writer
together:

- Reads a build log produced by ``make``
- Splits it into incidents and classifies each one
- Reports the findings and drops a zero-byte marker file on failure
"""

from pathlib import Path

from kbdiag.core.config.settings import DiagnosticSettings, get_settings
from kbdiag.core.exceptions.errors import LogNotFoundError
from kbdiag.core.logger.logger import get_logger
from kbdiag.diagnostic.classifier import Classifier
from kbdiag.diagnostic.models import DiagnosticReport, ReportEntry
from kbdiag.diagnostic.report import LoggerSink, ReportSink, ReportWriter
from kbdiag.diagnostic.segmenter import segment, split_lines
from kbdiag.diagnostic.signatures import SignatureTable

logger = get_logger(__name__)


class DiagnosticEngine:
    """Diagnoses kernel build failures from the build log.

    This class provides:
    - Pure diagnosis of log text into a DiagnosticReport
    - Reporting through a pluggable sink
    - The failure marker consumed by downstream automation
    """

    def __init__(
        self,
        table: SignatureTable | None = None,
        sink: ReportSink | None = None,
        marker_path: Path | str | None = None,
        settings: DiagnosticSettings | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            table: Signature table. Uses the kernel build table if not provided.
            sink: Reporting sink. Logs through the project logger if not provided.
            marker_path: Failure marker location. Taken from settings if not provided.
            settings: Diagnostic settings. Uses global settings if not provided.
        """
        self.settings = settings if settings is not None else get_settings().diagnostic
        self.classifier = Classifier(table)
        self.sink = sink or LoggerSink()
        self.marker_path = Path(marker_path) if marker_path else self.settings.marker_path
        self.writer = ReportWriter(self.sink, width=self.settings.separator_width)

    def diagnose(self, text: str, source: str | None = None) -> DiagnosticReport:
        """Segment and classify log text.

        Args:
            text: Raw build log content.
            source: Optional description of where the text came from.

        Returns:
            DiagnosticReport with one entry per incident.
        """
        incidents = segment(split_lines(text))
        entries = tuple(
            ReportEntry(
                ordinal=ordinal,
                incident=incident,
                classification=self.classifier.classify(incident),
            )
            for ordinal, incident in enumerate(incidents, start=1)
        )
        return DiagnosticReport(entries=entries, source=source)

    def read_log(self, log_file: Path | str) -> str:
        """Read a build log.

        Undecodable bytes are replaced rather than rejected.

        Raises:
            LogNotFoundError: If the log file does not exist.
        """
        path = Path(log_file)
        if not path.is_file():
            raise LogNotFoundError(
                f"Log file '{path}' does not exist.",
                log_path=str(path),
            )
        return path.read_bytes().decode("utf-8", errors="replace")

    def publish(self, report: DiagnosticReport) -> int:
        """Write a report to the sink and signal failure if needed.

        A marker that cannot be written is reported at error level and the
        count is still returned.

        Args:
            report: Report to publish.

        Returns:
            Total number of incidents.
        """
        self.writer.header(report.source)
        self.writer.incidents(report)

        if report.has_errors:
            self.writer.totals(report)
            try:
                self.write_marker()
            except OSError as e:
                self.sink.error(f"Failed to write failure marker '{self.marker_path}': {e}")
            self.writer.summary(report)
        else:
            self.writer.no_errors()

        self.writer.separator()
        return report.total

    def analyze_log(self, log_file: Path | str) -> int:
        """Analyze a build log end to end.

        A missing log is reported on the sink and counts as zero incidents.

        Args:
            log_file: Path to the build log.

        Returns:
            Total number of incidents found.
        """
        try:
            content = self.read_log(log_file)
        except LogNotFoundError as e:
            self.sink.error(e.message)
            return 0

        report = self.diagnose(content, source=str(log_file))
        logger.debug(f"Diagnosed {report.total} incident(s) in {log_file}")
        return self.publish(report)

    def write_marker(self) -> Path:
        """Create the zero-byte failure marker.

        Raises:
            OSError: If the marker cannot be created, e.g. the path is a directory.
        """
        self.marker_path.parent.mkdir(parents=True, exist_ok=True)
        self.marker_path.write_bytes(b"")
        logger.debug(f"Wrote failure marker: {self.marker_path}")
        return self.marker_path


def analyze_errors(
    log_file: Path | str,
    table: SignatureTable | None = None,
    sink: ReportSink | None = None,
    marker_path: Path | str | None = None,
) -> int:
    """Convenience function to analyze a build log.

    Args:
        log_file: Path to the build log.
        table: Optional signature table.
        sink: Optional reporting sink.
        marker_path: Optional failure marker location.

    Returns:
        Total number of incidents found.
    """
    engine = DiagnosticEngine(table=table, sink=sink, marker_path=marker_path)
    return engine.analyze_log(log_file)


def analyze_build_errors(
    kernel_dir: Path | str,
    sink: ReportSink | None = None,
    marker_path: Path | str | None = None,
    settings: DiagnosticSettings | None = None,
) -> int:
    """Analyze the build log inside a kernel output tree.

    Args:
        kernel_dir: Kernel source directory the build ran in.
        sink: Optional reporting sink.
        marker_path: Optional failure marker location.
        settings: Optional diagnostic settings.

    Returns:
        Total number of incidents found, 0 if the build log is missing.
    """
    engine = DiagnosticEngine(sink=sink, marker_path=marker_path, settings=settings)
    log_file = Path(kernel_dir) / engine.settings.build_log

    if not log_file.exists():
        engine.sink.warning(f"Build log not found: {log_file}")
        return 0

    return engine.analyze_log(log_file)
