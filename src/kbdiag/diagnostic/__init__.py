"""Kernel build log diagnostics.

This module provides:
- Log segmentation into error incidents
- Priority-ordered signature classification
- Report assembly with a failure marker for CI automation
"""

from kbdiag.diagnostic.classifier import Classifier
from kbdiag.diagnostic.engine import (
    DiagnosticEngine,
    analyze_build_errors,
    analyze_errors,
)
from kbdiag.diagnostic.models import (
    Classification,
    DiagnosticReport,
    Incident,
    LogLine,
    ReportEntry,
    Signature,
)
from kbdiag.diagnostic.report import (
    ConsoleSink,
    Level,
    LoggerSink,
    MemorySink,
    ReportSink,
    ReportWriter,
)
from kbdiag.diagnostic.segmenter import Segmenter, SegmenterState, segment, split_lines
from kbdiag.diagnostic.signatures import (
    DEFAULT_CLASSIFICATION,
    DEFAULT_SIGNATURES,
    SignatureTable,
)

__all__ = [
    "DiagnosticEngine",
    "analyze_errors",
    "analyze_build_errors",
    "Classifier",
    "Classification",
    "DiagnosticReport",
    "Incident",
    "LogLine",
    "ReportEntry",
    "Signature",
    "SignatureTable",
    "DEFAULT_SIGNATURES",
    "DEFAULT_CLASSIFICATION",
    "Segmenter",
    "SegmenterState",
    "segment",
    "split_lines",
    "ReportSink",
    "LoggerSink",
    "ConsoleSink",
    "MemorySink",
    "Level",
    "ReportWriter",
]
