"""Split a build log into error incidents.

The scan is a two-state automaton. A trigger line always opens a fresh
incident; while an incident is open any non-blank line is absorbed, so an
incident only ends at a blank line, at the next trigger line or at the end
of the log.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from kbdiag.core.logger.logger import get_logger
from kbdiag.diagnostic.models import Incident, LogLine

logger = get_logger(__name__)

TRIGGER_PATTERN = re.compile(r"\serror:|\sfatal error:|undefined reference to", re.IGNORECASE)
MAKE_SUB_ERROR_PATTERN = re.compile(r"make\[\d+\]:")


class SegmenterState(str, Enum):
    """Automaton states."""

    IDLE = "idle"
    IN_INCIDENT = "in_incident"


@dataclass(frozen=True)
class ScanState:
    """Immutable snapshot of the automaton between two lines."""

    state: SegmenterState = SegmenterState.IDLE
    pending: tuple[LogLine, ...] = ()


INITIAL_STATE = ScanState()


def is_trigger(text: str) -> bool:
    """Check whether a line starts a new incident."""
    return TRIGGER_PATTERN.search(text) is not None


def is_continuation(text: str) -> bool:
    """Check whether a line may extend an open incident."""
    if "note:" in text:
        return True
    if MAKE_SUB_ERROR_PATTERN.search(text) and "***" in text:
        return True
    return bool(text.strip())


def _close(scan: ScanState) -> Incident | None:
    if scan.state is SegmenterState.IN_INCIDENT and scan.pending:
        return Incident(lines=scan.pending)
    return None


def step(scan: ScanState, line: LogLine) -> tuple[ScanState, Incident | None]:
    """Advance the automaton by one line.

    Args:
        scan: Current automaton state.
        line: Next log line.

    Returns:
        Tuple of (next state, incident closed by this line or None).
    """
    if is_trigger(line.text):
        return ScanState(SegmenterState.IN_INCIDENT, (line,)), _close(scan)

    if scan.state is SegmenterState.IN_INCIDENT and is_continuation(line.text):
        return ScanState(SegmenterState.IN_INCIDENT, scan.pending + (line,)), None

    return INITIAL_STATE, _close(scan)


def finish(scan: ScanState) -> Incident | None:
    """Flush the incident still open at end of input."""
    return _close(scan)


def split_lines(text: str) -> list[LogLine]:
    """Split raw log text into numbered lines.

    Lines are separated on ``\\n``; a trailing carriage return is dropped.
    """
    return [
        LogLine(number=index, text=raw.removesuffix("\r"))
        for index, raw in enumerate(text.split("\n"), start=1)
    ]


class Segmenter:
    """Stateful wrapper around the scan automaton."""

    def __init__(self) -> None:
        self._scan = INITIAL_STATE
        self._incidents: list[Incident] = []

    @property
    def state(self) -> SegmenterState:
        return self._scan.state

    @property
    def incidents(self) -> list[Incident]:
        """Incidents closed so far."""
        return list(self._incidents)

    def feed(self, line: LogLine) -> Incident | None:
        """Consume one line, returning the incident it closed, if any."""
        self._scan, closed = step(self._scan, line)
        if closed is not None:
            self._incidents.append(closed)
        return closed

    def close(self) -> list[Incident]:
        """Force-close any open incident and return all incidents."""
        closed = finish(self._scan)
        if closed is not None:
            self._incidents.append(closed)
        self._scan = INITIAL_STATE
        return self.incidents


def segment(lines: Iterable[LogLine | str]) -> list[Incident]:
    """Segment a sequence of log lines into incidents.

    Plain strings are numbered from 1 in iteration order.

    Args:
        lines: Log lines to scan.

    Returns:
        Incidents in log order.
    """
    segmenter = Segmenter()
    for number, line in enumerate(lines, start=1):
        if isinstance(line, str):
            line = LogLine(number=number, text=line)
        segmenter.feed(line)

    incidents = segmenter.close()
    logger.debug(f"Segmented log into {len(incidents)} incident(s)")
    return incidents
