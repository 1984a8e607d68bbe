"""Data models for build log diagnostics."""

import re
from dataclasses import dataclass, field
from typing import Any

from kbdiag.core.exceptions.errors import SignatureError


@dataclass(frozen=True)
class LogLine:
    """One line of raw build log text.

    Attributes:
        number: 1-based position of the line in the log.
        text: Raw line content without the line terminator.
    """

    number: int
    text: str


@dataclass(frozen=True)
class Signature:
    """A known failure shape.

    The pattern is compiled case-insensitively and searched anywhere in the
    incident text. Priority is the signature's position in its table.

    Attributes:
        pattern: Regular expression source.
        category: Human-readable failure category.
        remediation: Suggested fix shown to the user.
    """

    pattern: str
    category: str
    remediation: str
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re.compile(self.pattern, re.IGNORECASE)
        except re.error as e:
            raise SignatureError(
                f"Invalid signature pattern for '{self.category}'",
                pattern=self.pattern,
                details={"error": str(e)},
            ) from e
        object.__setattr__(self, "_regex", compiled)

    def matches(self, text: str) -> bool:
        """Check whether the pattern occurs anywhere in text."""
        return self._regex.search(text) is not None


@dataclass(frozen=True)
class Classification:
    """Result of matching an incident against the signature table."""

    category: str
    remediation: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for export."""
        return {"category": self.category, "remediation": self.remediation}


@dataclass(frozen=True)
class Incident:
    """One contiguous error occurrence in the log.

    The first line is always a trigger line.
    """

    lines: tuple[LogLine, ...]

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("Incident must contain at least one line")

    @property
    def text(self) -> str:
        """All absorbed lines joined with line breaks."""
        return "\n".join(line.text for line in self.lines)

    @property
    def first_line(self) -> int:
        return self.lines[0].number

    @property
    def last_line(self) -> int:
        return self.lines[-1].number


@dataclass(frozen=True)
class ReportEntry:
    """An incident paired with its classification."""

    ordinal: int
    incident: Incident
    classification: Classification

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for export."""
        return {
            "ordinal": self.ordinal,
            "first_line": self.incident.first_line,
            "last_line": self.incident.last_line,
            "lines": [line.text for line in self.incident.lines],
            **self.classification.to_dict(),
        }


@dataclass(frozen=True)
class DiagnosticReport:
    """Final output of one engine run.

    Attributes:
        entries: Classified incidents in log order.
        source: Path of the analyzed log, if any.
    """

    entries: tuple[ReportEntry, ...] = ()
    source: str | None = None

    @property
    def total(self) -> int:
        """Total number of incidents found."""
        return len(self.entries)

    @property
    def has_errors(self) -> bool:
        return self.total > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "source": self.source,
            "total": self.total,
            "incidents": [entry.to_dict() for entry in self.entries],
        }
