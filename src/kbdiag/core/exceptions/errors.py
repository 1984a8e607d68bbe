"""Custom exception definitions for kbdiag."""

from typing import Any


class KbDiagError(Exception):
    """Base exception for all kbdiag errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class LogNotFoundError(KbDiagError):
    """Raised when the build log to analyze does not exist."""

    def __init__(
        self,
        message: str,
        log_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize log-not-found error.

        Args:
            message: Error message.
            log_path: Path of the missing log file.
            details: Additional error details.
        """
        details = details or {}
        if log_path:
            details["log_path"] = log_path
        super().__init__(message, details)
        self.log_path = log_path


class SignatureError(KbDiagError):
    """Raised when a failure signature cannot be compiled."""

    def __init__(
        self,
        message: str,
        pattern: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if pattern:
            details["pattern"] = pattern
        super().__init__(message, details)


class ConfigurationError(KbDiagError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
