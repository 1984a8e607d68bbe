"""Exception definitions module."""

from kbdiag.core.exceptions.errors import (
    ConfigurationError,
    KbDiagError,
    LogNotFoundError,
    SignatureError,
)

__all__ = ["KbDiagError", "LogNotFoundError", "SignatureError", "ConfigurationError"]
