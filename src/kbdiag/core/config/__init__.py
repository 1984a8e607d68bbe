"""Configuration management for kbdiag."""

from kbdiag.core.config.loader import ConfigLoader
from kbdiag.core.config.settings import (
    DiagnosticSettings,
    LoggingSettings,
    Settings,
    get_settings,
)

__all__ = [
    "ConfigLoader",
    "DiagnosticSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]
