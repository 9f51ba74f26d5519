"""Custom exception hierarchy for the configuration loader."""
from __future__ import annotations

from typing import Optional


class ConfigLoaderError(Exception):
    """Base exception for all configuration loading errors."""
    pass


class SettingsError(ConfigLoaderError):
    """Raised when load settings are missing or malformed."""
    pass


class SourceNotFound(ConfigLoaderError):
    """Raised when a configuration file source does not exist."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ParseError(ConfigLoaderError):
    """Raised when a located configuration file cannot be parsed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class DecodeError(ConfigLoaderError):
    """Raised when a merged value cannot be coerced into its destination field.

    Attributes:
        path: Dotted configuration path of the offending value
    """

    def __init__(self, path: str, message: str):
        super().__init__(f"cannot decode '{path}': {message}")
        self.path = path
