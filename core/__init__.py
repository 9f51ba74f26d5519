"""Core infrastructure shared by the loader: errors and result types."""
from __future__ import annotations

from .exceptions import ConfigLoaderError, DecodeError, ParseError, SettingsError, SourceNotFound
from .result import Result, Success, Failure

__all__ = [
    "ConfigLoaderError",
    "SettingsError",
    "SourceNotFound",
    "ParseError",
    "DecodeError",
    "Result",
    "Success",
    "Failure",
]
