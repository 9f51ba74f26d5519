"""Layered configuration loader.

Merges a base file, an optional profile file and environment variables
into a typed config dataclass.

Main components:
- settings.py: LoadSettings and ConfigFileSettings
- keyspace.py: Nested accumulator with deep merge
- sources.py: Convention-based file lookup and merge
- profile.py: Active profile resolution
- environment.py: Environment variable overlay
- binder.py: Typed binding onto dataclasses
- loader.py: load() orchestrating the above
"""
from __future__ import annotations

from loader.keyspace import Keyspace
from loader.loader import load, try_load
from loader.settings import ConfigFileSettings, LoadSettings

__all__ = ["ConfigFileSettings", "Keyspace", "LoadSettings", "load", "try_load"]
