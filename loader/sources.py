"""File sources: locate a configuration file by convention and merge it.

File names follow ``{prefix_}{name}.{ext}`` and are looked up directly under
the configured directory. There is no recursive search.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger

from core.exceptions import ParseError, SourceNotFound
from loader import formats
from loader.keyspace import Keyspace
from loader.settings import ConfigFileSettings


def resolve_file_name(file_prefix: str, name: str) -> str:
    """Join the optional prefix and the logical name, e.g. ``config_base``."""
    if not file_prefix:
        return name
    return f"{file_prefix}_{name}"


def find_config_file(config_dir: str, file_name: str, config_type: str) -> Optional[Path]:
    """Return the first existing ``file_name.<ext>`` under ``config_dir``."""
    directory = Path(config_dir)
    for ext in formats.extensions_for(config_type):
        candidate = directory / f"{file_name}.{ext}"
        if candidate.is_file():
            return candidate
    return None


def merge_config_file(
    keyspace: Keyspace,
    config_dir: str,
    name: str,
    file_settings: ConfigFileSettings,
) -> Path:
    """Parse the file for logical ``name`` and deep-merge it into ``keyspace``.

    Args:
        keyspace: Accumulator to merge into
        config_dir: Directory to look in
        name: Logical file name ("base" or a profile name)
        file_settings: Prefix and format of the file

    Returns:
        Path of the merged file

    Raises:
        SourceNotFound: If no file with the expected name exists
        ParseError: If the file exists but cannot be parsed
    """
    file_name = resolve_file_name(file_settings.file_name_prefix, name)
    path = find_config_file(config_dir, file_name, file_settings.config_type)
    if path is None:
        expected = Path(config_dir) / f"{file_name}.{file_settings.config_type}"
        raise SourceNotFound(f"config file {file_name!r} not found in {config_dir!r}", path=str(expected))

    try:
        with open(path, "r", encoding="utf-8") as f:
            tree = formats.parse(f, file_settings.config_type, path=str(path))
    except OSError as e:
        raise ParseError(f"failed to read {path}: {e}", path=str(path)) from e

    keyspace.merge(tree)
    logger.debug(f"Merged {len(tree)} top-level keys from {path}")
    return path


__all__ = ["find_config_file", "merge_config_file", "resolve_file_name"]
