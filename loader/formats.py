"""Parsers for the supported configuration file formats.

Each parser takes an open text stream and returns a mapping. An empty
document parses to an empty mapping.
"""
from __future__ import annotations

import configparser
import json
import tomllib
from typing import Any, Callable, Dict, List, TextIO

import yaml
from dotenv import dotenv_values

from core.exceptions import ParseError, SettingsError

Parser = Callable[[TextIO], Any]


def _parse_yaml(stream: TextIO) -> Any:
    return yaml.safe_load(stream)


def _parse_json(stream: TextIO) -> Any:
    text = stream.read()
    return json.loads(text) if text.strip() else None


def _parse_toml(stream: TextIO) -> Any:
    return tomllib.loads(stream.read())


def _parse_ini(stream: TextIO) -> Dict[str, Any]:
    parser = configparser.ConfigParser(interpolation=None)
    parser.read_file(stream)
    tree: Dict[str, Any] = dict(parser.defaults())
    for section in parser.sections():
        tree[section] = {key: parser.get(section, key) for key in parser.options(section)
                         if key not in parser.defaults()}
    return tree


def _parse_dotenv(stream: TextIO) -> Dict[str, Any]:
    return {key: value for key, value in dotenv_values(stream=stream).items() if value is not None}


_PARSERS: Dict[str, Parser] = {
    "yaml": _parse_yaml,
    "yml": _parse_yaml,
    "json": _parse_json,
    "toml": _parse_toml,
    "ini": _parse_ini,
    "env": _parse_dotenv,
    "dotenv": _parse_dotenv,
}

_EXTENSIONS: Dict[str, List[str]] = {
    "yaml": ["yaml", "yml"],
    "yml": ["yml", "yaml"],
}

_ERRORS = (
    yaml.YAMLError,
    json.JSONDecodeError,
    tomllib.TOMLDecodeError,
    configparser.Error,
    UnicodeDecodeError,
)


def supported_formats() -> List[str]:
    return sorted(_PARSERS)


def extensions_for(config_type: str) -> List[str]:
    """File extensions tried, in order, for a configuration type."""
    config_type = config_type.lower()
    return _EXTENSIONS.get(config_type, [config_type])


def get_parser(config_type: str) -> Parser:
    """Return the parser for ``config_type``.

    Raises:
        SettingsError: If the format is not supported
    """
    try:
        return _PARSERS[config_type.lower()]
    except KeyError:
        raise SettingsError(
            f"unsupported config type {config_type!r}, expected one of {supported_formats()}"
        ) from None


def parse(stream: TextIO, config_type: str, path: str = "<stream>") -> Dict[str, Any]:
    """Parse ``stream`` into a mapping.

    Raises:
        ParseError: If the document is malformed or its top level is not a mapping
    """
    parser = get_parser(config_type)
    try:
        tree = parser(stream)
    except _ERRORS as e:
        raise ParseError(f"failed to parse {path} as {config_type}: {e}", path=path) from e
    if tree is None:
        return {}
    if not isinstance(tree, dict):
        raise ParseError(
            f"failed to parse {path} as {config_type}: top level must be a mapping, "
            f"got {type(tree).__name__}",
            path=path,
        )
    return tree


__all__ = ["extensions_for", "get_parser", "parse", "supported_formats"]
