"""Load layered configuration into a config dataclass.

Sources are applied in a fixed order, later ones winning on the same key:

1. Defaults (current field values of the target, left as they are unless a
   later source sets them)
2. Base file ``{prefix_}base.{type}`` (required)
3. Profile file ``{prefix_}{profile}.{type}`` (optional)
4. Environment variables (only for keys already defined above)

Defaults are only consulted to decide which keys the environment may set;
the binder sees values from files and environment alone. Every call builds
its own keyspace; nothing is cached between calls.
"""
from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from loguru import logger

from core.error_handler import as_result, log_execution_time
from core.exceptions import ConfigLoaderError, DecodeError, SettingsError, SourceNotFound
from loader import formats
from loader.binder import bind
from loader.environment import apply_env_overlay
from loader.keyspace import Keyspace
from loader.profile import resolve_profile
from loader.settings import LoadSettings
from loader.sources import merge_config_file

BASE_CONFIG_NAME = "base"


@log_execution_time()
def load(target: Any, settings: Optional[LoadSettings], environ: Optional[Mapping[str, str]] = None) -> Any:
    """Load configuration files and environment variables into ``target``.

    Args:
        target: Mutable dataclass instance whose current values act as defaults
        settings: Where and how to load configuration
        environ: Environment to read, ``os.environ`` when omitted

    Returns:
        ``target``, updated in place

    Raises:
        SettingsError: If settings or file settings are missing or invalid
        SourceNotFound: If the base file does not exist
        ParseError: If the base or profile file cannot be parsed
        DecodeError: If a value cannot be converted to its field type
    """
    _validate(settings)
    if environ is None:
        environ = os.environ

    config_dir = settings.config_dir
    defaults = Keyspace.from_object(target)
    keyspace = Keyspace()

    _merge_base_config(keyspace, config_dir, settings)
    profile = resolve_profile(settings.env_prefix, keyspace, environ)
    if profile:
        _merge_profile_config(keyspace, config_dir, profile, settings)

    if settings.load_sys_env:
        apply_env_overlay(keyspace, settings.env_prefix, environ, defaults=defaults)

    try:
        return bind(keyspace, target)
    except DecodeError as e:
        logger.error(f"Unable to decode config into {type(target).__name__}: {e}")
        raise


try_load = as_result(load)


def _validate(settings: Optional[LoadSettings]) -> None:
    if settings is None:
        raise SettingsError("load settings not specified")
    if settings.config_file is None:
        raise SettingsError("config file settings not specified")
    formats.get_parser(settings.config_file.config_type)


def _merge_base_config(keyspace: Keyspace, config_dir: str, settings: LoadSettings) -> None:
    try:
        path = merge_config_file(keyspace, config_dir, BASE_CONFIG_NAME, settings.config_file)
    except ConfigLoaderError as e:
        logger.error(f"Failed to load {BASE_CONFIG_NAME} config: {e}")
        raise
    logger.info(f"Loaded {BASE_CONFIG_NAME} config ({path})")


def _merge_profile_config(keyspace: Keyspace, config_dir: str, profile: str, settings: LoadSettings) -> None:
    try:
        path = merge_config_file(keyspace, config_dir, profile, settings.config_file)
    except SourceNotFound as e:
        logger.warning(f"Config for {profile} profile not found, skipping: {e}")
        return
    except ConfigLoaderError as e:
        logger.error(f"Failed to load {profile} profile config: {e}")
        raise
    logger.info(f"Loaded {profile} profile config ({path})")


__all__ = ["BASE_CONFIG_NAME", "load", "try_load"]
