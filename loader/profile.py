"""Active profile resolution."""
from __future__ import annotations

from typing import Mapping

from core.exceptions import SettingsError
from loader.keyspace import Keyspace

APPLICATION_ENV = "APP_PROFILE"
PROFILE_PATH = "app.profile"


def profile_env_key(env_prefix: str) -> str:
    """Name of the variable selecting the profile, e.g. ``DICTUP_APP_PROFILE``."""
    if env_prefix:
        return f"{env_prefix.upper()}_{APPLICATION_ENV}"
    return APPLICATION_ENV


def resolve_profile(env_prefix: str, keyspace: Keyspace, environ: Mapping[str, str]) -> str:
    """Return the active profile name, or "" when no profile applies.

    The environment variable wins when set and non-empty, then ``app.profile``
    from the base configuration.

    Raises:
        SettingsError: If the name would point outside the config directory
    """
    profile = environ.get(profile_env_key(env_prefix), "")
    if not profile:
        profile = _profile_from_config(keyspace.get(PROFILE_PATH))
    _check_profile_name(profile)
    return profile


def _profile_from_config(value) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _check_profile_name(profile: str) -> None:
    if "/" in profile or "\\" in profile or profile in (".", ".."):
        raise SettingsError(f"invalid profile name {profile!r}: must be a plain file name")


__all__ = ["APPLICATION_ENV", "profile_env_key", "resolve_profile"]
