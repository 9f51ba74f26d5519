"""Environment variable overlay.

A variable overrides a configuration path only when that path is already
known from defaults or files: ``DICTUP_SERVER_PORT`` maps to ``server.port``.
Empty values are ignored so that a present but blank variable never erases a
configured value.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Mapping, Optional

from loguru import logger

from loader.keyspace import Keyspace


def env_var_name(env_prefix: str, path: str) -> str:
    """Variable name that overrides ``path``, e.g. ``DICTUP_DB_HOST``."""
    key = path.replace(".", "_").upper()
    if env_prefix:
        return f"{env_prefix.upper()}_{key}"
    return key


def _prefixed_environ(env_prefix: str, environ: Mapping[str, str]) -> Dict[str, str]:
    """Non-empty variables under the prefix, keyed by upper-cased name."""
    prefix = f"{env_prefix.upper()}_" if env_prefix else ""
    selected: Dict[str, str] = {}
    for name, value in environ.items():
        upper = name.upper()
        if not upper.startswith(prefix) or upper == prefix:
            continue
        if value == "":
            continue
        selected[upper] = value
    return selected


def _known_paths(keyspace: Keyspace, defaults: Optional[Keyspace]) -> List[str]:
    paths = dict.fromkeys(keyspace.leaf_paths())
    if defaults is not None:
        for path in defaults.leaf_paths():
            if not isinstance(keyspace.get(path), dict):
                paths.setdefault(path)
    return list(paths)


def apply_env_overlay(
    keyspace: Keyspace,
    env_prefix: str,
    environ: Mapping[str, str],
    defaults: Optional[Keyspace] = None,
) -> List[str]:
    """Overwrite known leaf paths of ``keyspace`` with environment values.

    Known paths are the leaves of ``keyspace`` plus the leaves of ``defaults``
    that ``keyspace`` does not hold as a section.

    When several paths translate to the same variable name (``db.max_conn``
    and ``db_max.conn``) the override is ambiguous: a warning is logged and
    none of those paths is changed.

    Returns:
        The paths that were overridden
    """
    variables = _prefixed_environ(env_prefix, environ)
    if not variables:
        return []

    candidates: Dict[str, List[str]] = defaultdict(list)
    for path in _known_paths(keyspace, defaults):
        candidates[env_var_name(env_prefix, path)].append(path)

    applied: List[str] = []
    for name, paths in candidates.items():
        if name not in variables:
            continue
        if len(paths) > 1:
            logger.warning(f"Environment variable {name} matches several config keys {paths}; ignoring it")
            continue
        keyspace.set(paths[0], variables[name])
        applied.append(paths[0])
        logger.debug(f"Overrode {paths[0]} from environment variable {name}")
    return applied


__all__ = ["apply_env_overlay", "env_var_name"]
