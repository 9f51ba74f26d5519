"""Nested key/value tree addressed by dotted, case-insensitive paths."""
from __future__ import annotations

import copy
import dataclasses
from typing import Any, Dict, Iterator, List, Mapping

_MISSING = object()


class Keyspace:
    """Accumulator for configuration values merged from several sources.

    Keys are stored lower-cased. Mappings are merged key by key, any other
    value (scalars and lists alike) replaces what was there. An empty node
    (``None``) never replaces an existing value.
    """

    def __init__(self, data: Mapping[str, Any] | None = None):
        self._data: Dict[str, Any] = {}
        if data:
            self.merge(data)

    @classmethod
    def from_object(cls, obj: Any) -> "Keyspace":
        """Seed a keyspace with the current field values of a dataclass."""
        return cls(_object_to_tree(obj))

    def merge(self, tree: Mapping[str, Any]) -> None:
        """Deep-merge ``tree`` into the keyspace."""
        _deep_update(self._data, _normalize(tree))

    def get(self, path: str, default: Any = None) -> Any:
        node = self._lookup(path)
        return default if node is _MISSING else node

    def has(self, path: str) -> bool:
        return self._lookup(path) is not _MISSING

    def set(self, path: str, value: Any) -> None:
        """Assign ``value`` at ``path``, creating intermediate sections."""
        parts = _split(path)
        node = self._data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    def leaf_paths(self) -> List[str]:
        """Dotted paths of every non-mapping value, in insertion order."""
        return list(_iter_leaves(self._data, ""))

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def _lookup(self, path: str) -> Any:
        node: Any = self._data
        for part in _split(path):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def __contains__(self, path: str) -> bool:
        return self.has(path)

    def __repr__(self) -> str:
        return f"Keyspace({self._data!r})"


def _split(path: str) -> List[str]:
    parts = path.lower().split(".")
    if not path or any(not part for part in parts):
        raise ValueError(f"invalid configuration path: {path!r}")
    return parts


def _normalize(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k).lower(): _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value


def _deep_update(target: Dict[str, Any], updates: Mapping[str, Any]) -> None:
    """Recursively update ``target`` with ``updates`` without clobbering nested dicts."""
    for key, new_val in updates.items():
        if new_val is None and key in target:
            # empty node ("db:" with nothing under it)
            continue
        if isinstance(new_val, dict) and isinstance(target.get(key), dict):
            _deep_update(target[key], new_val)
        else:
            target[key] = copy.deepcopy(new_val)


def _iter_leaves(node: Dict[str, Any], prefix: str) -> Iterator[str]:
    for key, value in node.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from _iter_leaves(value, path)
        else:
            yield path


def _object_to_tree(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            field_key(f): _object_to_tree(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, Mapping):
        return {str(k): _object_to_tree(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_object_to_tree(v) for v in obj]
    return obj


def field_key(f: dataclasses.Field) -> str:
    """Configuration key of a dataclass field, honouring ``metadata["key"]``."""
    return f.metadata.get("key", f.name)


__all__ = ["Keyspace"]
