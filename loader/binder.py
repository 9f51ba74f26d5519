"""Bind a merged keyspace onto a configuration dataclass.

The binder walks the declared fields of the destination dataclass and coerces
each keyspace value to the field's annotated type. Keys without a matching
field are ignored. Fields without a key, or whose key holds an empty node
and cannot be None, keep their current value. Any value that cannot be
coerced raises DecodeError naming its dotted path.
"""
from __future__ import annotations

import copy
import dataclasses
import types
import typing
from typing import Any, Dict, Mapping

from core.exceptions import DecodeError
from loader.keyspace import Keyspace, field_key

_TRUE = {"1", "t", "true", "yes", "y", "on"}
_FALSE = {"0", "f", "false", "no", "n", "off"}


def bind(keyspace: Keyspace, target: Any) -> Any:
    """Assign keyspace values onto ``target`` in place.

    The bind runs against a copy, so ``target`` is left untouched when a
    DecodeError is raised.

    Args:
        keyspace: Merged configuration values
        target: Mutable dataclass instance

    Returns:
        ``target``
    """
    if not dataclasses.is_dataclass(target) or isinstance(target, type):
        raise TypeError(f"bind target must be a dataclass instance, got {type(target).__name__}")

    staged = copy.deepcopy(target)
    _bind_dataclass(keyspace.to_dict(), staged, "")
    for f in dataclasses.fields(target):
        setattr(target, f.name, getattr(staged, f.name))
    return target


def _bind_dataclass(values: Mapping[str, Any], obj: Any, prefix: str) -> None:
    hints = typing.get_type_hints(type(obj))
    for f in dataclasses.fields(obj):
        key = field_key(f).lower()
        if key not in values:
            continue
        tp = hints.get(f.name, Any)
        if values[key] is None and not _accepts_none(tp):
            # empty node, keep the current value
            continue
        path = f"{prefix}.{key}" if prefix else key
        current = getattr(obj, f.name)
        setattr(obj, f.name, _coerce(values[key], tp, current, path))


def _accepts_none(tp: Any) -> bool:
    if tp is Any:
        return True
    if typing.get_origin(tp) in (typing.Union, types.UnionType):
        return type(None) in typing.get_args(tp)
    return False


def _coerce(value: Any, tp: Any, current: Any, path: str) -> Any:
    if tp is Any:
        return copy.deepcopy(value)

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin in (typing.Union, types.UnionType):
        if value is None and type(None) in args:
            return None
        members = [a for a in args if a is not type(None)]
        if len(members) != 1:
            raise DecodeError(path, f"unsupported union type {tp}")
        return _coerce(value, members[0], current, path)

    if dataclasses.is_dataclass(tp):
        if not isinstance(value, Mapping):
            raise DecodeError(path, f"expected a mapping, got {type(value).__name__}")
        obj = current if isinstance(current, tp) else _instantiate(tp, path)
        _bind_dataclass(value, obj, path)
        return obj

    if origin in (list, tuple, set, frozenset):
        return _coerce_sequence(value, origin, args, path)

    if origin is dict or tp is dict:
        if not isinstance(value, Mapping):
            raise DecodeError(path, f"expected a mapping, got {type(value).__name__}")
        value_type = args[1] if len(args) == 2 else Any
        return {k: _coerce(v, value_type, None, f"{path}.{k}") for k, v in value.items()}

    if tp is bool:
        return _to_bool(value, path)
    if tp is int:
        return _to_int(value, path)
    if tp is float:
        return _to_float(value, path)
    if tp is str:
        return _to_str(value, path)

    raise DecodeError(path, f"unsupported field type {tp}")


def _coerce_sequence(value: Any, origin: Any, args: tuple, path: str) -> Any:
    if isinstance(value, str):
        items = [part.strip() for part in value.split(",")] if value else []
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        raise DecodeError(path, f"expected a list, got {type(value).__name__}")

    if origin is tuple and args and args[-1] is not Ellipsis:
        if len(items) != len(args):
            raise DecodeError(path, f"expected {len(args)} items, got {len(items)}")
        return tuple(_coerce(v, t, None, f"{path}[{i}]") for i, (v, t) in enumerate(zip(items, args)))

    item_type = args[0] if args else Any
    return origin(_coerce(v, item_type, None, f"{path}[{i}]") for i, v in enumerate(items))


def _instantiate(tp: Any, path: str) -> Any:
    try:
        return tp()
    except TypeError as e:
        raise DecodeError(path, f"cannot construct {tp.__name__}: {e}") from e


def _to_bool(value: Any, path: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise DecodeError(path, f"cannot convert {value!r} to bool")


def _to_int(value: Any, path: str) -> int:
    if isinstance(value, bool):
        raise DecodeError(path, f"cannot convert {value!r} to int")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise DecodeError(path, f"cannot convert {value!r} to int")


def _to_float(value: Any, path: str) -> float:
    if isinstance(value, bool):
        raise DecodeError(path, f"cannot convert {value!r} to float")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise DecodeError(path, f"cannot convert {value!r} to float")


def _to_str(value: Any, path: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise DecodeError(path, f"cannot convert {type(value).__name__} to str")


def to_dict(obj: Any) -> Dict[str, Any]:
    """Plain nested dict of a bound config, keyed by configuration keys."""
    return Keyspace.from_object(obj).to_dict()


__all__ = ["bind", "to_dict"]
