"""Mapping between the property model and a nested key-value tree.

The tree is made of plain dicts, lists and scalars so it can be handed to any
serializer. Only set fields are written; an absent key reads back as unset.
Box kinds are tagged with a ``"type"`` key so a pad's box list round-trips.
"""

from __future__ import annotations

import types
import typing
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Mapping, TypeVar, get_args, get_origin, get_type_hints

from plotframe.errors import PlotConfigError

T = TypeVar("T")

TYPE_KEY = "type"


def to_tree(entity: Any) -> dict[str, Any]:
    if not is_dataclass(entity) or isinstance(entity, type):
        raise TypeError(f"expected a model entity, got {type(entity).__name__}")
    node: dict[str, Any] = {}
    tree_type = getattr(type(entity), "tree_type", None)
    if tree_type is not None:
        node[TYPE_KEY] = tree_type
    for f in fields(entity):
        if f.metadata.get("transient"):
            continue
        value = _to_value(getattr(entity, f.name))
        if value is None:
            continue
        node[f.name] = value
    return node


def _to_value(value: Any) -> Any:
    if value is None:
        return None
    if is_dataclass(value) and not isinstance(value, type):
        return to_tree(value) or None
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        items = [_to_value(item) for item in value]
        return items or None
    if isinstance(value, dict):
        out = {str(key): _to_value(item) for key, item in value.items()}
        return {key: item for key, item in out.items() if item is not None} or None
    return value


def from_tree(cls: type[T], tree: Mapping[str, Any]) -> T:
    if not is_dataclass(cls):
        raise TypeError(f"{cls!r} is not a model entity")
    hints = get_type_hints(cls)
    known = {f.name: f for f in fields(cls) if f.init}
    kwargs = {}
    for key, raw in tree.items():
        if key == TYPE_KEY:
            continue
        if key not in known:
            raise PlotConfigError(f"unknown key '{key}' for {cls.__name__}")
        kwargs[key] = _from_value(hints[key], raw, f"{cls.__name__}.{key}")
    return cls(**kwargs)


def _from_value(tp: Any, raw: Any, where: str) -> Any:
    origin = get_origin(tp)
    if origin is typing.Union or origin is types.UnionType:
        options = [arg for arg in get_args(tp) if arg is not type(None)]
        if raw is None:
            return None
        if len(options) == 1:
            return _from_value(options[0], raw, where)
        return _from_tagged(options, raw, where)
    if origin is list:
        (item_type,) = get_args(tp)
        return [_from_value(item_type, item, where) for item in raw]
    if origin is tuple:
        item_type = get_args(tp)[0]
        return tuple(_from_value(item_type, item, where) for item in raw)
    if origin is dict:
        key_type, item_type = get_args(tp)
        return {key_type(key): _from_value(item_type, item, where) for key, item in raw.items()}
    if isinstance(tp, type) and is_dataclass(tp):
        if not isinstance(raw, Mapping):
            raise PlotConfigError(f"{where}: expected a group node")
        return from_tree(tp, raw)
    if isinstance(tp, type) and issubclass(tp, Enum):
        try:
            return tp(raw)
        except ValueError as exc:
            raise PlotConfigError(f"{where}: {exc}") from exc
    if tp is bool:
        return bool(raw)
    if tp in (int, float, str):
        try:
            return tp(raw)
        except (TypeError, ValueError) as exc:
            raise PlotConfigError(f"{where}: cannot read {raw!r} as {tp.__name__}") from exc
    return raw


def _from_tagged(options: list[Any], raw: Any, where: str) -> Any:
    if not isinstance(raw, Mapping) or TYPE_KEY not in raw:
        raise PlotConfigError(f"{where}: node has no '{TYPE_KEY}' key")
    for option in options:
        if getattr(option, "tree_type", None) == raw[TYPE_KEY]:
            return from_tree(option, raw)
    raise PlotConfigError(f"{where}: unknown node type '{raw[TYPE_KEY]}'")
