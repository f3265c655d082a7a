"""Layered merge of plot descriptions.

``merge(base, override)`` produces a fresh object; neither input is touched.
Set values in ``override`` win, unset (``None``) values fall back to ``base``.
Lists concatenate (base items first), dicts are unioned key by key. Set
scalars are replaced whatever their type, so an int may override a float.
"""

from __future__ import annotations

import copy
from dataclasses import fields, is_dataclass
from typing import Any, TypeVar

T = TypeVar("T")


def merge(base: T, override: T) -> T:
    if base is None:
        return copy.deepcopy(override)
    if override is None:
        return copy.deepcopy(base)
    if _is_container(base) or _is_container(override):
        if type(base) is not type(override):
            raise TypeError(f"cannot merge {type(base).__name__} with {type(override).__name__}")
        if isinstance(base, dict):
            return _merge_dict(base, override)  # type: ignore[return-value]
        if isinstance(base, list):
            return copy.deepcopy(base) + copy.deepcopy(override)  # type: ignore[return-value]
        return _merge_dataclass(base, override)
    return copy.deepcopy(override)


def merge_all(*layers: Any) -> Any:
    """Fold layers left to right; later layers win."""
    out = None
    for layer in layers:
        out = merge(out, layer)
    return out


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list)) or (is_dataclass(value) and not isinstance(value, type))


def _merge_dataclass(base: Any, override: Any) -> Any:
    values = {}
    for f in fields(base):
        if not f.init:
            continue
        values[f.name] = merge(getattr(base, f.name), getattr(override, f.name))
    return type(base)(**values)


def _merge_dict(base: dict, override: dict) -> dict:
    out = {}
    for key in list(base.keys()) + [k for k in override.keys() if k not in base]:
        if key in base and key in override:
            out[key] = merge(base[key], override[key])
        elif key in base:
            out[key] = copy.deepcopy(base[key])
        else:
            out[key] = copy.deepcopy(override[key])
    return out
