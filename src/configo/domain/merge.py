"""Recursive merge of hierarchical value maps.

Later layers win: a scalar at a key overwrites whatever the earlier layer
held there, while two maps at the same key merge recursively. A scalar can
replace a map and a map can replace a scalar. Keys compare case-insensitively
and keep the spelling of the layer that introduced them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from copy import deepcopy
from typing import Any


def deep_merge(base: Mapping[str, Any], incoming: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new map with ``incoming`` merged over ``base``.

    Neither argument is mutated.

    Raises:
        TypeError: If either argument is not a mapping.

    Examples:
        >>> deep_merge({"http": {"port": 80, "host": "a"}}, {"http": {"port": 8080}})
        {'http': {'port': 8080, 'host': 'a'}}
        >>> deep_merge({"http": {"port": 80}}, {"http": "off"})
        {'http': 'off'}
    """
    if not isinstance(base, Mapping) or not isinstance(incoming, Mapping):
        raise TypeError(f"cannot merge {type(incoming).__name__} into {type(base).__name__}")
    merged: dict[str, Any] = {key: deepcopy(value) for key, value in base.items()}
    _merge_into(merged, incoming)
    return merged


def merge_layers(layers: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """Fold ``layers`` (lowest precedence first) into one map.

    Example:
        >>> merge_layers([{"a": 1}, {"b": {"c": 2}}, {"a": 3}])
        {'a': 3, 'b': {'c': 2}}
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        merged = deep_merge(merged, layer)
    return merged


def _merge_into(target: dict[str, Any], incoming: Mapping[str, Any]) -> None:
    for incoming_key, value in incoming.items():
        key = _existing_key(target, incoming_key)
        existing = target.get(key)
        if isinstance(value, Mapping) and isinstance(existing, dict):
            _merge_into(existing, value)
        elif isinstance(value, Mapping):
            target[key] = {}
            _merge_into(target[key], value)
        else:
            target[key] = deepcopy(value)


def _existing_key(target: Mapping[str, Any], key: str) -> str:
    """Return the key of ``target`` equal to ``key`` ignoring case, else ``key``.

    The earlier layer's spelling is kept so one entry survives per key.

    Example:
        >>> _existing_key({"Port": 80}, "port"), _existing_key({"port": 80}, "host")
        ('Port', 'host')
    """
    if key in target or not isinstance(key, str):
        return key
    folded = key.casefold()
    for candidate in target:
        if isinstance(candidate, str) and candidate.casefold() == folded:
            return candidate
    return key


def nest_under(key: str | None, mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Wrap ``mapping`` under ``key``; an empty key returns a plain copy.

    Example:
        >>> nest_under("http", {"port": 80})
        {'http': {'port': 80}}
    """
    if key:
        return {key: dict(mapping)}
    return dict(mapping)


__all__ = [
    "deep_merge",
    "merge_layers",
    "nest_under",
]
