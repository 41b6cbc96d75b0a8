"""Decode merged configuration maps into dataclass shapes.

Field matching follows the descriptor table of the shape: a map key matches
the field's ``config`` tag exactly, or case-insensitively when no exact key
exists. Untagged fields keep the value already on the target instance.

Scalar conversion is delegated to pydantic ``TypeAdapter`` in lax mode, so
environment strings such as ``"9090"`` or ``"true"`` become ``9090`` and
``True``. A string arriving for a list field is split on commas first, and an
empty string for a numeric or boolean field decodes to its zero value.

System Role:
    Implements the ``Decode`` port. This is the only module that talks to
    pydantic; the application layer sees plain ``DecodeError`` values.
"""

from __future__ import annotations

import typing
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import ConfigDict, PydanticUserError, TypeAdapter, ValidationError

from ...domain.defaults import provide_defaults
from ...domain.enums import FieldKind
from ...domain.errors import DecodeError, ShapeError
from ...domain.schema import FieldSpec, allocate, describe, is_shape, new_instance, unwrap_optional

T = TypeVar("T")

_LAX = ConfigDict(coerce_numbers_to_str=True)
_GENERIC_MAP: TypeAdapter[dict[str, Any]] = TypeAdapter(dict[str, Any])
_SEQUENCE_ORIGINS: tuple[type, ...] = (list, tuple, set, frozenset)
# An empty environment value still counts as set; it decodes to the zero value.
_EMPTY_AS_ZERO: tuple[type, ...] = (int, float, bool, complex)


def decode(data: Mapping[str, Any], target: T, *, key: str | None = None) -> T:
    """Decode ``data`` onto ``target`` and return it.

    Args:
        data: Merged hierarchical map.
        target: Default-populated shape instance; decoded values are
            assigned onto it.
        key: When given, ``data`` is first validated as a generic map and
            only the sub-tree under ``key`` is decoded; sibling keys are
            ignored.

    Returns:
        ``target``, now carrying the decoded values.

    Raises:
        DecodeError: If the scoped sub-tree is missing or not a mapping, or a
            value cannot be converted to its field type.
        ShapeError: If a field type cannot be handled by the decoder.
    """
    if key:
        try:
            generic = _GENERIC_MAP.validate_python(data)
        except ValidationError as exc:
            raise DecodeError(f"merged configuration is not a mapping: {exc}") from exc
        matched = _match_key(generic, key)
        scoped = generic.get(matched) if matched is not None else None
        if not isinstance(scoped, Mapping):
            raise DecodeError(f"unable to convert {type(scoped).__name__} to a mapping", path=key)
        return _decode_record(scoped, target, key)
    return _decode_record(data, target, "")


def _decode_record(data: Any, target: T, path: str) -> T:
    if not isinstance(data, Mapping):
        raise DecodeError(f"expected a mapping, got {type(data).__name__}", path=path or None)
    for spec in describe(type(target)):
        if not spec.tagged:
            continue
        matched = _match_key(data, spec.key)  # type: ignore[arg-type]
        if matched is None:
            continue
        current = getattr(target, spec.name, None)
        setattr(target, spec.name, _decode_field(spec, data[matched], current, _join(path, spec.key)))
    return target


def _decode_field(spec: FieldSpec, raw: Any, current: Any, path: str) -> Any:
    if raw is None:
        return None if spec.optional else current
    if spec.kind is FieldKind.RECORD:
        record = current if current is not None else provide_defaults(new_instance(spec.value_type))
        return _decode_record(raw, record, path)
    return _decode_value(spec.value_type, raw, path)


def _decode_value(tp: Any, raw: Any, path: str) -> Any:
    inner, optional = unwrap_optional(tp)
    if raw is None and optional:
        return None
    if is_shape(inner):
        return _decode_record(raw, provide_defaults(new_instance(inner)), path)
    if raw == "" and inner in _EMPTY_AS_ZERO:
        return allocate(inner)

    origin = typing.get_origin(inner)
    if origin in _SEQUENCE_ORIGINS:
        if isinstance(raw, str):
            raw = raw.split(",") if raw else []
        args = typing.get_args(inner)
        if len(args) == 1 and is_shape(args[0]) and isinstance(raw, (list, tuple)):
            return origin(_decode_value(args[0], item, f"{path}[{index}]") for index, item in enumerate(raw))

    try:
        return _adapter(tp).validate_python(raw)
    except ValidationError as exc:
        raise DecodeError(_describe_failure(exc), path=path) from exc


@lru_cache(maxsize=512)
def _adapter(tp: Any) -> TypeAdapter[Any]:
    try:
        return TypeAdapter(tp, config=_LAX)
    except PydanticUserError as exc:
        raise ShapeError(f"cannot decode values of type {tp!r}: {exc}") from exc


def _describe_failure(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    return f"{first['msg']} (got {first.get('input')!r})"


def _match_key(data: Mapping[str, Any], key: str) -> str | None:
    """Return the key of ``data`` matching ``key`` exactly, else case-insensitively.

    Example:
        >>> _match_key({"Port": 1}, "port")
        'Port'
        >>> _match_key({"port": 1, "Port": 2}, "Port")
        'Port'
    """
    if key in data:
        return key
    folded = key.casefold()
    for candidate in data:
        if isinstance(candidate, str) and candidate.casefold() == folded:
            return candidate
    return None


def _join(path: str, key: str | None) -> str:
    return f"{path}.{key}" if path else str(key)


__all__ = ["decode"]
