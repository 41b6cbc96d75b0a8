"""Field descriptor tables for target shapes.

A target shape is a dataclass whose fields carry two metadata tags:

* ``"config"`` - the key used for the field in source data. A field without
  it (or with ``"-"``) does not take part in configuration.
* ``"default"`` - a literal default written as text. ``"-"`` or an empty
  string means "no default".

:func:`describe` turns a shape into a tuple of :class:`FieldSpec` once and
caches it, so the default extractor, the decoder and the serializer all walk
the same table instead of inspecting the class repeatedly.

Contents:
    * :func:`conf` - declare a tagged field
    * :class:`FieldSpec` - one row of the descriptor table
    * :func:`describe` - build (and cache) the table for a shape
    * :func:`new_instance` / :func:`zero_value` - allocate zero values
"""

from __future__ import annotations

import dataclasses
import types
import typing
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, TypeVar, Union

from .enums import FieldKind
from .errors import ShapeError

CONFIG_TAG = "config"
DEFAULT_TAG = "default"
EXCLUDE = "-"

T = TypeVar("T")

_CONTAINER_ORIGINS: tuple[type, ...] = (list, tuple, set, frozenset, dict)


def conf(key: str, default: str | None = None, **field_kwargs: Any) -> Any:
    """Declare a configuration field on a dataclass shape.

    Returns a keyword-only ``dataclasses.field`` so tagged fields need no
    Python default and may follow fields that have one. The zero value for
    the annotated type is supplied by :func:`new_instance`.

    Args:
        key: Key name of the field in source data (``"-"`` excludes it).
        default: Literal default as text, coerced per field kind.
        **field_kwargs: Passed through to ``dataclasses.field``.

    Example:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Server:
        ...     port: int = conf("port", default="80")
        >>> [(spec.key, spec.default) for spec in describe(Server)]
        [('port', '80')]
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[CONFIG_TAG] = key
    if default is not None:
        metadata[DEFAULT_TAG] = default
    field_kwargs.setdefault("kw_only", True)
    return dataclasses.field(metadata=metadata, **field_kwargs)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One row of a shape's descriptor table."""

    name: str
    key: str | None
    default: str | None
    kind: FieldKind
    value_type: Any
    optional: bool
    annotation: Any
    init: bool
    has_python_default: bool

    @property
    def tagged(self) -> bool:
        """True when the field participates in configuration."""
        return bool(self.key) and self.key != EXCLUDE

    @property
    def default_literal(self) -> str | None:
        """The default text, or None when absent or excluded."""
        if not self.default or self.default == EXCLUDE:
            return None
        return self.default

    @property
    def record(self) -> type | None:
        """The nested shape for RECORD fields."""
        return self.value_type if self.kind is FieldKind.RECORD else None


def is_shape(obj: Any) -> bool:
    """Return True for dataclass types (not instances)."""
    return isinstance(obj, type) and dataclasses.is_dataclass(obj)


def unwrap_optional(tp: Any) -> tuple[Any, bool]:
    """Split ``X | None`` into ``(X, True)``; anything else into ``(tp, False)``.

    Example:
        >>> unwrap_optional(int | None)
        (<class 'int'>, True)
        >>> unwrap_optional(str)
        (<class 'str'>, False)
    """
    origin = typing.get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        if len(args) == 1 and type(None) in typing.get_args(tp):
            return args[0], True
    return tp, False


def classify(tp: Any) -> FieldKind:
    """Map a (non-optional) type to the kind driving default coercion.

    Example:
        >>> classify(bool), classify(int), classify(float)
        (<FieldKind.BOOL: 'bool'>, <FieldKind.INT: 'int'>, <FieldKind.OTHER: 'other'>)
    """
    if is_shape(tp):
        return FieldKind.RECORD
    if not isinstance(tp, type) or issubclass(tp, Enum):
        return FieldKind.OTHER
    if issubclass(tp, bool):
        return FieldKind.BOOL
    if issubclass(tp, int):
        return FieldKind.INT
    if issubclass(tp, str):
        return FieldKind.STRING
    return FieldKind.OTHER


def describe(shape: type) -> tuple[FieldSpec, ...]:
    """Return the (cached) descriptor table for ``shape``.

    Raises:
        ShapeError: If ``shape`` is not a dataclass or its annotations
            cannot be resolved.
    """
    if not is_shape(shape):
        raise ShapeError(f"target shape must be a dataclass type, got {shape!r}")
    return _describe(shape)


@lru_cache(maxsize=256)
def _describe(shape: type) -> tuple[FieldSpec, ...]:
    try:
        hints = typing.get_type_hints(shape)
    except (NameError, TypeError) as exc:
        raise ShapeError(f"cannot resolve annotations of {shape.__qualname__}: {exc}") from exc

    specs: list[FieldSpec] = []
    for fld in dataclasses.fields(shape):
        annotation = hints.get(fld.name, Any)
        value_type, optional = unwrap_optional(annotation)
        specs.append(
            FieldSpec(
                name=fld.name,
                key=fld.metadata.get(CONFIG_TAG),
                default=fld.metadata.get(DEFAULT_TAG),
                kind=classify(value_type),
                value_type=value_type,
                optional=optional,
                annotation=annotation,
                init=fld.init,
                has_python_default=(
                    fld.default is not dataclasses.MISSING or fld.default_factory is not dataclasses.MISSING
                ),
            )
        )
    return tuple(specs)


def zero_value(tp: Any) -> Any:
    """Return the zero value for a type annotation.

    Optional references are ``None``; nested shapes are allocated with
    :func:`new_instance`; unknown types fall back to ``None``.

    Example:
        >>> zero_value(int), zero_value(str), zero_value(bool), zero_value(list[str])
        (0, '', False, [])
        >>> zero_value(int | None) is None
        True
    """
    value_type, optional = unwrap_optional(tp)
    if optional:
        return None
    return allocate(value_type)


def allocate(tp: Any) -> Any:
    """Allocate a zero-valued instance of a non-optional type."""
    if is_shape(tp):
        return new_instance(tp)
    origin = typing.get_origin(tp) or tp
    if origin in _CONTAINER_ORIGINS:
        return origin()
    if tp in (int, float, str, bool, bytes, complex):
        return tp()
    return None


def new_instance(shape: type[T]) -> T:
    """Allocate ``shape`` with every field at its zero value.

    Fields declaring a Python default keep it.

    Raises:
        ShapeError: If ``shape`` is not a dataclass.
    """
    specs = describe(shape)
    kwargs = {spec.name: zero_value(spec.annotation) for spec in specs if spec.init and not spec.has_python_default}
    instance = shape(**kwargs)
    for spec in specs:
        if not spec.init and not spec.has_python_default and not hasattr(instance, spec.name):
            setattr(instance, spec.name, zero_value(spec.annotation))
    return instance


__all__ = [
    "CONFIG_TAG",
    "DEFAULT_TAG",
    "EXCLUDE",
    "FieldSpec",
    "allocate",
    "classify",
    "conf",
    "describe",
    "is_shape",
    "new_instance",
    "unwrap_optional",
    "zero_value",
]
