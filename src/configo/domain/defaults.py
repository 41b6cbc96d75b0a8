"""Default extraction, literal coercion and instance-to-map conversion.

Defaults are realised directly on a shape instance: :func:`provide_defaults`
walks the descriptor table and assigns each coerced literal onto the
instance it was given, allocating optional references on the way so their
own defaults can be filled. :func:`to_mapping` then re-derives the
hierarchical map that enters the merge as the lowest-precedence layer.

Coercion is deliberately lenient. A malformed integer or boolean literal
leaves the field at its zero value and unsupported kinds are skipped; both
cases emit a DEBUG record instead of raising.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from .enums import FieldKind
from .schema import FieldSpec, allocate, describe, is_shape

logger = logging.getLogger(__name__)

_INT_LITERAL = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def provide_defaults(instance: Any) -> Any:
    """Apply declared literal defaults to ``instance`` in place.

    Nested records are recursed into in place. Optional references that are
    currently ``None`` are allocated first: records recurse, scalars receive
    their coerced default. Plain scalar fields receive their coerced default.

    Args:
        instance: Dataclass instance to mutate. Non-dataclass values are
            returned untouched.

    Returns:
        The same ``instance``, for chaining.

    Example:
        >>> from dataclasses import dataclass
        >>> from configo.domain.schema import conf, new_instance
        >>> @dataclass
        ... class Server:
        ...     port: int = conf("port", default="80")
        ...     debug: bool = conf("debug", default="true")
        >>> provide_defaults(new_instance(Server))
        Server(port=80, debug=True)
    """
    if not is_shape(type(instance)):
        return instance

    for spec in describe(type(instance)):
        if not spec.tagged:
            continue
        current = getattr(instance, spec.name, None)

        if spec.optional:
            if current is not None:
                continue
            allocated = allocate(spec.value_type)
            if allocated is None:
                logger.debug("cannot allocate optional field %s of type %r", spec.name, spec.value_type)
                continue
            if spec.kind is FieldKind.RECORD:
                provide_defaults(allocated)
            elif spec.default_literal is not None:
                allocated = coerce_default(spec, spec.default_literal, allocated)
            setattr(instance, spec.name, allocated)
        elif spec.kind is FieldKind.RECORD:
            if current is None:
                current = allocate(spec.value_type)
                setattr(instance, spec.name, current)
            provide_defaults(current)
        elif spec.default_literal is not None:
            setattr(instance, spec.name, coerce_default(spec, spec.default_literal, current))
    return instance


def coerce_default(spec: FieldSpec, literal: str, current: Any) -> Any:
    """Convert ``literal`` into the runtime type of ``spec``.

    Returns ``current`` unchanged whenever the literal cannot be converted
    or the field kind does not support defaults.

    Example:
        >>> from configo.domain.schema import FieldSpec
        >>> spec = FieldSpec("port", "port", None, FieldKind.INT, int, False, int, True, False)
        >>> coerce_default(spec, "8080", 0), coerce_default(spec, "abc", 0)
        (8080, 0)
    """
    if spec.kind is FieldKind.INT:
        return _parse_int(literal, spec, current)
    if spec.kind is FieldKind.STRING:
        return spec.value_type(literal)
    if spec.kind is FieldKind.BOOL:
        return literal == "true"
    if spec.kind is FieldKind.RECORD:
        target = current if current is not None else allocate(spec.value_type)
        return provide_defaults(target)
    logger.debug("default %r for field %s skipped: unsupported kind %r", literal, spec.name, spec.value_type)
    return current


def _parse_int(literal: str, spec: FieldSpec, current: Any) -> Any:
    if not _INT_LITERAL.fullmatch(literal):
        logger.debug("default %r for field %s is not a base-10 integer", literal, spec.name)
        return current
    value = int(literal, 10)
    if not _INT64_MIN <= value <= _INT64_MAX:
        logger.debug("default %r for field %s is out of the 64-bit range", literal, spec.name)
        return current
    return spec.value_type(value)


def to_mapping(instance: Any) -> dict[str, Any]:
    """Re-derive the hierarchical map of a shape instance.

    Only tagged fields appear, under their tag key. Nested records become
    nested maps and records inside lists become maps as well.

    Example:
        >>> from dataclasses import dataclass
        >>> from configo.domain.schema import conf
        >>> @dataclass
        ... class Server:
        ...     port: int = conf("port")
        ...     note: str = ""
        >>> to_mapping(Server(port=80))
        {'port': 80}
    """
    result: dict[str, Any] = {}
    for spec in describe(type(instance)):
        if not spec.tagged:
            continue
        result[spec.key] = plain_value(getattr(instance, spec.name, None))  # type: ignore[index]
    return result


def plain_value(value: Any) -> Any:
    """Convert shape instances and containers inside ``value`` to plain maps and lists."""
    if is_shape(type(value)):
        return to_mapping(value)
    if isinstance(value, Mapping):
        return {str(key): plain_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [plain_value(item) for item in value]
    return value


__all__ = [
    "coerce_default",
    "plain_value",
    "provide_defaults",
    "to_mapping",
]
